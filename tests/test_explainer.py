"""
Tests for template and generative match explanations.
"""

from unittest import mock

import pytest

from skillswap.config import Settings
from skillswap.matching.completion import CompletionError, TextCompletionClient
from skillswap.matching.explainer import (
    EMPTY_RESPONSE_FALLBACK,
    ERROR_FALLBACK,
    GenerativeExplainer,
    TemplateExplainer,
    build_explainer,
)


def explain(explainer, they_can_teach=(), you_can_teach=(), score=42):
    return explainer.explain(
        ["React", "Python"],
        "Maya",
        ["React", "Figma"],
        list(they_can_teach),
        list(you_can_teach),
        score,
    )


class TestTemplateExplainer:
    """Test deterministic template sentences."""

    def test_both_directions(self):
        """Mentions up to two skills from each side."""
        text = explain(TemplateExplainer(), ["Figma", "Sketch", "Blender"], ["Python", "SQL", "Go"])
        assert text == (
            "Great skill exchange potential! They can teach you Figma, Sketch "
            "while you can share your Python, SQL expertise."
        )

    def test_they_can_teach_only(self):
        """Only the candidate has something new."""
        text = explain(TemplateExplainer(), ["Figma"])
        assert text == "They have expertise in Figma that could help you grow."

    def test_you_can_teach_only(self):
        """Only the requester has something new."""
        text = explain(TemplateExplainer(), you_can_teach=["Python", "SQL"])
        assert text == "You could mentor them in Python, SQL."

    def test_no_gaps(self):
        """Falls back to a generic collaboration message."""
        text = explain(TemplateExplainer())
        assert text == "Potential for skill sharing and collaboration."


class TestGenerativeExplainer:
    """Test explanations produced by the completion client."""

    def test_returns_generated_text(self):
        """Generated text is returned stripped."""
        client = mock.Mock()
        client.complete_text.return_value = "  You two could swap React and Figma tips!  "

        text = explain(GenerativeExplainer(client), ["Figma"], ["Python"])

        assert text == "You two could swap React and Figma tips!"
        client.complete_text.assert_called_once()
        _, kwargs = client.complete_text.call_args
        assert kwargs == {"max_tokens": 60, "temperature": 0.7}

    def test_prompt_contains_skills_and_score(self):
        """The prompt carries both skill lists, the gaps and the score."""
        client = mock.Mock()
        client.complete_text.return_value = "Nice match."

        explain(GenerativeExplainer(client), ["Figma"], [], score=35)

        prompt = client.complete_text.call_args[0][0]
        assert "User A skills: React, Python" in prompt
        assert "User B (Maya) skills: React, Figma" in prompt
        assert "They can teach: Figma" in prompt
        assert "You can teach them: nothing new" in prompt
        assert "Match score: 35%" in prompt
        assert "under 20 words" in prompt

    @pytest.mark.parametrize("error", [
        CompletionError("HTTP 503"),
        ConnectionError("reset"),
        ValueError("bad json"),
    ])
    def test_errors_fall_back(self, error):
        """Any client error yields the fallback sentence instead of raising."""
        client = mock.Mock()
        client.complete_text.side_effect = error

        text = explain(GenerativeExplainer(client), ["Figma"])

        assert text == ERROR_FALLBACK
        assert client.complete_text.call_count == 1

    @pytest.mark.parametrize("response", ["", "   ", None])
    def test_empty_response_falls_back(self, response):
        """Blank output yields the empty-response fallback."""
        client = mock.Mock()
        client.complete_text.return_value = response

        assert explain(GenerativeExplainer(client)) == EMPTY_RESPONSE_FALLBACK

    def test_error_body_uses_empty_response_fallback(self):
        """An HTTP error with a JSON body reads as an empty response."""
        client = TextCompletionClient(api_key="sk-test", base_url="https://llm.example.com/v1")
        response = mock.Mock(status_code=500)
        response.json.return_value = {"error": {"message": "upstream overloaded"}}

        with mock.patch.object(client.session, "post", return_value=response):
            text = explain(GenerativeExplainer(client), ["Figma"])

        assert text == EMPTY_RESPONSE_FALLBACK


class TestBuildExplainer:
    """Test strategy selection from settings."""

    def test_template_without_api_key(self):
        """No key means template explanations."""
        explainer = build_explainer(Settings(database_url="sqlite://"))
        assert isinstance(explainer, TemplateExplainer)

    def test_generative_with_api_key(self):
        """A key configures the completion client from settings."""
        settings = Settings(
            database_url="sqlite://",
            completion_api_key="sk-test",
            completion_base_url="https://llm.example.com/v1/",
            completion_model="test-model",
            explanation_timeout=2.5,
        )

        explainer = build_explainer(settings)

        assert isinstance(explainer, GenerativeExplainer)
        assert explainer.client.base_url == "https://llm.example.com/v1"
        assert explainer.client.model == "test-model"
        assert explainer.client.timeout == 2.5
        assert explainer.client.session.headers["Authorization"] == "Bearer sk-test"
