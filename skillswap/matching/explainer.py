"""Match explanations: template sentences or generated text."""

import logging
from abc import ABC, abstractmethod
from typing import Sequence

from skillswap.config import Settings
from skillswap.matching.completion import TextCompletionClient

logger = logging.getLogger(__name__)

EMPTY_RESPONSE_FALLBACK = "Great potential for skill exchange!"
ERROR_FALLBACK = "Great potential for skill exchange and collaboration!"
TEMPLATE_FALLBACK = "Potential for skill sharing and collaboration."

MENTIONED_SKILLS = 2


class Explainer(ABC):
    """Produces a short rationale for why two users were matched."""

    @abstractmethod
    def explain(
        self,
        requester_skill_names: Sequence[str],
        candidate_name: str | None,
        candidate_skill_names: Sequence[str],
        they_can_teach: Sequence[str],
        you_can_teach: Sequence[str],
        score: int,
    ) -> str:
        """Return a one-sentence explanation. Must not raise."""
        pass


class TemplateExplainer(Explainer):
    """Deterministic explanations built from the skill gap lists."""

    def explain(
        self,
        requester_skill_names,
        candidate_name,
        candidate_skill_names,
        they_can_teach,
        you_can_teach,
        score,
    ) -> str:
        theirs = ", ".join(they_can_teach[:MENTIONED_SKILLS])
        yours = ", ".join(you_can_teach[:MENTIONED_SKILLS])

        if theirs and yours:
            return (
                f"Great skill exchange potential! They can teach you {theirs} "
                f"while you can share your {yours} expertise."
            )
        if theirs:
            return f"They have expertise in {theirs} that could help you grow."
        if yours:
            return f"You could mentor them in {yours}."
        return TEMPLATE_FALLBACK


class GenerativeExplainer(Explainer):
    """Explanations written by a text-completion model, one attempt per match."""

    max_tokens = 60
    temperature = 0.7

    def __init__(self, client: TextCompletionClient):
        self.client = client

    def build_prompt(
        self,
        requester_skill_names,
        candidate_name,
        candidate_skill_names,
        they_can_teach,
        you_can_teach,
        score,
    ) -> str:
        current_skills = ", ".join(requester_skill_names) or "various skills"
        target_skills = ", ".join(candidate_skill_names) or "various skills"

        return (
            "Generate a brief, friendly 1-sentence match explanation for skill exchange.\n"
            f"User A skills: {current_skills}\n"
            f"User B ({candidate_name or 'User'}) skills: {target_skills}\n"
            f"They can teach: {', '.join(they_can_teach) or 'nothing new'}\n"
            f"You can teach them: {', '.join(you_can_teach) or 'nothing new'}\n"
            f"Match score: {score}%\n"
            "\n"
            "Keep it under 20 words, positive and encouraging."
        )

    def explain(
        self,
        requester_skill_names,
        candidate_name,
        candidate_skill_names,
        they_can_teach,
        you_can_teach,
        score,
    ) -> str:
        prompt = self.build_prompt(
            requester_skill_names,
            candidate_name,
            candidate_skill_names,
            they_can_teach,
            you_can_teach,
            score,
        )
        try:
            text = self.client.complete_text(
                prompt, max_tokens=self.max_tokens, temperature=self.temperature
            )
        except Exception as e:
            logger.warning(f"AI explanation error for {candidate_name or 'user'}: {e}")
            return ERROR_FALLBACK

        if not isinstance(text, str) or not text.strip():
            return EMPTY_RESPONSE_FALLBACK
        return text.strip()


def build_explainer(settings: Settings) -> Explainer:
    """Pick the explanation strategy once, based on whether an API key is configured."""
    if not settings.generative_explanations:
        logger.info("No completion API key configured, using template explanations")
        return TemplateExplainer()

    client = TextCompletionClient(
        api_key=settings.completion_api_key,
        base_url=settings.completion_base_url,
        model=settings.completion_model,
        timeout=settings.explanation_timeout,
    )
    logger.info(f"Using generative explanations (model: {settings.completion_model})")
    return GenerativeExplainer(client)
