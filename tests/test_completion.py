"""
Tests for the chat completions client.
"""

import threading
from unittest import mock

import pytest
import requests

from skillswap.matching.completion import CompletionError, TextCompletionClient


def make_response(status_code=200, payload=None, json_error=None):
    response = mock.Mock()
    response.status_code = status_code
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def client():
    return TextCompletionClient(api_key="sk-test", base_url="https://llm.example.com/v1", model="m1", timeout=3)


class TestCompleteText:
    """Test request building and response parsing."""

    def test_success(self, client):
        """Returns the first choice's content, stripped."""
        payload = {"choices": [{"message": {"content": " Great pair! \n"}}]}
        with mock.patch.object(client.session, "post", return_value=make_response(payload=payload)) as post:
            text = client.complete_text("hello", max_tokens=60, temperature=0.7)

        assert text == "Great pair!"
        post.assert_called_once_with(
            "https://llm.example.com/v1/chat/completions",
            json={
                "model": "m1",
                "messages": [{"role": "user", "content": "hello"}],
                "max_tokens": 60,
                "temperature": 0.7,
            },
            timeout=3,
        )

    def test_sends_bearer_token(self, client):
        """Authorization header is set on the session."""
        assert client.session.headers["Authorization"] == "Bearer sk-test"

    def test_null_content_is_empty(self, client):
        """A null content field is returned as an empty string."""
        payload = {"choices": [{"message": {"content": None}}]}
        with mock.patch.object(client.session, "post", return_value=make_response(payload=payload)):
            assert client.complete_text("hello") == ""

    def test_http_error_body_is_parsed(self, client):
        """An error status with an error body yields empty text."""
        payload = {"error": {"message": "Rate limit exceeded", "code": 429}}
        with mock.patch.object(client.session, "post", return_value=make_response(status_code=429, payload=payload)):
            assert client.complete_text("hello") == ""

    def test_network_error(self, client):
        """Transport failures raise CompletionError."""
        with mock.patch.object(client.session, "post", side_effect=requests.Timeout("read timed out")):
            with pytest.raises(CompletionError):
                client.complete_text("hello")

    def test_invalid_json(self, client):
        """Unparseable bodies raise CompletionError."""
        response = make_response(status_code=502, json_error=ValueError("Expecting value"))
        with mock.patch.object(client.session, "post", return_value=response):
            with pytest.raises(CompletionError):
                client.complete_text("hello")

    @pytest.mark.parametrize("payload", [
        {},
        {"choices": []},
        {"choices": [{"message": {}}]},
        {"choices": [{"message": {"content": ["not", "text"]}}]},
        ["unexpected"],
    ])
    def test_malformed_payload_is_empty(self, client, payload):
        """Bodies without a first choice's text yield empty text."""
        with mock.patch.object(client.session, "post", return_value=make_response(payload=payload)):
            assert client.complete_text("hello") == ""


class TestSessions:
    """Test per-thread HTTP sessions."""

    def test_same_thread_reuses_session(self, client):
        """Repeated access from one thread returns one session."""
        assert client.session is client.session

    def test_threads_get_separate_sessions(self, client):
        """Worker threads do not share a session."""
        sessions = []
        threads = [threading.Thread(target=lambda: sessions.append(client.session)) for _ in range(2)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(sessions) == 2
        assert sessions[0] is not sessions[1]
        assert client.session not in sessions
        assert all(s.headers["Authorization"] == "Bearer sk-test" for s in sessions)
