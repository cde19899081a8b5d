"""Client for an OpenAI-compatible chat completions API (OpenRouter by default)."""

import logging
import threading

import requests

from skillswap.config import DEFAULT_COMPLETION_BASE_URL, DEFAULT_COMPLETION_MODEL

logger = logging.getLogger(__name__)


class CompletionError(Exception):
    """Raised when the completion API cannot be reached or returns unparseable data."""


class TextCompletionClient:
    """Sends single-turn prompts to a chat completions endpoint.

    Each thread gets its own requests.Session, so one client can be shared
    by the explanation worker pool.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_COMPLETION_BASE_URL,
        model: str = DEFAULT_COMPLETION_MODEL,
        timeout: float = 5.0,
    ):
        """Initialize the client.

        Args:
            api_key: Bearer token for the API.
            base_url: API root, without the /chat/completions suffix.
            model: Model identifier sent with each request.
            timeout: Seconds to wait for each request.
        """
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self.headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        self._local = threading.local()

    @property
    def session(self) -> requests.Session:
        """The calling thread's session, created on first use."""
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            session.headers.update(self.headers)
            self._local.session = session
        return session

    def complete_text(self, prompt: str, max_tokens: int = 60, temperature: float = 0.7) -> str:
        """Send a prompt and return the generated text.

        Error statuses are not raised: their JSON body is parsed like any
        other, and a body without a first choice's text gives "".

        Args:
            prompt: User message content.
            max_tokens: Upper bound on generated tokens.
            temperature: Sampling temperature.

        Returns:
            The generated text, stripped. May be empty.

        Raises:
            CompletionError: On a transport failure or a body that is not JSON.
        """
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

        try:
            response = self.session.post(
                f"{self.base_url}/chat/completions", json=payload, timeout=self.timeout
            )
            data = response.json()
        except requests.RequestException as e:
            raise CompletionError(f"Completion request failed: {e}") from e
        except ValueError as e:
            raise CompletionError(f"Completion response is not valid JSON: {e}") from e

        if response.status_code >= 400:
            logger.warning(f"Completion API returned HTTP {response.status_code}")

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            logger.warning("Completion response has no choices")
            return ""

        if not isinstance(content, str):
            return ""
        return content.strip()
