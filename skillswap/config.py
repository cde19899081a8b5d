"""Runtime settings read from environment variables."""

import logging
import os
from dataclasses import dataclass

from skillswap.models.database import get_database_url

logger = logging.getLogger(__name__)

DEFAULT_COMPLETION_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_COMPLETION_MODEL = "google/gemma-2-9b-it"


def _get_number_env(key: str, default, cast):
    """Read a numeric environment variable, falling back to the default on bad input."""
    value = os.environ.get(key)
    if value is None or value.strip() == "":
        return default
    try:
        return cast(value)
    except ValueError:
        logger.warning(f"Invalid value for {key}: {value!r}, using default: {default}")
        return default


@dataclass(frozen=True)
class Settings:
    database_url: str
    completion_api_key: str | None = None
    completion_base_url: str = DEFAULT_COMPLETION_BASE_URL
    completion_model: str = DEFAULT_COMPLETION_MODEL
    explanation_timeout: float = 5.0
    explanation_max_workers: int = 4

    @property
    def generative_explanations(self) -> bool:
        """True when a text-completion API key is configured."""
        return bool(self.completion_api_key)

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=get_database_url(),
            completion_api_key=os.environ.get("OPENROUTER_API_KEY") or None,
            completion_base_url=os.environ.get("OPENROUTER_BASE_URL", DEFAULT_COMPLETION_BASE_URL),
            completion_model=os.environ.get("OPENROUTER_MODEL", DEFAULT_COMPLETION_MODEL),
            explanation_timeout=_get_number_env("EXPLANATION_TIMEOUT", 5.0, float),
            explanation_max_workers=max(1, _get_number_env("EXPLANATION_MAX_WORKERS", 4, int)),
        )
