"""App configuration — environment variable loading with typed defaults.

Loads settings from .env file (via python-dotenv) and os.environ.
Real environment variables take precedence over .env file values.

The default chat mode (AI_DEFAULT_MODE) is validated against UserMode
at load time so a typo fails at startup, not on the first chat request.

Usage:
    from campus_ai.config import get_settings
    settings = get_settings()
    print(settings.ai_cache_ttl_ms)  # 1800000
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from campus_ai.models import UserMode

# Only load .env from the project root — don't traverse parent directories.
PROJECT_ROOT = Path(__file__).resolve().parent.parent
_DOTENV_PATH = PROJECT_ROOT / ".env"


@dataclass(frozen=True)
class Settings:
    """Typed configuration for the campus AI assistant.

    All fields have sensible defaults for local development. An empty
    ai_service_api_key puts the assistant in canned-response mode.
    """

    # App
    app_env: str
    app_port: int
    log_level: str
    cors_origins: list[str]

    # AI provider
    ai_service_url: str
    ai_service_api_key: str
    ai_request_timeout_s: float

    # Response cache
    ai_cache_ttl_ms: int
    ai_cache_max_entries: int

    # Chat behaviour
    ai_default_mode: UserMode
    max_message_length: int
    chat_archive_after_days: int


def _resolve_mode(env_var: str, value: str) -> UserMode:
    """Resolves a mode string to a UserMode.

    Args:
        env_var: Name of the environment variable (for error messages).
        value: The raw value from the environment (e.g. "balanced").

    Returns:
        The matching UserMode.

    Raises:
        ValueError: If the value isn't a UserMode value.
    """
    try:
        return UserMode(value)
    except ValueError:
        valid = ", ".join(mode.value for mode in UserMode)
        raise ValueError(
            f"Invalid value for {env_var}: {value!r}. "
            f"Valid options: {valid}"
        ) from None


def _split_csv(value: str) -> list[str]:
    """Splits a comma-separated string into a list of stripped, non-empty values."""
    return [item.strip() for item in value.split(",") if item.strip()]


def _load_settings() -> Settings:
    """Loads configuration from .env file and environment variables.

    Returns:
        A fully resolved Settings instance.
    """
    load_dotenv(_DOTENV_PATH)

    return Settings(
        # App
        app_env=os.environ.get("APP_ENV", "development"),
        app_port=int(os.environ.get("APP_PORT", "3000")),
        log_level=os.environ.get("LOG_LEVEL", "info"),
        cors_origins=_split_csv(
            os.environ.get("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173")
        ),
        # AI provider
        ai_service_url=os.environ.get("AI_SERVICE_URL", "https://api.openai.com/v1").rstrip("/"),
        ai_service_api_key=os.environ.get("AI_SERVICE_API_KEY", ""),
        ai_request_timeout_s=float(os.environ.get("AI_REQUEST_TIMEOUT_S", "30")),
        # Response cache
        ai_cache_ttl_ms=int(os.environ.get("AI_CACHE_TIMEOUT_MS", "1800000")),
        ai_cache_max_entries=int(os.environ.get("AI_CACHE_MAX_ENTRIES", "1000")),
        # Chat behaviour
        ai_default_mode=_resolve_mode(
            "AI_DEFAULT_MODE",
            os.environ.get("AI_DEFAULT_MODE", "balanced"),
        ),
        max_message_length=int(os.environ.get("AI_MAX_MESSAGE_LENGTH", "500")),
        chat_archive_after_days=int(os.environ.get("CHAT_ARCHIVE_AFTER_DAYS", "180")),
    )


_settings: Settings | None = None


def get_settings() -> Settings:
    """Returns the singleton Settings instance. Loads .env on first call."""
    global _settings
    if _settings is None:
        _settings = _load_settings()
    return _settings
