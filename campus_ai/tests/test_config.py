"""Tests for campus_ai.config — Typed configuration from environment."""

import campus_ai.config as config_module
import pytest
from campus_ai.config import Settings, get_settings
from campus_ai.models import UserMode


@pytest.fixture(autouse=True)
def _reset_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Resets the cached singleton and keeps .env out of the picture."""
    monkeypatch.setattr(config_module, "_settings", None)
    monkeypatch.setattr(config_module, "load_dotenv", lambda *args, **kwargs: False)


@pytest.fixture()
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Removes all campus AI env vars so defaults are tested cleanly."""
    env_vars = [
        "APP_ENV", "APP_PORT", "LOG_LEVEL", "CORS_ORIGINS",
        "AI_SERVICE_URL", "AI_SERVICE_API_KEY", "AI_REQUEST_TIMEOUT_S",
        "AI_CACHE_TIMEOUT_MS", "AI_CACHE_MAX_ENTRIES",
        "AI_DEFAULT_MODE", "AI_MAX_MESSAGE_LENGTH", "CHAT_ARCHIVE_AFTER_DAYS",
    ]
    for var in env_vars:
        monkeypatch.delenv(var, raising=False)


class TestDefaults:
    """Settings defaults when no env vars are set."""

    @pytest.mark.usefixtures("_clean_env")
    def test_app_defaults(self) -> None:
        s = get_settings()
        assert s.app_env == "development"
        assert s.app_port == 3000
        assert s.log_level == "info"

    @pytest.mark.usefixtures("_clean_env")
    def test_cors_origins_default(self) -> None:
        s = get_settings()
        assert s.cors_origins == ["http://localhost:3000", "http://localhost:5173"]

    @pytest.mark.usefixtures("_clean_env")
    def test_ai_service_defaults(self) -> None:
        s = get_settings()
        assert s.ai_service_url == "https://api.openai.com/v1"
        assert s.ai_service_api_key == ""
        assert s.ai_request_timeout_s == 30.0

    @pytest.mark.usefixtures("_clean_env")
    def test_cache_defaults(self) -> None:
        s = get_settings()
        assert s.ai_cache_ttl_ms == 1_800_000
        assert s.ai_cache_max_entries == 1000

    @pytest.mark.usefixtures("_clean_env")
    def test_chat_defaults(self) -> None:
        s = get_settings()
        assert s.ai_default_mode == UserMode.BALANCED
        assert s.max_message_length == 500
        assert s.chat_archive_after_days == 180


class TestOverrides:
    """Env vars override defaults."""

    def test_cache_settings_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AI_CACHE_TIMEOUT_MS", "60000")
        monkeypatch.setenv("AI_CACHE_MAX_ENTRIES", "5")
        s = get_settings()
        assert s.ai_cache_ttl_ms == 60000
        assert s.ai_cache_max_entries == 5

    def test_service_url_trailing_slash_stripped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AI_SERVICE_URL", "http://localhost:8080/v1/")
        assert get_settings().ai_service_url == "http://localhost:8080/v1"

    def test_cors_origins_split_and_stripped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CORS_ORIGINS", " https://a.edu , ,https://b.edu")
        assert get_settings().cors_origins == ["https://a.edu", "https://b.edu"]

    def test_default_mode_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AI_DEFAULT_MODE", "fast")
        assert get_settings().ai_default_mode == UserMode.FAST

    def test_archive_age_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CHAT_ARCHIVE_AFTER_DAYS", "30")
        assert get_settings().chat_archive_after_days == 30

    def test_app_env_and_port_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_ENV", "production")
        monkeypatch.setenv("APP_PORT", "8080")
        s = get_settings()
        assert s.app_env == "production"
        assert s.app_port == 8080

    def test_invalid_default_mode_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AI_DEFAULT_MODE", "turbo")
        with pytest.raises(ValueError, match="AI_DEFAULT_MODE"):
            get_settings()


class TestSingleton:
    """get_settings() caches its result."""

    @pytest.mark.usefixtures("_clean_env")
    def test_returns_same_instance(self) -> None:
        assert get_settings() is get_settings()

    @pytest.mark.usefixtures("_clean_env")
    def test_settings_are_frozen(self) -> None:
        s = get_settings()
        assert isinstance(s, Settings)
        with pytest.raises(AttributeError):
            s.app_port = 1  # type: ignore[misc]
