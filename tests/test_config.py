"""Tests for configuration loading"""

from dataclasses import FrozenInstanceError

import pytest

from thoughtlog.core.config import get_settings


@pytest.fixture
def fresh_settings(monkeypatch):
    """get_settings() re-read after the test adjusts the environment."""
    get_settings.cache_clear()
    yield lambda: (get_settings.cache_clear(), get_settings())[1]
    get_settings.cache_clear()


class TestSettings:

    def test_defaults(self, monkeypatch, fresh_settings):
        for key in ("OPENAI_MODEL", "CLAUDE_FAST_MODEL", "CLAUDE_SMART_MODEL", "LLM_TIMEOUT_SECONDS"):
            monkeypatch.delenv(key, raising=False)

        settings = fresh_settings()

        assert settings.openai_model == "gpt-4.1-2025-04-14"
        assert settings.claude_fast_model == "claude-3-haiku-20240307"
        assert settings.claude_smart_model == "claude-3-sonnet-20240229"
        assert settings.llm_timeout == 60.0

    def test_keys_are_stripped(self, monkeypatch, fresh_settings):
        monkeypatch.setenv("OPENAI_API_KEY", "  sk-test \n")
        assert fresh_settings().openai_api_key == "sk-test"

    def test_postgres_scheme_is_normalized(self, monkeypatch, fresh_settings):
        monkeypatch.setenv("DATABASE_URL", "postgres://u:p@host/db")
        assert fresh_settings().database_url == "postgresql://u:p@host/db"

    def test_zero_timeout_disables_deadline(self, monkeypatch, fresh_settings):
        monkeypatch.setenv("LLM_TIMEOUT_SECONDS", "0")
        assert fresh_settings().llm_timeout is None

    def test_environment_helpers(self, monkeypatch, fresh_settings):
        monkeypatch.setenv("APP_ENV", "Production")
        settings = fresh_settings()
        assert settings.is_production()
        assert not settings.is_development()

    def test_settings_are_immutable(self, fresh_settings):
        settings = fresh_settings()
        with pytest.raises(FrozenInstanceError):
            settings.app_name = "other"
