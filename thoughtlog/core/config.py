"""
Configuration management via environment variables.

This module loads configuration from .env file using python-dotenv.
All configuration values are accessed through the Settings class.

Provider credentials are read here and nowhere else; business logic receives
them as an explicit ProviderCredentials value built from Settings.
"""
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


# Load .env file from project root
# This must happen before accessing os.environ
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(env_path)


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    frozen=True makes the dataclass immutable, preventing accidental
    modification of settings at runtime.

    Attributes:
        app_name: Application identifier for logging
        app_env: Environment name (development, staging, production)
        log_level: Logging verbosity (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        database_url: SQLAlchemy connection string for the record store
        openai_api_key: Primary provider credential (empty when unset)
        claude_api_key: Secondary provider credential (empty when unset)
        openai_model: Model used for every OpenAI-style call
        claude_fast_model: Claude model for categorization
        claude_smart_model: Claude model for insight generation
        llm_timeout_seconds: Deadline for a provider call (0 = no timeout)
        enable_audit_logging: Whether the request audit middleware is installed
    """
    # Application settings
    app_name: str
    app_env: str
    log_level: str

    # Database settings
    database_url: str

    # LLM settings
    openai_api_key: str
    claude_api_key: str
    openai_model: str
    claude_fast_model: str
    claude_smart_model: str
    llm_timeout_seconds: float

    # Request auditing
    enable_audit_logging: bool

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env.lower() == "development"

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env.lower() == "production"

    @property
    def llm_timeout(self) -> Optional[float]:
        """Timeout passed to the HTTP layer, or None to wait indefinitely."""
        return self.llm_timeout_seconds if self.llm_timeout_seconds > 0 else None


def _get_env(key: str, default: Optional[str] = None) -> str:
    """
    Get environment variable with optional default.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value

    Raises:
        ValueError: If required variable is not set and no default provided
    """
    value = os.environ.get(key, default)
    if value is None:
        raise ValueError(
            f"Required environment variable '{key}' is not set. "
            f"Please check your .env file."
        )
    return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are read once; tests that change the environment call
    get_settings.cache_clear() afterwards.

    Returns:
        Settings instance with all configuration values
    """
    database_url = _get_env("DATABASE_URL", "sqlite:///./thoughtlog.db")

    # SQLAlchemy 2.x only accepts the postgresql:// scheme
    if database_url.startswith("postgres://"):
        database_url = database_url.replace("postgres://", "postgresql://", 1)

    return Settings(
        # Application
        app_name=_get_env("APP_NAME", "Thoughtlog"),
        app_env=_get_env("APP_ENV", "development"),
        log_level=_get_env("LOG_LEVEL", "INFO"),

        # Database
        database_url=database_url,

        # LLM
        openai_api_key=_get_env("OPENAI_API_KEY", "").strip(),
        claude_api_key=_get_env("CLAUDE_API_KEY", "").strip(),
        openai_model=_get_env("OPENAI_MODEL", "gpt-4.1-2025-04-14"),
        claude_fast_model=_get_env("CLAUDE_FAST_MODEL", "claude-3-haiku-20240307"),
        claude_smart_model=_get_env("CLAUDE_SMART_MODEL", "claude-3-sonnet-20240229"),
        llm_timeout_seconds=float(_get_env("LLM_TIMEOUT_SECONDS", "60")),

        enable_audit_logging=_get_env("ENABLE_AUDIT_LOGGING", "true").lower() == "true",
    )
