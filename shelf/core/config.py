"""
Application settings

All values are read from environment variables (or a local .env file)
through pydantic-settings.
"""

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the agent engine and provider skills."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Provider credentials
    REDDIT_ACCESS_TOKEN: SecretStr | None = Field(
        default=None, description="OAuth access token for the Reddit API"
    )
    REDDIT_USER_AGENT: str = Field(
        default="shelf/0.1", description="User-Agent header sent to Reddit"
    )
    REDDIT_COMMENT_LIMIT: int = Field(
        default=5, ge=0, description="Top-level comments appended to hydrated Reddit text"
    )
    X_BEARER_TOKEN: SecretStr | None = Field(
        default=None, description="Bearer token for the X v2 API"
    )
    HTTP_TIMEOUT_SECONDS: float = Field(
        default=10.0, gt=0, description="Timeout for provider HTTP requests"
    )

    # Executor
    AGENT_MAX_ATTEMPTS: int = Field(
        default=3, ge=1, description="Attempts per step when neither skill nor caller set one"
    )
    AGENT_BACKOFF_BASE_SECONDS: float = Field(
        default=0.2, ge=0, description="Backoff base; delay grows with attempt squared"
    )
    AGENT_BACKOFF_MAX_SECONDS: float = Field(
        default=2.0, ge=0, description="Upper bound for a single backoff delay"
    )

    LOG_LEVEL: str = Field(default="INFO", description="Root level for configure_logging()")


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()
