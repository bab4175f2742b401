"""Application settings."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CODE_PULSE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # GitHub settings
    github_token: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_TOKEN", "CODE_PULSE_GITHUB_TOKEN"),
    )
    github_api_base: str = "https://api.github.com"
    user_agent: str = "CodePulse-App"

    # Fetch settings
    page_size: int = Field(default=100, ge=1, le=100)
    request_timeout: float = 30.0
    detail_failure_policy: Literal["fail_fast", "skip"] = "fail_fast"

    # Server settings
    log_level: str = "INFO"
    max_request_size: int = 64 * 1024


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
