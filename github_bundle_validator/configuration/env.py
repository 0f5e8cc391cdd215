"""Pydantic Settings model for application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from github_bundle_validator.utils.constants import DEFAULT_BUNDLE_ROOT


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Generic application-wide settings
    DEBUG: bool = False

    # Bundle settings
    BUNDLE_ROOT: Path = Path(DEFAULT_BUNDLE_ROOT)
    STRICT: bool = False
