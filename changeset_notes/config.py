"""Application configuration."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables.

    Settings are loaded in this priority order (highest to lowest):
    1. Environment variables (prefixed ``CHANGESET_NOTES_``)
    2. .env file (for local development)
    3. Default values

    Command-line options override these for a single invocation.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHANGESET_NOTES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # Files
    # =========================================================================
    changelog_path: Path = Field(
        default=Path("CHANGELOG.md"),
        description="CHANGELOG file transformed when no path is given",
    )

    # =========================================================================
    # Logging
    # =========================================================================
    log_level: str = Field(
        default="INFO",
        description="Root log level for the CLI (DEBUG, INFO, WARNING, ...)",
    )
    log_format: str = "%(levelname)-5.5s [%(name)s] %(message)s"


settings = Settings()
