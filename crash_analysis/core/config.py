"""
Configuration management for the crash analysis project.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "crash_analysis"
    postgres_user: str = "postgres"
    postgres_password: str = "postgres"
    # Full URL override, e.g. sqlite:///crash_analysis.db
    database_url_override: Optional[str] = None

    # Reporting
    risk_min_crash_count: int = 2
    unknown_label: str = "Unknown"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_token: str = "change_me_in_production"
    api_title: str = "Crash Analysis API"
    api_version: str = "0.1.0"

    # Logging
    log_level: str = "INFO"
    log_file_path: Optional[Path] = Field(default=Path("logs/app.log"))

    # Environment
    environment: str = "development"

    @field_validator("log_file_path", mode="before")
    @classmethod
    def convert_to_path(cls, v):
        """Convert string paths to Path objects; an empty string disables the file."""
        if isinstance(v, str):
            return Path(v) if v else None
        return v

    @property
    def database_url(self) -> str:
        """Construct the database URL."""
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def is_sqlite(self) -> bool:
        """Check if the configured database is SQLite."""
        return self.database_url.startswith("sqlite")

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Application settings
    """
    return Settings()
