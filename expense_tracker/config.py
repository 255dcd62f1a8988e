"""Configuration management for the application."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Storage
    storage_backend: Literal["database", "file"] = Field(default="database")
    database_url: str = Field(default="sqlite:///./expenses.db")
    data_dir: str = Field(default="data")

    # JWT
    jwt_secret: str = Field(default="change-me-in-production")
    jwt_algorithm: str = Field(default="HS256")
    jwt_expiration_minutes: int = Field(default=10080)  # 7 days

    # Comma-separated list of emails that are always treated as admins
    admin_emails: str = Field(default="")

    password_min_length: int = Field(default=6)

    # API
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production has secure settings."""
        if self.environment == "production":
            if self.jwt_secret == "change-me-in-production":  # noqa: S105
                raise ValueError("JWT_SECRET must be changed in production")
        return self

    @property
    def admin_email_list(self) -> list[str]:
        """Admin allow-list parsed from ADMIN_EMAILS, lower-cased for matching."""
        return [
            email.strip().lower() for email in self.admin_emails.split(",") if email.strip()
        ]

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
