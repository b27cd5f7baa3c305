"""Configuration management using Pydantic Settings."""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Hosted upload policy service
API_UPLOAD_URL = "https://api.portive.com/api/v1/upload"


class Settings(BaseSettings):
    """Library defaults loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Upload Policy Service
    upload_policy_url: str = API_UPLOAD_URL
    # Older deployments expect "permit" or "auth"
    auth_token_field: str = "authToken"

    # Token Configuration
    default_expires_in: str = "1h"

    # Application Configuration
    log_level: str = "INFO"

    @field_validator("auth_token_field")
    @classmethod
    def require_token_field(cls, v: str) -> str:
        """Reject a blank token field name."""
        if not v.strip():
            raise ValueError("auth_token_field must not be empty")
        return v


# Global settings instance
settings = Settings()
