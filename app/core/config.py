"""
Configuration management using Pydantic Settings.

This module defines the Settings class that loads configuration from
environment variables and .env files.
"""

from typing import Any, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = Field(default="Smart Farming", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    # Gemini API (generative text)
    gemini_api_key: str = Field(
        default="", description="Google Generative Language API key"
    )
    gemini_model: str = Field(
        default="gemini-2.0-flash", description="Model used for generateContent"
    )
    gemini_api_base: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta/models",
        description="Base URL of the models endpoint",
    )
    gemini_timeout: Optional[float] = Field(
        default=None,
        description="Request timeout in seconds (None disables the timeout)",
    )

    # Parsing policy
    allow_synthetic_data: bool = Field(
        default=True,
        description="Fill fields the AI text does not provide with synthesized values",
    )
    pest_unclassified_control_policy: Literal["balance", "drop"] = Field(
        default="balance",
        description="What to do with control lines that are neither organic nor chemical",
    )

    # API Configuration
    api_v1_prefix: str = Field(default="/api/v1", description="API v1 prefix")

    # CORS
    cors_origins: list[str] = Field(
        default=["http://localhost:3000"],
        description="CORS allowed origins",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: Any) -> Any:
        """Parse CORS origins from environment variable."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v

    @field_validator("gemini_timeout", mode="before")
    @classmethod
    def parse_gemini_timeout(cls, v: Any) -> Any:
        """Treat an empty or zero timeout as "no timeout"."""
        if v in ("", "0", 0, None):
            return None
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the global Settings instance.

    Returns:
        Settings: The application settings

    Raises:
        ValidationError: If environment variables are invalid
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached Settings so the next call re-reads the environment."""
    global _settings
    _settings = None
