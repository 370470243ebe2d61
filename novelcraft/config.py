"""
Application configuration management using Pydantic Settings.

This module provides a type-safe, centralized configuration system
that loads from environment variables with sensible defaults.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """
    Application configuration loaded from environment variables.

    All settings can be overridden via .env file or environment variables.
    Settings are validated at startup using Pydantic.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # ===== API Keys =====
    ANTHROPIC_API_KEY: str | None = Field(
        default=None,
        description="Anthropic API key for Claude (required for Phase 1 generation)"
    )

    # ===== Phase 1 LLM Configuration =====
    PHASE1_MODEL: str = Field(
        default="claude-sonnet-4-20250514",
        description="Claude model used to fill blueprint chapters"
    )

    PHASE1_TEMPERATURE: float = Field(
        default=1.0,
        ge=0.0,
        le=2.0,
        description="Temperature for Phase 1 (high for creative chapter descriptions)"
    )

    PHASE1_MAX_TOKENS: int = Field(
        default=8192,
        ge=256,
        le=64000,
        description="Maximum tokens for the Phase 1 response (14 chapters + JSON fits well under 8K)"
    )

    LLM_TIMEOUT_SECONDS: float = Field(
        default=120.0,
        gt=0,
        description="Per-request timeout for the Anthropic client"
    )

    LLM_MAX_RETRIES: int = Field(
        default=3,
        ge=0,
        le=10,
        description="Transport-level retries performed by the Anthropic client"
    )

    # ===== Logging =====
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    LOG_BUFFER_SIZE: int = Field(
        default=1000,
        ge=10,
        le=100000,
        description="Number of recent log entries kept in memory"
    )

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept lowercase level names from the environment."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    # ===== Application Settings =====
    ENVIRONMENT: str = Field(
        default="development",
        description="Environment mode: development or production"
    )

    @property
    def anthropic_configured(self) -> bool:
        """Check if the Anthropic client can be used."""
        return self.ANTHROPIC_API_KEY is not None


# Global configuration instance
# Import this in other modules: from novelcraft.config import config
config = AppConfig()


if __name__ == "__main__":
    print("Configuration loaded successfully!")
    print(f"Phase 1 model: {config.PHASE1_MODEL}")
    print(f"Temperature: {config.PHASE1_TEMPERATURE} | Max tokens: {config.PHASE1_MAX_TOKENS}")
    print(f"Anthropic: {'✓' if config.anthropic_configured else '✗'}")
