"""Application configuration using Pydantic Settings."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Calculate project root: config.py is in backend/, so go up one level
_CONFIG_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _CONFIG_DIR.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(_PROJECT_ROOT / "backend" / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="JSON Studio", description="Application name")
    app_env: str = Field(default="development", description="Application environment")
    cors_origins: list[str] = Field(
        default=["http://localhost:5173", "http://127.0.0.1:5173"],
        description="Origins allowed by the CORS middleware",
        alias="CORS_ORIGINS",
    )

    # Security
    secret_key: str = Field(
        ...,
        description="Secret key for JWT tokens",
        alias="SECRET_KEY",
    )
    algorithm: str = Field(default="HS256", description="JWT algorithm")
    access_token_expire_minutes: int = Field(default=60, description="Access token expiration in minutes")

    # Database
    database_url: str = Field(
        ...,
        description="Database connection URL",
        alias="DATABASE_URL",
    )

    # LLM Provider
    llm_base_url: str = Field(
        default="https://api.x.ai/v1",
        description="Base URL of an OpenAI-compatible chat completions API",
        alias="LLM_BASE_URL",
    )
    llm_api_key: str | None = Field(
        default=None,
        description="API key for the chat completions provider",
        alias="LLM_API_KEY",
    )
    llm_model: str = Field(
        default="grok-3-mini-fast",
        description="Chat model used for JSON generation",
        alias="LLM_MODEL",
    )
    llm_timeout: int = Field(
        default=120,
        description="Provider request timeout in seconds",
        alias="LLM_TIMEOUT",
    )

    # Generation
    generation_history_limit: int = Field(
        default=10,
        description="Number of generation records returned by the history listing",
        alias="GENERATION_HISTORY_LIMIT",
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def validate_database_url(cls, v: str | None) -> str:
        """Validate and normalize database URL."""
        if v is None or v == "":
            raise ValueError("DATABASE_URL is required")
        return v.strip()

    @field_validator("app_env", mode="before")
    @classmethod
    def normalize_app_env(cls, v: str) -> str:
        """Normalize app environment to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v

    @field_validator("generation_history_limit")
    @classmethod
    def validate_history_limit(cls, v: int) -> int:
        """History limit must be positive."""
        if v < 1:
            raise ValueError("GENERATION_HISTORY_LIMIT must be at least 1")
        return v


def get_settings() -> Settings:
    """Get application settings instance.

    Returns:
        Settings: Application settings instance

    Example:
        ```python
        from backend.config import get_settings

        settings = get_settings()
        print(settings.database_url)
        ```
    """
    return Settings()


# Global settings instance
settings = get_settings()
