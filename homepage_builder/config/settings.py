"""
Application Settings
===================

Main application settings and environment configuration using Pydantic Settings.
Supports development, testing, and production environments.
"""

from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path


class Settings(BaseSettings):
    """Main application settings with environment variable support."""

    # Application Configuration
    app_name: str = Field(default="Homepage Builder", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(
        default="development", description="Environment: development, testing, production"
    )
    log_level: str = Field(default="INFO", description="Logging level")

    # Storage Configuration
    storage_path: Path = Field(default=Path("./storage"), description="Storage directory path")

    # Completion Provider Configuration
    openai_api_key: Optional[str] = Field(default=None, description="Completion provider API key")
    openai_base_url: Optional[str] = Field(
        default=None, description="Alternate completion service endpoint"
    )
    openai_model: str = Field(default="gpt-4o-mini", description="Completion model identifier")
    openai_temperature: float = Field(
        default=0.3, ge=0.0, le=2.0, description="Completion sampling temperature"
    )
    openai_max_tokens: int = Field(default=3000, gt=0, description="Maximum output tokens")
    completion_timeout: float = Field(
        default=120.0, gt=0, description="Completion call timeout in seconds"
    )
    completion_max_concurrency: int = Field(
        default=4, ge=1, description="Maximum concurrent completion calls"
    )

    # Browser Configuration
    playwright_headless: bool = Field(default=True, description="Run browser in headless mode")
    browser_launch_timeout: int = Field(
        default=60000, description="Browser launch timeout in milliseconds"
    )
    render_load_timeout: int = Field(
        default=30000, description="Content load timeout in milliseconds"
    )
    render_settle_delay: int = Field(
        default=1000, ge=0, description="Delay after load before capture in milliseconds"
    )
    render_max_concurrency: int = Field(
        default=4, ge=1, description="Maximum concurrent browser contexts"
    )
    utility_stylesheet_url: str = Field(
        default="https://cdn.jsdelivr.net/npm/tailwindcss@2.2.19/dist/tailwind.min.css",
        description="Utility stylesheet linked into synthesized documents",
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed = {"development", "testing", "production"}
        if v not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @field_validator("openai_api_key", "openai_base_url")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat blank environment values as unset."""
        if v is not None and not v.strip():
            return None
        return v

    @field_validator("storage_path")
    @classmethod
    def create_directories(cls, v: Path) -> Path:
        """Ensure directories exist."""
        v.mkdir(parents=True, exist_ok=True)
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="HOMEPAGE_BUILDER_",
        extra="ignore",
    )


# Global settings instance - will be initialized when needed
settings = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global settings
    if settings is None:
        settings = Settings()
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment."""
    global settings
    settings = Settings()
    return settings
