"""Configuration management with pydantic-settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class HarscopeSettings(BaseSettings):
    """harscope settings loaded from environment variables.

    All settings use the HARSCOPE_ prefix for environment variables.
    """

    output_dir: Path = Field(
        default=Path("universal_har_analysis"),
        description="Directory receiving reports, relative to the working directory",
    )
    max_table_rows: int = Field(
        default=20,
        ge=1,
        description="Maximum rows shown per Markdown report table",
    )

    # Logging configuration
    log_level: str = Field(default="WARNING", description="Logging level")
    log_format: str = Field(default="console", description="Log format: console or json")

    model_config = SettingsConfigDict(
        env_prefix="HARSCOPE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Global settings instance
_settings: HarscopeSettings | None = None


def get_settings() -> HarscopeSettings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = HarscopeSettings()
    return _settings


def reset_settings() -> None:
    """Reset the global settings instance (useful for testing)."""
    global _settings
    _settings = None
