"""Type-safe environment configuration using Pydantic Settings."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Mirror configuration loaded from environment variables.

    Every field has a default so a bare `lobsters-gopher` invocation works.
    The `--host` CLI flag takes precedence over LOBSTERS_HOST.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra fields in .env
        env_ignore_empty=True,
    )

    APP_NAME: str = Field(
        default="lobsters-gopher",
        description="Application name, included in JSON log records"
    )

    LOBSTERS_HOST: str = Field(
        default="lobste.rs",
        description="Forum host, with or without a URL scheme"
    )

    WORKER_COUNT: int = Field(
        default=4,
        description="Number of stories processed in parallel",
        gt=0
    )

    OUTPUT_DIR: Path = Field(
        default=Path("."),
        description="Directory receiving the gophermap and article files"
    )

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level"
    )

    LOG_JSON: bool = Field(
        default=False,
        description="Emit log records as JSON lines"
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(
                f"LOG_LEVEL must be one of {valid_levels}, got '{v}'"
            )
        return v_upper


# Singleton instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Loads settings from environment variables and .env file on first call.
    Subsequent calls return the cached instance.

    Returns:
        Settings: The application settings instance

    Raises:
        ValidationError: If an environment variable holds an invalid value
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset the settings singleton. Useful for testing."""
    global _settings
    _settings = None
