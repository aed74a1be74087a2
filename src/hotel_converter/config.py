# ABOUTME: Application configuration using Pydantic Settings for environment variables
# ABOUTME: Provides type-safe access to output paths, download limits, and logging settings

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="HOTEL_CONVERTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown environment variables
    )

    # Output Configuration
    output_dir: Path = Field(
        default=Path("output"), description="Base directory; each run writes to a timestamped subdirectory"
    )

    # Image Download Configuration
    image_request_timeout: float = Field(
        default=10.0, gt=0, description="Per-image HTTP timeout in seconds (shorter than the batch deadline)"
    )
    batch_deadline_seconds: float = Field(
        default=300.0, gt=0, description="Global deadline for all image downloads of one batch"
    )
    max_concurrent_downloads: int = Field(default=16, ge=1, description="Upper bound on in-flight image downloads")
    max_image_size_mb: float = Field(default=10.0, gt=0, description="Images larger than this are rejected")
    user_agent: str = Field(
        default="HotelConverter/1.0 (+https://github.com/freshcells/hotel-converter)",
        description="User-Agent header sent with image requests",
    )

    # Logging Configuration
    log_mode: Literal["interactive", "production"] = Field(default="interactive", description="Logging output mode")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging verbosity level"
    )

    log_file: Path | None = Field(default=None, description="Custom log file path (overrides default)")


# Global config instance - lazy loaded when first accessed
_config_instance: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance.

    Creates the config on first access, subsequent calls return the same instance.

    Returns:
        Config: The application configuration instance
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def reload_config() -> Config:
    """Reload configuration from environment variables.

    Useful for testing or when environment variables change at runtime.

    Returns:
        Config: A fresh configuration instance
    """
    global _config_instance
    _config_instance = Config()
    return _config_instance
