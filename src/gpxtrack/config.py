"""Configuration management using Pydantic settings."""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

GPX_NAMESPACE = "http://www.topografix.com/GPX/1/1"

LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


class GpxSettings(BaseSettings):
    """Settings loaded from GPXTRACK_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GPXTRACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Encoder
    creator: str = "gpxtrack"
    gpx_version: str = "1.1"
    write_namespace: bool = True  # emit xmlns on the <gpx> root

    # CLI
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return level


settings = GpxSettings()
