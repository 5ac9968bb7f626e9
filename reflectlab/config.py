"""
Configuration for reflectlab.

Settings are read from environment variables with the REFLECTLAB_ prefix.

Example:
    REFLECTLAB_LOG_LEVEL=DEBUG
    REFLECTLAB_INCLUDE_PRIVATE_FIELDS=false
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """reflectlab configuration."""

    log_level: str = Field(default="WARNING")

    # Entity introspection
    include_private_fields: bool = Field(
        default=True, description="Read underscore-prefixed attributes as columns"
    )
    include_instance_attributes: bool = Field(
        default=True,
        description="Plain classes: append instance attributes that have no annotation",
    )

    model_config = {"env_prefix": "REFLECTLAB_"}


@lru_cache
def get_settings() -> Settings:
    """Get the process-wide settings."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Apply the configured level to the reflectlab logger namespace."""
    settings = settings or get_settings()
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Invalid log level: {settings.log_level}")
    logging.getLogger("reflectlab").setLevel(level)
