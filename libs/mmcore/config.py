"""Configuration loading for the morphological metrics library.

Reads environment variables into a typed settings object using Pydantic v2.

Env variables:
- MM_LOG_LEVEL (default: INFO)
- MM_ENV (default: development)
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Settings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    MM_LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    MM_ENV: str = Field(default="development", description="Environment name")

    @field_validator("MM_LOG_LEVEL")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment and memoize.

    Raises:
        pydantic.ValidationError: if MM_LOG_LEVEL is not a logging level name.
    """

    env = {
        "MM_LOG_LEVEL": os.getenv("MM_LOG_LEVEL", "INFO"),
        "MM_ENV": os.getenv("MM_ENV", "development"),
    }
    return Settings.model_validate(env)


__all__ = ["Settings", "get_settings"]
