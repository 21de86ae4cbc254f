from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv(override=False)


class Settings(BaseModel):
    """Runtime configuration read from the environment (and a local .env file)."""

    config_path: Path | None = Field(default_factory=lambda: os.getenv("LESSONSCRIPT_CONFIG") or None)
    log_level: str = Field(default_factory=lambda: os.getenv("LESSONSCRIPT_LOG_LEVEL", "WARNING"))

    model_config = {
        "frozen": True,
        "validate_default": True,
    }

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: object) -> str:
        level = str(value or "WARNING").strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance for scripts."""

    return Settings()


__all__ = ["Settings", "get_settings"]
