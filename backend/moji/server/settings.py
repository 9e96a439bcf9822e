"""Moji service configuration via environment variables."""

from datetime import date
from enum import StrEnum

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from moji.logic.clock import FIRST_PUZZLE_DATE
from shared.logging import VALID_LOG_FORMATS, VALID_LOG_LEVELS


class StorageBackend(StrEnum):
    FILE = "file"
    SQLITE = "sqlite"
    MEMORY = "memory"  # nothing survives a restart


class MojiSettings(BaseSettings):
    model_config = {"env_prefix": "MOJI_"}

    # Testing override: every play counts as a new play, even on the same day.
    unlimited_plays: bool = False
    first_puzzle_date: date = FIRST_PUZZLE_DATE

    storage_backend: StorageBackend = StorageBackend.FILE
    storage_path: str = Field(default="backend/data", min_length=1)  # directory for file, db path for sqlite

    log_dir: str | None = "backend/logs/moji"
    log_format: str = "console"
    log_level: str = "INFO"

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        value = v.lower()
        if value not in VALID_LOG_FORMATS:
            raise ValueError(f"log_format must be one of {', '.join(sorted(VALID_LOG_FORMATS))}")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        value = v.upper()
        if value not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(sorted(VALID_LOG_LEVELS))}")
        return value
