"""Configuration models.

The whole configuration is a single pydantic tree persisted as JSON by
``ConfigService``.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class StorageConfig(BaseModel):
    """Local task store configuration."""

    db_path: str | None = Field(
        default=None, description="SQLite database path (None = user data dir)"
    )
    user_id: str | None = Field(default=None, description="Local owner ID")

    @field_validator("db_path")
    @classmethod
    def validate_db_path(cls, v: str | None) -> str | None:
        """Treat blank paths as unset."""
        if v is None or not v.strip():
            return None
        return v.strip()


class OutputConfig(BaseModel):
    """Output defaults for the task commands."""

    format: Literal["pretty", "table", "json", "yaml"] = Field(
        default="pretty", description="Used when --output is not given"
    )
    color: bool = Field(default=True, description="Colour terminal output")


class UrgencyConfig(BaseModel):
    """Urgency panel configuration."""

    top_count: int = Field(default=5, ge=1)
    default_weight: int = Field(default=3, ge=1, le=5)


class ReminderConfig(BaseModel):
    """Due-date reminder configuration."""

    enabled: bool = Field(default=True)
    preview: int = Field(default=3, ge=1)


class AppConfig(BaseModel):
    """Main todotree configuration"""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    urgency: UrgencyConfig = Field(default_factory=UrgencyConfig)
    reminders: ReminderConfig = Field(default_factory=ReminderConfig)
