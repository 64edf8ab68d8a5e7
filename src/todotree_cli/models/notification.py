"""Notification data models."""

from typing import Literal

from pydantic import BaseModel, Field


class Notification(BaseModel):
    """A transient message shown to the user.

    Attributes:
        title: Headline of the message
        description: Optional detail line
        variant: Visual style of the message
        duration_ms: How long a UI should keep the message on screen
    """

    title: str
    description: str = ""
    variant: Literal["success", "info", "warning", "error"] = "info"
    duration_ms: int = Field(default=3000, ge=0)
