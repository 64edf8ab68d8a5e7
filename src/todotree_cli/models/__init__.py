"""todotree domain models.

This package contains Pydantic models that represent the core domain entities
of the application. These models are used throughout the application for
data validation, serialization, and type safety.
"""

from .config_models import AppConfig
from .core import (
    MAX_WEIGHT,
    MIN_WEIGHT,
    Task,
    TaskCreate,
    TaskFilters,
    TaskUpdate,
    UrgencyLevel,
    Weight,
    clamp_weight,
)
from .notification import Notification

__all__ = [
    # Task models
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskFilters",
    "Weight",
    "UrgencyLevel",
    "MIN_WEIGHT",
    "MAX_WEIGHT",
    "clamp_weight",
    # Notification model
    "Notification",
    # Config models
    "AppConfig",
]
