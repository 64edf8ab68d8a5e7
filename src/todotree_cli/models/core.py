"""Task data models."""

import math
from datetime import date, datetime
from enum import Enum, IntEnum
from typing import Any

from pydantic import BaseModel, Field, field_validator

MIN_WEIGHT = 1
MAX_WEIGHT = 5


class Weight(IntEnum):
    """User assigned importance of a task (1=lowest, 5=highest)."""

    MINIMAL = 1
    LOW = 2
    NORMAL = 3
    HIGH = 4
    MAXIMUM = 5


class UrgencyLevel(str, Enum):
    """Discrete urgency tier derived from a task's priority score."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


def clamp_weight(value: Any) -> Weight:
    """Coerce a loosely typed stored weight into the 1-5 range.

    Rows coming from the data store may carry any number (or nothing at all);
    they are clamped rather than rejected so a single bad row cannot hide the
    rest of the task list.
    """
    try:
        number = math.floor(float(value))
    except (TypeError, ValueError):
        return Weight.NORMAL
    return Weight(min(max(number, MIN_WEIGHT), MAX_WEIGHT))


def coerce_due_date(value: Any) -> Any:
    """Reduce datetimes and ISO timestamps to their calendar date."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    return value


class Task(BaseModel):
    """Task model representing a complete task entity.

    Attributes:
        id: Unique identifier for the task
        title: Short task title (never blank)
        description: Free-form details, empty string when absent
        due_date: Optional calendar due date
        weight: Importance weight (1=lowest, 5=highest)
        completed: Completion status
        parent_id: Parent task ID, None for root tasks
        order: Manual ordering index within the sibling group
        user_id: Owner of the task
        created_at: Creation timestamp
        updated_at: Last update timestamp
        subtasks: Child tasks, only populated in the tree representation
    """

    id: str
    title: str
    description: str = ""
    due_date: date | None = None
    weight: Weight = Weight.NORMAL
    completed: bool = False
    parent_id: str | None = None
    order: int = 0
    user_id: str | None = None
    created_at: datetime
    updated_at: datetime
    subtasks: list["Task"] = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be blank")
        return value

    @field_validator("description", mode="before")
    @classmethod
    def _description_default(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("due_date", mode="before")
    @classmethod
    def _due_date_to_date(cls, value: Any) -> Any:
        return coerce_due_date(value)

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Task":
        """Build a task from a raw storage row.

        This is the boundary where persisted data enters the core: column
        names are mapped to model fields and the weight is clamped.
        """
        return cls(
            id=record["id"],
            title=record["title"],
            description=record.get("description") or "",
            due_date=record.get("due_date"),
            weight=clamp_weight(record.get("weight")),
            completed=bool(record.get("completed", False)),
            parent_id=record.get("parent_task_id") or None,
            order=record.get("order_position") or 0,
            user_id=record.get("user_id"),
            created_at=record["created_at"],
            updated_at=record["updated_at"],
        )


class TaskCreate(BaseModel):
    """Model for creating a new task.

    Attributes:
        title: Task title (required)
        description: Optional detailed description
        due_date: Optional due date
        weight: Importance weight; None lets the service inherit or default it
        parent_id: Optional parent task ID for subtasks
    """

    title: str = Field(min_length=1)
    description: str = ""
    due_date: date | None = None
    weight: Weight | None = None
    parent_id: str | None = None

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title must not be blank")
        return value


class TaskUpdate(BaseModel):
    """Model for updating an existing task.

    All fields are optional - only provided fields will be updated.
    ``clear_due_date`` removes the due date, since ``due_date=None`` means
    "leave unchanged".
    """

    title: str | None = None
    description: str | None = None
    due_date: date | None = None
    clear_due_date: bool = False
    weight: Weight | None = None
    completed: bool | None = None
    parent_id: str | None = None
    make_root: bool = False
    order: int | None = Field(default=None, ge=0)

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise ValueError("title must not be blank")
        return value.strip() if value is not None else None


class TaskFilters(BaseModel):
    """Filters for querying tasks.

    Attributes:
        status: Filter by status ("active", "completed", "all")
        parent_id: Only direct children of this task
        root_only: Only tasks without a parent
        due_on: Tasks due on this date
        search: Substring match on title and description
        limit: Maximum number of results
    """

    status: str | None = Field(default=None, pattern="^(active|completed|all)$")
    parent_id: str | None = None
    root_only: bool = False
    due_on: date | None = None
    search: str | None = None
    limit: int | None = Field(default=None, ge=1)
