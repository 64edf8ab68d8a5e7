"""Domain exceptions for todotree."""


class TodoTreeError(Exception):
    """Base class for all todotree domain errors."""


class TaskNotFoundError(TodoTreeError):
    """Raised when a task id does not resolve to a stored task."""

    def __init__(self, task_id: str):
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class InvalidHierarchyError(TodoTreeError):
    """Raised when a parent assignment would break the task tree."""


class ValidationFailedError(TodoTreeError):
    """Raised when user supplied task data is rejected."""
