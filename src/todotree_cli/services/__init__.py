"""Services module for todotree - Business logic layer."""

from .config_service import ConfigService, get_config_service
from .notification_service import ConsoleNotifier, MemoryNotifier, Notifier
from .task_service import TaskService, get_task_service

__all__ = [
    "TaskService",
    "get_task_service",
    "ConfigService",
    "get_config_service",
    "Notifier",
    "ConsoleNotifier",
    "MemoryNotifier",
]
