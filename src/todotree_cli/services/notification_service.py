"""Notification delivery.

The task service reports outcomes through a ``Notifier`` so it never talks
to the terminal directly. The console implementation renders with rich;
the in-memory one simply records what it was given.
"""

from __future__ import annotations

from typing import Protocol

from todotree_cli.models import Notification
from todotree_cli.utils.ui.formatters import format_notification


class Notifier(Protocol):
    """Anything able to show a transient message to the user."""

    def notify(self, notification: Notification) -> None: ...


class ConsoleNotifier:
    """Shows notifications on the terminal."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet

    def notify(self, notification: Notification) -> None:
        # Errors are always shown, even in quiet mode
        if self.quiet and notification.variant != "error":
            return
        format_notification(notification)


class MemoryNotifier:
    """Keeps notifications in a list instead of displaying them."""

    def __init__(self):
        self.notifications: list[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)

    @property
    def titles(self) -> list[str]:
        return [n.title for n in self.notifications]
