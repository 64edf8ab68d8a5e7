"""Tests for notifiers."""

from unittest.mock import patch

from todotree_cli.models import Notification
from todotree_cli.services.notification_service import ConsoleNotifier, MemoryNotifier


def test_memory_notifier_records():
    notifier = MemoryNotifier()
    notifier.notify(Notification(title="Saved"))
    notifier.notify(Notification(title="Oops", variant="error"))

    assert notifier.titles == ["Saved", "Oops"]


@patch("todotree_cli.services.notification_service.format_notification")
def test_console_notifier_renders(mock_format):
    notification = Notification(title="Task created successfully!", variant="success")

    ConsoleNotifier().notify(notification)

    mock_format.assert_called_once_with(notification)


@patch("todotree_cli.services.notification_service.format_notification")
def test_quiet_console_notifier_only_shows_errors(mock_format):
    notifier = ConsoleNotifier(quiet=True)

    notifier.notify(Notification(title="fine"))
    notifier.notify(Notification(title="broken", variant="error"))

    assert [c.args[0].title for c in mock_format.call_args_list] == ["broken"]
