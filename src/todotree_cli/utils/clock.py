"""Reference instant for urgency computations."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import tzlocal


def local_now() -> datetime:
    """Current time in the system's local timezone."""
    return datetime.now(tzlocal.get_localzone())


def parse_date(value: str, now: date | datetime | None = None) -> date:
    """Parse a date given on the command line.

    Accepts ``today``, ``tomorrow``, ``+N`` (days from now) and ISO dates.

    Raises:
        ValueError: If the value cannot be understood
    """
    reference = now if now is not None else local_now()
    today = reference.date() if isinstance(reference, datetime) else reference

    text = value.strip().lower()
    if text == "today":
        return today
    if text == "tomorrow":
        return today + timedelta(days=1)
    if text.startswith("+") and text[1:].isdigit():
        return today + timedelta(days=int(text[1:]))
    return date.fromisoformat(text)
