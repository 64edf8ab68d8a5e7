"""Local task owner management for the SQLite store."""

from __future__ import annotations

import sqlite3
import uuid
from datetime import UTC, datetime

import tzlocal


def get_system_timezone() -> str:
    """Detect system timezone.

    Returns:
        Timezone string (e.g., "America/New_York" or "UTC" if detection fails)
    """
    tz = tzlocal.get_localzone()
    return str(tz.key) if hasattr(tz, "key") else str(tz)


def create_default_user(
    connection: sqlite3.Connection,
    user_id: str | None = None,
    timezone: str | None = None,
) -> str:
    """Create the local user profile.

    Args:
        connection: Database connection
        user_id: Optional fixed ID (e.g. from config). Generated when None.
        timezone: Optional timezone string. If None, auto-detects system timezone.

    Returns:
        User ID (UUID string)
    """
    user_id = user_id or str(uuid.uuid4())
    if timezone is None:
        timezone = get_system_timezone()

    now = datetime.now(UTC).isoformat()

    connection.execute(
        """
        INSERT INTO users (id, name, timezone, created_at, updated_at)
        VALUES (?, ?, ?, ?, ?)
        """,
        (user_id, "Local User", timezone, now, now),
    )
    connection.commit()

    return user_id


def get_or_create_local_user(
    connection: sqlite3.Connection, user_id: str | None = None
) -> str:
    """Get the local user, creating it if it doesn't exist.

    Args:
        connection: Database connection
        user_id: Preferred user ID. When given, that exact user is ensured.

    Returns:
        User ID (UUID string)
    """
    if user_id is not None:
        row = connection.execute(
            "SELECT id FROM users WHERE id = ?", (user_id,)
        ).fetchone()
    else:
        row = connection.execute(
            "SELECT id FROM users ORDER BY created_at LIMIT 1"
        ).fetchone()

    if row:
        return row[0]

    return create_default_user(connection, user_id=user_id)
