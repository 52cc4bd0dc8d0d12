"""Utility functions for SQLite adapter."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any


def generate_uuid() -> str:
    """Generate a new UUID as string."""
    return str(uuid.uuid4())


def now_iso() -> str:
    """Get current timestamp in ISO format.

    Returns:
        ISO format datetime string (UTC)
    """
    return datetime.now(UTC).isoformat()


def row_to_dict(row: Any) -> dict[str, Any]:
    """Convert sqlite3.Row to dictionary.

    Args:
        row: sqlite3.Row object

    Returns:
        Dictionary with column names as keys
    """
    if row is None:
        return {}
    return dict(row)


def to_iso(value: datetime | None) -> str | None:
    """Serialise an optional datetime for storage."""
    return value.isoformat() if value is not None else None
