"""Database connection management for the local SQLite task store."""

from __future__ import annotations

import os
import sqlite3
from pathlib import Path

from platformdirs import user_data_dir

from focusflow.adapters.sqlite import schema
from focusflow.adapters.sqlite.utils import now_iso
from focusflow.utils.logger import get_logger

IN_MEMORY = ":memory:"


def default_db_path() -> Path:
    """Location of the task database when none is configured."""
    return Path(user_data_dir("focusflow")) / "tasks.db"


def initialize_schema(connection: sqlite3.Connection) -> None:
    """Create tables and indexes if they do not exist yet."""
    for statement in schema.ALL_TABLES:
        connection.execute(statement)
    for statement in schema.ALL_INDEXES:
        connection.execute(statement)

    row = connection.execute("SELECT MAX(version) FROM schema_version").fetchone()
    if row[0] is None:
        connection.execute(
            "INSERT INTO schema_version (version, applied_at) VALUES (?, ?)",
            (schema.SCHEMA_VERSION, now_iso()),
        )
        get_logger().info("initialised task store schema v%d", schema.SCHEMA_VERSION)
    connection.commit()


def get_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """Open a configured connection to the task database.

    Args:
        db_path: Path to database file. If None, uses default location.
            ":memory:" opens a private in-memory database.

    Returns:
        sqlite3.Connection with row access by name and foreign keys enforced
    """
    path: Path | None = None
    is_new_database = False

    if str(db_path) == IN_MEMORY:
        connection = sqlite3.connect(IN_MEMORY, check_same_thread=False)
    else:
        path = Path(db_path) if db_path is not None else default_db_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        is_new_database = not path.exists()
        connection = sqlite3.connect(str(path), check_same_thread=False, timeout=30.0)

    connection.row_factory = sqlite3.Row
    connection.execute("PRAGMA foreign_keys = ON")
    initialize_schema(connection)

    # Set file permissions (owner read/write only)
    if path is not None and is_new_database:
        os.chmod(path, 0o600)

    return connection
