"""Database schema definitions for the local task store."""

from __future__ import annotations

# Schema version tracking
SCHEMA_VERSION = 1

CREATE_TASKS_TABLE = """
CREATE TABLE IF NOT EXISTS tasks (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    description TEXT,
    priority TEXT NOT NULL DEFAULT 'medium',
    due_date DATETIME,
    is_completed BOOLEAN NOT NULL DEFAULT 0,
    completed_at DATETIME,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL
)
"""

CREATE_REMINDERS_TABLE = """
CREATE TABLE IF NOT EXISTS task_reminders (
    id TEXT PRIMARY KEY,
    task_id TEXT NOT NULL,
    reminder_time DATETIME NOT NULL,
    reminder_type TEXT NOT NULL DEFAULT 'in_app',
    is_sent BOOLEAN NOT NULL DEFAULT 0,
    created_at DATETIME NOT NULL,
    FOREIGN KEY (task_id) REFERENCES tasks(id) ON DELETE CASCADE
)
"""

CREATE_SCHEMA_VERSION_TABLE = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    applied_at DATETIME NOT NULL
)
"""

ALL_TABLES = [
    CREATE_SCHEMA_VERSION_TABLE,
    CREATE_TASKS_TABLE,
    CREATE_REMINDERS_TABLE,
]

ALL_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_completed ON tasks(is_completed, completed_at)",
    "CREATE INDEX IF NOT EXISTS idx_reminders_task ON task_reminders(task_id)",
]
