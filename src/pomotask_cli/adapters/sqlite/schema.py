"""Table definitions for the local task store."""

from __future__ import annotations

# Tasks and the durations each pomodoro phase runs for
CREATE_TASKS_TABLE = """
CREATE TABLE IF NOT EXISTS tasks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    description TEXT,
    work_secs INTEGER NOT NULL CHECK (work_secs >= 0),
    short_break_secs INTEGER NOT NULL CHECK (short_break_secs >= 0),
    long_break_secs INTEGER NOT NULL CHECK (long_break_secs >= 0),
    cycles_completed INTEGER NOT NULL DEFAULT 0,
    completed_at DATETIME,
    created_at DATETIME NOT NULL
)
"""

# One row per finished work phase, used for the per-day history
CREATE_CYCLES_TABLE = """
CREATE TABLE IF NOT EXISTS cycles (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    task_id INTEGER NOT NULL,
    created_at DATETIME NOT NULL,
    FOREIGN KEY (task_id) REFERENCES tasks(id) ON DELETE CASCADE
)
"""

ALL_TABLES = [
    CREATE_TASKS_TABLE,
    CREATE_CYCLES_TABLE,
]

ALL_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_completed_at ON tasks(completed_at)",
    "CREATE INDEX IF NOT EXISTS idx_cycles_task ON cycles(task_id)",
    "CREATE INDEX IF NOT EXISTS idx_cycles_created_at ON cycles(created_at)",
]
