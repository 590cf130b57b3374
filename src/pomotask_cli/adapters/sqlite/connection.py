"""Connection management for the local SQLite task store."""

from __future__ import annotations

import atexit
import os
import sqlite3
from pathlib import Path

from platformdirs import user_data_dir

from pomotask_cli.adapters.sqlite.migrations.m001_initial_schema import ALL_MIGRATIONS
from pomotask_cli.adapters.sqlite.migrations.runner import MigrationRunner
from pomotask_cli.models.exceptions import PersistenceError
from pomotask_cli.utils.logger import get_logger

DB_FILENAME = "tasks.db"


def default_db_path() -> Path:
    return Path(user_data_dir("pomotask-cli")) / DB_FILENAME


class DatabaseConnection:
    """Process-wide SQLite connection.

    Provides:
    - One connection per process, reopened only if the path changes
    - WAL journaling and foreign key enforcement
    - Owner-only permissions on a newly created file
    - Schema migrations on open and a clean close at exit
    """

    _instance: DatabaseConnection | None = None
    _connection: sqlite3.Connection | None = None
    _db_path: Path | None = None

    def __new__(cls) -> DatabaseConnection:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def get_connection(cls, db_path: str | Path | None = None) -> sqlite3.Connection:
        """Return the shared connection, opening it on first use.

        Args:
            db_path: Path to database file. If None, uses default location.
        """
        instance = cls()
        db_path = Path(db_path) if db_path is not None else default_db_path()

        if instance._connection is not None and instance._db_path == db_path:
            return instance._connection

        if instance._connection is not None:
            instance._connection.close()
            instance._connection = None
            instance._db_path = None

        db_path.parent.mkdir(parents=True, exist_ok=True)
        is_new_database = not db_path.exists()

        connection = sqlite3.connect(str(db_path), timeout=30.0)
        connection.row_factory = sqlite3.Row
        connection.execute("PRAGMA foreign_keys = ON")
        connection.execute("PRAGMA journal_mode = WAL")

        if is_new_database:
            os.chmod(db_path, 0o600)
            get_logger().info("created task database at %s", db_path)

        try:
            MigrationRunner(connection).run_migrations(ALL_MIGRATIONS)
        except (sqlite3.Error, PersistenceError):
            connection.close()
            raise

        instance._connection = connection
        instance._db_path = db_path
        atexit.register(cls.close_connection)
        return connection

    @classmethod
    def close_connection(cls) -> None:
        instance = cls()
        if instance._connection is None:
            return
        try:
            instance._connection.commit()
            instance._connection.close()
        except sqlite3.Error as e:
            get_logger().warning("error closing task database: %s", e)
        finally:
            instance._connection = None
            instance._db_path = None

    @classmethod
    def get_db_path(cls) -> Path | None:
        return cls()._db_path


def get_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    return DatabaseConnection.get_connection(db_path)
