"""Helpers shared by the SQLite adapter."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any

from pomotask_cli.models.exceptions import PersistenceError


def now_iso() -> str:
    """Current UTC time in ISO format."""
    return datetime.now(UTC).isoformat()


def row_to_dict(row: Any) -> dict[str, Any]:
    if row is None:
        return {}
    return dict(row)


def parse_datetime(value: str | datetime | None) -> datetime | None:
    """Parse a stored timestamp. Naive values are taken to be UTC."""
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Re-raise sqlite3 and filesystem errors from the block as PersistenceError."""
    try:
        yield
    except (sqlite3.Error, OSError) as e:
        raise PersistenceError(f"{operation} failed: {e}") from e
