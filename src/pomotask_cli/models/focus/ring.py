"""Focus ring: an optional cursor over a number of selectable slots."""

from __future__ import annotations

from collections.abc import Callable


class FocusRing:
    """Cursor that wraps around ``n`` slots, or points at nothing.

    The ring does not know what its slots are. Owners pass the slot count,
    either as an int or as a callable when the count changes over time, and
    an optional ``pre_move`` hook that runs before every move.

    The cursor is always ``None`` or a valid index below the slot count.
    Moving from ``None`` in either direction lands on slot 0.
    """

    def __init__(
        self,
        length: int | Callable[[], int],
        pre_move: Callable[[], None] | None = None,
    ):
        self._length = length if callable(length) else (lambda: length)
        self._pre_move = pre_move
        self._cursor: int | None = None

    def __len__(self) -> int:
        return self._length()

    def is_empty(self) -> bool:
        return len(self) == 0

    @property
    def cursor(self) -> int | None:
        # The slot count may have shrunk since the last move
        if self._cursor is not None and self._cursor >= len(self):
            self._cursor = len(self) - 1 if not self.is_empty() else None
        return self._cursor

    @cursor.setter
    def cursor(self, value: int | None) -> None:
        if value is not None and not 0 <= value < len(self):
            raise IndexError(f"cursor {value} out of range for {len(self)} slots")
        self._cursor = value

    def clear(self) -> None:
        self._cursor = None

    def next(self) -> int | None:
        if self._pre_move:
            self._pre_move()
        n = len(self)
        if n == 0:
            self._cursor = None
        elif self.cursor is None:
            self._cursor = 0
        else:
            self._cursor = (self.cursor + 1) % n
        return self._cursor

    def previous(self) -> int | None:
        if self._pre_move:
            self._pre_move()
        n = len(self)
        if n == 0:
            self._cursor = None
        elif self.cursor is None:
            self._cursor = 0
        else:
            self._cursor = (self.cursor - 1) % n
        return self._cursor
