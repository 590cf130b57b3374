"""Multi-field form for entering a new task."""

from __future__ import annotations

import math
from dataclasses import dataclass

from pomotask_cli.models.core import MAX_DURATION_MINUTES, DurationDefaults, Task

from .ring import FocusRing

NAME_FIELD = "Task name"
WORK_FIELD = "Work duration (m)"
SHORT_BREAK_FIELD = "Short break duration (m)"
LONG_BREAK_FIELD = "Long break duration (m)"


@dataclass
class FormField:
    """A titled text buffer."""

    title: str
    text: str = ""


def parse_minutes(text: str, default: float) -> int:
    """Convert minutes typed by the user into whole seconds.

    Anything that is not a number between 0 and ``MAX_DURATION_MINUTES``
    falls back to *default*.
    """
    try:
        minutes = float(text.strip())
    except ValueError:
        minutes = default
    if not math.isfinite(minutes) or not 0 <= minutes <= MAX_DURATION_MINUTES:
        minutes = default
    return int(minutes * 60)


class TaskForm:
    """Name plus three duration fields, one of them focused at a time."""

    def __init__(self, defaults: DurationDefaults | None = None):
        self.defaults = defaults or DurationDefaults()
        self.fields = [
            FormField(NAME_FIELD),
            FormField(WORK_FIELD),
            FormField(SHORT_BREAK_FIELD),
            FormField(LONG_BREAK_FIELD),
        ]
        self.focus = FocusRing(len(self.fields))

    @property
    def focused(self) -> FormField | None:
        if self.focus.cursor is None:
            return None
        return self.fields[self.focus.cursor]

    def next(self) -> None:
        self.focus.next()

    def previous(self) -> None:
        self.focus.previous()

    def unfocus(self) -> None:
        self.focus.clear()

    def push(self, ch: str) -> None:
        if self.focused is not None:
            self.focused.text += ch

    def pop(self) -> str | None:
        field = self.focused
        if field is None or not field.text:
            return None
        ch = field.text[-1]
        field.text = field.text[:-1]
        return ch

    def clear(self) -> None:
        """Empty the focused field only."""
        if self.focused is not None:
            self.focused.text = ""

    def submit(self) -> Task:
        """Build a draft task from the fields and empty all of them."""
        name, work, short_break, long_break = (f.text for f in self.fields)
        draft = Task(
            description=name or None,
            work_secs=parse_minutes(work, self.defaults.work_minutes),
            short_break_secs=parse_minutes(short_break, self.defaults.short_break_minutes),
            long_break_secs=parse_minutes(long_break, self.defaults.long_break_minutes),
        )
        for field in self.fields:
            field.text = ""
        return draft
