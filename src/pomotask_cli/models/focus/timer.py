"""Wall-clock countdown timer with pause/resume."""

from __future__ import annotations

import math
import time
from collections.abc import Callable

FINISHED_TOKEN = "Finished!"


class Timer:
    """Countdown measured against a monotonic clock.

    Elapsed time is recomputed from the start reference on every tick, so a
    late or skipped tick never distorts the countdown.
    """

    def __init__(self, duration: float, clock: Callable[[], float] = time.monotonic):
        self.duration = float(duration)
        self._clock = clock
        self._start = clock()
        self.elapsed = 0.0
        self.paused = False

    def tick(self) -> None:
        """Refresh elapsed time unless paused."""
        if not self.paused:
            self.elapsed = self._clock() - self._start

    def is_finished(self) -> bool:
        return self.elapsed >= self.duration

    def pause(self) -> None:
        """Freeze elapsed at its last ticked value. No-op when already paused."""
        self.paused = True

    def resume(self) -> None:
        """Continue from the frozen elapsed value. No-op when running."""
        if not self.paused:
            return
        self.paused = False
        self._start = self._clock() - self.elapsed

    def toggle_pause(self) -> None:
        if self.paused:
            self.resume()
        else:
            self.pause()

    def remaining_seconds(self) -> int:
        """Whole seconds left, rounded up."""
        return max(0, math.ceil(self.duration - self.elapsed))

    def progress(self) -> float:
        """Elapsed fraction of the duration, clamped to ``[0, 1]``."""
        if self.duration <= 0:
            return 1.0
        return min(1.0, max(0.0, self.elapsed / self.duration))

    def remaining_display(self) -> str:
        if self.is_finished():
            return FINISHED_TOKEN
        hours, rest = divmod(self.remaining_seconds(), 3600)
        mins, secs = divmod(rest, 60)
        if hours:
            return f"{hours}h{mins}m{secs}s"
        return f"{mins}m{secs}s"
