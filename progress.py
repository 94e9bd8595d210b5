"""Fractional progress reporting between a computation and its observers.

A ``Progress`` is written by one computation thread and read by any
number of observer threads.  Writes are lock-guarded and monotonic:
a value lower than the current one is ignored, and every value is
clamped into [0, 1].  Observers poll and may see stale values; the
final value is always exactly 1.0 once ``finish()`` has run.

``span(start, stop)`` hands a sub-computation its own [0, 1] scale
mapped onto a slice of the parent, so a multi-phase computation can
report each phase without knowing about the others.
"""
from __future__ import annotations

import threading
import time
from typing import Callable, Protocol


class ProgressSink(Protocol):
    """What a computation needs from a progress channel."""

    def report(self, fraction: float) -> None: ...

    def finish(self) -> None: ...

    def span(self, start: float, stop: float) -> ProgressSink: ...


def _clamp(fraction: float) -> float:
    return max(0.0, min(1.0, fraction))


class Progress:
    """Thread-safe, monotonic progress scalar in [0, 1]."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = 0.0

    @property
    def value(self) -> float:
        with self._lock:
            return self._value

    @property
    def done(self) -> bool:
        return self.value >= 1.0

    def report(self, fraction: float) -> None:
        fraction = _clamp(fraction)
        with self._lock:
            if fraction > self._value:
                self._value = fraction

    def finish(self) -> None:
        """Mark the computation complete."""
        self.report(1.0)

    def span(self, start: float, stop: float) -> ProgressSpan:
        return ProgressSpan(self, start, stop)


class ProgressSpan:
    """A slice [start, stop] of a parent progress channel."""

    def __init__(self, parent: ProgressSink, start: float, stop: float) -> None:
        if not 0.0 <= start <= stop <= 1.0:
            raise ValueError(
                f"span must satisfy 0 <= start <= stop <= 1, got [{start}, {stop}]"
            )
        self.parent = parent
        self.start = start
        self.stop = stop

    def report(self, fraction: float) -> None:
        self.parent.report(self.start + (self.stop - self.start) * _clamp(fraction))

    def finish(self) -> None:
        self.report(1.0)

    def span(self, start: float, stop: float) -> ProgressSpan:
        return ProgressSpan(self, start, stop)


def poll(
    progress: Progress,
    render: Callable[[float], None],
    interval: float = 0.1,
) -> None:
    """Render the progress value every ``interval`` seconds until done.

    The last rendered value is always the completed 1.0.
    """
    while True:
        value = progress.value
        render(value)
        if value >= 1.0:
            return
        time.sleep(interval)
