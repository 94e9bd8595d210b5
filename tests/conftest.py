"""Shared fixtures for engine, combinatorics and service tests."""
from __future__ import annotations

import pytest

from progress import Progress
from spec import Domain, build_spec
from store import JobStore


# Small enough for exhaustive pair checks, wide enough to cross the
# one- and two-digit carry/borrow boundaries.
SMALL = Domain(lo=-30, hi=30)


class RecordingProgress(Progress):
    """Progress channel that keeps every value it accepted."""

    def __init__(self) -> None:
        super().__init__()
        self.history: list[float] = []

    def report(self, fraction: float) -> None:
        super().report(fraction)
        self.history.append(self.value)


@pytest.fixture
def recording_progress() -> RecordingProgress:
    return RecordingProgress()


@pytest.fixture
def small_spec():
    return build_spec(SMALL)


@pytest.fixture
def store() -> JobStore:
    return JobStore()
