"""In-memory job store running combinatorics computations in the background.

Each submitted job gets its own daemon thread and its own ``Progress``
channel.  The computation thread is the only writer of a job's result
fields; readers take a snapshot under the store lock, so the progress
they see may be stale but never goes backwards.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field

from combinatorics import CATALOGUE, PreconditionError
from models import Job, JobCreate, JobStatus, _new_id, _utcnow
from progress import Progress

logger = logging.getLogger(__name__)

DEFAULT_MAX_JOBS = 100


class JobNotFoundError(Exception):
    """Raised when a job lookup fails."""

    def __init__(self, job_id: str) -> None:
        self.job_id = job_id
        super().__init__(f"Job not found: {job_id}")


class JobCapacityError(Exception):
    """Raised when every slot holds a job that is still running."""

    def __init__(self, max_jobs: int) -> None:
        self.max_jobs = max_jobs
        super().__init__(f"Job store is full: {max_jobs} jobs still running")


@dataclass
class _JobState:
    record: Job
    progress: Progress = field(default_factory=Progress)
    finished: threading.Event = field(default_factory=threading.Event)


class JobStore:
    """Submits, tracks and lists background computations.

    At most ``max_jobs`` records are kept.  When the store is full the
    oldest finished job is evicted to make room; if none has finished,
    ``submit`` raises ``JobCapacityError``.  This also bounds the number
    of computation threads.
    """

    def __init__(self, max_jobs: int = DEFAULT_MAX_JOBS) -> None:
        if max_jobs < 1:
            raise ValueError(f"max_jobs must be >= 1, got {max_jobs}")
        self.max_jobs = max_jobs
        self._jobs: dict[str, _JobState] = {}
        self._lock = threading.Lock()

    # -- helpers -------------------------------------------------------------

    def _state(self, job_id: str) -> _JobState:
        try:
            return self._jobs[job_id]
        except KeyError:
            raise JobNotFoundError(job_id) from None

    def _snapshot(self, state: _JobState) -> Job:
        return state.record.model_copy(update={"progress": state.progress.value})

    def _update(self, state: _JobState, **changes: object) -> None:
        with self._lock:
            state.record = state.record.model_copy(update=changes)

    def _evict_finished(self) -> None:
        # caller holds the lock
        for job_id, state in self._jobs.items():
            if state.finished.is_set():
                del self._jobs[job_id]
                logger.debug("Evicted finished job %s", job_id)
                return
        raise JobCapacityError(self.max_jobs)

    def _run(self, state: _JobState) -> None:
        record = state.record
        func, _ = CATALOGUE[record.function.value]
        self._update(state, status=JobStatus.RUNNING)
        logger.info("Job %s started: %s%s", record.id, record.function.value, tuple(record.args))
        try:
            value = func(*record.args, progress=state.progress)
        except PreconditionError as e:
            logger.warning("Job %s rejected: %s", record.id, e)
            self._update(state, status=JobStatus.FAILED, error=str(e), finished_at=_utcnow())
        except Exception as e:
            logger.exception("Job %s crashed", record.id)
            self._update(
                state,
                status=JobStatus.FAILED,
                error=f"{type(e).__name__}: {e}",
                finished_at=_utcnow(),
            )
        else:
            self._update(
                state,
                status=JobStatus.SUCCEEDED,
                result=str(value),
                digits=value.size,
                finished_at=_utcnow(),
            )
            logger.info("Job %s finished with %d digits", record.id, value.size)
        finally:
            state.progress.finish()
            state.finished.set()

    # -- operations ----------------------------------------------------------

    def submit(self, payload: JobCreate) -> Job:
        """Register a job and start computing it on a background thread."""
        record = Job(
            id=_new_id(),
            function=payload.function,
            args=list(payload.args),
            created_at=_utcnow(),
        )
        state = _JobState(record=record)
        with self._lock:
            if len(self._jobs) >= self.max_jobs:
                self._evict_finished()
            self._jobs[record.id] = state
        thread = threading.Thread(
            target=self._run, args=(state,), name=f"job-{record.id[:8]}", daemon=True
        )
        thread.start()
        return self.get(record.id)

    def get(self, job_id: str) -> Job:
        """Current snapshot of a job."""
        with self._lock:
            state = self._state(job_id)
            return self._snapshot(state)

    def list(self) -> list[Job]:
        """All jobs, newest first."""
        with self._lock:
            return [self._snapshot(s) for s in reversed(self._jobs.values())]

    def wait(self, job_id: str, timeout: float | None = None) -> Job:
        """Block until the job finishes (or ``timeout`` elapses)."""
        with self._lock:
            state = self._state(job_id)
        state.finished.wait(timeout)
        return self.get(job_id)

    def count(self) -> int:
        with self._lock:
            return len(self._jobs)

    def clear(self) -> None:
        """Forget every job (useful for testing); running threads finish on their own."""
        with self._lock:
            self._jobs.clear()
