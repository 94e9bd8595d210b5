"""FastAPI REST endpoints for BigInt arithmetic and combinatorics jobs.

Routes
------
POST   /arithmetic     Apply add/sub/mul/div/mod to two decimal literals
POST   /compare        Three-way comparison, optionally ignoring sign
POST   /jobs           Start a combinatorics computation in the background
GET    /jobs           List jobs, newest first
GET    /jobs/{id}      Retrieve a job with its current progress
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from bigint import BigInt, compare
from models import (
    ArithmeticRequest,
    ArithmeticResponse,
    CompareRequest,
    CompareResponse,
    Job,
    JobCreate,
    JobListResponse,
)
from spec import OPERATORS
from store import JobCapacityError, JobNotFoundError, JobStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["arithmetic"])
jobs_router = APIRouter(prefix="/jobs", tags=["jobs"])

# The store instance is injected by the app factory (see app.py).
_store: JobStore | None = None


def set_store(store: JobStore) -> None:
    """Inject the store instance. Called once at app startup."""
    global _store
    _store = store


def get_store() -> JobStore:
    assert _store is not None, "Store not initialized"
    return _store


def _not_found(job_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Job not found: {job_id}")


# ---------------------------------------------------------------------------
# Arithmetic endpoints
# ---------------------------------------------------------------------------

@router.post("/arithmetic", response_model=ArithmeticResponse)
def arithmetic(payload: ArithmeticRequest) -> ArithmeticResponse:
    """Apply one engine operation to two decimal literals."""
    left, right = BigInt(payload.left), BigInt(payload.right)
    try:
        result = OPERATORS[payload.op.value](left, right)
    except ZeroDivisionError as e:
        logger.info("Rejected %s by zero: %s", payload.op.value, payload.left)
        raise HTTPException(status_code=400, detail=str(e)) from e
    return ArithmeticResponse(
        op=payload.op,
        left=payload.left,
        right=payload.right,
        result=str(result),
        digits=result.size,
    )


@router.post("/compare", response_model=CompareResponse)
def compare_literals(payload: CompareRequest) -> CompareResponse:
    """Three-way comparison of two decimal literals."""
    result = compare(BigInt(payload.left), BigInt(payload.right), payload.ignore_sign)
    return CompareResponse(
        left=payload.left,
        right=payload.right,
        ignore_sign=payload.ignore_sign,
        result=result,
    )


# ---------------------------------------------------------------------------
# Job endpoints
# ---------------------------------------------------------------------------

@jobs_router.post("", response_model=Job, status_code=202)
def create_job(payload: JobCreate) -> Job:
    """Start a computation; poll GET /jobs/{id} for progress."""
    try:
        return get_store().submit(payload)
    except JobCapacityError as e:
        logger.warning("Rejected job %s: %s", payload.function.value, e)
        raise HTTPException(status_code=503, detail=str(e)) from e


@jobs_router.get("", response_model=JobListResponse)
def list_jobs() -> JobListResponse:
    store = get_store()
    items = store.list()
    return JobListResponse(items=items, total=len(items))


@jobs_router.get("/{job_id}", response_model=Job)
def get_job(job_id: str) -> Job:
    """Retrieve a single job by id."""
    try:
        return get_store().get(job_id)
    except JobNotFoundError:
        raise _not_found(job_id)
