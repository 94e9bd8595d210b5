"""Application factory and entry point.

Run with:
    uvicorn app:app --reload
"""

from __future__ import annotations

from fastapi import FastAPI

from api import jobs_router, router, set_store
from store import JobStore


def create_app(store: JobStore | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    Accepts an optional store for testing; creates a fresh one if omitted.
    """
    if store is None:
        store = JobStore()

    set_store(store)

    app = FastAPI(
        title="Decimal BigInt API",
        description=(
            "Arbitrary-precision decimal arithmetic on string literals, and "
            "long-running combinatorics jobs (factorials, arrangements, "
            "combinations) whose progress can be polled while they run."
        ),
        version="0.1.0",
    )
    app.include_router(router)
    app.include_router(jobs_router)
    return app


# Default app instance for `uvicorn app:app`
app = create_app()
