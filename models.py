"""Request and response models for the computation service.

Decimal operands travel as strings so they are not limited by JSON's
number range; every literal is validated by parsing it into a
``BigInt`` and echoed back in canonical form.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, Field, field_validator, model_validator

from bigint import BigInt
from combinatorics import CATALOGUE


# Upper bounds on the work a single request can start.
MAX_LITERAL_LENGTH = 1001       # 1000 digits plus a sign
MAX_JOB_ARGUMENT = 1000         # magnitude bound on every job argument
MAX_SQUARINGS = 10              # square_repeatedly doubles the digit count each time

JobArgument = Annotated[int, Field(ge=-MAX_JOB_ARGUMENT, le=MAX_JOB_ARGUMENT)]


def _canonical_literal(v: str) -> str:
    # ParseError is a ValueError, so pydantic reports it as a 422
    return str(BigInt.parse(v))


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------

class ArithmeticOp(str, Enum):
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    MOD = "mod"


class ArithmeticRequest(BaseModel):
    """Two decimal literals and the operation to apply."""

    op: ArithmeticOp
    left: str = Field(
        ..., min_length=1, max_length=MAX_LITERAL_LENGTH,
        description="Decimal literal, e.g. '-123'",
    )
    right: str = Field(
        ..., min_length=1, max_length=MAX_LITERAL_LENGTH,
        description="Decimal literal, e.g. '45'",
    )

    @field_validator("left", "right")
    @classmethod
    def literal_is_decimal(cls, v: str) -> str:
        return _canonical_literal(v)


class ArithmeticResponse(BaseModel):
    op: ArithmeticOp
    left: str
    right: str
    result: str
    digits: int


class CompareRequest(BaseModel):
    left: str = Field(..., min_length=1, max_length=MAX_LITERAL_LENGTH)
    right: str = Field(..., min_length=1, max_length=MAX_LITERAL_LENGTH)
    ignore_sign: bool = False

    @field_validator("left", "right")
    @classmethod
    def literal_is_decimal(cls, v: str) -> str:
        return _canonical_literal(v)


class CompareResponse(BaseModel):
    left: str
    right: str
    ignore_sign: bool
    result: int = Field(..., ge=-1, le=1)


# ---------------------------------------------------------------------------
# Jobs
# ---------------------------------------------------------------------------

class JobFunction(str, Enum):
    FACTORIAL = "factorial"
    RANGED_PRODUCT = "ranged_product"
    ARRANGEMENT = "arrangement"
    ARRANGEMENT_WITH_REPEAT = "arrangement_with_repeat"
    COMBINATION = "combination"
    POWER = "power"
    SQUARE_REPEATEDLY = "square_repeatedly"


class JobStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid.uuid4().hex


class JobCreate(BaseModel):
    """Payload for starting a combinatorics computation."""

    function: JobFunction
    args: list[JobArgument] = Field(default_factory=list, max_length=2)

    @model_validator(mode="after")
    def args_match_arity(self) -> JobCreate:
        _, arity = CATALOGUE[self.function.value]
        if len(self.args) != arity:
            raise ValueError(
                f"{self.function.value} takes {arity} argument(s), got {len(self.args)}"
            )
        if self.function is JobFunction.SQUARE_REPEATEDLY and self.args[1] > MAX_SQUARINGS:
            raise ValueError(
                f"square_repeatedly allows at most {MAX_SQUARINGS} squarings, "
                f"got {self.args[1]}"
            )
        return self


class Job(BaseModel):
    """Job record as stored and returned by the API."""

    id: str = Field(default_factory=_new_id)
    function: JobFunction
    args: list[int]
    status: JobStatus = JobStatus.PENDING
    progress: float = Field(default=0.0, ge=0.0, le=1.0)
    result: str | None = None
    digits: int | None = None
    error: str | None = None
    created_at: datetime = Field(default_factory=_utcnow)
    finished_at: datetime | None = None


class JobListResponse(BaseModel):
    items: list[Job]
    total: int
