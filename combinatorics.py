"""Combinatorial functions on top of the BigInt engine.

Every function takes native ints, returns a ``BigInt`` and accepts an
optional progress channel that is advanced after each multiplication
step and finished on return.

``CATALOGUE`` maps the public function names to ``(callable, arity)``
so outer layers (the job service, the demo) can dispatch by name.
"""
from __future__ import annotations

import logging
from typing import Callable

from bigint import ONE, BigInt, long_divide
from progress import ProgressSink

logger = logging.getLogger(__name__)


class PreconditionError(ValueError):
    """Raised when arguments fall outside a function's domain."""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _require_non_negative(**values: int) -> None:
    for name, value in values.items():
        if value < 0:
            raise PreconditionError(f"{name} must be >= 0, got {value}")


def _require_k_le_n(what: str, k: int, n: int) -> None:
    _require_non_negative(k=k, n=n)
    if k > n:
        raise PreconditionError(f"{what} not defined for k > n (k={k}, n={n})")


def _finish(progress: ProgressSink | None) -> None:
    if progress is not None:
        progress.finish()


def _descending_product(
    top: int,
    bottom: int,
    progress: ProgressSink | None = None,
) -> BigInt:
    """Product top * (top-1) * ... * bottom; 1 when the range is empty."""
    result = ONE
    steps = top - bottom + 1
    for done, i in enumerate(range(top, bottom - 1, -1), start=1):
        result = result * BigInt(i)
        if progress is not None:
            progress.report(done / steps)
    return result


# ---------------------------------------------------------------------------
# Powers
# ---------------------------------------------------------------------------

def square_repeatedly(
    base: int | BigInt,
    times: int,
    progress: ProgressSink | None = None,
) -> BigInt:
    """Square ``base`` ``times`` times, i.e. ``base ** (2 ** times)``."""
    _require_non_negative(times=times)
    result = BigInt(base)
    for done in range(1, times + 1):
        result = result * result
        if progress is not None:
            progress.report(done / times)
    _finish(progress)
    return result


def power(
    base: int | BigInt,
    exponent: int,
    progress: ProgressSink | None = None,
) -> BigInt:
    """``base ** exponent`` by repeated multiplication."""
    _require_non_negative(exponent=exponent)
    logger.debug("power(%s, %d) started", base, exponent)
    factor = BigInt(base)
    result = ONE
    for done in range(1, exponent + 1):
        result = result * factor
        if progress is not None:
            progress.report(done / exponent)
    _finish(progress)
    return result


# ---------------------------------------------------------------------------
# Factorials and products
# ---------------------------------------------------------------------------

def factorial(n: int, progress: ProgressSink | None = None) -> BigInt:
    """n! with 0! == 1."""
    _require_non_negative(n=n)
    logger.debug("factorial(%d) started", n)
    result = _descending_product(n, 1, progress)
    _finish(progress)
    logger.debug("factorial(%d) finished with %d digits", n, result.size)
    return result


def ranged_product(
    first: int,
    second: int,
    progress: ProgressSink | None = None,
) -> BigInt:
    """Product of every integer in the inclusive range between the bounds.

    The bounds may come in either order and may be negative.
    """
    low, high = min(first, second), max(first, second)
    logger.debug("ranged_product(%d, %d) started", low, high)
    result = _descending_product(high, low, progress)
    _finish(progress)
    return result


# ---------------------------------------------------------------------------
# Arrangements and combinations
# ---------------------------------------------------------------------------

def arrangement_count(
    k: int,
    n: int,
    progress: ProgressSink | None = None,
) -> BigInt:
    """Ordered selections of k out of n without repetition: n!/(n-k)!."""
    _require_k_le_n("Arrangement", k, n)
    logger.debug("arrangement_count(%d, %d) started", k, n)
    result = _descending_product(n, n - k + 1, progress)
    _finish(progress)
    return result


def arrangement_with_repeat_count(
    k: int,
    n: int,
    progress: ProgressSink | None = None,
) -> BigInt:
    """Ordered selections of length n from k items with repetition: k**n."""
    _require_non_negative(k=k, n=n)
    return power(k, n, progress)


def combination_count(
    k: int,
    n: int,
    progress: ProgressSink | None = None,
) -> BigInt:
    """Binomial coefficient C(n, k).

    Computed as (max(k, n-k)+1) * ... * n divided by min(k, n-k)!.
    Progress is split in thirds: numerator, denominator, division.
    """
    _require_k_le_n("Combination", k, n)
    low, high = min(k, n - k), max(k, n - k)
    logger.debug("combination_count(%d, %d) started", k, n)

    numerator_span = progress.span(0.0, 1 / 3) if progress is not None else None
    denominator_span = progress.span(1 / 3, 2 / 3) if progress is not None else None
    division_span = progress.span(2 / 3, 1.0) if progress is not None else None

    numerator = _descending_product(n, high + 1, numerator_span)
    _finish(numerator_span)
    denominator = _descending_product(low, 1, denominator_span)
    _finish(denominator_span)

    on_digit = None
    if division_span is not None:
        on_digit = lambda done, total: division_span.report(done / total)
    quotient, remainder = long_divide(numerator, denominator, on_digit)
    assert remainder.is_zero, "binomial division left a remainder"

    _finish(progress)
    return quotient


# ---------------------------------------------------------------------------
# Dispatch table
# ---------------------------------------------------------------------------

CATALOGUE: dict[str, tuple[Callable[..., BigInt], int]] = {
    "factorial": (factorial, 1),
    "ranged_product": (ranged_product, 2),
    "arrangement": (arrangement_count, 2),
    "arrangement_with_repeat": (arrangement_with_repeat_count, 2),
    "combination": (combination_count, 2),
    "power": (power, 2),
    "square_repeatedly": (square_repeatedly, 2),
}
