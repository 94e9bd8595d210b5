"""Formal contract for the BigInt arithmetic engine.

Each operation is specified as a collection of:
- preconditions: what inputs must satisfy before the operation
- postconditions: what the output must satisfy given valid inputs
- error conditions: what inputs must cause specific exceptions
- algebraic properties: relationships between operations that must hold

Inputs are native Python ints; Python's own ``int`` arithmetic is the
oracle the engine's results are checked against.  The contract is
machine-readable: the conformance tests and the counterexample search
iterate over it instead of hand-writing every case.

Layers
------
Domain          sample domain of native ints for verification
OperationSpec   per-operation contract (pre/post/error/properties)
BranchSpec      every decision point that white-box tests must cover
EngineSpec      the full contract for the engine over a domain
build_spec()    constructs an EngineSpec for a given domain
"""
from __future__ import annotations

import operator
import random
from dataclasses import dataclass
from typing import Callable

from bigint import BigInt


# ---------------------------------------------------------------------------
# Domain
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Domain:
    """Inclusive native-int interval [lo, hi] used to drive verification."""

    lo: int
    hi: int

    def __post_init__(self) -> None:
        if self.lo > self.hi:
            raise ValueError(f"lo ({self.lo}) must be <= hi ({self.hi})")

    def contains(self, v: int) -> bool:
        return self.lo <= v <= self.hi

    @property
    def width(self) -> int:
        return self.hi - self.lo + 1

    def all_values(self) -> range:
        return range(self.lo, self.hi + 1)

    def edge_values(self) -> list[int]:
        """Boundaries plus the carry/borrow edges that fall inside."""
        candidates = [
            self.lo, self.lo + 1, -100, -99, -10, -9, -1,
            0, 1, 9, 10, 99, 100, self.hi - 1, self.hi,
        ]
        seen: list[int] = []
        for v in candidates:
            if self.contains(v) and v not in seen:
                seen.append(v)
        return seen

    def sample(self, count: int, seed: int = 0) -> list[int]:
        """Edge values followed by seeded random fill up to ``count``."""
        rng = random.Random(seed)
        values = self.edge_values()[:count]
        while len(values) < count:
            values.append(rng.randint(self.lo, self.hi))
        return values


# ---------------------------------------------------------------------------
# Spec building blocks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Precondition:
    name: str
    description: str
    check: Callable[..., bool]


@dataclass(frozen=True)
class Postcondition:
    name: str
    description: str
    check: Callable[..., bool]


@dataclass(frozen=True)
class ErrorCondition:
    name: str
    description: str
    trigger: Callable[..., bool]
    exception: type


@dataclass(frozen=True)
class AlgebraicProperty:
    name: str
    description: str
    arity: int          # how many BigInt values the check needs
    check: Callable[..., bool]


@dataclass(frozen=True)
class OperationSpec:
    name: str
    preconditions: list[Precondition]
    postconditions: list[Postcondition]
    error_conditions: list[ErrorCondition]
    properties: list[AlgebraicProperty]


@dataclass(frozen=True)
class BranchSpec:
    """A decision point in the implementation that must be exercised."""

    id: str
    description: str
    condition: str      # human-readable boolean expression
    operation: str      # which operation / helper this belongs to


@dataclass(frozen=True)
class EngineSpec:
    """Complete contract for the engine over a verification domain."""

    domain: Domain
    operations: dict[str, OperationSpec]
    branches: list[BranchSpec]

    @property
    def all_properties(self) -> list[tuple[str, AlgebraicProperty]]:
        out: list[tuple[str, AlgebraicProperty]] = []
        for name, op in self.operations.items():
            for prop in op.properties:
                out.append((name, prop))
        return out

    @property
    def all_postconditions(self) -> list[tuple[str, Postcondition]]:
        out: list[tuple[str, Postcondition]] = []
        for name, op in self.operations.items():
            for post in op.postconditions:
                out.append((name, post))
        return out

    @property
    def branch_ids(self) -> list[str]:
        return [b.id for b in self.branches]


# ---------------------------------------------------------------------------
# Oracle helpers and engine dispatch
# ---------------------------------------------------------------------------

def truncdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero (not floor division).

    Python's ``//`` rounds toward negative infinity; the engine
    truncates toward zero instead.
    """
    q, r = divmod(a, b)
    # divmod rounds toward -inf; adjust when the result is negative
    # and there is a remainder.
    if r != 0 and (a < 0) != (b < 0):
        q += 1
    return q


def truncmod(a: int, b: int) -> int:
    """Remainder matching ``truncdiv``: it takes the sign of ``a``."""
    return a - b * truncdiv(a, b)


OPERATORS: dict[str, Callable[[BigInt, BigInt], BigInt]] = {
    "add": operator.add,
    "sub": operator.sub,
    "mul": operator.mul,
    "div": operator.truediv,
    "mod": operator.mod,
}


def evaluate(op_name: str, a: int, b: int) -> BigInt:
    """Run one engine operation on native-int inputs."""
    return OPERATORS[op_name](BigInt(a), BigInt(b))


def _canonical(result: BigInt, expected: int) -> bool:
    """The result's text is the canonical decimal form of ``expected``."""
    return str(result) == str(expected)


# ---------------------------------------------------------------------------
# Spec builder
# ---------------------------------------------------------------------------

def build_spec(domain: Domain) -> EngineSpec:
    """Construct the full engine specification for a verification domain."""

    in_domain = Precondition(
        "inputs_in_domain",
        "Both inputs within the verification domain",
        lambda a, b: domain.contains(a) and domain.contains(b),
    )

    # ------------------------------------------------------------------ add
    add_spec = OperationSpec(
        name="add",
        preconditions=[in_domain],
        postconditions=[
            Postcondition(
                "result_correct",
                "Result equals the exact sum",
                lambda a, b, result: int(result) == a + b,
            ),
            Postcondition(
                "result_canonical",
                "Result prints as the canonical decimal of the sum",
                lambda a, b, result: _canonical(result, a + b),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "commutativity", "a + b == b + a", 2,
                lambda a, b: a + b == b + a,
            ),
            AlgebraicProperty(
                "identity", "a + 0 == a", 1,
                lambda a: a + BigInt(0) == a,
            ),
            AlgebraicProperty(
                "inverse", "a + b - b == a", 2,
                lambda a, b: a + b - b == a,
            ),
        ],
    )

    # ------------------------------------------------------------------ sub
    sub_spec = OperationSpec(
        name="sub",
        preconditions=[in_domain],
        postconditions=[
            Postcondition(
                "result_correct",
                "Result equals the exact difference",
                lambda a, b, result: int(result) == a - b,
            ),
            Postcondition(
                "result_canonical",
                "Result prints as the canonical decimal of the difference",
                lambda a, b, result: _canonical(result, a - b),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "self_inverse", "a - a == 0", 1,
                lambda a: (a - a).is_zero and not (a - a).is_negative,
            ),
            AlgebraicProperty(
                "anticommutativity", "a - b == -(b - a)", 2,
                lambda a, b: a - b == -(b - a),
            ),
            AlgebraicProperty(
                "operands_unchanged", "a - b leaves both operands intact", 2,
                lambda a, b: _operands_unchanged(operator.sub, a, b),
            ),
        ],
    )

    # ------------------------------------------------------------------ mul
    mul_spec = OperationSpec(
        name="mul",
        preconditions=[in_domain],
        postconditions=[
            Postcondition(
                "result_correct",
                "Result equals the exact product",
                lambda a, b, result: int(result) == a * b,
            ),
            Postcondition(
                "result_canonical",
                "Result prints as the canonical decimal of the product",
                lambda a, b, result: _canonical(result, a * b),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "commutativity", "a * b == b * a", 2,
                lambda a, b: a * b == b * a,
            ),
            AlgebraicProperty(
                "identity", "a * 1 == a", 1,
                lambda a: a * BigInt(1) == a,
            ),
            AlgebraicProperty(
                "zero", "a * 0 == 0 and is never negative", 1,
                lambda a: (a * BigInt(0)).is_zero and not (a * BigInt(0)).is_negative,
            ),
            AlgebraicProperty(
                "distributes_over_add", "a * (b + b) == a * b + a * b", 2,
                lambda a, b: a * (b + b) == a * b + a * b,
            ),
        ],
    )

    # ------------------------------------------------------------------ div
    div_spec = OperationSpec(
        name="div",
        preconditions=[in_domain],
        postconditions=[
            Postcondition(
                "result_correct",
                "Result equals the quotient truncated toward zero",
                lambda a, b, result: int(result) == truncdiv(a, b),
            ),
        ],
        error_conditions=[
            ErrorCondition(
                "div_by_zero_error",
                "ZeroDivisionError when divisor is zero",
                lambda a, b: b == 0,
                ZeroDivisionError,
            ),
        ],
        properties=[
            AlgebraicProperty(
                "division_identity", "(a / b) * b + a % b == a for b != 0", 2,
                lambda a, b: b.is_zero or (a / b) * b + a % b == a,
            ),
            AlgebraicProperty(
                "identity", "a / 1 == a", 1,
                lambda a: a / BigInt(1) == a,
            ),
            AlgebraicProperty(
                "self", "a / a == 1 for a != 0", 1,
                lambda a: a.is_zero or a / a == BigInt(1),
            ),
        ],
    )

    # ------------------------------------------------------------------ mod
    mod_spec = OperationSpec(
        name="mod",
        preconditions=[in_domain],
        postconditions=[
            Postcondition(
                "result_correct",
                "Remainder matches truncating division",
                lambda a, b, result: int(result) == truncmod(a, b),
            ),
            Postcondition(
                "result_smaller_than_divisor",
                "|a % b| < |b|",
                lambda a, b, result: abs(int(result)) < abs(b),
            ),
            Postcondition(
                "result_sign_follows_dividend",
                "A nonzero remainder has the dividend's sign",
                lambda a, b, result: result.is_zero or (int(result) < 0) == (a < 0),
            ),
        ],
        error_conditions=[
            ErrorCondition(
                "mod_by_zero_error",
                "ZeroDivisionError when divisor is zero",
                lambda a, b: b == 0,
                ZeroDivisionError,
            ),
        ],
        properties=[
            AlgebraicProperty(
                "matches_divmod", "divmod(a, b) == (a / b, a % b) for b != 0", 2,
                lambda a, b: b.is_zero or divmod(a, b) == (a / b, a % b),
            ),
        ],
    )

    # -------------------------------------------------------------- branches
    branches = [
        # Construction and normalization
        BranchSpec("PARSE-VALID", "Literal of digits parsed", "literal matches -?[0-9]+", "parse"),
        BranchSpec("PARSE-NEGATIVE", "Leading '-' sets MINUS", "literal.startswith('-')", "parse"),
        BranchSpec("PARSE-MALFORMED", "ParseError on bad literal", "literal does not match -?[0-9]+", "parse"),
        BranchSpec("NORM-STRIP", "Most-significant zeros stripped", "digits[-1] == 0 and len(digits) > 1", "normalize"),
        BranchSpec("NORM-ZERO-SIGN", "Zero forced to PLUS", "digits == [0]", "normalize"),
        # Comparator
        BranchSpec("CMP-SIGN-DIFFER", "Sign mismatch decides the order", "a.sign != b.sign and not ignore_sign", "compare"),
        BranchSpec("CMP-BOTH-NEGATIVE", "Magnitude order reversed for two negatives", "a.sign == b.sign == MINUS and not ignore_sign", "compare"),
        BranchSpec("CMP-LENGTH", "Digit count decides the order", "a.size != b.size", "compare"),
        BranchSpec("CMP-DIGITS", "First differing digit decides the order", "a.size == b.size and digits differ", "compare"),
        BranchSpec("CMP-EQUAL", "Equal magnitudes", "a.digits == b.digits", "compare"),
        # Addition
        BranchSpec("ADD-CARRY", "Digit sum >= 10 carries", "digit sum >= 10", "add"),
        BranchSpec("ADD-CARRY-OUT", "Final carry adds a digit", "carry after top digit", "add"),
        BranchSpec("ADD-MIXED-SIGN", "Opposite signs dispatch to subtraction", "a.sign != b.sign", "add"),
        # Subtraction
        BranchSpec("SUB-BORROW", "Negative digit difference borrows", "digit difference < 0", "sub"),
        BranchSpec("SUB-EQUAL-MAGNITUDE", "Equal magnitudes give zero", "|a| == |b|", "sub"),
        BranchSpec("SUB-SWAP", "Smaller minus larger takes larger's sign", "|a| < |b|", "sub"),
        # Multiplication
        BranchSpec("MUL-CARRY-PAST-END", "Carry continues past b's top digit", "carry > 0 and j >= b.size", "mul"),
        BranchSpec("MUL-ZERO-DIGIT", "Zero digits of a are skipped", "a[i] == 0", "mul"),
        BranchSpec("MUL-SIGN-DIFFER", "Mixed signs give MINUS", "a.sign != b.sign", "mul"),
        # Division
        BranchSpec("DIV-ZERO", "ZeroDivisionError on zero divisor", "b == 0", "div"),
        BranchSpec("DIV-DIGIT-ZERO", "Quotient digit search settles on 0", "b * 10**i > remainder", "div"),
        BranchSpec("DIV-SIGN-DIFFER", "Quotient truncates toward zero on mixed signs", "a.sign != b.sign", "div"),
        BranchSpec("DIV-REMAINDER-SIGN", "Remainder takes the dividend's sign", "a < 0 and a % b != 0", "div"),
        # Negation
        BranchSpec("NEG-ZERO", "Negating zero stays PLUS", "a == 0", "neg"),
    ]

    return EngineSpec(
        domain=domain,
        operations={
            "add": add_spec,
            "sub": sub_spec,
            "mul": mul_spec,
            "div": div_spec,
            "mod": mod_spec,
        },
        branches=branches,
    )


def _operands_unchanged(op: Callable[[BigInt, BigInt], BigInt], a: BigInt, b: BigInt) -> bool:
    before = (a.digits, a.sign, b.digits, b.sign)
    op(a, b)
    return before == (a.digits, a.sign, b.digits, b.sign)
