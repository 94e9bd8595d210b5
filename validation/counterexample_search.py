"""Counterexample search: discovers gaps in the engine or its tests.

This module runs independently of the test suite.  It sweeps a
verification domain through the engine contract and searches for:

1. Postcondition violations: inputs where the engine's result doesn't
   match native ``int`` arithmetic.
2. Error condition violations: inputs that should raise but don't (or
   raise the wrong exception).
3. Property violations: algebraic relationships that fail for some
   input combination.

Small domains are checked exhaustively; wide ones (far past 64-bit
range) are sampled with a fixed seed so runs are reproducible.

Run directly::

    python -m validation.counterexample_search
"""
from __future__ import annotations

import itertools
import sys
from dataclasses import dataclass, field

sys.path.insert(0, ".")

from bigint import BigInt
from spec import Domain, EngineSpec, build_spec, evaluate

EXHAUSTIVE_THRESHOLD = 64  # max domain width for brute-force pairs


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass
class Counterexample:
    category: str
    operation: str
    inputs: tuple
    expected: str
    actual: str
    description: str


@dataclass
class SearchReport:
    counterexamples: list[Counterexample] = field(default_factory=list)
    checks_run: int = 0

    @property
    def passed(self) -> bool:
        return len(self.counterexamples) == 0

    def summary(self) -> str:
        lines = [
            "Counterexample Search Report",
            "=" * 40,
            f"Total checks: {self.checks_run}",
            f"Counterexamples found: {len(self.counterexamples)}",
        ]
        if self.counterexamples:
            lines.append("")
            for i, cx in enumerate(self.counterexamples, 1):
                lines.append(f"  [{i}] {cx.category} / {cx.operation}")
                lines.append(f"      Inputs:   {cx.inputs}")
                lines.append(f"      Expected: {cx.expected}")
                lines.append(f"      Actual:   {cx.actual}")
                lines.append(f"      {cx.description}")
        else:
            lines.append("\nNo counterexamples found; all checks passed.")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Input generation
# ---------------------------------------------------------------------------

def input_values(domain: Domain, samples: int = 40, seed: int = 0) -> list[int]:
    """Every value of a small domain, or a seeded sample of a wide one."""
    if domain.width <= EXHAUSTIVE_THRESHOLD:
        return list(domain.all_values())
    return domain.sample(samples, seed=seed)


# ---------------------------------------------------------------------------
# Search functions
# ---------------------------------------------------------------------------

def search_postcondition_violations(
    spec: EngineSpec,
    values: list[int],
) -> tuple[list[Counterexample], int]:
    """Verify postconditions for every input pair."""
    cxs: list[Counterexample] = []
    checks = 0

    for op_name, op_spec in spec.operations.items():
        for a, b in itertools.product(values, repeat=2):
            # Skip inputs that are supposed to error
            if any(ec.trigger(a, b) for ec in op_spec.error_conditions):
                checks += 1
                continue

            try:
                result = evaluate(op_name, a, b)
            except Exception as e:
                cxs.append(Counterexample(
                    category="unexpected_error",
                    operation=op_name,
                    inputs=(a, b),
                    expected="no error",
                    actual=f"{type(e).__name__}: {e}",
                    description="Operation raised an unexpected exception",
                ))
                checks += 1
                continue

            for post in op_spec.postconditions:
                if not post.check(a, b, result):
                    cxs.append(Counterexample(
                        category="postcondition_violation",
                        operation=op_name,
                        inputs=(a, b),
                        expected=post.description,
                        actual=f"result={result}",
                        description=f"Postcondition '{post.name}' violated",
                    ))
            checks += 1

    return cxs, checks


def search_error_condition_violations(
    spec: EngineSpec,
    values: list[int],
) -> tuple[list[Counterexample], int]:
    """Verify every error condition triggers the right exception."""
    cxs: list[Counterexample] = []
    checks = 0

    for op_name, op_spec in spec.operations.items():
        for a, b in itertools.product(values, repeat=2):
            for ec in op_spec.error_conditions:
                if not ec.trigger(a, b):
                    continue
                checks += 1
                try:
                    result = evaluate(op_name, a, b)
                    cxs.append(Counterexample(
                        category="missing_error",
                        operation=op_name,
                        inputs=(a, b),
                        expected=f"{ec.exception.__name__}",
                        actual=f"result={result}",
                        description=(
                            f"Error condition '{ec.name}' should have "
                            f"triggered but didn't"
                        ),
                    ))
                except ec.exception:
                    pass  # expected
                except Exception as e:
                    cxs.append(Counterexample(
                        category="wrong_error",
                        operation=op_name,
                        inputs=(a, b),
                        expected=f"{ec.exception.__name__}",
                        actual=f"{type(e).__name__}: {e}",
                        description=f"Wrong exception type for '{ec.name}'",
                    ))

    return cxs, checks


def search_property_violations(
    spec: EngineSpec,
    values: list[int],
) -> tuple[list[Counterexample], int]:
    """Check every algebraic property over the input values."""
    cxs: list[Counterexample] = []
    checks = 0

    for op_name, prop in spec.all_properties:
        for combo in itertools.product(values, repeat=prop.arity):
            checks += 1
            if not prop.check(*(BigInt(v) for v in combo)):
                cxs.append(Counterexample(
                    category="property_violation",
                    operation=op_name,
                    inputs=combo,
                    expected=prop.description,
                    actual="property does not hold",
                    description=f"Property '{prop.name}' violated",
                ))

    return cxs, checks


# ---------------------------------------------------------------------------
# Top-level runner
# ---------------------------------------------------------------------------

def run_search(domain: Domain, samples: int = 40, seed: int = 0) -> SearchReport:
    """Run complete counterexample search for one domain."""
    spec = build_spec(domain)
    values = input_values(domain, samples=samples, seed=seed)
    report = SearchReport()

    for search_fn in (
        search_postcondition_violations,
        search_error_condition_violations,
        search_property_violations,
    ):
        cxs, checks = search_fn(spec, values)
        report.counterexamples.extend(cxs)
        report.checks_run += checks

    return report


def main() -> None:
    """Run counterexample search across several domains."""
    configs = [
        ("exhaustive [-20, 20]", Domain(-20, 20)),
        ("exhaustive [0, 60]", Domain(0, 60)),
        ("sampled 64-bit", Domain(-(2**63), 2**63 - 1)),
        ("sampled 40 digits", Domain(-(10**40), 10**40)),
    ]

    all_passed = True
    for name, domain in configs:
        print(f"\n--- Domain: {name} ---")
        report = run_search(domain)
        print(report.summary())
        if not report.passed:
            all_passed = False

    print("\n" + "=" * 40)
    if all_passed:
        print("ALL DOMAINS PASSED")
    else:
        print("SOME DOMAINS HAD COUNTEREXAMPLES")
        sys.exit(1)


if __name__ == "__main__":
    main()
