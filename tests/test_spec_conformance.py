"""Contract conformance tests.

These tests are driven by ``spec.build_spec``: they iterate over every
postcondition, error condition and algebraic property it defines and
check the engine against each of them, so a predicate added there is
covered here without writing a new test.
"""
from __future__ import annotations

import pytest
from hypothesis import assume, given, settings
from hypothesis.strategies import integers, sampled_from

from bigint import BigInt
from conftest import SMALL
from spec import Domain, build_spec, evaluate, truncdiv, truncmod

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

SPEC = build_spec(SMALL)
WIDE = Domain(lo=-(10**40), hi=10**40)
WIDE_SPEC = build_spec(WIDE)

small = integers(min_value=SMALL.lo, max_value=SMALL.hi)
wide = integers(min_value=WIDE.lo, max_value=WIDE.hi)
op_names = sampled_from(sorted(SPEC.operations))


def _check_postconditions(spec, op_name: str, a: int, b: int) -> None:
    result = evaluate(op_name, a, b)
    for post in spec.operations[op_name].postconditions:
        assert post.check(a, b, result), (
            f"Postcondition '{post.name}' failed: {op_name}({a}, {b}) = {result}"
        )


# ===================================================================
# POSTCONDITIONS (property-based)
# ===================================================================

class TestPostconditions:
    """Every postcondition holds for random inputs."""

    @given(op=op_names, a=wide, b=wide)
    @settings(max_examples=200, deadline=None)
    def test_wide_postconditions(self, op, a, b):
        assume(b != 0 or op in ("add", "sub", "mul"))
        _check_postconditions(WIDE_SPEC, op, a, b)

    @given(a=wide, b=integers(min_value=1, max_value=99))
    @settings(max_examples=100, deadline=None)
    def test_div_by_short_divisor(self, a, b):
        for op in ("div", "mod"):
            _check_postconditions(WIDE_SPEC, op, a, b)
            _check_postconditions(WIDE_SPEC, op, a, -b)


# ===================================================================
# ERROR CONDITIONS
# ===================================================================

class TestErrorConditions:
    """Every error condition triggers the declared exception."""

    def test_error_conditions_over_small_domain(self):
        triggered = 0
        for op_name, op_spec in SPEC.operations.items():
            for ec in op_spec.error_conditions:
                for a in SMALL.all_values():
                    for b in SMALL.edge_values():
                        if ec.trigger(a, b):
                            triggered += 1
                            with pytest.raises(ec.exception):
                                evaluate(op_name, a, b)
        # one zero divisor per dividend, for div and mod
        assert triggered == 2 * SMALL.width

    def test_only_division_declares_errors(self):
        declared = {n for n, op in SPEC.operations.items() if op.error_conditions}
        assert declared == {"div", "mod"}


# ===================================================================
# ALGEBRAIC PROPERTIES (property-based)
# ===================================================================

class TestAlgebraicProperties:
    """Every algebraic property holds for random inputs."""

    @given(a=wide, b=wide)
    @settings(max_examples=150, deadline=None)
    def test_binary_properties(self, a, b):
        for op_name, prop in WIDE_SPEC.all_properties:
            if prop.arity != 2:
                continue
            assert prop.check(BigInt(a), BigInt(b)), (
                f"Property '{prop.name}' failed for {op_name}({a}, {b})"
            )

    @given(a=wide)
    @settings(max_examples=150, deadline=None)
    def test_unary_properties(self, a):
        for op_name, prop in WIDE_SPEC.all_properties:
            if prop.arity != 1:
                continue
            assert prop.check(BigInt(a)), (
                f"Property '{prop.name}' failed for {op_name}({a})"
            )


# ===================================================================
# EXHAUSTIVE VERIFICATION (small domain)
# ===================================================================

class TestExhaustive:
    """For the small domain, check every input pair against postconditions."""

    @pytest.mark.parametrize("op_name", ["add", "sub", "mul"])
    def test_all_pairs(self, op_name):
        checked = 0
        for a in SMALL.all_values():
            for b in SMALL.all_values():
                _check_postconditions(SPEC, op_name, a, b)
                checked += 1
        assert checked == SMALL.width ** 2

    @pytest.mark.parametrize("op_name", ["div", "mod"])
    def test_all_pairs_division(self, op_name):
        checked = 0
        for a in SMALL.all_values():
            for b in SMALL.all_values():
                if b == 0:
                    continue
                _check_postconditions(SPEC, op_name, a, b)
                checked += 1
        # width^2 minus the column where b == 0
        assert checked == SMALL.width ** 2 - SMALL.width

    def test_exhaustive_pair_count(self):
        """Sanity: confirm the expected number of pairs."""
        assert SMALL.width == 61
        assert SMALL.width ** 2 == 3721


# ===================================================================
# ORACLE AND DOMAIN HELPERS
# ===================================================================

class TestOracle:

    @pytest.mark.parametrize(
        "a, b, q, r",
        [(7, 2, 3, 1), (-7, 2, -3, -1), (7, -2, -3, 1), (-7, -2, 3, -1), (6, 3, 2, 0)],
    )
    def test_truncating_oracle(self, a, b, q, r):
        assert truncdiv(a, b) == q
        assert truncmod(a, b) == r

    def test_domain_rejects_inverted_bounds(self):
        with pytest.raises(ValueError):
            Domain(lo=5, hi=4)

    def test_edge_values_stay_inside(self):
        edges = Domain(-5, 50).edge_values()
        assert all(-5 <= v <= 50 for v in edges)
        assert {-5, -1, 0, 1, 9, 10, 50} <= set(edges)
        assert len(edges) == len(set(edges))

    def test_sample_is_reproducible(self):
        d = Domain(-(2**63), 2**63 - 1)
        assert d.sample(30, seed=7) == d.sample(30, seed=7)
        assert len(d.sample(30, seed=7)) == 30
        assert all(d.contains(v) for v in d.sample(30, seed=7))
