"""Arbitrary-precision signed decimal integers.

A ``BigInt`` keeps one decimal digit per slot, least significant first,
plus a sign flag.  Values are persistent: every operation builds a new
value and no public method mutates an existing one.

Layers
------
digit store     digit_at / _set_digit / _normalize
comparator      compare(a, b, ignore_sign)
engine          magnitude add / subtract, schoolbook multiply,
                long division with a binary search per quotient digit
operators       + - * / // % divmod, unary - + abs, ordering, equality

Division truncates toward zero and the remainder takes the dividend's
sign, so ``(a / b) * b + a % b == a`` for every nonzero ``b``.
"""
from __future__ import annotations

from enum import Enum
from typing import Callable, Iterable, Union


class Sign(Enum):
    PLUS = 1
    MINUS = -1


class ParseError(ValueError):
    """Raised when a decimal literal cannot be parsed."""

    def __init__(self, literal: str) -> None:
        self.literal = literal
        super().__init__(f"Malformed decimal literal: {literal!r}")


# (digits processed, total digits) after each quotient digit is settled
DigitCallback = Callable[[int, int], None]

Operand = Union["BigInt", int]


class BigInt:
    """Signed decimal integer of unbounded size."""

    __slots__ = ("_digits", "_sign")

    def __init__(self, value: BigInt | int | str = 0) -> None:
        if isinstance(value, BigInt):
            self._digits = list(value._digits)
            self._sign = value._sign
            return

        if isinstance(value, bool):
            raise TypeError("BigInt cannot be built from a bool")

        if isinstance(value, int):
            self._sign = Sign.MINUS if value < 0 else Sign.PLUS
            self._digits = _native_digits(-value if value < 0 else value)
        elif isinstance(value, str):
            self._sign, self._digits = _parse_literal(value)
        else:
            raise TypeError(
                f"BigInt cannot be built from {type(value).__name__}"
            )
        self._normalize()

    # -- alternative constructors -------------------------------------------

    @classmethod
    def parse(cls, literal: str) -> BigInt:
        """Parse a decimal literal with an optional leading '-'."""
        return cls(literal)

    @classmethod
    def from_digits(
        cls, digits: Iterable[int], sign: Sign = Sign.PLUS
    ) -> BigInt:
        """Build a value from least-significant-first digits."""
        collected = list(digits)
        for d in collected:
            if isinstance(d, bool) or not isinstance(d, int) or not 0 <= d <= 9:
                raise ValueError(f"Digit must be an int in 0..9, got {d!r}")
        return cls._assemble(collected, sign)

    @classmethod
    def exp(cls, value: int, position: int) -> BigInt:
        """Return ``value * 10**position`` for a single digit ``value``."""
        if not 0 <= value <= 9:
            raise ValueError(f"value must be a digit in 0..9, got {value}")
        if position < 0:
            raise ValueError(f"position must be >= 0, got {position}")
        result = cls()
        result._set_digit(position, value)
        result._normalize()
        return result

    @classmethod
    def _assemble(cls, digits: list[int], sign: Sign) -> BigInt:
        """Wrap an engine-built digit list without copying or validating."""
        result = cls.__new__(cls)
        result._digits = digits
        result._sign = sign
        result._normalize()
        return result

    # -- digit store ----------------------------------------------------------

    @property
    def digits(self) -> tuple[int, ...]:
        return tuple(self._digits)

    @property
    def sign(self) -> Sign:
        return self._sign

    @property
    def size(self) -> int:
        """Number of stored digits (1 for zero)."""
        return len(self._digits)

    @property
    def is_zero(self) -> bool:
        return self._digits == [0]

    @property
    def is_negative(self) -> bool:
        return self._sign is Sign.MINUS

    def digit_at(self, i: int) -> int:
        """Digit at position ``i``; positions past the top read as 0."""
        return self._digits[i] if i < len(self._digits) else 0

    def _set_digit(self, i: int, value: int) -> None:
        while len(self._digits) <= i:
            self._digits.append(0)
        self._digits[i] = value

    def _normalize(self) -> None:
        digits = self._digits
        while len(digits) > 1 and digits[-1] == 0:
            digits.pop()
        if not digits:
            digits.append(0)
        if digits == [0]:
            self._sign = Sign.PLUS

    def _is_normalized(self) -> bool:
        digits = self._digits
        if not digits or (len(digits) > 1 and digits[-1] == 0):
            return False
        return not (digits == [0] and self._sign is Sign.MINUS)

    # -- conversions ----------------------------------------------------------

    def __str__(self) -> str:
        text = "".join(str(d) for d in reversed(self._digits))
        return "-" + text if self._sign is Sign.MINUS else text

    def __repr__(self) -> str:
        return f"BigInt('{self}')"

    def __int__(self) -> int:
        value = 0
        for d in reversed(self._digits):
            value = value * 10 + d
        return -value if self._sign is Sign.MINUS else value

    def __bool__(self) -> bool:
        return not self.is_zero

    def __hash__(self) -> int:
        return hash(int(self))

    # -- comparison -----------------------------------------------------------

    def compare(self, other: Operand, ignore_sign: bool = False) -> int:
        return compare(self, _coerce_strict(other), ignore_sign)

    def __eq__(self, other: object) -> bool:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return compare(self, rhs) == 0

    def __lt__(self, other: object) -> bool:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return compare(self, rhs) < 0

    def __le__(self, other: object) -> bool:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return compare(self, rhs) <= 0

    def __gt__(self, other: object) -> bool:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return compare(self, rhs) > 0

    def __ge__(self, other: object) -> bool:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return compare(self, rhs) >= 0

    # -- unary ----------------------------------------------------------------

    def __neg__(self) -> BigInt:
        flipped = Sign.PLUS if self._sign is Sign.MINUS else Sign.MINUS
        return BigInt._assemble(list(self._digits), flipped)

    def __pos__(self) -> BigInt:
        return BigInt(self)

    def __abs__(self) -> BigInt:
        return BigInt._assemble(list(self._digits), Sign.PLUS)

    # -- arithmetic -----------------------------------------------------------

    def __add__(self, other: object) -> BigInt:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return _signed_add(self, rhs)

    def __radd__(self, other: object) -> BigInt:
        lhs = _coerce(other)
        if lhs is None:
            return NotImplemented
        return _signed_add(lhs, self)

    def __sub__(self, other: object) -> BigInt:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return _signed_add(self, -rhs)

    def __rsub__(self, other: object) -> BigInt:
        lhs = _coerce(other)
        if lhs is None:
            return NotImplemented
        return _signed_add(lhs, -self)

    def __mul__(self, other: object) -> BigInt:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return _multiply(self, rhs)

    def __rmul__(self, other: object) -> BigInt:
        lhs = _coerce(other)
        if lhs is None:
            return NotImplemented
        return _multiply(lhs, self)

    def __truediv__(self, other: object) -> BigInt:
        """Integer division truncating toward zero."""
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return long_divide(self, rhs)[0]

    def __rtruediv__(self, other: object) -> BigInt:
        lhs = _coerce(other)
        if lhs is None:
            return NotImplemented
        return long_divide(lhs, self)[0]

    # ``//`` is the same truncating division; it does not floor.
    __floordiv__ = __truediv__
    __rfloordiv__ = __rtruediv__

    def __mod__(self, other: object) -> BigInt:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return long_divide(self, rhs)[1]

    def __rmod__(self, other: object) -> BigInt:
        lhs = _coerce(other)
        if lhs is None:
            return NotImplemented
        return long_divide(lhs, self)[1]

    def __divmod__(self, other: object) -> tuple[BigInt, BigInt]:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return long_divide(self, rhs)

    def __rdivmod__(self, other: object) -> tuple[BigInt, BigInt]:
        lhs = _coerce(other)
        if lhs is None:
            return NotImplemented
        return long_divide(lhs, self)


# ---------------------------------------------------------------------------
# Construction helpers
# ---------------------------------------------------------------------------

def _native_digits(magnitude: int) -> list[int]:
    digits: list[int] = []
    while True:
        magnitude, d = divmod(magnitude, 10)
        digits.append(d)
        if magnitude == 0:
            return digits


def _parse_literal(literal: str) -> tuple[Sign, list[int]]:
    sign = Sign.PLUS
    body = literal
    if body.startswith("-"):
        sign = Sign.MINUS
        body = body[1:]
    if not body or not body.isascii() or not body.isdigit():
        raise ParseError(literal)
    return sign, [int(c) for c in reversed(body)]


def _coerce(value: object) -> BigInt | None:
    if isinstance(value, BigInt):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return BigInt(value)
    return None


def _coerce_strict(value: Operand) -> BigInt:
    result = _coerce(value)
    if result is None:
        raise TypeError(f"Cannot compare BigInt with {type(value).__name__}")
    return result


# ---------------------------------------------------------------------------
# Comparator
# ---------------------------------------------------------------------------

def compare(a: BigInt, b: BigInt, ignore_sign: bool = False) -> int:
    """Three-way comparison: -1, 0 or 1.

    With ``ignore_sign`` only magnitudes are compared.  Otherwise a
    negative value sorts below a positive one and two negatives compare
    by reversed magnitude.
    """
    assert a._is_normalized() and b._is_normalized(), (
        "non-normalized operand reached the comparator"
    )
    if not ignore_sign:
        if a._sign is not b._sign:
            return -1 if a._sign is Sign.MINUS else 1
        if a._sign is Sign.MINUS:
            return -_compare_magnitudes(a, b)
    return _compare_magnitudes(a, b)


def _compare_magnitudes(a: BigInt, b: BigInt) -> int:
    if a.size != b.size:
        return -1 if a.size < b.size else 1
    for i in range(a.size - 1, -1, -1):
        da, db = a._digits[i], b._digits[i]
        if da != db:
            return -1 if da < db else 1
    return 0


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

def _signed_add(a: BigInt, b: BigInt) -> BigInt:
    if a._sign is b._sign:
        return _add_magnitudes(a, b)
    return _subtract_magnitudes(a, b)


def _add_magnitudes(a: BigInt, b: BigInt) -> BigInt:
    """Digit-wise sum with carry; the result takes ``a``'s sign."""
    digits: list[int] = []
    carry = 0
    for i in range(max(a.size, b.size)):
        total = a.digit_at(i) + b.digit_at(i) + carry
        if total >= 10:
            total -= 10
            carry = 1
        else:
            carry = 0
        digits.append(total)
    if carry:
        digits.append(carry)
    return BigInt._assemble(digits, a._sign)


def _subtract_magnitudes(a: BigInt, b: BigInt) -> BigInt:
    """Subtract the smaller magnitude from the larger.

    The result carries the sign of the operand with the larger
    magnitude; equal magnitudes give zero.
    """
    order = compare(a, b, ignore_sign=True)
    if order == 0:
        return BigInt()
    larger, smaller = (a, b) if order > 0 else (b, a)

    digits: list[int] = []
    borrow = 0
    for i in range(larger.size):
        d = larger.digit_at(i) - smaller.digit_at(i) - borrow
        if d < 0:
            d += 10
            borrow = 1
        else:
            borrow = 0
        digits.append(d)
    assert borrow == 0, "borrow left over after subtracting a smaller magnitude"
    return BigInt._assemble(digits, larger._sign)


def _multiply(a: BigInt, b: BigInt) -> BigInt:
    """Schoolbook multiplication accumulated through the digit store."""
    product = BigInt()
    for i in range(a.size):
        da = a.digit_at(i)
        if da == 0:
            continue
        j = 0
        carry = 0
        while j < b.size or carry > 0:
            cur = product.digit_at(i + j) + da * b.digit_at(j) + carry
            product._set_digit(i + j, cur % 10)
            carry = cur // 10
            j += 1
    product._sign = Sign.PLUS if a._sign is b._sign else Sign.MINUS
    product._normalize()
    return product


def _place(value: int, position: int) -> BigInt:
    """``value * 10**position`` for a quotient candidate in 0..10."""
    if value == 10:
        return BigInt.exp(1, position + 1)
    return BigInt.exp(value, position)


def _quotient_digit(divisor: BigInt, remainder: BigInt, position: int) -> int:
    """Largest x in [0, 10] with ``divisor * x * 10**position <= remainder``."""
    x, lo, hi = 0, 0, 10
    while lo <= hi:
        m = (lo + hi) // 2
        candidate = _place(m, position) * divisor
        if compare(candidate, remainder, ignore_sign=True) <= 0:
            x = m
            lo = m + 1
        else:
            hi = m - 1
    assert x < 10, "quotient digit search exceeded 9"
    return x


def long_divide(
    dividend: BigInt,
    divisor: BigInt,
    on_digit: DigitCallback | None = None,
) -> tuple[BigInt, BigInt]:
    """Return ``(quotient, remainder)`` from one long-division pass.

    Digits of the dividend are folded into a running remainder from the
    most significant position down; each quotient digit is found by a
    binary search.  The quotient truncates toward zero and the remainder
    takes the dividend's sign.

    Raises:
        ZeroDivisionError: if ``divisor`` is zero.
    """
    if divisor.is_zero:
        raise ZeroDivisionError("BigInt division by zero")

    magnitude = abs(divisor)
    quotient = BigInt()
    remainder = BigInt()
    total = dividend.size

    for i in range(total - 1, -1, -1):
        remainder = remainder + BigInt.exp(dividend.digit_at(i), i)
        x = _quotient_digit(magnitude, remainder, i)
        quotient._set_digit(i, x)
        remainder = remainder - _place(x, i) * magnitude
        if on_digit is not None:
            on_digit(total - i, total)

    quotient._sign = Sign.PLUS if dividend._sign is divisor._sign else Sign.MINUS
    quotient._normalize()
    remainder = BigInt._assemble(list(remainder._digits), dividend._sign)
    return quotient, remainder


ZERO = BigInt(0)
ONE = BigInt(1)
