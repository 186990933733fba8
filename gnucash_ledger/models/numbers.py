"""
Fixed-Point Numbers

All money in the ledger flows through FixedPointNumber.

DESIGN DECISION: The value is a decimal.Decimal evaluated in a dedicated
context that TRAPS inexact results. An operation either produces the exact
answer or raises - it never rounds silently. Binary floats are refused at
construction.

GnuCash stores amounts as rationals ("1250/100"). Power-of-ten
denominators keep their scale, so "1250/100" reads back as 12.50.
"""

from decimal import Context, Decimal, Inexact, InvalidOperation, ROUND_HALF_EVEN
from typing import Union


# Wide enough for any amount GnuCash can store (64-bit num / 64-bit denom)
WORKING_PRECISION = 60

_CONTEXT = Context(
    prec=WORKING_PRECISION,
    rounding=ROUND_HALF_EVEN,
    traps=[InvalidOperation, Inexact],
)

NumberLike = Union["FixedPointNumber", Decimal, int, str]


def _bounded(value: Decimal) -> Decimal:
    """Reject values with more significant digits than the working precision."""
    if len(value.as_tuple().digits) > WORKING_PRECISION:
        raise ValueError(
            f"{value} exceeds working precision of {WORKING_PRECISION} digits"
        )
    return value


def _parse_rational(literal: str) -> Decimal:
    """Parse "num/denom" exactly."""
    num_text, _, denom_text = literal.partition("/")
    try:
        num = int(num_text.strip())
        denom = int(denom_text.strip())
    except ValueError:
        raise ValueError(f"Invalid rational literal: '{literal}'")

    if denom <= 0:
        raise ValueError(f"Denominator must be positive in '{literal}'")

    digits = str(denom)
    try:
        # Power of ten: shift the digits, keeps the stored scale
        if digits[0] == "1" and set(digits[1:]) <= {"0"}:
            return Decimal(num).scaleb(-(len(digits) - 1), _CONTEXT)
        return _CONTEXT.divide(Decimal(num), Decimal(denom))
    except Inexact:
        raise ValueError(
            f"'{literal}' has no exact decimal representation"
        )


def _to_decimal(value: NumberLike) -> Decimal:
    if isinstance(value, FixedPointNumber):
        return value.to_decimal()
    if isinstance(value, bool):
        raise TypeError("bool is not a number here")
    if isinstance(value, float):
        raise TypeError(
            "FixedPointNumber refuses binary floats; pass a string literal instead"
        )
    if isinstance(value, int):
        return _bounded(Decimal(value))
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"Non-finite value: {value}")
        return _bounded(value)
    if isinstance(value, str):
        literal = value.strip()
        # int() and Decimal() both accept "1_000"
        if "_" in literal:
            raise ValueError(f"Invalid literal: '{value}'")
        if "/" in literal:
            return _parse_rational(literal)
        try:
            parsed = Decimal(literal)
        except InvalidOperation:
            raise ValueError(f"Invalid decimal literal: '{value}'")
        if not parsed.is_finite():
            raise ValueError(f"Non-finite value: '{value}'")
        return _bounded(parsed)
    raise TypeError(f"Cannot build a FixedPointNumber from {type(value).__name__}")


class FixedPointNumber:
    """
    Exact signed decimal value.

    Immutable: add() and multiply() return new instances.
    FixedPointNumber() is the additive identity.
    """

    __slots__ = ("_value",)

    def __init__(self, value: NumberLike = 0):
        decimal_value = _to_decimal(value)
        # Zero is canonical - never carry a negative zero around
        if decimal_value.is_zero() and decimal_value.is_signed():
            decimal_value = decimal_value.copy_abs()
        self._value = decimal_value

    def to_decimal(self) -> Decimal:
        return self._value

    def is_zero(self) -> bool:
        return self._value.is_zero()

    def add(self, other: NumberLike) -> "FixedPointNumber":
        """Exact sum. Raises ValueError if the result exceeds the working precision."""
        try:
            return FixedPointNumber(_CONTEXT.add(self._value, _to_decimal(other)))
        except Inexact:
            raise ValueError(f"Sum of {self} and {other} exceeds working precision")

    def multiply(self, factor: NumberLike) -> "FixedPointNumber":
        """
        Exact product.

        Integral factors are applied at scale 0, so the scale of self is kept:
        12.50 * "-100/100" is -12.50, identical to negating 12.50.
        """
        factor_value = _to_decimal(factor)
        try:
            if factor_value == factor_value.to_integral_value():
                factor_value = _CONTEXT.quantize(factor_value, Decimal(1))
            return FixedPointNumber(_CONTEXT.multiply(self._value, factor_value))
        except (Inexact, InvalidOperation):
            # quantize signals InvalidOperation when the factor is too wide
            raise ValueError(f"Product of {self} and {factor} exceeds working precision")

    def negate(self) -> "FixedPointNumber":
        return self.multiply(NEGATIVE_ONE)

    # Operators

    def __add__(self, other: NumberLike) -> "FixedPointNumber":
        if isinstance(other, float):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other: NumberLike) -> "FixedPointNumber":
        # Lets sum() start from the int 0
        return self.__add__(other)

    def __mul__(self, other: NumberLike) -> "FixedPointNumber":
        if isinstance(other, float):
            return NotImplemented
        return self.multiply(other)

    __rmul__ = __mul__

    def __neg__(self) -> "FixedPointNumber":
        return self.negate()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FixedPointNumber):
            return self._value == other._value
        if isinstance(other, (int, Decimal)) and not isinstance(other, bool):
            return self._value == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"FixedPointNumber('{self._value}')"


# The exact -1 used for negation, written the way GnuCash stores it
NEGATIVE_ONE = FixedPointNumber("-100/100")
