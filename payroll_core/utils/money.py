"""
Payroll Core - Money

Fixed-point monetary value: an integer count of minor units (hundredths,
e.g. halalas). Decimal currency values are accepted and produced only by
``from_decimal`` / ``to_decimal``; all arithmetic in between is integer or
exact-rational.

Rounding: any operation whose exact result falls between two minor units
rounds half-up (ties away from zero), matching ``ROUND_HALF_UP``.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from fractions import Fraction
from numbers import Rational
from typing import Iterable, Union

MINOR_UNITS_PER_MAJOR = 100
TWO_PLACES = Decimal("0.01")

Scalar = Union[int, Fraction, Decimal]
DecimalLike = Union[Decimal, int, str, float]


def round_half_up(value: Fraction) -> int:
    """Round an exact rational to the nearest integer, ties away from zero."""
    sign = -1 if value < 0 else 1
    quotient, remainder = divmod(abs(value.numerator), value.denominator)
    if 2 * remainder >= value.denominator:
        quotient += 1
    return sign * quotient


def to_fraction(value: Scalar) -> Fraction:
    """Convert a scalar factor to an exact rational."""
    if isinstance(value, Fraction):
        return value
    if isinstance(value, (int, Rational)):
        return Fraction(value)
    if isinstance(value, Decimal):
        return Fraction(value)
    if isinstance(value, float):
        # Go through the shortest repr so 1.5 stays 3/2, not a binary expansion
        return Fraction(Decimal(repr(value)))
    raise TypeError(f"Unsupported scalar type: {type(value).__name__}")


@dataclass(frozen=True, order=True)
class Money:
    """Currency amount held as integer minor units."""
    minor_units: int = 0

    def __post_init__(self):
        if not isinstance(self.minor_units, int) or isinstance(self.minor_units, bool):
            raise TypeError("Money.minor_units must be an int")

    # ===========================================
    # BOUNDARY CONVERSION
    # ===========================================

    @classmethod
    def from_decimal(cls, amount: DecimalLike) -> "Money":
        """
        Build Money from a decimal currency amount.

        ``None`` is not accepted; callers default missing fields to zero.
        Floats are converted through ``str`` so 0.1 means 0.10.
        """
        if isinstance(amount, float):
            amount = Decimal(repr(amount))
        value = Decimal(amount) if not isinstance(amount, Decimal) else amount
        quantized = value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
        return cls(int(quantized * MINOR_UNITS_PER_MAJOR))

    @classmethod
    def zero(cls) -> "Money":
        return cls(0)

    def to_decimal(self) -> Decimal:
        """Decimal currency amount with exactly two places."""
        return (Decimal(self.minor_units) / MINOR_UNITS_PER_MAJOR).quantize(TWO_PLACES)

    # ===========================================
    # ARITHMETIC
    # ===========================================

    def add(self, other: "Money") -> "Money":
        return Money(self.minor_units + other.minor_units)

    def subtract(self, other: "Money") -> "Money":
        return Money(self.minor_units - other.minor_units)

    def multiply(self, factor: Scalar) -> "Money":
        """Multiply by an exact rational factor, rounding once."""
        return Money(round_half_up(self.minor_units * to_fraction(factor)))

    def divide(self, divisor: int) -> "Money":
        """Divide by a non-zero integer, rounding once."""
        if not isinstance(divisor, int) or divisor == 0:
            raise ValueError("Money can only be divided by a non-zero integer")
        return Money(round_half_up(Fraction(self.minor_units, divisor)))

    def exact(self) -> Fraction:
        """Exact rational minor-unit value, for chaining without rounding."""
        return Fraction(self.minor_units)

    @classmethod
    def from_exact(cls, minor_units: Fraction) -> "Money":
        """Round an exact rational minor-unit amount to Money."""
        return cls(round_half_up(minor_units))

    @classmethod
    def sum_of(cls, amounts: Iterable["Money"]) -> "Money":
        total = 0
        for amount in amounts:
            total += amount.minor_units
        return cls(total)

    @property
    def is_negative(self) -> bool:
        return self.minor_units < 0

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return self.subtract(other)

    def __neg__(self) -> "Money":
        return Money(-self.minor_units)

    def __str__(self) -> str:
        return str(self.to_decimal())
