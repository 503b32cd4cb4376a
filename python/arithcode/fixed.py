import decimal
import math
from decimal import Decimal
from fractions import Fraction
from typing import cast

from arithcode.errors import InvalidArgument


# Context in which +, - and * never round; inexact results raise instead
EXACT = decimal.Context(
    prec=decimal.MAX_PREC,
    Emax=decimal.MAX_EMAX,
    Emin=decimal.MIN_EMIN,
    traps=[
        decimal.InvalidOperation,
        decimal.DivisionByZero,
        decimal.Overflow,
        decimal.Inexact,
    ],
)


def check_precision(precision) -> int:
    if isinstance(precision, bool) or not isinstance(precision, int):
        raise InvalidArgument(f"Precision must be an integer, got {precision!r}")
    if precision < 1:
        raise InvalidArgument(f"Precision must be at least 1, got {precision}")
    return precision


def to_decimal(x: Decimal | int | str, what: str = "value") -> Decimal:
    """Parse a decimal literal without going through binary floating point."""
    if isinstance(x, bool) or not isinstance(x, (Decimal, int, str)):
        raise InvalidArgument(f"Invalid {what}: expected a decimal string, got {x!r}")
    try:
        d = Decimal(x.strip()) if isinstance(x, str) else Decimal(x)
    except decimal.InvalidOperation:
        raise InvalidArgument(f"Invalid {what}: {x!r} is not a decimal literal") from None
    if not d.is_finite():
        raise InvalidArgument(f"Invalid {what}: {x!r} is not finite")
    return d


def scale_of(x: Decimal) -> int:
    # Fractional digits as written, e.g. 0.3700 -> 4, 12 -> 0. Callers pass finite
    # values (to_decimal rejects NaN and Infinity), so the exponent is an int
    exponent = cast(int, x.as_tuple().exponent)
    return max(0, -exponent)


def round_half_up(x: Fraction, scale: int) -> Decimal:
    """Round an exact rational to `scale` fractional digits, ties away from zero."""
    n = math.floor(abs(x) * 10**scale + Fraction(1, 2))
    if x < 0:
        n = -n
    return Decimal(n).scaleb(-scale, context=EXACT)


def divide(num: Decimal | int, den: Decimal | int, scale: int) -> Decimal:
    return round_half_up(Fraction(num) / Fraction(den), scale)


def add(a: Decimal, b: Decimal) -> Decimal:
    return EXACT.add(a, b)


def sub(a: Decimal, b: Decimal) -> Decimal:
    return EXACT.subtract(a, b)


def mul(a: Decimal, b: Decimal) -> Decimal:
    return EXACT.multiply(a, b)


def plain(x: Decimal) -> str:
    # Never use exponent notation, e.g. 1E-7 -> 0.0000001
    return format(x, "f")
