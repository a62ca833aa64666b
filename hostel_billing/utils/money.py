"""
Money helpers.

All amounts are ``Decimal``. Rounding is ROUND_HALF_UP and happens only
where an amount is emitted, never on intermediate rates.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Union

TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")
ZERO = Decimal("0.00")
MONEY_TOLERANCE = Decimal("0.01")

Numeric = Union[Decimal, int, float, str]


def to_decimal(value: Numeric) -> Decimal:
    """Coerce to Decimal; floats go through their string form."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def to_money(value: Numeric) -> Decimal:
    """Round to 2 decimal places."""
    return to_decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def to_rate(value: Numeric) -> Decimal:
    """Round a rate to 4 decimal places for display."""
    return to_decimal(value).quantize(FOUR_PLACES, rounding=ROUND_HALF_UP)


def sum_money(values: Iterable[Numeric]) -> Decimal:
    total = ZERO
    for value in values:
        total += to_decimal(value)
    return to_money(total)


def is_negligible(value: Numeric, tolerance: Decimal = MONEY_TOLERANCE) -> bool:
    """True when the amount is strictly inside the tolerance band."""
    return abs(to_decimal(value)) < tolerance
