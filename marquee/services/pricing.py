from decimal import Decimal
from typing import Union

from marquee.core.config import settings

CENT = Decimal("0.01")

Money = Union[Decimal, int, str, float]


def to_decimal(value: Money) -> Decimal:
    """Exact Decimal for a money value. Floats go through str() to avoid binary noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def compute_total(unit_price: Money, seat_count: int) -> Decimal:
    """Total charge for ``seat_count`` seats at ``unit_price`` each, to the cent."""
    if isinstance(seat_count, bool) or not isinstance(seat_count, int) or seat_count <= 0:
        raise ValueError(f"seat_count must be a positive integer, got {seat_count!r}")
    return (to_decimal(unit_price) * seat_count).quantize(CENT)


def format_amount(amount: Money) -> str:
    """Display string for an amount, e.g. '₹400.00'."""
    return f"{settings.CURRENCY_SYMBOL}{to_decimal(amount).quantize(CENT):,}"
