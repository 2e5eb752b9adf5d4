"""
Fixed-point currency helpers.

Amounts are Decimals with two fraction digits. Rounding is half-up and
happens only when a value is stored or rendered.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer

CENT = Decimal("0.01")


def quantize_money(value: Decimal) -> Decimal:
    """Round to whole cents."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def to_minor_units(amount: Decimal) -> int:
    """Convert an amount to the smallest currency unit (cents)."""
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_money(value: Decimal) -> str:
    """Render with exactly two fraction digits."""
    return f"{quantize_money(value):.2f}"


def _coerce_decimal(value: Any) -> Any:
    # floats go through str() so 0.1 becomes Decimal("0.1"), not its binary expansion
    if isinstance(value, float):
        return Decimal(str(value))
    return value


Money = Annotated[
    Decimal,
    BeforeValidator(_coerce_decimal),
    PlainSerializer(format_money, return_type=str, when_used="json"),
]
