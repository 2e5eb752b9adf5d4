"""
Pricing Calculator.

Subtotal, flat shipping, flat-rate tax and grand total for a set of
(unit price, quantity) lines. Amounts stay exact until ``quantized()``.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from storefront.core.money import quantize_money

DEFAULT_SHIPPING = Decimal("15.00")
DEFAULT_TAX_RATE = Decimal("0.08")


@dataclass(frozen=True)
class PriceBreakdown:
    """Monetary breakdown of an order."""

    subtotal: Decimal
    shipping: Decimal
    tax: Decimal
    total: Decimal

    def quantized(self) -> "PriceBreakdown":
        """
        Round every amount to cents.

        Subtotal and shipping are already whole cents for 2-place prices,
        so the rounded total still equals subtotal + shipping + tax.
        """
        subtotal = quantize_money(self.subtotal)
        shipping = quantize_money(self.shipping)
        tax = quantize_money(self.tax)
        return PriceBreakdown(
            subtotal=subtotal,
            shipping=shipping,
            tax=tax,
            total=subtotal + shipping + tax,
        )


def calculate_totals(
    lines: Iterable[tuple[Decimal, int]],
    shipping: Decimal = DEFAULT_SHIPPING,
    tax_rate: Decimal = DEFAULT_TAX_RATE,
) -> PriceBreakdown:
    """
    Price an order.

    Args:
        lines: (unit_price, quantity) pairs; quantities are validated by the caller
        shipping: Flat shipping charge
        tax_rate: Flat tax rate applied to the subtotal

    Returns:
        Unrounded price breakdown
    """
    subtotal = sum((price * quantity for price, quantity in lines), Decimal("0"))
    tax = subtotal * tax_rate
    return PriceBreakdown(
        subtotal=subtotal,
        shipping=shipping,
        tax=tax,
        total=subtotal + shipping + tax,
    )
