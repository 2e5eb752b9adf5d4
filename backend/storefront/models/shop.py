"""
Shop records for the storefront.

Includes:
- Products (cufflinks and accessories)
- Orders
- Order items

Records are immutable snapshots; the store replaces them on update.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum as PyEnum


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PaymentStatus(str, PyEnum):
    """Order payment status."""

    PENDING = "pending"
    PAID = "paid"


@dataclass(frozen=True)
class Product:
    """Product for sale."""

    id: str
    name: str
    description: str
    price: Decimal
    image_url: str
    material: str
    stock: int = 0
    featured: bool = False
    created_at: datetime = field(default_factory=utcnow)

    @property
    def is_in_stock(self) -> bool:
        """Check if product is in stock."""
        return self.stock > 0

    def __repr__(self) -> str:
        return f"<Product {self.id}: {self.name}>"


@dataclass(frozen=True)
class Order:
    """Customer order."""

    id: str

    # Customer
    customer_first_name: str
    customer_last_name: str
    customer_email: str
    customer_phone: str

    # Shipping
    shipping_street: str
    shipping_city: str
    shipping_state: str
    shipping_zip_code: str

    # Pricing
    subtotal: Decimal
    shipping: Decimal
    tax: Decimal
    total: Decimal

    # Payment
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_reference: str | None = None

    created_at: datetime = field(default_factory=utcnow)

    @property
    def customer_name(self) -> str:
        return f"{self.customer_first_name} {self.customer_last_name}"

    @property
    def short_id(self) -> str:
        """Trailing part of the id, used in email subjects."""
        return self.id[-8:]

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID

    def __repr__(self) -> str:
        return f"<Order {self.id} {self.payment_status.value}>"


@dataclass(frozen=True)
class OrderItem:
    """Line item in an order."""

    id: str
    order_id: str
    product_id: str
    quantity: int
    # Snapshot at time of order
    price: Decimal

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


@dataclass(frozen=True)
class ResolvedOrderItem:
    """Order item joined with its product for display."""

    item: OrderItem
    product: Product

    @property
    def name(self) -> str:
        return self.product.name

    @property
    def quantity(self) -> int:
        return self.item.quantity

    @property
    def unit_price(self) -> Decimal:
        return self.item.price

    @property
    def line_total(self) -> Decimal:
        return self.item.line_total
