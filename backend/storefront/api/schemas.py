"""
Request and response schemas shared by the API endpoints.

Field names are camelCase on the wire; snake_case is accepted on input too.
Money is rendered as a string with two fraction digits.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from storefront.core.money import Money
from storefront.models.shop import Order, PaymentStatus, ResolvedOrderItem


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ==================== Products ====================


class ProductOut(CamelModel):
    id: str
    name: str
    description: str
    price: Money
    image_url: str
    material: str
    stock: int
    featured: bool
    created_at: datetime


class ProductCreate(CamelModel):
    """Create new product."""

    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    price: Money = Field(ge=0)
    image_url: str = Field(min_length=1)
    material: str = Field(min_length=1)
    stock: int = Field(default=0, ge=0)
    featured: bool = False


class ProductUpdate(CamelModel):
    """Partial product update; only fields that are sent are applied."""

    name: str | None = Field(default=None, min_length=1)
    description: str | None = Field(default=None, min_length=1)
    price: Money | None = Field(default=None, ge=0)
    image_url: str | None = Field(default=None, min_length=1)
    material: str | None = Field(default=None, min_length=1)
    stock: int | None = Field(default=None, ge=0)
    featured: bool | None = None


# ==================== Orders ====================


class OrderOut(CamelModel):
    id: str
    customer_first_name: str
    customer_last_name: str
    customer_email: str
    customer_phone: str
    shipping_street: str
    shipping_city: str
    shipping_state: str
    shipping_zip_code: str
    subtotal: Money
    shipping: Money
    tax: Money
    total: Money
    payment_status: PaymentStatus
    payment_reference: str | None = None
    created_at: datetime


class OrderItemOut(CamelModel):
    id: str
    order_id: str
    product_id: str
    quantity: int
    price: Money
    product: ProductOut

    @classmethod
    def from_resolved(cls, resolved: ResolvedOrderItem) -> "OrderItemOut":
        item = resolved.item
        return cls(
            id=item.id,
            order_id=item.order_id,
            product_id=item.product_id,
            quantity=item.quantity,
            price=item.price,
            product=ProductOut.model_validate(resolved.product),
        )


class OrderDetailOut(CamelModel):
    order: OrderOut
    items: list[OrderItemOut]

    @classmethod
    def build(cls, order: Order, items: list[ResolvedOrderItem]) -> "OrderDetailOut":
        return cls(
            order=OrderOut.model_validate(order),
            items=[OrderItemOut.from_resolved(item) for item in items],
        )
