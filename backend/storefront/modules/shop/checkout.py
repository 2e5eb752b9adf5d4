"""
Checkout Service - turns submitted cart contents into a pending order.

Stages, in order:
    validating -> pricing -> persisting -> awaiting_payment -> created

Validation and stock checks happen before anything is written, so a
failed checkout never leaves a partial order behind.
"""

import re
from collections import Counter
from dataclasses import dataclass, fields
from decimal import Decimal
from enum import Enum
from typing import Sequence

from loguru import logger

from storefront.core.config import Settings, settings as default_settings
from storefront.core.exceptions import (
    GatewayError,
    InsufficientStockError,
    NotFoundError,
    ValidationError,
)
from storefront.core.money import to_minor_units
from storefront.models.shop import (
    Order,
    PaymentStatus,
    Product,
    ResolvedOrderItem,
)
from storefront.modules.shop.payment import PaymentIntent, PaymentService
from storefront.modules.shop.pricing import calculate_totals
from storefront.modules.shop.store import RecordStore

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class CheckoutStage(str, Enum):
    """Progress of a single checkout submission."""

    VALIDATING = "validating"
    PRICING = "pricing"
    PERSISTING = "persisting"
    AWAITING_PAYMENT = "awaiting_payment"
    CREATED = "created"


@dataclass(frozen=True)
class CustomerInfo:
    """Customer contact and shipping details from the checkout form."""

    customer_first_name: str
    customer_last_name: str
    customer_email: str
    customer_phone: str
    shipping_street: str
    shipping_city: str
    shipping_state: str
    shipping_zip_code: str

    def stripped(self) -> "CustomerInfo":
        return CustomerInfo(
            **{f.name: str(getattr(self, f.name) or "").strip() for f in fields(self)}
        )


@dataclass(frozen=True)
class LineItemRequest:
    """One requested (product, quantity) pair."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class CheckoutResult:
    """Created order plus its product-joined items."""

    order: Order
    items: list[ResolvedOrderItem]


def validate_customer(customer: CustomerInfo) -> list[str]:
    """Return the names of missing or malformed customer fields."""
    invalid = []
    for f in fields(customer):
        value = getattr(customer, f.name)
        if not value or (f.name == "customer_email" and not EMAIL_PATTERN.match(value)):
            invalid.append(f.name)
    return invalid


def validate_line_items(line_items: Sequence[LineItemRequest]) -> list[str]:
    """Return the names of invalid line item fields."""
    if not line_items:
        return ["items"]

    invalid = []
    for index, line in enumerate(line_items):
        if not line.product_id:
            invalid.append(f"items.{index}.product_id")
        if isinstance(line.quantity, bool) or not isinstance(line.quantity, int) or line.quantity <= 0:
            invalid.append(f"items.{index}.quantity")
    return invalid


class CheckoutService:
    """
    Checkout orchestration over the record store and payment gateway.

    Usage:
        checkout = CheckoutService(store, PaymentService())
        result = checkout.submit_checkout(customer, [LineItemRequest("p1", 2)])
        intent = await checkout.create_payment_intent(result.order.total, result.order.id)
    """

    def __init__(
        self,
        store: RecordStore,
        payments: PaymentService,
        settings: Settings | None = None,
    ) -> None:
        self.store = store
        self.payments = payments
        self.settings = settings or default_settings
        self.stage: CheckoutStage | None = None

    def _enter(self, stage: CheckoutStage) -> None:
        self.stage = stage
        logger.debug(f"Checkout stage: {stage.value}")

    def _check_stock(self, line_items: Sequence[LineItemRequest]) -> dict[str, Product]:
        """Look up every product and compare combined quantities against stock."""
        requested = Counter()
        for line in line_items:
            requested[line.product_id] += line.quantity

        products: dict[str, Product] = {}
        for product_id, quantity in requested.items():
            product = self.store.get_product(product_id)
            if not product:
                logger.warning(f"Checkout references unknown product {product_id}")
                raise NotFoundError("Product", product_id)

            if quantity > product.stock:
                logger.warning(
                    f"Insufficient stock for {product.name}: "
                    f"requested {quantity}, available {product.stock}"
                )
                raise InsufficientStockError(
                    product_id=product.id,
                    product_name=product.name,
                    requested=quantity,
                    available=product.stock,
                )
            products[product_id] = product

        return products

    def submit_checkout(
        self,
        customer: CustomerInfo,
        line_items: Sequence[LineItemRequest],
    ) -> CheckoutResult:
        """
        Validate, price and persist a new pending order.

        Args:
            customer: Contact and shipping details
            line_items: Requested products and quantities

        Returns:
            Created order with product-joined items

        Raises:
            ValidationError: Missing or malformed input
            NotFoundError: A product does not exist
            InsufficientStockError: A quantity exceeds stock
        """
        self._enter(CheckoutStage.VALIDATING)
        customer = customer.stripped()
        invalid = validate_customer(customer) + validate_line_items(line_items)
        if invalid:
            raise ValidationError("Invalid checkout data", fields=invalid)

        products = self._check_stock(line_items)

        self._enter(CheckoutStage.PRICING)
        # stored prices only; clients never supply a price
        breakdown = calculate_totals(
            [(products[line.product_id].price, line.quantity) for line in line_items],
            shipping=self.settings.shipping_flat_rate,
            tax_rate=self.settings.tax_rate,
        ).quantized()

        self._enter(CheckoutStage.PERSISTING)
        order = self.store.create_order(
            customer_first_name=customer.customer_first_name,
            customer_last_name=customer.customer_last_name,
            customer_email=customer.customer_email,
            customer_phone=customer.customer_phone,
            shipping_street=customer.shipping_street,
            shipping_city=customer.shipping_city,
            shipping_state=customer.shipping_state,
            shipping_zip_code=customer.shipping_zip_code,
            subtotal=breakdown.subtotal,
            shipping=breakdown.shipping,
            tax=breakdown.tax,
            total=breakdown.total,
            payment_status=PaymentStatus.PENDING,
        )

        items = []
        for line in line_items:
            product = products[line.product_id]
            item = self.store.create_order_item(
                order_id=order.id,
                product_id=product.id,
                quantity=line.quantity,
                price=product.price,
            )
            if self.settings.decrement_stock_on_order:
                product = self.store.adjust_stock(product.id, -line.quantity) or product
            items.append(ResolvedOrderItem(item=item, product=product))

        self._enter(CheckoutStage.AWAITING_PAYMENT)
        logger.info(
            f"Order {order.id} created for {order.customer_email}: "
            f"{len(items)} item(s), total {order.total}"
        )

        self._enter(CheckoutStage.CREATED)
        return CheckoutResult(order=order, items=items)

    async def create_payment_intent(
        self,
        amount: Decimal,
        order_id: str | None = None,
    ) -> PaymentIntent:
        """
        Ask the payment gateway to reserve a charge.

        Args:
            amount: Amount in currency units (e.g. dollars)
            order_id: Optional order reference stored as intent metadata

        Raises:
            GatewayError: Non-positive amount or gateway failure
        """
        # amounts below half a cent round to zero and are rejected too
        amount_minor = to_minor_units(Decimal(amount)) if amount is not None else 0
        if amount_minor <= 0:
            raise GatewayError("Invalid amount")

        metadata = {"order_id": order_id} if order_id else {}
        return await self.payments.create_payment_intent(
            amount_minor,
            currency=self.settings.shop_currency,
            metadata=metadata,
        )
