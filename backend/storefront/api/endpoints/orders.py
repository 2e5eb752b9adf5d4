"""
Checkout Endpoints.

Order creation, payment intents and client-reported payment success.
"""

from fastapi import APIRouter, Depends
from pydantic import Field
from pydantic.alias_generators import to_camel

from storefront.api.deps import get_checkout_service, get_confirmation_service
from storefront.api.schemas import CamelModel, OrderDetailOut
from storefront.core.exceptions import ValidationError
from storefront.core.money import Money
from storefront.modules.shop.checkout import (
    CheckoutService,
    CustomerInfo,
    LineItemRequest,
)
from storefront.modules.shop.confirmation import PaymentConfirmationService

router = APIRouter()


# ==================== Schemas ====================


class CheckoutData(CamelModel):
    """Customer and shipping details from the checkout form."""

    customer_first_name: str
    customer_last_name: str
    customer_email: str
    customer_phone: str
    shipping_street: str
    shipping_city: str
    shipping_state: str
    shipping_zip_code: str

    def to_customer_info(self) -> CustomerInfo:
        return CustomerInfo(**self.model_dump())


class OrderLineRequest(CamelModel):
    """Requested product and quantity. Prices are never taken from the client."""

    product_id: str
    quantity: int


class CreateOrderRequest(CamelModel):
    order_data: CheckoutData
    items: list[OrderLineRequest] = Field(default_factory=list)


class PaymentIntentRequest(CamelModel):
    amount: Money
    order_id: str | None = None


class PaymentIntentResponse(CamelModel):
    client_secret: str
    payment_intent_id: str


class PaymentSuccessRequest(CamelModel):
    order_id: str
    payment_intent_id: str | None = None


def _request_field(name: str) -> str:
    """Map a checkout field name to its location in the request body."""
    if name in CheckoutData.model_fields:
        return f"orderData.{to_camel(name)}"
    return ".".join(to_camel(part) for part in name.split("."))


# ==================== Routes ====================


@router.post("/create-payment-intent", response_model=PaymentIntentResponse)
async def create_payment_intent(
    request: PaymentIntentRequest,
    checkout: CheckoutService = Depends(get_checkout_service),
) -> PaymentIntentResponse:
    """Reserve a charge with the payment gateway and return its client secret."""
    intent = await checkout.create_payment_intent(request.amount, order_id=request.order_id)
    return PaymentIntentResponse(
        client_secret=intent.client_secret,
        payment_intent_id=intent.id,
    )


@router.post("/orders", response_model=OrderDetailOut)
async def create_order(
    request: CreateOrderRequest,
    checkout: CheckoutService = Depends(get_checkout_service),
) -> OrderDetailOut:
    """
    Submit checkout.

    Validates the form, checks stock, prices the order from stored product
    prices and creates it with payment status ``pending``.
    """
    try:
        result = checkout.submit_checkout(
            request.order_data.to_customer_info(),
            [LineItemRequest(product_id=line.product_id, quantity=line.quantity) for line in request.items],
        )
    except ValidationError as e:
        raise ValidationError(e.message, fields=[_request_field(name) for name in e.fields]) from e

    return OrderDetailOut.build(result.order, result.items)


@router.post("/payment-success")
async def payment_success(
    request: PaymentSuccessRequest,
    confirmations: PaymentConfirmationService = Depends(get_confirmation_service),
) -> dict[str, bool]:
    """Client-reported payment success: mark the order paid and send emails."""
    await confirmations.confirm_payment(request.order_id, request.payment_intent_id)
    return {"success": True}
