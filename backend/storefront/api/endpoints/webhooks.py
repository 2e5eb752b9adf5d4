"""
Webhook Endpoints.

Handles incoming webhooks from external services:
- Stripe (payment confirmations)
"""

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from loguru import logger

from storefront.api.deps import get_confirmation_service, get_payment_service
from storefront.core.exceptions import NotFoundError
from storefront.modules.shop.confirmation import PaymentConfirmationService
from storefront.modules.shop.payment import PaymentService

router = APIRouter()


@router.post("/stripe", status_code=200)
async def stripe_webhook(
    request: Request,
    payment: PaymentService = Depends(get_payment_service),
    confirmations: PaymentConfirmationService = Depends(get_confirmation_service),
) -> Response:
    """
    Stripe Webhook Endpoint.

    ``payment_intent.succeeded`` events whose metadata carries an
    ``order_id`` confirm that order. Other events are acknowledged.
    """
    body = await request.body()
    signature = request.headers.get("Stripe-Signature")

    if not signature:
        raise HTTPException(status_code=401, detail="Missing signature")

    event = await payment.verify_webhook(body, signature)

    if not event:
        raise HTTPException(status_code=401, detail="Invalid signature")

    event_type = event["type"]
    logger.info(f"Received Stripe webhook: {event_type}")

    if event_type == "payment_intent.succeeded":
        intent = event["data"]
        order_id = (intent.get("metadata") or {}).get("order_id")

        if not order_id:
            logger.warning(f"Payment intent {intent.get('id')} has no order_id metadata")
        else:
            try:
                await confirmations.confirm_payment(order_id, intent.get("id"))
            except NotFoundError as e:
                # acknowledged anyway; a retry cannot make the record appear
                logger.warning(f"Payment intent {intent.get('id')} not applied: {e.message}")

    elif event_type == "payment_intent.payment_failed":
        intent = event["data"]
        logger.warning(f"Payment failed: {intent.get('id')}")

    return Response(status_code=200)
