"""
Payment Service - Stripe integration.

Handles:
- Payment intents
- Webhook verification
"""

from dataclasses import dataclass
from typing import Any

import stripe
from loguru import logger

from storefront.core.config import Settings, settings as default_settings
from storefront.core.exceptions import GatewayError


@dataclass(frozen=True)
class PaymentIntent:
    """Gateway-side reservation of a charge."""

    id: str
    client_secret: str
    amount_minor: int
    currency: str
    status: str


class PaymentService:
    """
    Stripe payment service.

    Usage:
        payment = PaymentService()
        intent = await payment.create_payment_intent(28500, "usd")
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize Stripe with API key."""
        self.settings = settings or default_settings
        stripe.api_key = self.settings.stripe_secret_key

        if not self.settings.stripe_secret_key:
            logger.warning("STRIPE_SECRET_KEY not configured")

    async def create_payment_intent(
        self,
        amount_minor: int,
        currency: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> PaymentIntent:
        """
        Create Stripe payment intent.

        Args:
            amount_minor: Amount in the smallest currency unit (cents)
            currency: Currency code, defaults to the shop currency
            metadata: Additional data to attach

        Returns:
            Payment intent details including client_secret
        """
        currency = (currency or self.settings.shop_currency).lower()

        try:
            intent = stripe.PaymentIntent.create(
                amount=amount_minor,
                currency=currency,
                metadata=metadata or {},
                automatic_payment_methods={"enabled": True},
            )
        except stripe.StripeError as e:
            logger.error(f"Stripe error creating payment intent: {e}")
            raise GatewayError(f"Payment provider rejected the request: {e.user_message or e}") from e

        logger.info(f"Created payment intent {intent.id} for {amount_minor} {currency}")
        return PaymentIntent(
            id=intent.id,
            client_secret=intent.client_secret,
            amount_minor=amount_minor,
            currency=currency,
            status=intent.status,
        )

    async def verify_webhook(
        self,
        payload: bytes,
        signature: str,
    ) -> dict[str, Any] | None:
        """
        Verify Stripe webhook signature and return event.

        Args:
            payload: Raw request body
            signature: Stripe-Signature header

        Returns:
            Verified event data or None if invalid
        """
        try:
            event = stripe.Webhook.construct_event(
                payload,
                signature,
                self.settings.stripe_webhook_secret,
            )
        except stripe.SignatureVerificationError:
            logger.warning("Invalid Stripe webhook signature")
            return None
        except ValueError as e:
            logger.warning(f"Malformed Stripe webhook payload: {e}")
            return None

        return {
            "type": event["type"],
            "data": event["data"]["object"],
        }
