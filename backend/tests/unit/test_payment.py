"""Tests for the Stripe payment service."""

from types import SimpleNamespace
from unittest.mock import patch

import pytest
import stripe

from storefront.core.exceptions import GatewayError
from storefront.modules.shop.payment import PaymentService


@pytest.fixture
def service(test_settings):
    return PaymentService(test_settings)


class TestCreatePaymentIntent:
    async def test_creates_intent(self, service):
        fake_intent = SimpleNamespace(
            id="pi_1",
            client_secret="pi_1_secret",
            status="requires_payment_method",
        )

        with patch("stripe.PaymentIntent.create", return_value=fake_intent) as create:
            intent = await service.create_payment_intent(28500, metadata={"order_id": "o1"})

        create.assert_called_once_with(
            amount=28500,
            currency="usd",
            metadata={"order_id": "o1"},
            automatic_payment_methods={"enabled": True},
        )
        assert intent.id == "pi_1"
        assert intent.client_secret == "pi_1_secret"
        assert intent.amount_minor == 28500

    async def test_stripe_error_becomes_gateway_error(self, service):
        error = stripe.CardError("Your card was declined.", param=None, code="card_declined")

        with patch("stripe.PaymentIntent.create", side_effect=error):
            with pytest.raises(GatewayError) as exc_info:
                await service.create_payment_intent(1000)

        assert "declined" in exc_info.value.message


class TestVerifyWebhook:
    async def test_valid_event(self, service):
        event = {
            "type": "payment_intent.succeeded",
            "data": {"object": {"id": "pi_1", "metadata": {"order_id": "o1"}}},
        }

        with patch("stripe.Webhook.construct_event", return_value=event) as construct:
            result = await service.verify_webhook(b"{}", "t=1,v1=abc")

        construct.assert_called_once_with(b"{}", "t=1,v1=abc", "whsec_dummy")
        assert result == {
            "type": "payment_intent.succeeded",
            "data": {"id": "pi_1", "metadata": {"order_id": "o1"}},
        }

    async def test_bad_signature(self, service):
        error = stripe.SignatureVerificationError("bad", "t=1,v1=abc")

        with patch("stripe.Webhook.construct_event", side_effect=error):
            assert await service.verify_webhook(b"{}", "t=1,v1=abc") is None

    async def test_malformed_payload(self, service):
        with patch("stripe.Webhook.construct_event", side_effect=ValueError("bad json")):
            assert await service.verify_webhook(b"not json", "t=1,v1=abc") is None
