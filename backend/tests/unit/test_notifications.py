"""Tests for order email formatting and dispatch."""

from dataclasses import replace
from unittest.mock import AsyncMock, patch

import pytest

from storefront.modules.notifications import EmailMessageData, SmtpEmailSender
from storefront.modules.shop.checkout import LineItemRequest


@pytest.fixture
def placed(checkout, customer, gold_product, silver_product):
    return checkout.submit_checkout(
        customer,
        [LineItemRequest(gold_product.id, 2), LineItemRequest(silver_product.id, 1)],
    )


class TestFormatting:
    def test_operator_notification(self, notifier, placed, test_settings):
        message = notifier.format_order_notification(placed.order, placed.items)

        assert message.to == test_settings.order_notification_email
        assert message.subject == f"New Order #{placed.order.id[-8:]} - $285.00"
        for expected in (
            "Ada Lovelace",
            "ada@example.com",
            "555-0100",
            "12 Analytical Way",
            "London, LDN 10001",
            "Classic Gold Heritage",
            "$100.00",
            "$200.00",
            "Subtotal: $250.00",
            "Shipping: $15.00",
            "Tax: $20.00",
            "Total: $285.00",
        ):
            assert expected in message.html
        assert "- Classic Gold Heritage x2 @ $100.00 = $200.00" in message.text

    def test_customer_confirmation(self, notifier, placed):
        message = notifier.format_order_confirmation(placed.order, placed.items)

        assert message.to == "ada@example.com"
        assert message.subject == f"Order Confirmation #{placed.order.short_id} - LuxeCuffs"
        assert "Dear Ada," in message.html
        assert "Modern Silver Edge" in message.html
        assert "Total Paid: $285.00" in message.html
        assert message.text.startswith("Dear Ada,")

    def test_customer_input_is_escaped(self, notifier, placed):
        order = replace(placed.order, customer_first_name="<script>")

        message = notifier.format_order_confirmation(order, placed.items)

        assert "<script>" not in message.html
        assert "&lt;script&gt;" in message.html


class TestDispatch:
    async def test_dispatch_sends_both(self, notifier, placed, email_sender):
        assert await notifier.dispatch_order_emails(placed.order, placed.items) == (True, True)
        assert len(email_sender.sent) == 2

    async def test_failures_are_swallowed(self, notifier, placed, email_sender):
        email_sender.should_fail = True

        assert await notifier.dispatch_order_emails(placed.order, placed.items) == (False, False)
        assert email_sender.sent == []

    async def test_formatting_failure_is_swallowed(self, notifier, placed, email_sender):
        with patch.object(notifier, "format_order_notification", side_effect=KeyError("store_name")):
            result = await notifier.dispatch_order_emails(placed.order, placed.items)

        assert result == (False, True)
        assert [m.to for m in email_sender.sent] == ["ada@example.com"]


class TestSmtpEmailSender:
    def _message(self):
        return EmailMessageData(
            to="ada@example.com",
            subject="Hello",
            html="<p>Hi</p>",
            text="Hi",
        )

    def test_build_message(self, test_settings):
        mime = SmtpEmailSender(test_settings).build_message(self._message())

        assert mime["From"] == test_settings.from_email
        assert mime["To"] == "ada@example.com"
        assert mime["Subject"] == "Hello"
        assert mime.get_body(preferencelist=("html",)).get_content().strip() == "<p>Hi</p>"

    async def test_send_uses_smtp_settings(self, test_settings):
        with patch("storefront.modules.notifications.email.aiosmtplib.send", new=AsyncMock()) as send:
            await SmtpEmailSender(test_settings).send(self._message())

        send.assert_awaited_once()
        kwargs = send.await_args.kwargs
        assert kwargs["hostname"] == test_settings.smtp_host
        assert kwargs["port"] == test_settings.smtp_port
        assert kwargs["start_tls"] is True

    async def test_disabled_sender_does_not_connect(self, test_settings):
        test_settings.email_enabled = False

        with patch("storefront.modules.notifications.email.aiosmtplib.send", new=AsyncMock()) as send:
            await SmtpEmailSender(test_settings).send(self._message())

        send.assert_not_awaited()
