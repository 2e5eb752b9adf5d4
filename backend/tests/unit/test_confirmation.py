"""Tests for payment confirmation."""

import pytest

from storefront.core.exceptions import NotFoundError
from storefront.models.shop import PaymentStatus
from storefront.modules.shop.checkout import LineItemRequest


@pytest.fixture
def pending_order(checkout, customer, gold_product, silver_product):
    result = checkout.submit_checkout(
        customer,
        [LineItemRequest(gold_product.id, 2), LineItemRequest(silver_product.id, 1)],
    )
    return result.order


class TestConfirmPayment:
    async def test_marks_order_paid(self, confirmations, store, pending_order):
        order = await confirmations.confirm_payment(pending_order.id, "pi_test_123")

        assert order.payment_status == PaymentStatus.PAID
        assert order.payment_reference == "pi_test_123"
        assert store.get_order(pending_order.id) == order

    async def test_sends_operator_then_customer_email(
        self, confirmations, pending_order, email_sender, test_settings
    ):
        await confirmations.confirm_payment(pending_order.id, "pi_test_123")

        assert [m.to for m in email_sender.sent] == [
            test_settings.order_notification_email,
            "ada@example.com",
        ]
        assert "Payment Status:</strong> paid" in email_sender.sent[0].html

    async def test_unknown_order_sends_nothing(self, confirmations, email_sender):
        with pytest.raises(NotFoundError):
            await confirmations.confirm_payment("missing", "pi_test_123")

        assert email_sender.sent == []

    async def test_repeat_confirmation_resends_emails(
        self, confirmations, store, pending_order, email_sender
    ):
        await confirmations.confirm_payment(pending_order.id, "pi_test_123")
        order = await confirmations.confirm_payment(pending_order.id, "pi_test_123")

        assert order.payment_status == PaymentStatus.PAID
        assert len(email_sender.sent) == 4

    async def test_email_failure_keeps_paid_status(
        self, confirmations, store, pending_order, email_sender
    ):
        email_sender.should_fail = True

        order = await confirmations.confirm_payment(pending_order.id, "pi_test_123")

        assert order.payment_status == PaymentStatus.PAID
        assert store.get_order(pending_order.id).payment_status == PaymentStatus.PAID

    async def test_product_deleted_after_checkout(
        self, confirmations, store, pending_order, gold_product, email_sender
    ):
        store.delete_product(gold_product.id)

        order = await confirmations.confirm_payment(pending_order.id, "pi_test_123")

        assert order.payment_status == PaymentStatus.PAID
        assert len(email_sender.sent) == 2
        assert "Product no longer available" in email_sender.sent[0].html
        assert "$200.00" in email_sender.sent[0].html
