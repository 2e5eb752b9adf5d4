"""
Payment Confirmation - marks orders paid and sends order emails.
"""

from loguru import logger

from storefront.core.exceptions import NotFoundError
from storefront.models.shop import Order, PaymentStatus
from storefront.modules.notifications.dispatcher import NotificationDispatcher
from storefront.modules.shop.store import RecordStore


class PaymentConfirmationService:
    """
    Handles gateway-confirmed payments.

    Not idempotent: confirming the same order twice re-applies the paid
    status and sends both emails again.

    Usage:
        confirmations = PaymentConfirmationService(store, notifier)
        order = await confirmations.confirm_payment(order_id, "pi_123")
    """

    def __init__(self, store: RecordStore, notifier: NotificationDispatcher) -> None:
        self.store = store
        self.notifier = notifier

    async def confirm_payment(self, order_id: str, payment_reference: str | None) -> Order:
        """
        Mark an order paid and trigger notifications.

        Args:
            order_id: Order to confirm
            payment_reference: Gateway payment id (e.g. Stripe payment intent)

        Returns:
            Updated order

        Raises:
            NotFoundError: Order does not exist
        """
        order = self.store.update_order_payment_status(
            order_id,
            PaymentStatus.PAID,
            payment_reference=payment_reference,
        )
        if not order:
            logger.warning(f"Payment confirmation for unknown order {order_id}")
            raise NotFoundError("Order", order_id)

        logger.info(f"Order {order.id} marked paid (reference {payment_reference})")

        # the status change stands even if a product was deleted since checkout
        items = self.store.resolve_order_items(order.id, allow_missing=True)
        await self.notifier.dispatch_order_emails(order, items)
        return order
