"""
Order Notification Dispatcher.

Formats and sends the two order emails:
- Operator notification (new order received)
- Customer confirmation (thank you for your order)

Delivery is fire-and-forget: failures are logged and never raised, so a
lost email cannot undo a payment that was already recorded.
"""

from html import escape
from typing import Callable, Sequence

from loguru import logger

from storefront.core.config import Settings, settings as default_settings
from storefront.core.money import format_money
from storefront.models.shop import Order, ResolvedOrderItem
from storefront.modules.notifications.email import EmailMessageData, EmailSender


class NotificationDispatcher:
    """
    Order email notifications.

    Usage:
        notifier = NotificationDispatcher(SmtpEmailSender())
        await notifier.dispatch_order_emails(order, items)
    """

    ITEM_ROW_TEMPLATE = """
        <tr>
          <td style="padding: 8px; border-bottom: 1px solid #eee;">{name}</td>
          <td style="padding: 8px; border-bottom: 1px solid #eee; text-align: center;">{quantity}</td>
          <td style="padding: 8px; border-bottom: 1px solid #eee; text-align: right;">${unit_price}</td>
          <td style="padding: 8px; border-bottom: 1px solid #eee; text-align: right;">${line_total}</td>
        </tr>"""

    ITEMS_TABLE_TEMPLATE = """
        <div style="background-color: #f8fafc; padding: 20px; border-radius: 8px; margin: 20px 0;">
          <h3>Order Items</h3>
          <table style="width: 100%; border-collapse: collapse;">
            <thead>
              <tr style="background-color: #e2e8f0;">
                <th style="padding: 10px; text-align: left;">Product</th>
                <th style="padding: 10px; text-align: center;">Quantity</th>
                <th style="padding: 10px; text-align: right;">Unit Price</th>
                <th style="padding: 10px; text-align: right;">Total</th>
              </tr>
            </thead>
            <tbody>{rows}
            </tbody>
          </table>
        </div>"""

    ADDRESS_TEMPLATE = """
        <div style="background-color: #f8fafc; padding: 20px; border-radius: 8px; margin: 20px 0;">
          <h3>Delivery Address</h3>
          <p>{street}</p>
          <p>{city}, {state} {zip_code}</p>
        </div>"""

    NOTIFICATION_TEMPLATE = """
      <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
        <h2 style="color: #1e40af;">New Order Received - {store_name}</h2>

        <div style="background-color: #f8fafc; padding: 20px; border-radius: 8px; margin: 20px 0;">
          <h3>Order Details</h3>
          <p><strong>Order ID:</strong> {order_id}</p>
          <p><strong>Order Date:</strong> {order_date}</p>
          <p><strong>Payment Status:</strong> {payment_status}</p>
        </div>

        <div style="background-color: #f8fafc; padding: 20px; border-radius: 8px; margin: 20px 0;">
          <h3>Customer Information</h3>
          <p><strong>Name:</strong> {customer_name}</p>
          <p><strong>Email:</strong> {customer_email}</p>
          <p><strong>Phone:</strong> {customer_phone}</p>
        </div>
{address}
{items_table}

        <div style="background-color: #1e40af; color: white; padding: 20px; border-radius: 8px;">
          <p>Subtotal: ${subtotal}</p>
          <p>Shipping: ${shipping}</p>
          <p>Tax: ${tax}</p>
          <p style="font-size: 18px; font-weight: bold;">Total: ${total}</p>
        </div>
      </div>
    """.strip()

    CONFIRMATION_TEMPLATE = """
      <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
        <h2 style="color: #1e40af;">Thank You for Your Order!</h2>

        <p>Dear {first_name},</p>
        <p>Thank you for choosing {store_name}. Your order has been received and is being processed.</p>

        <div style="background-color: #f8fafc; padding: 20px; border-radius: 8px; margin: 20px 0;">
          <h3>Order Summary</h3>
          <p><strong>Order ID:</strong> {order_id}</p>
          <p><strong>Order Date:</strong> {order_date}</p>
          <p><strong>Payment Status:</strong> {payment_status}</p>
        </div>
{address}
{items_table}

        <div style="background-color: #1e40af; color: white; padding: 20px; border-radius: 8px;">
          <p>Subtotal: ${subtotal}</p>
          <p>Shipping: ${shipping}</p>
          <p>Tax: ${tax}</p>
          <p style="font-size: 18px; font-weight: bold;">Total Paid: ${total}</p>
        </div>

        <p style="margin-top: 20px; color: #64748b;">
          We'll send you shipping confirmation once your order is on its way.
        </p>
      </div>
    """.strip()

    def __init__(self, sender: EmailSender, settings: Settings | None = None) -> None:
        self.sender = sender
        self.settings = settings or default_settings

    # ==================== Formatting ====================

    def _items_html(self, items: Sequence[ResolvedOrderItem]) -> str:
        rows = "".join(
            self.ITEM_ROW_TEMPLATE.format(
                name=escape(item.name),
                quantity=item.quantity,
                unit_price=format_money(item.unit_price),
                line_total=format_money(item.line_total),
            )
            for item in items
        )
        return self.ITEMS_TABLE_TEMPLATE.format(rows=rows)

    def _address_html(self, order: Order) -> str:
        return self.ADDRESS_TEMPLATE.format(
            street=escape(order.shipping_street),
            city=escape(order.shipping_city),
            state=escape(order.shipping_state),
            zip_code=escape(order.shipping_zip_code),
        )

    def _summary_text(self, order: Order, items: Sequence[ResolvedOrderItem]) -> list[str]:
        lines = [
            f"Order ID: {order.id}",
            f"Order Date: {order.created_at:%Y-%m-%d}",
            f"Payment Status: {order.payment_status.value}",
            "",
            "Delivery Address:",
            order.shipping_street,
            f"{order.shipping_city}, {order.shipping_state} {order.shipping_zip_code}",
            "",
            "Items:",
        ]
        lines += [
            f"- {item.name} x{item.quantity} @ ${format_money(item.unit_price)}"
            f" = ${format_money(item.line_total)}"
            for item in items
        ]
        lines += [
            "",
            f"Subtotal: ${format_money(order.subtotal)}",
            f"Shipping: ${format_money(order.shipping)}",
            f"Tax: ${format_money(order.tax)}",
            f"Total: ${format_money(order.total)}",
        ]
        return lines

    def _common_fields(self, order: Order, items: Sequence[ResolvedOrderItem]) -> dict[str, str]:
        return {
            "store_name": escape(self.settings.store_name),
            "order_id": escape(order.id),
            "order_date": f"{order.created_at:%Y-%m-%d}",
            "payment_status": order.payment_status.value,
            "address": self._address_html(order),
            "items_table": self._items_html(items),
            "subtotal": format_money(order.subtotal),
            "shipping": format_money(order.shipping),
            "tax": format_money(order.tax),
            "total": format_money(order.total),
        }

    def format_order_notification(
        self,
        order: Order,
        items: Sequence[ResolvedOrderItem],
    ) -> EmailMessageData:
        """Operator-facing new order email."""
        html = self.NOTIFICATION_TEMPLATE.format(
            customer_name=escape(order.customer_name),
            customer_email=escape(order.customer_email),
            customer_phone=escape(order.customer_phone),
            **self._common_fields(order, items),
        )
        text = "\n".join(
            [
                f"New order received - {self.settings.store_name}",
                "",
                f"Customer: {order.customer_name}",
                f"Email: {order.customer_email}",
                f"Phone: {order.customer_phone}",
                "",
                *self._summary_text(order, items),
            ]
        )
        return EmailMessageData(
            to=self.settings.order_notification_email,
            subject=f"New Order #{order.short_id} - ${format_money(order.total)}",
            html=html,
            text=text,
        )

    def format_order_confirmation(
        self,
        order: Order,
        items: Sequence[ResolvedOrderItem],
    ) -> EmailMessageData:
        """Customer-facing order confirmation email."""
        html = self.CONFIRMATION_TEMPLATE.format(
            first_name=escape(order.customer_first_name),
            **self._common_fields(order, items),
        )
        text = "\n".join(
            [
                f"Dear {order.customer_first_name},",
                "",
                f"Thank you for choosing {self.settings.store_name}. "
                "Your order has been received and is being processed.",
                "",
                *self._summary_text(order, items),
            ]
        )
        return EmailMessageData(
            to=order.customer_email,
            subject=f"Order Confirmation #{order.short_id} - {self.settings.store_name}",
            html=html,
            text=text,
        )

    # ==================== Delivery ====================

    async def _deliver(
        self,
        build: Callable[[Order, Sequence[ResolvedOrderItem]], EmailMessageData],
        kind: str,
        order: Order,
        items: Sequence[ResolvedOrderItem],
    ) -> bool:
        # a rendering failure counts as a failed send
        try:
            message = build(order, items)
            await self.sender.send(message)
        except Exception as e:
            logger.error(f"Failed to send {kind} email for order {order.id}: {e}")
            return False

        logger.info(f"Sent {kind} email for order {order.id} to {message.to}")
        return True

    async def send_order_notification(
        self,
        order: Order,
        items: Sequence[ResolvedOrderItem],
    ) -> bool:
        """
        Notify the store operator of a paid order.

        Returns:
            True if sent successfully
        """
        return await self._deliver(self.format_order_notification, "order notification", order, items)

    async def send_order_confirmation(
        self,
        order: Order,
        items: Sequence[ResolvedOrderItem],
    ) -> bool:
        """
        Send the customer their order confirmation.

        Returns:
            True if sent successfully
        """
        return await self._deliver(self.format_order_confirmation, "order confirmation", order, items)

    async def dispatch_order_emails(
        self,
        order: Order,
        items: Sequence[ResolvedOrderItem],
    ) -> tuple[bool, bool]:
        """Send both order emails, operator first. Never raises."""
        notified = await self.send_order_notification(order, items)
        confirmed = await self.send_order_confirmation(order, items)
        return notified, confirmed
