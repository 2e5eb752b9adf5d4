"""
Notifications Module - order emails.

Features:
- SMTP delivery
- Operator order notification
- Customer order confirmation
"""

from storefront.modules.notifications.dispatcher import NotificationDispatcher
from storefront.modules.notifications.email import EmailMessageData, SmtpEmailSender

__all__ = [
    "EmailMessageData",
    "NotificationDispatcher",
    "SmtpEmailSender",
]
