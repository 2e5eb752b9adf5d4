"""
Email delivery over SMTP.
"""

from dataclasses import dataclass
from email.message import EmailMessage
from typing import Protocol

import aiosmtplib
from loguru import logger

from storefront.core.config import Settings, settings as default_settings


@dataclass(frozen=True)
class EmailMessageData:
    """Rendered email ready for delivery."""

    to: str
    subject: str
    html: str
    text: str


class EmailSender(Protocol):
    async def send(self, message: EmailMessageData) -> None: ...


class SmtpEmailSender:
    """
    Sends email through an SMTP relay with aiosmtplib.

    Usage:
        sender = SmtpEmailSender()
        await sender.send(EmailMessageData(to=..., subject=..., html=..., text=...))
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or default_settings
        self.enabled = self.settings.email_enabled

        if not self.settings.smtp_user:
            logger.warning("SMTP_USER not configured")

    def build_message(self, message: EmailMessageData) -> EmailMessage:
        """Build a multipart text/HTML message."""
        mime = EmailMessage()
        mime["From"] = self.settings.from_email
        mime["To"] = message.to
        mime["Subject"] = message.subject
        mime.set_content(message.text)
        mime.add_alternative(message.html, subtype="html")
        return mime

    async def send(self, message: EmailMessageData) -> None:
        """
        Deliver a message.

        Raises:
            aiosmtplib.SMTPException: Delivery failed
        """
        if not self.enabled:
            logger.debug(f"Email disabled, not sending '{message.subject}' to {message.to}")
            return

        await aiosmtplib.send(
            self.build_message(message),
            hostname=self.settings.smtp_host,
            port=self.settings.smtp_port,
            username=self.settings.smtp_user or None,
            password=self.settings.smtp_password or None,
            start_tls=self.settings.smtp_start_tls,
            timeout=self.settings.smtp_timeout,
        )
