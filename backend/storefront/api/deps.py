"""
FastAPI dependencies handing out the process-wide services.

Tests replace these through ``app.dependency_overrides``.
"""

from fastapi import Depends

from storefront.core.config import settings
from storefront.modules.notifications import NotificationDispatcher, SmtpEmailSender
from storefront.modules.shop import (
    CheckoutService,
    PaymentConfirmationService,
    PaymentService,
    RecordStore,
)

# Singleton instances
_store: RecordStore | None = None
_payment_service: PaymentService | None = None
_notifier: NotificationDispatcher | None = None


def get_store() -> RecordStore:
    """Get or create the record store singleton."""
    global _store
    if _store is None:
        _store = RecordStore()
    return _store


def get_payment_service() -> PaymentService:
    """Get or create the payment service singleton."""
    global _payment_service
    if _payment_service is None:
        _payment_service = PaymentService(settings)
    return _payment_service


def get_notifier() -> NotificationDispatcher:
    """Get or create the notification dispatcher singleton."""
    global _notifier
    if _notifier is None:
        _notifier = NotificationDispatcher(SmtpEmailSender(settings), settings)
    return _notifier


def get_checkout_service(
    store: RecordStore = Depends(get_store),
    payments: PaymentService = Depends(get_payment_service),
) -> CheckoutService:
    """New checkout per request; it tracks the stage of one submission."""
    return CheckoutService(store, payments, settings)


def get_confirmation_service(
    store: RecordStore = Depends(get_store),
    notifier: NotificationDispatcher = Depends(get_notifier),
) -> PaymentConfirmationService:
    return PaymentConfirmationService(store, notifier)
