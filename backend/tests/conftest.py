"""Shared fixtures for storefront tests."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from storefront.core.config import Settings
from storefront.modules.notifications import EmailMessageData, NotificationDispatcher
from storefront.modules.shop import (
    CheckoutService,
    PaymentConfirmationService,
    PaymentService,
    RecordStore,
)
from storefront.modules.shop.checkout import CustomerInfo
from storefront.modules.shop.payment import PaymentIntent


class RecordingEmailSender:
    """Email sender that keeps messages in memory."""

    def __init__(self) -> None:
        self.sent: list[EmailMessageData] = []
        self.should_fail = False

    async def send(self, message: EmailMessageData) -> None:
        if self.should_fail:
            raise ConnectionError("SMTP relay unavailable")
        self.sent.append(message)


@pytest.fixture
def test_settings():
    return Settings(
        _env_file=None,
        seed_sample_data=False,
        stripe_secret_key="sk_test_dummy",
        stripe_webhook_secret="whsec_dummy",
        email_enabled=True,
        order_notification_email="orders@luxecuffs.test",
        store_name="LuxeCuffs",
    )


@pytest.fixture
def store():
    return RecordStore()


@pytest.fixture
def gold_product(store):
    return store.create_product(
        name="Classic Gold Heritage",
        description="Timeless 18k gold cufflinks with intricate vintage engravings",
        price=Decimal("100.00"),
        image_url="https://example.com/gold.jpg",
        material="Gold",
        stock=5,
        featured=True,
    )


@pytest.fixture
def silver_product(store):
    return store.create_product(
        name="Modern Silver Edge",
        description="Contemporary sterling silver with geometric patterns",
        price=Decimal("50.00"),
        image_url="https://example.com/silver.jpg",
        material="Silver",
        stock=3,
    )


@pytest.fixture
def customer():
    return CustomerInfo(
        customer_first_name="Ada",
        customer_last_name="Lovelace",
        customer_email="ada@example.com",
        customer_phone="555-0100",
        shipping_street="12 Analytical Way",
        shipping_city="London",
        shipping_state="LDN",
        shipping_zip_code="10001",
    )


@pytest.fixture
def email_sender():
    return RecordingEmailSender()


@pytest.fixture
def notifier(email_sender, test_settings):
    return NotificationDispatcher(email_sender, test_settings)


@pytest.fixture
def payments():
    service = MagicMock(spec=PaymentService)
    service.create_payment_intent = AsyncMock(
        return_value=PaymentIntent(
            id="pi_test_123",
            client_secret="pi_test_123_secret_abc",
            amount_minor=28500,
            currency="usd",
            status="requires_payment_method",
        )
    )
    service.verify_webhook = AsyncMock(return_value=None)
    return service


@pytest.fixture
def checkout(store, payments, test_settings):
    return CheckoutService(store, payments, test_settings)


@pytest.fixture
def confirmations(store, notifier):
    return PaymentConfirmationService(store, notifier)
