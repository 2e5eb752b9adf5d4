"""Fixtures for API tests through the FastAPI test client."""

import pytest
from fastapi.testclient import TestClient

from storefront.api.deps import get_notifier, get_payment_service, get_store
from storefront.main import app


@pytest.fixture
def client(store, payments, notifier):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_payment_service] = lambda: payments
    app.dependency_overrides[get_notifier] = lambda: notifier
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def checkout_payload(gold_product, silver_product):
    return {
        "orderData": {
            "customerFirstName": "Ada",
            "customerLastName": "Lovelace",
            "customerEmail": "ada@example.com",
            "customerPhone": "555-0100",
            "shippingStreet": "12 Analytical Way",
            "shippingCity": "London",
            "shippingState": "LDN",
            "shippingZipCode": "10001",
        },
        "items": [
            {"productId": gold_product.id, "quantity": 2},
            {"productId": silver_product.id, "quantity": 1},
        ],
    }
