"""
Shop Module - E-commerce functionality.

Features:
- Product catalog with search and filters
- Checkout with Stripe payments
- Payment confirmation and order emails
- Order management
"""

from storefront.modules.shop.checkout import CheckoutService
from storefront.modules.shop.confirmation import PaymentConfirmationService
from storefront.modules.shop.payment import PaymentService
from storefront.modules.shop.store import RecordStore

__all__ = [
    "CheckoutService",
    "PaymentConfirmationService",
    "PaymentService",
    "RecordStore",
]
