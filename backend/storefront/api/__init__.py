"""
API Router.

Combines all endpoints under the ``/api`` prefix.
"""

from fastapi import APIRouter

from storefront.api.endpoints import admin, orders, products, webhooks

router = APIRouter()

# Include endpoint routers
router.include_router(products.router, prefix="/products", tags=["Products"])
router.include_router(admin.router, prefix="/admin", tags=["Admin"])
router.include_router(orders.router, tags=["Checkout"])
router.include_router(webhooks.router, prefix="/webhooks", tags=["Webhooks"])
