"""
Admin Endpoints.

Store operator login, product management and order overview. Sessions
are the caller's responsibility; these routes do not check one.
"""

from typing import Any

from fastapi import APIRouter, Depends
from loguru import logger
from pydantic import BaseModel, Field

from storefront.api.deps import get_store
from storefront.api.schemas import (
    OrderDetailOut,
    OrderOut,
    ProductCreate,
    ProductOut,
    ProductUpdate,
)
from storefront.core.exceptions import AuthenticationError, NotFoundError
from storefront.core.security import verify_password
from storefront.modules.shop.store import RecordStore

router = APIRouter()


class AdminLoginRequest(BaseModel):
    """Admin credentials."""

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


# ==================== Auth ====================


@router.post("/login")
async def admin_login(
    request: AdminLoginRequest,
    store: RecordStore = Depends(get_store),
) -> dict[str, Any]:
    """Check admin credentials."""
    user = store.get_user_by_username(request.username)

    if not user or not verify_password(request.password, user.password_hash) or not user.is_admin:
        logger.warning(f"Failed admin login for '{request.username}'")
        raise AuthenticationError("Invalid credentials")

    logger.info(f"Admin '{user.username}' logged in")
    return {
        "user": {
            "id": user.id,
            "username": user.username,
            "isAdmin": user.is_admin,
        }
    }


# ==================== Products ====================


@router.post("/products", response_model=ProductOut)
async def create_product(
    request: ProductCreate,
    store: RecordStore = Depends(get_store),
) -> ProductOut:
    """Create new product."""
    product = store.create_product(**request.model_dump())
    logger.info(f"Created product {product.id} ({product.name})")
    return ProductOut.model_validate(product)


@router.put("/products/{product_id}", response_model=ProductOut)
async def update_product(
    product_id: str,
    request: ProductUpdate,
    store: RecordStore = Depends(get_store),
) -> ProductOut:
    """Update product fields that were sent."""
    changes = request.model_dump(exclude_unset=True, exclude_none=True)
    product = store.update_product(product_id, **changes)
    if not product:
        raise NotFoundError("Product", product_id)

    logger.info(f"Updated product {product_id}")
    return ProductOut.model_validate(product)


@router.delete("/products/{product_id}")
async def delete_product(
    product_id: str,
    store: RecordStore = Depends(get_store),
) -> dict[str, str]:
    """Delete product."""
    if not store.delete_product(product_id):
        raise NotFoundError("Product", product_id)

    logger.info(f"Deleted product {product_id}")
    return {"message": "Product deleted successfully"}


# ==================== Orders ====================


@router.get("/orders", response_model=list[OrderOut])
async def get_orders(
    store: RecordStore = Depends(get_store),
) -> list[OrderOut]:
    """Get all orders, newest first."""
    return [OrderOut.model_validate(o) for o in store.list_orders()]


@router.get("/orders/{order_id}", response_model=OrderDetailOut)
async def get_order(
    order_id: str,
    store: RecordStore = Depends(get_store),
) -> OrderDetailOut:
    """Get order details with its items."""
    order = store.get_order(order_id)
    if not order:
        raise NotFoundError("Order", order_id)

    return OrderDetailOut.build(order, store.resolve_order_items(order_id))
