"""
Product Catalog Endpoints.

Public browsing: listing, search, filters and featured products.
"""

from decimal import Decimal

from fastapi import APIRouter, Depends, Query

from storefront.api.deps import get_store
from storefront.api.schemas import ProductOut
from storefront.core.exceptions import NotFoundError
from storefront.modules.shop.store import RecordStore

router = APIRouter()


@router.get("", response_model=list[ProductOut])
async def get_products(
    search: str | None = Query(None, description="Search name, description and material"),
    material: str | None = Query(None, description="Exact material match"),
    min_price: Decimal | None = Query(None, alias="minPrice", ge=0),
    max_price: Decimal | None = Query(None, alias="maxPrice", ge=0),
    store: RecordStore = Depends(get_store),
) -> list[ProductOut]:
    """
    Get products.

    A search query takes precedence over filters; with neither, all
    products are returned newest first.
    """
    if search:
        products = store.search_products(search)
    elif material or min_price is not None or max_price is not None:
        products = store.filter_products(
            material=material,
            min_price=min_price,
            max_price=max_price,
        )
    else:
        products = store.list_products()

    return [ProductOut.model_validate(p) for p in products]


@router.get("/featured", response_model=list[ProductOut])
async def get_featured_products(
    store: RecordStore = Depends(get_store),
) -> list[ProductOut]:
    """Get featured products."""
    return [ProductOut.model_validate(p) for p in store.get_featured_products()]


@router.get("/{product_id}", response_model=ProductOut)
async def get_product(
    product_id: str,
    store: RecordStore = Depends(get_store),
) -> ProductOut:
    """Get product details."""
    product = store.get_product(product_id)
    if not product:
        raise NotFoundError("Product", product_id)
    return ProductOut.model_validate(product)
