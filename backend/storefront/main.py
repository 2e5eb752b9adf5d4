"""
LuxeCuffs Storefront Backend Application.

FastAPI application with product catalog, checkout with Stripe
payments, order emails and an admin API.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from loguru import logger

from storefront.api import router as api_router
from storefront.api.deps import get_store
from storefront.core.config import settings
from storefront.core.exceptions import register_exception_handlers
from storefront.core.logging import setup_logging
from storefront.modules.shop.seed import seed_sample_data


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    setup_logging(settings.log_level)
    logger.info("Starting LuxeCuffs Storefront...")

    if settings.seed_sample_data:
        seed_sample_data(get_store(), settings)

    logger.info("LuxeCuffs Storefront started successfully")

    yield

    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    LuxeCuffs Storefront Backend

    ## Features

    - **Catalog**: Product listing, search and filters
    - **Checkout**: Order creation with Stripe card payments
    - **Notifications**: Order emails for the operator and customer
    - **Admin**: Product management and order overview
    """,
    openapi_url=f"{settings.api_prefix}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
    default_response_class=ORJSONResponse,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include API router
app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/health", tags=["System"])
async def health_check() -> dict:
    """Health check endpoint for monitoring."""
    return {
        "status": "healthy",
        "version": settings.app_version,
    }


@app.get("/", tags=["System"])
async def root() -> dict:
    """Root endpoint with API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "api": settings.api_prefix,
    }
