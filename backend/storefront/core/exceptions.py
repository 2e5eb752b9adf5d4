"""
Storefront error taxonomy and its HTTP mapping.

Services raise these; the API layer turns them into JSON responses.
Nothing here is retried automatically.
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from loguru import logger


class StorefrontError(Exception):
    """Base class for all storefront errors."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message}


class ValidationError(StorefrontError):
    """Malformed or missing input. The caller may fix it and resubmit."""

    status_code = 400

    def __init__(self, message: str, fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.fields = list(fields or [])

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "fields": self.fields}


class NotFoundError(StorefrontError):
    """A referenced entity does not exist."""

    status_code = 404

    def __init__(self, entity: str, identifier: str) -> None:
        super().__init__(f"{entity} {identifier} not found")
        self.entity = entity
        self.identifier = identifier


class InsufficientStockError(StorefrontError):
    """Requested quantity exceeds the product's stock."""

    status_code = 400

    def __init__(
        self,
        product_id: str,
        product_name: str,
        requested: int,
        available: int,
    ) -> None:
        super().__init__(f"Insufficient stock for {product_name}")
        self.product_id = product_id
        self.product_name = product_name
        self.requested = requested
        self.available = available

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "productId": self.product_id,
            "requested": self.requested,
            "available": self.available,
        }


class GatewayError(StorefrontError):
    """Payment provider rejected the request or failed. Order stays pending."""

    status_code = 402


class AuthenticationError(StorefrontError):
    """Bad admin credentials."""

    status_code = 401


async def storefront_error_handler(
    request: Request, exc: StorefrontError
) -> ORJSONResponse:
    """Render a storefront error as JSON."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return ORJSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> ORJSONResponse:
    """Report request-body validation problems in the same shape as ValidationError."""
    fields = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        name = ".".join(loc)
        if name and name not in fields:
            fields.append(name)

    error = ValidationError("Invalid request data", fields=fields)
    return ORJSONResponse(status_code=error.status_code, content=error.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    """Attach storefront exception handlers to the application."""
    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
