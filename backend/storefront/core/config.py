"""
LuxeCuffs Storefront Configuration.

Environment-based configuration using Pydantic Settings.
All sensitive values should be set via environment variables.
"""

from decimal import Decimal
from functools import lru_cache
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "LuxeCuffs Storefront"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # API
    api_prefix: str = "/api"

    # Catalog bootstrap
    seed_sample_data: bool = True
    admin_username: str = "admin"
    admin_password: str = "admin123"
    admin_email: str = "admin@luxecuffs.com"

    # Pricing
    shipping_flat_rate: Decimal = Decimal("15.00")
    tax_rate: Decimal = Decimal("0.08")

    # Inventory
    decrement_stock_on_order: bool = True

    # Payments (Stripe)
    stripe_secret_key: str = ""
    stripe_publishable_key: str = ""
    stripe_webhook_secret: str = ""
    shop_currency: str = "usd"

    # Email
    email_enabled: bool = True
    smtp_host: str = "smtp.ethereal.email"
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    smtp_start_tls: bool = True
    smtp_timeout: float = 10.0
    from_email: str = "noreply@luxecuffs.com"
    order_notification_email: str = "admin@luxecuffs.com"
    store_name: str = "LuxeCuffs"

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5000",
        "http://localhost:5173",
    ]

    @field_validator("shop_currency", mode="before")
    @classmethod
    def normalize_currency(cls, v: Any) -> Any:
        """Stripe expects lower-case ISO currency codes."""
        if isinstance(v, str):
            return v.strip().lower()
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
