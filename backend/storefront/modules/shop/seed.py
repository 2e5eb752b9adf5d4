"""
Sample catalog and default admin account.
"""

from decimal import Decimal

from loguru import logger

from storefront.core.config import Settings
from storefront.modules.shop.store import RecordStore

SAMPLE_PRODUCTS = [
    {
        "name": "Classic Gold Heritage",
        "description": "Timeless 18k gold cufflinks with intricate vintage engravings",
        "price": Decimal("299.00"),
        "image_url": "https://images.unsplash.com/photo-1588444650700-7be9fd5c8db2?w=400",
        "material": "Gold",
        "stock": 10,
        "featured": True,
    },
    {
        "name": "Modern Silver Edge",
        "description": "Contemporary sterling silver with geometric patterns",
        "price": Decimal("199.00"),
        "image_url": "https://images.unsplash.com/photo-1590736969955-71cc94901144?w=400",
        "material": "Silver",
        "stock": 15,
        "featured": True,
    },
    {
        "name": "Diamond Prestige",
        "description": "Exquisite white gold with genuine diamonds",
        "price": Decimal("899.00"),
        "image_url": "https://images.unsplash.com/photo-1515562141207-7a88fb7ce338?w=400",
        "material": "Platinum",
        "stock": 5,
        "featured": True,
    },
    {
        "name": "Vintage Brass Collection",
        "description": "Antique-inspired brass with ornate detailing",
        "price": Decimal("149.00"),
        "image_url": "https://images.unsplash.com/photo-1611652022419-a9419f74343d?w=400",
        "material": "Brass",
        "stock": 20,
        "featured": False,
    },
    {
        "name": "Titanium Minimalist",
        "description": "Ultra-lightweight titanium with brushed finish",
        "price": Decimal("249.00"),
        "image_url": "https://images.unsplash.com/photo-1553062407-98eeb64c6a62?w=400",
        "material": "Titanium",
        "stock": 12,
        "featured": False,
    },
    {
        "name": "Pearl Elegance",
        "description": "Mother-of-pearl with gold accent details",
        "price": Decimal("399.00"),
        "image_url": "https://images.unsplash.com/photo-1539874754764-5a96559165b0?w=400",
        "material": "Gold",
        "stock": 8,
        "featured": False,
    },
]


def seed_sample_data(store: RecordStore, settings: Settings) -> None:
    """Create the default admin and sample products if the store is empty."""
    if not store.get_user_by_username(settings.admin_username):
        store.create_user(
            username=settings.admin_username,
            password=settings.admin_password,
            email=settings.admin_email,
            is_admin=True,
        )
        logger.info(f"Created default admin user '{settings.admin_username}'")

    if store.products:
        return

    for product in SAMPLE_PRODUCTS:
        store.create_product(**product)
    logger.info(f"Seeded {len(SAMPLE_PRODUCTS)} sample products")
