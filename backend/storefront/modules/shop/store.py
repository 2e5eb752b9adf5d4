"""
Record Store - in-memory collections for the storefront.

Holds products, orders, order items and users as keyed maps. Every read
builds a fresh list of immutable records, so results are never affected
by later writes. Lookups by id return ``None`` when nothing matches and
leave it to the caller to decide whether that is fatal.
"""

from dataclasses import fields, replace
from decimal import Decimal
from typing import Any, Iterable
from uuid import uuid4

from loguru import logger

from storefront.core.exceptions import NotFoundError, ValidationError
from storefront.core.money import quantize_money
from storefront.core.security import hash_password
from storefront.models.shop import (
    Order,
    OrderItem,
    PaymentStatus,
    Product,
    ResolvedOrderItem,
)
from storefront.models.user import User

REMOVED_PRODUCT_NAME = "Product no longer available"

PRODUCT_FIELDS = frozenset(
    f.name for f in fields(Product) if f.name not in ("id", "created_at")
)


def _new_id() -> str:
    return str(uuid4())


def _newest_first(records: Iterable[Any]) -> list[Any]:
    # reversed() first so ties on created_at come out latest-inserted first
    return sorted(reversed(list(records)), key=lambda r: r.created_at, reverse=True)


class RecordStore:
    """
    Keyed in-memory storage for shop records.

    Usage:
        store = RecordStore()
        product = store.create_product(name="Classic", ...)
        store.get_product(product.id)
    """

    def __init__(
        self,
        users: dict[str, User] | None = None,
        products: dict[str, Product] | None = None,
        orders: dict[str, Order] | None = None,
        order_items: dict[str, OrderItem] | None = None,
    ) -> None:
        """Initialize the store, optionally around existing collections."""
        self.users = users if users is not None else {}
        self.products = products if products is not None else {}
        self.orders = orders if orders is not None else {}
        self.order_items = order_items if order_items is not None else {}

    # ==================== Users ====================

    def get_user(self, user_id: str) -> User | None:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> User | None:
        return next(
            (user for user in self.users.values() if user.username == username),
            None,
        )

    def create_user(
        self,
        username: str,
        password: str,
        email: str | None = None,
        is_admin: bool = False,
    ) -> User:
        """Create a user; the password is stored as a salted hash."""
        if self.get_user_by_username(username):
            raise ValidationError(
                f"Username {username} is already taken", fields=["username"]
            )

        user = User(
            id=_new_id(),
            username=username,
            password_hash=hash_password(password),
            email=email or None,
            is_admin=is_admin,
        )
        self.users[user.id] = user
        return user

    # ==================== Products ====================

    def list_products(self) -> list[Product]:
        """All products, newest first."""
        return _newest_first(self.products.values())

    def get_product(self, product_id: str) -> Product | None:
        return self.products.get(product_id)

    def get_featured_products(self) -> list[Product]:
        return [p for p in self.products.values() if p.featured]

    def create_product(
        self,
        name: str,
        description: str,
        price: Decimal,
        image_url: str,
        material: str,
        stock: int = 0,
        featured: bool = False,
    ) -> Product:
        """Create new product."""
        product = Product(
            id=_new_id(),
            name=name,
            description=description,
            price=quantize_money(Decimal(price)),
            image_url=image_url,
            material=material,
            stock=stock or 0,
            featured=bool(featured),
        )
        self.products[product.id] = product
        return product

    def update_product(self, product_id: str, **changes: Any) -> Product | None:
        """
        Apply a partial update.

        Returns:
            Updated product, or None if it does not exist
        """
        existing = self.products.get(product_id)
        if not existing:
            return None

        unknown = set(changes) - PRODUCT_FIELDS
        if unknown:
            raise ValidationError("Unknown product fields", fields=sorted(unknown))

        if changes.get("price") is not None:
            changes["price"] = quantize_money(Decimal(changes["price"]))

        updated = replace(existing, **changes)
        self.products[product_id] = updated
        return updated

    def delete_product(self, product_id: str) -> bool:
        return self.products.pop(product_id, None) is not None

    def adjust_stock(self, product_id: str, quantity_change: int) -> Product | None:
        """
        Add (positive) or remove (negative) stock.

        Returns:
            Updated product, or None if it does not exist or would go negative
        """
        product = self.products.get(product_id)
        if not product:
            return None

        new_quantity = product.stock + quantity_change
        if new_quantity < 0:
            return None

        updated = replace(product, stock=new_quantity)
        self.products[product_id] = updated
        return updated

    def search_products(self, query: str) -> list[Product]:
        """Case-insensitive substring match on name, description and material."""
        needle = query.lower()
        return [
            p
            for p in self.products.values()
            if needle in p.name.lower()
            or needle in p.description.lower()
            or needle in p.material.lower()
        ]

    def filter_products(
        self,
        material: str | None = None,
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
    ) -> list[Product]:
        """Conjunctive filter; criteria left as None are ignored."""
        results = []
        for product in self.products.values():
            if material and product.material != material:
                continue
            if min_price is not None and product.price < min_price:
                continue
            if max_price is not None and product.price > max_price:
                continue
            results.append(product)
        return results

    # ==================== Orders ====================

    def create_order(
        self,
        customer_first_name: str,
        customer_last_name: str,
        customer_email: str,
        customer_phone: str,
        shipping_street: str,
        shipping_city: str,
        shipping_state: str,
        shipping_zip_code: str,
        subtotal: Decimal,
        shipping: Decimal,
        tax: Decimal,
        total: Decimal,
        payment_status: PaymentStatus = PaymentStatus.PENDING,
        payment_reference: str | None = None,
    ) -> Order:
        """Create new order."""
        order = Order(
            id=_new_id(),
            customer_first_name=customer_first_name,
            customer_last_name=customer_last_name,
            customer_email=customer_email,
            customer_phone=customer_phone,
            shipping_street=shipping_street,
            shipping_city=shipping_city,
            shipping_state=shipping_state,
            shipping_zip_code=shipping_zip_code,
            subtotal=subtotal,
            shipping=shipping,
            tax=tax,
            total=total,
            payment_status=payment_status,
            payment_reference=payment_reference,
        )
        self.orders[order.id] = order
        return order

    def get_order(self, order_id: str) -> Order | None:
        return self.orders.get(order_id)

    def list_orders(self) -> list[Order]:
        """All orders, newest first."""
        return _newest_first(self.orders.values())

    def update_order_payment_status(
        self,
        order_id: str,
        status: PaymentStatus,
        payment_reference: str | None = None,
    ) -> Order | None:
        """
        Set the payment status, keeping the old reference unless a new one is given.

        Returns:
            Updated order, or None if it does not exist
        """
        order = self.orders.get(order_id)
        if not order:
            return None

        changes: dict[str, Any] = {"payment_status": status}
        if payment_reference:
            changes["payment_reference"] = payment_reference

        updated = replace(order, **changes)
        self.orders[order_id] = updated
        return updated

    # ==================== Order items ====================

    def create_order_item(
        self,
        order_id: str,
        product_id: str,
        quantity: int,
        price: Decimal,
    ) -> OrderItem:
        """Create a line item; ``price`` is the product price at this instant."""
        item = OrderItem(
            id=_new_id(),
            order_id=order_id,
            product_id=product_id,
            quantity=quantity,
            price=price,
        )
        self.order_items[item.id] = item
        return item

    def get_order_items(self, order_id: str) -> list[OrderItem]:
        return [item for item in self.order_items.values() if item.order_id == order_id]

    def resolve_order_items(
        self,
        order_id: str,
        allow_missing: bool = False,
    ) -> list[ResolvedOrderItem]:
        """
        Order items joined with their products.

        Args:
            order_id: Order whose items to resolve
            allow_missing: Stand in a placeholder for deleted products instead of raising
        """
        resolved = []
        for item in self.get_order_items(order_id):
            product = self.get_product(item.product_id)
            if not product:
                if not allow_missing:
                    logger.error(f"Order {order_id} references missing product {item.product_id}")
                    raise NotFoundError("Product", item.product_id)

                logger.warning(f"Order {order_id} references deleted product {item.product_id}")
                product = Product(
                    id=item.product_id,
                    name=REMOVED_PRODUCT_NAME,
                    description="",
                    price=item.price,
                    image_url="",
                    material="",
                )
            resolved.append(ResolvedOrderItem(item=item, product=product))
        return resolved
