"""Product aggregate: a seller's listing with price, stock and order-quantity bounds.

Products are read-mostly. Cart and checkout read ``price`` live; an order
snapshots it at placement. Stock is decremented when an order is placed and
released when that order is cancelled.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Decimal, Identifier, Integer, String, Text

from bazaar.domain import bazaar
from bazaar.product.events import (
    ProductDeactivated,
    ProductListed,
    ProductPriceChanged,
    ProductStockAdjusted,
)
from bazaar.shared.money import to_money


class StockReason(Enum):
    RESTOCK = "restock"
    RESERVED = "reserved"
    RELEASED = "released"


@bazaar.aggregate
class Product:
    seller_id: Identifier(required=True)
    category_id: Identifier(required=True)
    name: String(required=True, max_length=200, sanitize=False)
    name_hindi: String(max_length=200, sanitize=False)
    description: Text(sanitize=False)
    description_hindi: Text(sanitize=False)
    price: Decimal(required=True, min_value=0, precision=10, scale=2)
    original_price: Decimal(min_value=0, precision=10, scale=2)
    image: String(max_length=500, sanitize=False)
    unit: String(max_length=20, default="piece", sanitize=False)
    brand: String(max_length=100, sanitize=False)
    stock: Integer(default=0, min_value=0)
    min_order_qty: Integer(default=1, min_value=1)
    max_order_qty: Integer(default=100, min_value=1)
    is_active: Boolean(default=True)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def order_quantity_bounds_must_be_ordered(self):
        if self.min_order_qty > self.max_order_qty:
            raise ValidationError({"min_order_qty": ["Minimum order quantity cannot exceed the maximum"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        seller_id,
        category_id,
        name,
        price,
        stock=0,
        name_hindi=None,
        description=None,
        description_hindi=None,
        original_price=None,
        image=None,
        unit="piece",
        brand=None,
        min_order_qty=1,
        max_order_qty=100,
    ):
        now = datetime.now(UTC)
        product = cls(
            seller_id=seller_id,
            category_id=category_id,
            name=name,
            name_hindi=name_hindi,
            description=description,
            description_hindi=description_hindi,
            price=to_money(price),
            original_price=to_money(original_price) if original_price is not None else None,
            image=image,
            unit=unit or "piece",
            brand=brand,
            stock=stock,
            min_order_qty=min_order_qty,
            max_order_qty=max_order_qty,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductListed(
                product_id=str(product.id),
                seller_id=str(seller_id),
                category_id=str(category_id),
                name=name,
                price=product.price,
                stock=product.stock,
                listed_at=now,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Ordering rules
    # -------------------------------------------------------------------
    def check_order_quantity(self, quantity: int):
        """Raise ``ValidationError`` unless ``quantity`` is within the product's order bounds."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        if quantity < self.min_order_qty:
            raise ValidationError({"quantity": [f"Minimum order quantity for {self.name} is {self.min_order_qty}"]})
        if quantity > self.max_order_qty:
            raise ValidationError({"quantity": [f"Maximum order quantity for {self.name} is {self.max_order_qty}"]})

    def ensure_available(self):
        if not self.is_active:
            raise ValidationError({"product_id": [f"{self.name} is not available"]})

    # -------------------------------------------------------------------
    # Seller edits
    # -------------------------------------------------------------------
    def change_price(self, price, original_price=None):
        previous = self.price
        now = datetime.now(UTC)

        self.price = to_money(price)
        if original_price is not None:
            self.original_price = to_money(original_price)
        self.updated_at = now

        self.raise_(
            ProductPriceChanged(
                product_id=str(self.id),
                previous_price=previous,
                new_price=self.price,
                changed_at=now,
            )
        )

    def restock(self, quantity: int):
        if quantity < 1:
            raise ValidationError({"quantity": ["Restock quantity must be at least 1"]})
        self._adjust_stock(quantity, StockReason.RESTOCK)

    def deactivate(self):
        if not self.is_active:
            return

        now = datetime.now(UTC)
        self.is_active = False
        self.updated_at = now
        self.raise_(ProductDeactivated(product_id=str(self.id), deactivated_at=now))

    # -------------------------------------------------------------------
    # Stock reservation
    # -------------------------------------------------------------------
    def reserve(self, quantity: int):
        self.ensure_available()
        if quantity > self.stock:
            raise ValidationError({"stock": [f"Only {self.stock} of {self.name} left in stock"]})
        self._adjust_stock(-quantity, StockReason.RESERVED)

    def release(self, quantity: int):
        self._adjust_stock(quantity, StockReason.RELEASED)

    def _adjust_stock(self, delta: int, reason: StockReason):
        previous = self.stock
        now = datetime.now(UTC)

        self.stock = previous + delta
        self.updated_at = now

        self.raise_(
            ProductStockAdjusted(
                product_id=str(self.id),
                previous_stock=previous,
                new_stock=self.stock,
                reason=reason.value,
                adjusted_at=now,
            )
        )
