"""Cart aggregate: one per user, keyed by the user's id.

A cart holds at most one line per product. Adding a product that is already
in the cart grows the existing line, and the merged quantity must still fit
the product's order bounds. Concurrent writers are serialized by the
aggregate version; a stale write is retried by the command processor on
fresh state.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String

from bazaar.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartItemUpdated
from bazaar.domain import bazaar
from bazaar.shared.exceptions import NotFoundError


@bazaar.entity(part_of="Cart")
class CartItem:
    product_id: Identifier(required=True)
    quantity: Integer(required=True, min_value=1)
    session_id: String(max_length=255)
    added_at: DateTime()


@bazaar.aggregate
class Cart:
    user_id: Identifier(identifier=True)
    items: HasMany(CartItem)
    updated_at: DateTime()

    @invariant.post
    def one_line_per_product(self):
        product_ids = [str(item.product_id) for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product may appear only once in a cart"]})

    @classmethod
    def for_user(cls, user_id):
        return cls(user_id=user_id, updated_at=datetime.now(UTC))

    @property
    def is_empty(self) -> bool:
        return not self.items

    def line_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def item(self, item_id) -> CartItem:
        found = next((i for i in self.items if str(i.id) == str(item_id)), None)
        if found is None:
            raise NotFoundError(f"Cart item {item_id} not found")
        return found

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    def add_item(self, product, quantity: int, session_id=None) -> CartItem:
        """Add ``quantity`` of ``product``, merging into an existing line."""
        product.check_order_quantity(quantity)

        now = datetime.now(UTC)
        existing = self.line_for(product.id)

        if existing:
            merged = existing.quantity + quantity
            if merged > product.max_order_qty:
                raise ValidationError(
                    {"quantity": [f"Maximum order quantity for {product.name} is {product.max_order_qty}"]}
                )
            existing.quantity = merged
            line = existing
        else:
            line = CartItem(product_id=product.id, quantity=quantity, session_id=session_id, added_at=now)
            self.add_items(line)

        self.updated_at = now
        self.raise_(
            CartItemAdded(
                cart_id=str(self.user_id),
                item_id=str(line.id),
                product_id=str(product.id),
                quantity=quantity,
                line_quantity=line.quantity,
            )
        )
        return line

    def update_item(self, item_id, quantity: int, product) -> CartItem:
        line = self.item(item_id)
        product.check_order_quantity(quantity)

        previous = line.quantity
        line.quantity = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemUpdated(
                cart_id=str(self.user_id),
                item_id=str(line.id),
                previous_quantity=previous,
                new_quantity=quantity,
            )
        )
        return line

    def remove_item(self, item_id):
        line = self.item(item_id)
        self.remove_items(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartItemRemoved(cart_id=str(self.user_id), item_id=str(line.id), product_id=str(line.product_id)))

    def clear(self):
        """Remove every line. Clearing an empty cart is a no-op."""
        if self.is_empty:
            return

        removed = len(self.items)
        for line in list(self.items):
            self.remove_items(line)

        now = datetime.now(UTC)
        self.updated_at = now
        self.raise_(CartCleared(cart_id=str(self.user_id), items_removed=removed, cleared_at=now))
