"""Domain events for the Cart aggregate."""

from protean.fields import DateTime, Identifier, Integer

from bazaar.domain import bazaar


@bazaar.event(part_of="Cart")
class CartItemAdded:
    """A product was added to a cart, either as a new line or merged into an existing one."""

    __version__ = 1

    cart_id: Identifier(required=True)
    item_id: Identifier(required=True)
    product_id: Identifier(required=True)
    quantity: Integer(required=True)
    line_quantity: Integer(required=True)


@bazaar.event(part_of="Cart")
class CartItemUpdated:
    __version__ = 1

    cart_id: Identifier(required=True)
    item_id: Identifier(required=True)
    previous_quantity: Integer(required=True)
    new_quantity: Integer(required=True)


@bazaar.event(part_of="Cart")
class CartItemRemoved:
    __version__ = 1

    cart_id: Identifier(required=True)
    item_id: Identifier(required=True)
    product_id: Identifier(required=True)


@bazaar.event(part_of="Cart")
class CartCleared:
    __version__ = 1

    cart_id: Identifier(required=True)
    items_removed: Integer(required=True)
    cleared_at: DateTime(required=True)
