"""Domain events for the Product aggregate."""

from protean.fields import Decimal, DateTime, Identifier, Integer, String

from bazaar.domain import bazaar


@bazaar.event(part_of="Product")
class ProductListed:
    """An approved seller listed a new product."""

    __version__ = 1

    product_id: Identifier(required=True)
    seller_id: Identifier(required=True)
    category_id: Identifier(required=True)
    name: String(required=True, sanitize=False)
    price: Decimal(required=True)
    stock: Integer(required=True)
    listed_at: DateTime(required=True)


@bazaar.event(part_of="Product")
class ProductPriceChanged:
    __version__ = 1

    product_id: Identifier(required=True)
    previous_price: Decimal(required=True)
    new_price: Decimal(required=True)
    changed_at: DateTime(required=True)


@bazaar.event(part_of="Product")
class ProductStockAdjusted:
    """Stock moved because of a restock, a checkout reservation or a cancellation release."""

    __version__ = 1

    product_id: Identifier(required=True)
    previous_stock: Integer(required=True)
    new_stock: Integer(required=True)
    reason: String(required=True, sanitize=False)
    adjusted_at: DateTime(required=True)


@bazaar.event(part_of="Product")
class ProductDeactivated:
    __version__ = 1

    product_id: Identifier(required=True)
    deactivated_at: DateTime(required=True)
