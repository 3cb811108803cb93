"""Read-only view of a cart joined with live catalog data.

The cart page and checkout both work from this snapshot, so the subtotal a
customer sees is computed the same way checkout computes it.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from protean.utils.globals import current_domain

from bazaar.cart.cart import Cart
from bazaar.product.product import Product
from bazaar.shared.money import ZERO, to_money


@dataclass(frozen=True)
class CartLine:
    item_id: str
    product_id: str
    seller_id: str
    quantity: int
    name: str
    name_hindi: str | None
    price: Decimal
    image: str | None
    unit: str
    is_active: bool
    stock: int
    added_at: datetime | None

    @property
    def line_total(self) -> Decimal:
        return to_money(self.price * self.quantity)


@dataclass(frozen=True)
class CartSnapshot:
    user_id: str
    lines: list[CartLine] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def subtotal(self) -> Decimal:
        return to_money(sum((line.line_total for line in self.lines), ZERO))

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)


def cart_snapshot(user_id) -> CartSnapshot:
    cart = current_domain.repository_for(Cart).get_or_none(user_id)
    if cart is None:
        return CartSnapshot(user_id=str(user_id))

    products = current_domain.repository_for(Product)
    lines = []
    for item in sorted(cart.items, key=lambda i: i.added_at):
        product = products.get(item.product_id)
        lines.append(
            CartLine(
                item_id=str(item.id),
                product_id=str(product.id),
                seller_id=str(product.seller_id),
                quantity=item.quantity,
                name=product.name,
                name_hindi=product.name_hindi,
                price=to_money(product.price),
                image=product.image,
                unit=product.unit,
                is_active=product.is_active,
                stock=product.stock,
                added_at=item.added_at,
            )
        )
    return CartSnapshot(user_id=str(user_id), lines=lines)
