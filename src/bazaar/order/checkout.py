"""Checkout: turn a user's cart into an order.

Everything checkout writes happens in the handler's single unit of work:

1. stock reservation on each product
2. promo code redemption
3. the order with its items and first tracking entry
4. clearing the cart

If any step fails nothing is committed, so a failed checkout leaves the cart
and stock exactly as they were.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from bazaar.cart.cart import Cart
from bazaar.cart.snapshot import cart_snapshot
from bazaar.delivery.charges import quote_delivery
from bazaar.domain import bazaar
from bazaar.order.numbering import generate_order_number
from bazaar.order.order import DeliveryAddress, Order
from bazaar.product.product import Product
from bazaar.promotion.management import redeem_promo_code
from bazaar.shared.exceptions import ConflictError, EmptyCartError
from bazaar.shared.money import ZERO, to_money

logger = structlog.get_logger(__name__)


@bazaar.command(part_of="Order")
class PlaceOrder:
    user_id: Identifier(required=True)
    payment_method: String(required=True, max_length=10)
    delivery_address: Text(required=True, sanitize=False)  # JSON object
    delivery_instructions: Text(sanitize=False)
    promo_code: String(max_length=30)


@bazaar.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        snapshot = cart_snapshot(command.user_id)
        if snapshot.is_empty:
            raise EmptyCartError()

        address = DeliveryAddress(**json.loads(command.delivery_address))

        # Reserve stock at the live price and against the live order bounds
        products = current_domain.repository_for(Product)
        lines = []
        for line in snapshot.lines:
            product = products.get(line.product_id)
            product.ensure_available()
            product.check_order_quantity(line.quantity)
            product.reserve(line.quantity)
            products.add(product)
            lines.append(
                {
                    "product_id": str(product.id),
                    "seller_id": str(product.seller_id),
                    "product_name": product.name,
                    "quantity": line.quantity,
                    "unit_price": product.price,
                }
            )

        subtotal = to_money(sum((to_money(ln["unit_price"]) * ln["quantity"] for ln in lines), ZERO))
        quote = quote_delivery(address.pincode, subtotal)
        discount = redeem_promo_code(command.promo_code, subtotal)

        def build(order_number):
            return Order.place(
                order_number=order_number,
                customer_id=command.user_id,
                lines=lines,
                delivery_address=address,
                payment_method=command.payment_method,
                delivery_charge=quote.charge,
                discount=discount,
                delivery_instructions=command.delivery_instructions,
                promo_code=command.promo_code,
            )

        order = _insert_with_fresh_number(build, command.user_id)

        carts = current_domain.repository_for(Cart)
        cart = carts.get(command.user_id)
        cart.clear()
        carts.add(cart)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            order_number=order.order_number,
            customer_id=str(command.user_id),
            total=str(order.total),
            delivery_area=quote.area_name,
        )
        return str(order.id)


def _insert_with_fresh_number(build, user_id) -> Order:
    """Build and persist the order, retrying once with a new number on a uniqueness clash."""
    repo = current_domain.repository_for(Order)

    order = build(generate_order_number(user_id))
    try:
        return repo.add(order)
    except ValidationError as exc:
        if "order_number" not in exc.messages:
            raise
        logger.warning("order_number_collision", order_number=order.order_number)

    order = build(generate_order_number(user_id))
    try:
        return repo.add(order)
    except ValidationError as exc:
        if "order_number" not in exc.messages:
            raise
        raise ConflictError("Could not allocate a unique order number") from exc
