"""Customer-facing order reads."""

from protean.utils.globals import current_domain

from bazaar.order.order import Order
from bazaar.shared.exceptions import NotFoundError


def list_for_user(user_id) -> list[Order]:
    return current_domain.repository_for(Order).for_customer(user_id)


def order_for_user(user_id, order_id) -> Order:
    """Return the order if ``user_id`` placed it; a foreign order looks missing."""
    order = current_domain.repository_for(Order).get_or_none(order_id)
    if order is None or str(order.customer_id) != str(user_id):
        raise NotFoundError(f"Order {order_id} not found")
    return order
