import pytest
from protean import current_domain

from bazaar.order.lifecycle import UpdateOrderStatus


@pytest.fixture()
def delivered_order(customer, product, delivery_area, admin, place_order):
    order = place_order(customer, [(product, 1)])
    for status in ("confirmed", "packed", "out_for_delivery", "delivered"):
        current_domain.process(
            UpdateOrderStatus(order_id=order.id, status=status, actor_id=admin.id), asynchronous=False
        )
    return order
