"""Storage queries for orders."""

from bazaar.domain import bazaar
from bazaar.order.order import Order


@bazaar.repository(part_of=Order)
class OrderRepository:
    def for_customer(self, customer_id: str) -> list[Order]:
        """The customer's orders, most recent first."""
        return self.query.filter(customer_id=customer_id).order_by("-placed_at").all().items

    def by_number(self, order_number: str) -> Order | None:
        return self.query.filter(order_number=order_number).all().first
