"""Storage queries for delivery areas."""

from bazaar.delivery.area import DeliveryArea
from bazaar.domain import bazaar


@bazaar.repository(part_of=DeliveryArea)
class DeliveryAreaRepository:
    def active_for_pincode(self, pincode: str) -> DeliveryArea | None:
        return self.query.filter(pincode=(pincode or "").strip(), is_active=True).all().first
