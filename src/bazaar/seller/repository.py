"""Storage queries for sellers."""

from bazaar.domain import bazaar
from bazaar.seller.seller import Seller, SellerStatus


@bazaar.repository(part_of=Seller)
class SellerRepository:
    def pending(self) -> list[Seller]:
        """Pending applications, newest first."""
        return self.query.filter(status=SellerStatus.PENDING.value).order_by("-applied_at").all().items
