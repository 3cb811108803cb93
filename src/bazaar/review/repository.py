"""Storage queries for reviews."""

from bazaar.domain import bazaar
from bazaar.review.review import Review, review_key


@bazaar.repository(part_of=Review)
class ReviewRepository:
    def for_product(self, product_id: str) -> list[Review]:
        """Reviews of a product, newest first."""
        return self.query.filter(product_id=product_id).order_by("-created_at").all().items

    def exists_for(self, customer_id, product_id, order_id) -> bool:
        key = review_key(customer_id, product_id, order_id)
        return self.query.filter(review_key=key).all().total > 0
