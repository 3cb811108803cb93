"""Review aggregate: post-delivery feedback on a product from a specific order.

``review_key`` combines customer, product and order and is unique in storage,
so a customer reviews each product of an order at most once even under
concurrent submissions.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, Integer, String, Text

from bazaar.domain import bazaar
from bazaar.review.events import ReviewSubmitted


def review_key(customer_id, product_id, order_id) -> str:
    return f"{customer_id}:{product_id}:{order_id}"


@bazaar.aggregate
class Review:
    customer_id: Identifier(required=True)
    product_id: Identifier(required=True)
    order_id: Identifier(required=True)
    review_key: String(required=True, max_length=120, unique=True)
    rating: Integer(required=True, min_value=1, max_value=5)
    comment: Text(sanitize=False)
    created_at: DateTime()

    @classmethod
    def submit(cls, customer_id, product_id, order_id, rating, comment=None):
        now = datetime.now(UTC)
        review = cls(
            customer_id=customer_id,
            product_id=product_id,
            order_id=order_id,
            review_key=review_key(customer_id, product_id, order_id),
            rating=rating,
            comment=comment.strip() if comment else None,
            created_at=now,
        )
        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                customer_id=str(customer_id),
                product_id=str(product_id),
                order_id=str(order_id),
                rating=rating,
                submitted_at=now,
            )
        )
        return review
