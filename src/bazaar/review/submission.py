"""SubmitReview: review a product from a delivered order.

The order must belong to the reviewer, be delivered and contain the product.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain

from bazaar.domain import bazaar
from bazaar.order.order import Order, OrderStatus
from bazaar.review.review import Review
from bazaar.shared.exceptions import ConflictError

logger = structlog.get_logger(__name__)


@bazaar.command(part_of="Review")
class SubmitReview:
    customer_id: Identifier(required=True)
    product_id: Identifier(required=True)
    order_id: Identifier(required=True)
    rating: Integer(required=True)
    comment: Text(sanitize=False)


@bazaar.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        if not 1 <= command.rating <= 5:
            raise ValidationError({"rating": ["Rating must be between 1 and 5"]})

        order = current_domain.repository_for(Order).get_or_none(command.order_id)
        if order is None or str(order.customer_id) != str(command.customer_id):
            raise ValidationError({"order_id": ["Order not found for this customer"]})
        if OrderStatus(order.status) != OrderStatus.DELIVERED:
            raise ValidationError({"order_id": ["Only delivered orders can be reviewed"]})
        if not order.contains_product(command.product_id):
            raise ValidationError({"product_id": ["Product is not part of this order"]})

        repo = current_domain.repository_for(Review)
        if repo.exists_for(command.customer_id, command.product_id, command.order_id):
            raise ConflictError("Product already reviewed for this order")

        review = Review.submit(
            customer_id=command.customer_id,
            product_id=command.product_id,
            order_id=command.order_id,
            rating=command.rating,
            comment=command.comment,
        )
        try:
            repo.add(review)
        except ValidationError as exc:
            if "review_key" in exc.messages:
                raise ConflictError("Product already reviewed for this order") from exc
            raise

        logger.info("review_submitted", review_id=str(review.id), product_id=str(command.product_id))
        return str(review.id)


def reviews_for_product(product_id) -> list[Review]:
    return current_domain.repository_for(Review).for_product(product_id)
