"""Domain events for the Review aggregate."""

from protean.fields import DateTime, Identifier, Integer

from bazaar.domain import bazaar


@bazaar.event(part_of="Review")
class ReviewSubmitted:
    """A customer reviewed a product from one of their delivered orders."""

    __version__ = 1

    review_id: Identifier(required=True)
    customer_id: Identifier(required=True)
    product_id: Identifier(required=True)
    order_id: Identifier(required=True)
    rating: Integer(required=True)
    submitted_at: DateTime(required=True)
