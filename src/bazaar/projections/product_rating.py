"""ProductRating: running rating statistics per product."""

import json

from protean.core.projector import on
from protean.fields import DateTime, Float, Identifier, Integer, Text
from protean.utils.globals import current_domain

from bazaar.domain import bazaar
from bazaar.review.events import ReviewSubmitted
from bazaar.review.review import Review


@bazaar.projection
class ProductRating:
    product_id: Identifier(identifier=True, required=True)
    average_rating: Float(default=0.0)
    total_reviews: Integer(default=0)
    rating_distribution: Text()  # JSON: {"1": 0, ..., "5": 0}
    updated_at: DateTime()

    @property
    def distribution(self) -> dict[str, int]:
        return json.loads(self.rating_distribution) if self.rating_distribution else _empty_distribution()


def _empty_distribution():
    return {str(star): 0 for star in range(1, 6)}


def _average(distribution):
    total = sum(distribution.values())
    if total == 0:
        return 0.0
    return round(sum(int(star) * count for star, count in distribution.items()) / total, 2)


@bazaar.projector(projector_for=ProductRating, aggregates=[Review])
class ProductRatingProjector:
    @on(ReviewSubmitted)
    def on_review_submitted(self, event):
        repo = current_domain.repository_for(ProductRating)

        rating = repo.get_or_none(event.product_id)
        if rating is None:
            rating = ProductRating(product_id=event.product_id, rating_distribution=json.dumps(_empty_distribution()))

        distribution = rating.distribution
        distribution[str(event.rating)] = distribution.get(str(event.rating), 0) + 1

        rating.total_reviews = rating.total_reviews + 1
        rating.rating_distribution = json.dumps(distribution)
        rating.average_rating = _average(distribution)
        rating.updated_at = event.submitted_at
        repo.add(rating)


def rating_for_product(product_id) -> ProductRating:
    """Current statistics, or an empty record for a product nobody has reviewed."""
    rating = current_domain.repository_for(ProductRating).get_or_none(product_id)
    if rating is None:
        return ProductRating(product_id=product_id, rating_distribution=json.dumps(_empty_distribution()))
    return rating
