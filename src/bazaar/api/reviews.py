"""Product review endpoints."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from protean.utils.globals import current_domain

from bazaar.api.dependencies import current_user
from bazaar.api.schemas import ProductReviewsResponse, RatingSummary, ReviewResponse, SubmitReviewRequest
from bazaar.projections.product_rating import rating_for_product
from bazaar.review.review import Review
from bazaar.review.submission import SubmitReview, reviews_for_product
from bazaar.user.user import User

router = APIRouter(tags=["reviews"])


@router.post("/reviews", status_code=201, response_model=ReviewResponse)
async def submit_review(body: SubmitReviewRequest, user: User = Depends(current_user)):
    command = SubmitReview(
        customer_id=str(user.id),
        product_id=body.product_id,
        order_id=body.order_id,
        rating=body.rating,
        comment=body.comment,
    )
    review_id = current_domain.process(command, asynchronous=False)
    review = current_domain.repository_for(Review).get(review_id)
    return JSONResponse(status_code=201, content=ReviewResponse.from_review(review).model_dump(mode="json"))


@router.get("/products/{product_id}/reviews", response_model=ProductReviewsResponse)
async def product_reviews(product_id: str) -> ProductReviewsResponse:
    rating = rating_for_product(product_id)
    return ProductReviewsResponse(
        summary=RatingSummary(
            average_rating=rating.average_rating,
            total_reviews=rating.total_reviews,
            rating_distribution=rating.distribution,
        ),
        reviews=[ReviewResponse.from_review(r) for r in reviews_for_product(product_id)],
    )
