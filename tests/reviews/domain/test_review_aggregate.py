import pytest
from protean.exceptions import ValidationError

from bazaar.review.events import ReviewSubmitted
from bazaar.review.review import Review, review_key


class TestReview:
    def test_submit(self):
        review = Review.submit("user-1", "rice", "order-1", 4, comment="  Fresh stock ")

        assert review.review_key == review_key("user-1", "rice", "order-1")
        assert review.comment == "Fresh stock"
        assert isinstance(review._events[-1], ReviewSubmitted)
        assert review._events[-1].rating == 4

    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_range(self, rating):
        with pytest.raises(ValidationError):
            Review.submit("user-1", "rice", "order-1", rating)
