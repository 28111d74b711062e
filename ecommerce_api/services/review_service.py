"""
Review Service - Business Logic Layer
"""
from typing import Optional
from sqlalchemy.orm import Session

from ecommerce_api.errors import ConflictError, ForbiddenError, InvalidStateError, NotFoundError
from ecommerce_api.models.review import Review
from ecommerce_api.policy import Principal, is_owner, require_owner_or_admin
from ecommerce_api.repositories.product_repository import ProductRepository
from ecommerce_api.repositories.review_repository import ReviewFilters, ReviewRepository
from ecommerce_api.schemas.common import Page, page_window
from ecommerce_api.schemas.review import ReviewCreate, ReviewUpdate, ReviewResponse


class ReviewService:
    """Service layer for product reviews"""

    def __init__(self, db: Session):
        self.repository = ReviewRepository(db)
        self.product_repository = ProductRepository(db)

    def _get_review(self, review_id: str) -> Review:
        review = self.repository.get_by_id(review_id)
        if not review:
            raise NotFoundError(f"Review with id={review_id} not found")
        return review

    def _list(self, filters: ReviewFilters, page: int, limit: int) -> Page[ReviewResponse]:
        page, limit = page_window(page, limit)
        window = Page(items=[], total=self.repository.count(filters), page=page, limit=limit)
        reviews = self.repository.get_all(filters, skip=window.skip, limit=limit)
        window.items = [ReviewResponse.model_validate(r) for r in reviews]
        return window

    def create_review(self, user_id: str, review_data: ReviewCreate) -> ReviewResponse:
        """
        Create a review

        Raises:
            NotFoundError: If the product does not exist
            ConflictError: If the user already reviewed this product
            InvalidStateError: If the user has no delivered order with the product
        """
        if not self.product_repository.get_by_id(review_data.product_id):
            raise NotFoundError(f"Product with id={review_data.product_id} not found")

        if self.repository.get_by_user_and_product(user_id, review_data.product_id):
            raise ConflictError("You have already reviewed this product")

        if not self.repository.has_delivered_purchase(user_id, review_data.product_id):
            raise InvalidStateError("You can only review products from your delivered orders")

        review = self.repository.create({"user_id": user_id, **review_data.model_dump()})
        return ReviewResponse.model_validate(self._get_review(review.id))

    def get_review_by_id(self, review_id: str) -> ReviewResponse:
        return ReviewResponse.model_validate(self._get_review(review_id))

    def get_product_reviews(
        self, product_id: str, rating: Optional[int] = None, page: int = 1, limit: int = 20
    ) -> Page[ReviewResponse]:
        return self._list(ReviewFilters(product_id=product_id, rating=rating), page, limit)

    def get_user_reviews(self, user_id: str, page: int = 1, limit: int = 20) -> Page[ReviewResponse]:
        return self._list(ReviewFilters(user_id=user_id), page, limit)

    def update_review(self, review_id: str, review_data: ReviewUpdate, requester: Principal) -> ReviewResponse:
        """Update a review; only its author may"""
        review = self._get_review(review_id)
        if not is_owner(requester, review.user_id):
            raise ForbiddenError("You can only edit your own reviews")

        review = self.repository.update(review, review_data.model_dump(exclude_unset=True))
        return ReviewResponse.model_validate(review)

    def delete_review(self, review_id: str, requester: Principal) -> None:
        """Delete a review; its author or an admin may"""
        review = self._get_review(review_id)
        require_owner_or_admin(requester, review.user_id)
        self.repository.delete(review)
