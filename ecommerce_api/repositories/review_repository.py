"""
Review Repository - Data Access Layer
"""
from dataclasses import dataclass
from typing import List, Optional
from sqlalchemy.orm import Session, Query, joinedload
from sqlalchemy import desc

from ecommerce_api.models.review import Review
from ecommerce_api.models.order import Order, OrderItem, OrderStatus


@dataclass
class ReviewFilters:
    product_id: Optional[str] = None
    user_id: Optional[str] = None
    rating: Optional[int] = None


class ReviewRepository:
    """Repository for Review CRUD operations"""

    def __init__(self, db: Session):
        self.db = db

    def _filtered(self, filters: ReviewFilters) -> Query:
        query = self.db.query(Review)
        if filters.product_id:
            query = query.filter(Review.product_id == filters.product_id)
        if filters.user_id:
            query = query.filter(Review.user_id == filters.user_id)
        if filters.rating:
            query = query.filter(Review.rating == filters.rating)
        return query

    def get_by_id(self, review_id: str) -> Optional[Review]:
        return self.db.query(Review).options(
            joinedload(Review.user),
            joinedload(Review.product),
        ).filter(Review.id == review_id).first()

    def get_by_user_and_product(self, user_id: str, product_id: str) -> Optional[Review]:
        return self.db.query(Review).filter(
            Review.user_id == user_id,
            Review.product_id == product_id,
        ).first()

    def get_all(self, filters: ReviewFilters, skip: int = 0, limit: int = 20) -> List[Review]:
        """Get reviews matching filters with pagination, newest first"""
        return self._filtered(filters).options(
            joinedload(Review.user),
            joinedload(Review.product),
        ).order_by(desc(Review.created_at)).offset(skip).limit(limit).all()

    def count(self, filters: ReviewFilters) -> int:
        return self._filtered(filters).count()

    def create(self, review_data: dict) -> Review:
        review = Review(**review_data)
        self.db.add(review)
        self.db.commit()
        self.db.refresh(review)
        return review

    def update(self, review: Review, update_data: dict) -> Review:
        for field, value in update_data.items():
            setattr(review, field, value)

        self.db.commit()
        self.db.refresh(review)
        return review

    def delete(self, review: Review) -> None:
        self.db.delete(review)
        self.db.commit()

    def has_delivered_purchase(self, user_id: str, product_id: str) -> bool:
        """Whether the user has a delivered order containing the product"""
        return self.db.query(OrderItem.id).join(Order).filter(
            OrderItem.product_id == product_id,
            Order.user_id == user_id,
            Order.status == OrderStatus.DELIVERED,
        ).first() is not None
