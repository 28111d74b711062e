"""
SQLAlchemy Review model
"""
from sqlalchemy import Column, Integer, String, ForeignKey, CheckConstraint, UniqueConstraint
from sqlalchemy.orm import relationship

from ecommerce_api.database import Base
from ecommerce_api.models.base import id_column, created_at_column, updated_at_column


class Review(Base):
    """Review database model; one per user and product"""

    __tablename__ = "reviews"

    id = id_column()
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(String(36), ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    comment = Column(String(1000), nullable=True)
    created_at = created_at_column()
    updated_at = updated_at_column()

    user = relationship("User", back_populates="reviews")
    product = relationship("Product", back_populates="reviews")

    __table_args__ = (
        UniqueConstraint('user_id', 'product_id', name='uq_review_user_product'),
        CheckConstraint('rating >= 1 AND rating <= 5', name='check_rating_range'),
    )

    def __repr__(self):
        return f"<Review(id={self.id}, product_id={self.product_id}, rating={self.rating})>"
