"""
SQLAlchemy Product model
"""
from sqlalchemy import Column, Integer, String, Numeric, Text, Boolean, ForeignKey, JSON, CheckConstraint
from sqlalchemy.orm import relationship

from ecommerce_api.database import Base
from ecommerce_api.models.base import id_column, created_at_column, updated_at_column


class Product(Base):
    """Product database model; ``stock`` is the authoritative stock ledger"""

    __tablename__ = "products"

    id = id_column()
    name = Column(String(200), nullable=False, index=True)
    slug = Column(String(200), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    images = Column(JSON, nullable=False, default=list)
    is_active = Column(Boolean, nullable=False, default=True)
    category_id = Column(String(36), ForeignKey("categories.id"), nullable=False, index=True)
    created_at = created_at_column()
    updated_at = updated_at_column()

    category = relationship("Category", back_populates="products")
    reviews = relationship("Review", back_populates="product", cascade="all, delete-orphan")
    order_items = relationship("OrderItem", back_populates="product")

    # Constraints
    __table_args__ = (
        CheckConstraint('price >= 0', name='check_price_non_negative'),
        CheckConstraint('stock >= 0', name='check_stock_non_negative'),
    )

    def __repr__(self):
        return f"<Product(id={self.id}, slug='{self.slug}', price={self.price}, stock={self.stock})>"
