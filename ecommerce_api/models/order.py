"""
SQLAlchemy Order and OrderItem models
"""
import enum

from sqlalchemy import Column, Integer, String, Numeric, Text, ForeignKey, Enum, CheckConstraint
from sqlalchemy.orm import relationship

from ecommerce_api.database import Base
from ecommerce_api.models.base import id_column, created_at_column, updated_at_column


class OrderStatus(str, enum.Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES

    @property
    def is_cancellable(self) -> bool:
        return self in CANCELLABLE_STATUSES


TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})
CANCELLABLE_STATUSES = frozenset({OrderStatus.PENDING, OrderStatus.PROCESSING})
LIVE_STATUSES = frozenset(OrderStatus) - TERMINAL_STATUSES

# Admins may move a live order to any status, skipping stages included.
# Terminal statuses have no way out.
ALLOWED_TRANSITIONS = {
    status: (frozenset() if status in TERMINAL_STATUSES else frozenset(OrderStatus))
    for status in OrderStatus
}


def can_transition(current: OrderStatus, new: OrderStatus) -> bool:
    return new in ALLOWED_TRANSITIONS[current]


class Order(Base):
    """Order database model"""

    __tablename__ = "orders"

    id = id_column()
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    status = Column(Enum(OrderStatus, name="order_status"), nullable=False, default=OrderStatus.PENDING, index=True)
    # Frozen at creation; never recomputed from current product prices
    total_price = Column(Numeric(12, 2), nullable=False)
    notes = Column(Text, nullable=True)
    created_at = created_at_column()
    updated_at = updated_at_column()

    user = relationship("User", back_populates="orders")
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )

    __table_args__ = (
        CheckConstraint('total_price >= 0', name='check_total_price_non_negative'),
    )

    def __repr__(self):
        return f"<Order(id={self.id}, user_id={self.user_id}, status='{self.status}')>"


class OrderItem(Base):
    """Order line item; ``price`` is the unit price snapshot at order time"""

    __tablename__ = "order_items"

    id = id_column()
    order_id = Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(String(36), ForeignKey("products.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)

    order = relationship("Order", back_populates="items")
    product = relationship("Product", back_populates="order_items")

    __table_args__ = (
        CheckConstraint('quantity > 0', name='check_quantity_positive'),
    )

    def __repr__(self):
        return f"<OrderItem(order_id={self.order_id}, product_id={self.product_id}, quantity={self.quantity})>"
