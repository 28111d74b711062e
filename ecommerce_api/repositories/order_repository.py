"""
Order Repository - Data Access Layer
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional
from sqlalchemy.orm import Session, Query, selectinload, joinedload
from sqlalchemy import desc, update

from ecommerce_api.models.order import Order, OrderItem, OrderStatus


@dataclass
class OrderFilters:
    user_id: Optional[str] = None
    status: Optional[OrderStatus] = None


class OrderRepository:
    """Repository for Order persistence"""

    def __init__(self, db: Session):
        self.db = db

    def _with_details(self, query: Query) -> Query:
        return query.options(
            joinedload(Order.user),
            selectinload(Order.items).joinedload(OrderItem.product),
        )

    def _filtered(self, filters: OrderFilters) -> Query:
        query = self.db.query(Order)
        if filters.user_id:
            query = query.filter(Order.user_id == filters.user_id)
        if filters.status:
            query = query.filter(Order.status == filters.status)
        return query

    def get_all(self, filters: OrderFilters, skip: int = 0, limit: int = 20) -> List[Order]:
        """Get orders matching filters with pagination, newest first"""
        return self._with_details(self._filtered(filters)).order_by(
            desc(Order.created_at)
        ).offset(skip).limit(limit).all()

    def count(self, filters: OrderFilters) -> int:
        """Get total count of orders matching filters"""
        return self._filtered(filters).count()

    def get_by_id(self, order_id: str) -> Optional[Order]:
        """Get order by ID with user, items and products loaded"""
        return self._with_details(
            self.db.query(Order).filter(Order.id == order_id)
        ).first()

    def add(self, order: Order) -> Order:
        """
        Stage a new order and its items

        Flushes so the order gets its ID, but leaves committing to the
        caller's transaction.
        """
        self.db.add(order)
        self.db.flush()
        return order

    def transition_status(
        self, order_id: str, new_status: OrderStatus, allowed: Iterable[OrderStatus]
    ) -> bool:
        """
        Move an order to ``new_status`` if it is still in one of ``allowed``

        The current status is checked by the update itself, so a decision
        made on a stale read cannot apply twice. Does not commit.

        Returns:
            True if the status changed, False if the order had moved on
        """
        result = self.db.execute(
            update(Order)
            .where(Order.id == order_id, Order.status.in_(list(allowed)))
            .values(status=new_status)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
