"""
Analytics Repository - read-only aggregation queries
"""
from datetime import datetime
from typing import List, Tuple
from sqlalchemy.orm import Session
from sqlalchemy import desc, func

from ecommerce_api.models.category import Category
from ecommerce_api.models.order import Order, OrderItem, OrderStatus
from ecommerce_api.models.product import Product
from ecommerce_api.models.user import User, Role

# Orders that count as realised sales
REVENUE_STATUSES = (OrderStatus.SHIPPED, OrderStatus.DELIVERED)


def _to_float(value) -> float:
    return float(value or 0)


class AnalyticsRepository:
    """Aggregations over users, products and orders"""

    def __init__(self, db: Session):
        self.db = db

    def get_dashboard_stats(self) -> dict:
        total_revenue = self.db.query(func.sum(Order.total_price)).filter(
            Order.status != OrderStatus.CANCELLED
        ).scalar()
        return {
            "total_users": self.db.query(User).count(),
            "total_products": self.db.query(Product).filter(Product.is_active.is_(True)).count(),
            "total_orders": self.db.query(Order).count(),
            "total_revenue": _to_float(total_revenue),
            "pending_orders": self.db.query(Order).filter(Order.status == OrderStatus.PENDING).count(),
            "completed_orders": self.db.query(Order).filter(Order.status == OrderStatus.DELIVERED).count(),
        }

    def get_sales_in_range(self, start_date: datetime, end_date: datetime) -> List[Tuple[datetime, float]]:
        """(created_at, total_price) of realised orders inside the range, oldest first"""
        rows = self.db.query(Order.created_at, Order.total_price).filter(
            Order.created_at >= start_date,
            Order.created_at <= end_date,
            Order.status.in_(REVENUE_STATUSES),
        ).order_by(Order.created_at).all()
        return [(created_at, _to_float(total)) for created_at, total in rows]

    def get_top_products(self, limit: int = 10) -> List[dict]:
        revenue = func.sum(OrderItem.price * OrderItem.quantity)
        rows = self.db.query(
            Product.id,
            Product.name,
            Product.slug,
            func.sum(OrderItem.quantity).label("total_sold"),
            revenue.label("revenue"),
        ).join(
            OrderItem, OrderItem.product_id == Product.id
        ).join(
            Order, Order.id == OrderItem.order_id
        ).filter(
            Order.status.in_(REVENUE_STATUSES)
        ).group_by(
            Product.id, Product.name, Product.slug
        ).order_by(desc("revenue")).limit(limit).all()

        return [
            {
                "id": row.id,
                "name": row.name,
                "slug": row.slug,
                "total_sold": int(row.total_sold or 0),
                "revenue": _to_float(row.revenue),
            }
            for row in rows
        ]

    def get_category_stats(self) -> List[dict]:
        product_counts = dict(
            self.db.query(Product.category_id, func.count(Product.id))
            .group_by(Product.category_id).all()
        )
        revenues = dict(
            self.db.query(Product.category_id, func.sum(OrderItem.price * OrderItem.quantity))
            .join(OrderItem, OrderItem.product_id == Product.id)
            .join(Order, Order.id == OrderItem.order_id)
            .filter(Order.status.in_(REVENUE_STATUSES))
            .group_by(Product.category_id).all()
        )

        stats = [
            {
                "id": category.id,
                "name": category.name,
                "product_count": int(product_counts.get(category.id, 0)),
                "total_revenue": _to_float(revenues.get(category.id)),
            }
            for category in self.db.query(Category).all()
        ]
        stats.sort(key=lambda item: item["total_revenue"], reverse=True)
        return stats

    def get_user_activity(self, limit: int = 20) -> List[dict]:
        total_spent = func.coalesce(func.sum(Order.total_price), 0)
        rows = self.db.query(
            User.id,
            User.first_name,
            User.last_name,
            func.count(Order.id).label("order_count"),
            total_spent.label("total_spent"),
        ).join(
            Order, Order.user_id == User.id
        ).filter(
            User.role != Role.ADMIN,
            Order.status != OrderStatus.CANCELLED,
        ).group_by(
            User.id, User.first_name, User.last_name
        ).order_by(desc("total_spent")).limit(limit).all()

        return [
            {
                "user_id": row.id,
                "user_name": f"{row.first_name} {row.last_name}",
                "order_count": int(row.order_count),
                "total_spent": _to_float(row.total_spent),
            }
            for row in rows
        ]

    def get_revenue_by_status(self) -> List[dict]:
        rows = self.db.query(
            Order.status,
            func.count(Order.id),
            func.sum(Order.total_price),
        ).group_by(Order.status).all()

        return [
            {"status": status.value, "count": int(count), "revenue": _to_float(revenue)}
            for status, count, revenue in rows
        ]
