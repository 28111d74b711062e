"""
Analytics schemas
"""
from typing import List

from ecommerce_api.schemas.common import ApiModel


class DashboardStats(ApiModel):
    total_users: int
    total_products: int
    total_orders: int
    total_revenue: float
    pending_orders: int
    completed_orders: int


class SalesStats(ApiModel):
    period: str
    total_sales: float
    order_count: int
    average_order_value: float


class TopProduct(ApiModel):
    id: str
    name: str
    slug: str
    total_sold: int
    revenue: float


class CategoryStats(ApiModel):
    id: str
    name: str
    product_count: int
    total_revenue: float


class UserActivity(ApiModel):
    user_id: str
    user_name: str
    order_count: int
    total_spent: float
    average_order_value: float


class RevenueByStatus(ApiModel):
    status: str
    count: int
    revenue: float


class FullReport(ApiModel):
    dashboard: DashboardStats
    top_products: List[TopProduct]
    category_stats: List[CategoryStats]
    revenue_by_status: List[RevenueByStatus]
