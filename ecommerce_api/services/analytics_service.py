"""
Analytics Service - sales and activity reports (admin only)
"""
from collections import OrderedDict
from datetime import datetime, timedelta, timezone
from typing import List, Optional
from sqlalchemy.orm import Session

from ecommerce_api.errors import ValidationError
from ecommerce_api.policy import Principal, require_admin
from ecommerce_api.repositories.analytics_repository import AnalyticsRepository
from ecommerce_api.schemas.analytics import (
    CategoryStats,
    DashboardStats,
    FullReport,
    RevenueByStatus,
    SalesStats,
    TopProduct,
    UserActivity,
)

DEFAULT_SALES_WINDOW = timedelta(days=30)
GROUP_BY_CHOICES = ("day", "week", "month")


def period_key(moment: datetime, group_by: str) -> str:
    """Label of the bucket a timestamp falls into"""
    if group_by == "month":
        return moment.strftime("%Y-%m")
    if group_by == "week":
        year, week, _ = moment.isocalendar()
        return f"{year}-W{week:02d}"
    return moment.strftime("%Y-%m-%d")


class AnalyticsService:

    def __init__(self, db: Session):
        self.repository = AnalyticsRepository(db)

    def get_dashboard_stats(self, requester: Principal) -> DashboardStats:
        require_admin(requester)
        return DashboardStats(**self.repository.get_dashboard_stats())

    def get_sales_by_period(
        self,
        requester: Principal,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        group_by: str = "day",
    ) -> List[SalesStats]:
        """
        Realised sales grouped by day, ISO week or month

        The range defaults to the last 30 days ending now.
        """
        require_admin(requester)
        if group_by not in GROUP_BY_CHOICES:
            raise ValidationError(f"groupBy must be one of: {', '.join(GROUP_BY_CHOICES)}")

        end_date = end_date or datetime.now(timezone.utc)
        start_date = start_date or end_date - DEFAULT_SALES_WINDOW
        if start_date > end_date:
            raise ValidationError("startDate must not be after endDate")

        buckets = OrderedDict()
        for created_at, total in self.repository.get_sales_in_range(start_date, end_date):
            key = period_key(created_at, group_by)
            sales, count = buckets.get(key, (0.0, 0))
            buckets[key] = (sales + total, count + 1)

        return [
            SalesStats(
                period=key,
                total_sales=round(sales, 2),
                order_count=count,
                average_order_value=round(sales / count, 2),
            )
            for key, (sales, count) in buckets.items()
        ]

    def get_top_products(self, requester: Principal, limit: int = 10) -> List[TopProduct]:
        require_admin(requester)
        return [TopProduct(**row) for row in self.repository.get_top_products(limit)]

    def get_category_stats(self, requester: Principal) -> List[CategoryStats]:
        require_admin(requester)
        return [CategoryStats(**row) for row in self.repository.get_category_stats()]

    def get_user_activity(self, requester: Principal, limit: int = 20) -> List[UserActivity]:
        require_admin(requester)
        return [
            UserActivity(
                average_order_value=round(row["total_spent"] / row["order_count"], 2) if row["order_count"] else 0.0,
                **row,
            )
            for row in self.repository.get_user_activity(limit)
        ]

    def get_revenue_by_status(self, requester: Principal) -> List[RevenueByStatus]:
        require_admin(requester)
        return [RevenueByStatus(**row) for row in self.repository.get_revenue_by_status()]

    def get_full_report(self, requester: Principal) -> FullReport:
        """Dashboard, top products, category stats and revenue by status in one payload"""
        return FullReport(
            dashboard=self.get_dashboard_stats(requester),
            top_products=self.get_top_products(requester),
            category_stats=self.get_category_stats(requester),
            revenue_by_status=self.get_revenue_by_status(requester),
        )
