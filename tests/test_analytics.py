"""Tests for the analytics service and endpoints."""

from datetime import datetime, timedelta, timezone

import pytest

from ecommerce_api.errors import ForbiddenError, ValidationError
from ecommerce_api.models import OrderStatus
from ecommerce_api.schemas.order import OrderCreate, OrderItemCreate
from ecommerce_api.services.analytics_service import AnalyticsService, period_key
from ecommerce_api.services.order_service import OrderService


@pytest.fixture
def sales(db, user, other_user, admin, as_principal, make_product):
    """Orders in every interesting state, placed through the workflow."""
    phone = make_product(name="Phone", price="100.00", stock=50)
    case = make_product(name="Case", price="5.00", stock=50)
    service = OrderService(db)

    def place(buyer, lines, status=None):
        order = service.create_order(buyer.id, OrderCreate(
            items=[OrderItemCreate(product_id=p.id, quantity=q) for p, q in lines]
        ))
        if status:
            service.update_order_status(order.id, status, as_principal(admin))
        return order

    place(user, [(phone, 2), (case, 1)], OrderStatus.DELIVERED)  # 205.00
    place(user, [(case, 4)], OrderStatus.SHIPPED)  # 20.00
    place(other_user, [(phone, 1)])  # 100.00, pending
    place(other_user, [(phone, 3)], OrderStatus.CANCELLED)  # 300.00, cancelled
    return {"phone": phone, "case": case}


@pytest.fixture
def analytics(db):
    return AnalyticsService(db)


class TestDashboard:
    def test_totals(self, analytics, admin, as_principal, sales):
        stats = analytics.get_dashboard_stats(as_principal(admin))

        assert stats.total_users == 3
        assert stats.total_products == 2
        assert stats.total_orders == 4
        assert stats.total_revenue == 325.0
        assert stats.pending_orders == 1
        assert stats.completed_orders == 1

    def test_admin_only(self, analytics, user, as_principal):
        with pytest.raises(ForbiddenError):
            analytics.get_dashboard_stats(as_principal(user))


class TestSales:
    def test_counts_shipped_and_delivered_only(self, analytics, admin, as_principal, sales):
        rows = analytics.get_sales_by_period(as_principal(admin))

        assert sum(row.order_count for row in rows) == 2
        assert sum(row.total_sales for row in rows) == 225.0

    def test_month_grouping(self, analytics, admin, as_principal, sales):
        rows = analytics.get_sales_by_period(as_principal(admin), group_by="month")
        assert len(rows) in (1, 2)

    def test_empty_range(self, analytics, admin, as_principal, sales):
        start = datetime.now(timezone.utc) - timedelta(days=400)
        rows = analytics.get_sales_by_period(as_principal(admin), start, start + timedelta(days=1))
        assert rows == []

    def test_reversed_range(self, analytics, admin, as_principal):
        now = datetime.now(timezone.utc)
        with pytest.raises(ValidationError):
            analytics.get_sales_by_period(as_principal(admin), now, now - timedelta(days=1))

    def test_unknown_grouping(self, analytics, admin, as_principal):
        with pytest.raises(ValidationError):
            analytics.get_sales_by_period(as_principal(admin), group_by="year")

    @pytest.mark.parametrize("group_by,expected", [
        ("day", "2024-12-30"),
        ("week", "2025-W01"),
        ("month", "2024-12"),
    ])
    def test_period_keys(self, group_by, expected):
        assert period_key(datetime(2024, 12, 30, 15, 0), group_by) == expected


class TestRankings:
    def test_top_products_by_revenue(self, analytics, admin, as_principal, sales):
        top = analytics.get_top_products(as_principal(admin))

        assert [p.name for p in top] == ["Phone", "Case"]
        assert top[0].total_sold == 2
        assert top[0].revenue == 200.0
        assert top[1].total_sold == 5
        assert top[1].revenue == 25.0

    def test_category_stats(self, analytics, admin, as_principal, category, sales):
        stats = analytics.get_category_stats(as_principal(admin))

        assert len(stats) == 1
        assert stats[0].id == category.id
        assert stats[0].product_count == 2
        assert stats[0].total_revenue == 225.0

    def test_user_activity(self, analytics, user, admin, as_principal, sales):
        activity = analytics.get_user_activity(as_principal(admin))

        assert activity[0].user_id == user.id
        assert activity[0].order_count == 2
        assert activity[0].total_spent == 225.0
        assert activity[0].average_order_value == 112.5
        assert admin.id not in [row.user_id for row in activity]

    def test_revenue_by_status(self, analytics, admin, as_principal, sales):
        by_status = {row.status: row for row in analytics.get_revenue_by_status(as_principal(admin))}

        assert by_status["CANCELLED"].revenue == 300.0
        assert by_status["PENDING"].count == 1
        assert by_status["DELIVERED"].revenue == 205.0


class TestAnalyticsApi:
    def test_report(self, client, admin_headers, sales):
        response = client.get("/api/analytics/report", headers=admin_headers)
        assert response.status_code == 200
        report = response.json()["data"]
        assert report["dashboard"]["totalOrders"] == 4
        assert report["topProducts"][0]["name"] == "Phone"
        assert {"dashboard", "topProducts", "categoryStats", "revenueByStatus"} == set(report)

    def test_sales_endpoint(self, client, admin_headers, sales):
        response = client.get("/api/analytics/sales?groupBy=week", headers=admin_headers)
        assert response.status_code == 200
        assert sum(row["orderCount"] for row in response.json()["data"]) == 2

    def test_users_are_forbidden(self, client, user_headers):
        response = client.get("/api/analytics/dashboard", headers=user_headers)
        assert response.status_code == 403
