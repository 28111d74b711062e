"""
Analytics API endpoints (admin only)
"""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ecommerce_api.api.deps import get_current_principal
from ecommerce_api.database import get_db
from ecommerce_api.policy import Principal
from ecommerce_api.services.analytics_service import AnalyticsService
from ecommerce_api.schemas.common import ApiResponse, ok
from ecommerce_api.schemas.analytics import (
    CategoryStats,
    DashboardStats,
    FullReport,
    RevenueByStatus,
    SalesStats,
    TopProduct,
    UserActivity,
)

router = APIRouter(prefix="/analytics", tags=["analytics"])


def get_analytics_service(db: Session = Depends(get_db)) -> AnalyticsService:
    """Dependency to get AnalyticsService instance"""
    return AnalyticsService(db)


@router.get("/dashboard", response_model=ApiResponse[DashboardStats], summary="Dashboard totals")
def get_dashboard(
    principal: Principal = Depends(get_current_principal),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return ok(service.get_dashboard_stats(principal))


@router.get("/sales", response_model=ApiResponse[List[SalesStats]], summary="Sales by period")
def get_sales(
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    group_by: str = Query("day", alias="groupBy", pattern="^(day|week|month)$"),
    principal: Principal = Depends(get_current_principal),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """
    Shipped and delivered sales grouped by period

    - **startDate** / **endDate**: defaults to the last 30 days
    - **groupBy**: day, week or month
    """
    return ok(service.get_sales_by_period(principal, start_date, end_date, group_by))


@router.get("/top-products", response_model=ApiResponse[List[TopProduct]], summary="Top products by revenue")
def get_top_products(
    limit: int = Query(10, ge=1, le=100),
    principal: Principal = Depends(get_current_principal),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return ok(service.get_top_products(principal, limit))


@router.get("/categories", response_model=ApiResponse[List[CategoryStats]], summary="Category statistics")
def get_category_stats(
    principal: Principal = Depends(get_current_principal),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return ok(service.get_category_stats(principal))


@router.get("/users", response_model=ApiResponse[List[UserActivity]], summary="Most active customers")
def get_user_activity(
    limit: int = Query(20, ge=1, le=100),
    principal: Principal = Depends(get_current_principal),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return ok(service.get_user_activity(principal, limit))


@router.get("/revenue", response_model=ApiResponse[List[RevenueByStatus]], summary="Revenue by order status")
def get_revenue_by_status(
    principal: Principal = Depends(get_current_principal),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return ok(service.get_revenue_by_status(principal))


@router.get("/report", response_model=ApiResponse[FullReport], summary="Full report")
def get_full_report(
    principal: Principal = Depends(get_current_principal),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return ok(service.get_full_report(principal))
