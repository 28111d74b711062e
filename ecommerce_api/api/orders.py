"""
Order API endpoints
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ecommerce_api.api.deps import PageParams, get_current_principal, get_page_params
from ecommerce_api.database import get_db
from ecommerce_api.models.order import OrderStatus
from ecommerce_api.policy import Principal
from ecommerce_api.services.order_service import OrderService
from ecommerce_api.schemas.common import ApiResponse, PaginatedResponse, ok, paginated
from ecommerce_api.schemas.order import OrderCreate, OrderStatusUpdate, OrderResponse

router = APIRouter(prefix="/orders", tags=["orders"])


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    """Dependency to get OrderService instance"""
    return OrderService(db)


@router.post(
    "",
    response_model=ApiResponse[OrderResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create order",
)
def create_order(
    order_data: OrderCreate,
    principal: Principal = Depends(get_current_principal),
    service: OrderService = Depends(get_order_service),
):
    """
    Place an order for the authenticated user

    Process:
    1. Check every product exists, is active and has enough stock
    2. Freeze current unit prices into the line items
    3. Save the order and reserve stock in one transaction
    4. Publish OrderCreated event to RabbitMQ
    """
    return ok(service.create_order(principal.id, order_data), "Order created")


@router.get("", response_model=PaginatedResponse[OrderResponse], summary="List orders")
def list_orders(
    order_status: Optional[OrderStatus] = Query(None, alias="status"),
    user_id: Optional[str] = Query(None, alias="userId", description="Admins only; ignored for users"),
    paging: PageParams = Depends(get_page_params),
    principal: Principal = Depends(get_current_principal),
    service: OrderService = Depends(get_order_service),
):
    """Admins see every order, users only their own"""
    return paginated(service.list_orders(
        principal, status=order_status, user_id=user_id, page=paging.page, limit=paging.limit
    ))


@router.get("/my", response_model=PaginatedResponse[OrderResponse], summary="List my orders")
def list_my_orders(
    order_status: Optional[OrderStatus] = Query(None, alias="status"),
    paging: PageParams = Depends(get_page_params),
    principal: Principal = Depends(get_current_principal),
    service: OrderService = Depends(get_order_service),
):
    return paginated(service.list_user_orders(
        principal.id, status=order_status, page=paging.page, limit=paging.limit
    ))


@router.get("/{order_id}", response_model=ApiResponse[OrderResponse], summary="Get order by ID")
def get_order(
    order_id: str,
    principal: Principal = Depends(get_current_principal),
    service: OrderService = Depends(get_order_service),
):
    return ok(service.get_order_by_id(order_id, principal))


@router.patch("/{order_id}/status", response_model=ApiResponse[OrderResponse], summary="Update order status")
def update_order_status(
    order_id: str,
    status_update: OrderStatusUpdate,
    principal: Principal = Depends(get_current_principal),
    service: OrderService = Depends(get_order_service),
):
    """
    Move an order to a new status (admin only)

    Publishes OrderStatusChanged event to RabbitMQ
    """
    return ok(service.update_order_status(order_id, status_update.status, principal), "Order status updated")


@router.post("/{order_id}/cancel", response_model=ApiResponse[OrderResponse], summary="Cancel order")
def cancel_order(
    order_id: str,
    principal: Principal = Depends(get_current_principal),
    service: OrderService = Depends(get_order_service),
):
    """Cancel a PENDING or PROCESSING order and return its stock"""
    return ok(service.cancel_order(order_id, principal), "Order cancelled")
