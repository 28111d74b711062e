"""
Schemas package
"""
from ecommerce_api.schemas.common import ApiResponse, PaginatedResponse, ErrorResponse, Page
from ecommerce_api.schemas.order import (
    OrderItemCreate,
    OrderCreate,
    OrderStatusUpdate,
    OrderItemResponse,
    OrderResponse,
)
from ecommerce_api.schemas.events import OrderEvent

__all__ = [
    "ApiResponse",
    "PaginatedResponse",
    "ErrorResponse",
    "Page",
    "OrderItemCreate",
    "OrderCreate",
    "OrderStatusUpdate",
    "OrderItemResponse",
    "OrderResponse",
    "OrderEvent",
]
