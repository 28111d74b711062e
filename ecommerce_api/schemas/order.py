"""
Order schemas
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from ecommerce_api.models.order import OrderStatus
from ecommerce_api.schemas.common import ApiModel
from ecommerce_api.schemas.product import ProductSummary
from ecommerce_api.schemas.user import UserSummary


class OrderItemCreate(ApiModel):
    product_id: str = Field(..., min_length=1, description="Product ID")
    quantity: int = Field(..., gt=0, description="Quantity to order")


class OrderCreate(ApiModel):
    """Schema for creating a new order"""
    items: List[OrderItemCreate]
    notes: Optional[str] = Field(None, max_length=1000)


class OrderStatusUpdate(ApiModel):
    """Schema for updating order status"""
    status: OrderStatus


class OrderItemResponse(ApiModel):
    id: str
    product_id: str
    quantity: int
    price: Decimal
    product: Optional[ProductSummary] = None


class OrderResponse(ApiModel):
    """Schema for order response"""
    id: str
    user_id: str
    status: OrderStatus
    total_price: Decimal
    notes: Optional[str] = None
    user: Optional[UserSummary] = None
    items: List[OrderItemResponse] = []
    created_at: datetime
    updated_at: datetime
