"""
Product schemas
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from ecommerce_api.schemas.common import ApiModel
from ecommerce_api.schemas.category import CategoryRef


class ProductBase(ApiModel):
    name: str = Field(..., min_length=2, max_length=200, description="Product name")
    slug: str = Field(..., min_length=2, max_length=200, description="Unique URL slug")
    description: Optional[str] = Field(None, max_length=2000)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    stock: int = Field(..., ge=0, description="Stock quantity (must be non-negative)")
    category_id: str
    images: List[str] = []
    is_active: bool = True


class ProductCreate(ProductBase):
    """Schema for creating a new product"""
    pass


class ProductUpdate(ApiModel):
    """Schema for updating a product (all fields optional)"""
    name: Optional[str] = Field(None, min_length=2, max_length=200)
    slug: Optional[str] = Field(None, min_length=2, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    stock: Optional[int] = Field(None, ge=0)
    category_id: Optional[str] = None
    images: Optional[List[str]] = None
    is_active: Optional[bool] = None


class StockUpdate(ApiModel):
    """Schema for adjusting product stock"""
    quantity: int = Field(..., description="Quantity to add (positive) or subtract (negative)")


class ProductRef(ApiModel):
    id: str
    name: str
    slug: str


class ProductSummary(ProductRef):
    """Product details embedded in order items"""
    price: Decimal
    is_active: bool


class ProductResponse(ProductBase):
    id: str
    category: Optional[CategoryRef] = None
    created_at: datetime
    updated_at: datetime


class ProductDetailResponse(ProductResponse):
    average_rating: float = 0.0
    review_count: int = 0
