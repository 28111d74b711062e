"""
Category schemas
"""
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from ecommerce_api.schemas.common import ApiModel


class CategoryBase(ApiModel):
    name: str = Field(..., min_length=2, max_length=100, description="Category name")
    slug: str = Field(..., min_length=2, max_length=100, description="Unique URL slug")
    description: Optional[str] = Field(None, max_length=500)
    parent_id: Optional[str] = Field(None, description="Parent category ID")
    is_active: bool = True


class CategoryCreate(CategoryBase):
    """Schema for creating a new category"""
    pass


class CategoryUpdate(ApiModel):
    """Schema for updating a category (all fields optional)"""
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    slug: Optional[str] = Field(None, min_length=2, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    parent_id: Optional[str] = None
    is_active: Optional[bool] = None


class CategoryRef(ApiModel):
    id: str
    name: str
    slug: str


class CategoryResponse(CategoryBase):
    id: str
    parent: Optional[CategoryRef] = None
    children: List[CategoryRef] = []
    product_count: int = 0
    created_at: datetime
    updated_at: datetime


class CategoryTreeNode(ApiModel):
    id: str
    name: str
    slug: str
    product_count: int = 0
    children: List["CategoryTreeNode"] = []
