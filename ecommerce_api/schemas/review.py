"""
Review schemas
"""
from datetime import datetime
from typing import Optional

from pydantic import Field

from ecommerce_api.schemas.common import ApiModel
from ecommerce_api.schemas.product import ProductRef
from ecommerce_api.schemas.user import UserSummary


class ReviewCreate(ApiModel):
    product_id: str
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=1000)


class ReviewUpdate(ApiModel):
    rating: Optional[int] = Field(None, ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=1000)


class ReviewResponse(ApiModel):
    id: str
    user_id: str
    product_id: str
    rating: int
    comment: Optional[str] = None
    user: Optional[UserSummary] = None
    product: Optional[ProductRef] = None
    created_at: datetime
    updated_at: datetime
