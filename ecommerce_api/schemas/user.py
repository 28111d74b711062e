"""
User schemas
"""
from datetime import date, datetime
from typing import Optional

from pydantic import EmailStr, Field

from ecommerce_api.models.user import Role
from ecommerce_api.schemas.common import ApiModel


class UserSummary(ApiModel):
    """Owner details embedded in orders and reviews"""
    id: str
    first_name: str
    last_name: str
    email: str


class UserResponse(ApiModel):
    """User as exposed by the API (never includes the password hash)"""
    id: str
    email: str
    first_name: str
    last_name: str
    middle_name: Optional[str] = None
    date_of_birth: date
    role: Role
    is_active: bool
    created_at: datetime
    updated_at: datetime


class UserUpdate(ApiModel):
    """Schema for updating a user (all fields optional)"""
    first_name: Optional[str] = Field(None, min_length=2, max_length=50)
    last_name: Optional[str] = Field(None, min_length=2, max_length=50)
    middle_name: Optional[str] = Field(None, max_length=50)
    date_of_birth: Optional[date] = None
    email: Optional[EmailStr] = None
    is_active: Optional[bool] = None
