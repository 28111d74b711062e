"""
Authentication schemas
"""
from datetime import date
from typing import Optional

from pydantic import EmailStr, Field

from ecommerce_api.schemas.common import ApiModel
from ecommerce_api.schemas.user import UserResponse


class RegisterRequest(ApiModel):
    """Schema for registering a new user"""
    first_name: str = Field(..., min_length=2, max_length=50)
    last_name: str = Field(..., min_length=2, max_length=50)
    middle_name: Optional[str] = Field(None, max_length=50)
    date_of_birth: date
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)


class LoginRequest(ApiModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class AuthResponse(ApiModel):
    user: UserResponse
    token: str
