"""
User API endpoints
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ecommerce_api.api.deps import PageParams, get_current_principal, get_page_params
from ecommerce_api.database import get_db
from ecommerce_api.policy import Principal
from ecommerce_api.services.user_service import UserService
from ecommerce_api.schemas.common import ApiResponse, PaginatedResponse, ok, paginated
from ecommerce_api.schemas.user import UserResponse, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    """Dependency to get UserService instance"""
    return UserService(db)


@router.get("", response_model=PaginatedResponse[UserResponse], summary="List users")
def list_users(
    paging: PageParams = Depends(get_page_params),
    principal: Principal = Depends(get_current_principal),
    service: UserService = Depends(get_user_service),
):
    """Retrieve all users, newest first (admin only)"""
    return paginated(service.list_users(principal, page=paging.page, limit=paging.limit))


@router.get("/{user_id}", response_model=ApiResponse[UserResponse], summary="Get user by ID")
def get_user(
    user_id: str,
    principal: Principal = Depends(get_current_principal),
    service: UserService = Depends(get_user_service),
):
    return ok(service.get_user_by_id(user_id, principal))


@router.patch("/{user_id}", response_model=ApiResponse[UserResponse], summary="Update user")
def update_user(
    user_id: str,
    user_data: UserUpdate,
    principal: Principal = Depends(get_current_principal),
    service: UserService = Depends(get_user_service),
):
    """Update profile fields; only provided fields change"""
    return ok(service.update_user(user_id, user_data, principal), "User updated")


@router.patch("/{user_id}/block", response_model=ApiResponse[UserResponse], summary="Block or unblock user")
def toggle_block(
    user_id: str,
    principal: Principal = Depends(get_current_principal),
    service: UserService = Depends(get_user_service),
):
    """Flip the account's active flag"""
    user = service.toggle_block(user_id, principal)
    return ok(user, "User unblocked" if user.is_active else "User blocked")


@router.delete("/{user_id}", response_model=ApiResponse, summary="Delete user")
def delete_user(
    user_id: str,
    principal: Principal = Depends(get_current_principal),
    service: UserService = Depends(get_user_service),
):
    service.delete_user(user_id, principal)
    return ok(message="User deleted")
