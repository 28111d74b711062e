"""
Authentication API endpoints
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ecommerce_api.database import get_db
from ecommerce_api.services.auth_service import AuthService
from ecommerce_api.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from ecommerce_api.schemas.common import ApiResponse, ok

router = APIRouter(prefix="/auth", tags=["auth"])


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    """Dependency to get AuthService instance"""
    return AuthService(db)


@router.post(
    "/register",
    response_model=ApiResponse[AuthResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account",
)
def register(data: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    """
    Create a USER account and return it with an access token

    - **email**: must not be registered yet
    - **password**: at least 8 characters
    """
    return ok(service.register(data), "Registration successful")


@router.post("/login", response_model=ApiResponse[AuthResponse], summary="Log in")
def login(data: LoginRequest, service: AuthService = Depends(get_auth_service)):
    """Exchange email and password for an access token; earlier tokens are revoked"""
    return ok(service.login(data), "Login successful")
