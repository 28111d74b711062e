"""
Auth Service - registration, login and token resolution
"""
import logging
from sqlalchemy.orm import Session

from ecommerce_api.errors import ConflictError, UnauthenticatedError
from ecommerce_api.models.user import Role, User
from ecommerce_api.policy import Principal
from ecommerce_api.repositories.user_repository import UserRepository
from ecommerce_api.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from ecommerce_api.schemas.user import UserResponse
from ecommerce_api.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:
    """Service layer for authentication"""

    def __init__(self, db: Session):
        self.repository = UserRepository(db)

    def _auth_response(self, user: User) -> AuthResponse:
        token = create_access_token(user.id, user.email, user.role.value, user.token_version)
        return AuthResponse(user=UserResponse.model_validate(user), token=token)

    def register(self, data: RegisterRequest) -> AuthResponse:
        """
        Register a new USER account

        Raises:
            ConflictError: If the email is already registered
        """
        if self.repository.get_by_email(data.email):
            raise ConflictError("A user with this email already exists")

        user_data = data.model_dump()
        user_data["password"] = hash_password(data.password)
        user_data["role"] = Role.USER

        user = self.repository.create(user_data)
        logger.info("User %s registered", user.id)
        return self._auth_response(user)

    def login(self, data: LoginRequest) -> AuthResponse:
        """
        Check credentials and issue a fresh token

        Every login bumps the user's token version, so tokens issued
        before it stop working.
        """
        user = self.repository.get_by_email(data.email)
        if not user or not verify_password(user.password, data.password):
            logger.info("Failed login for %s", data.email)
            raise UnauthenticatedError(INVALID_CREDENTIALS)
        if not user.is_active:
            raise UnauthenticatedError("Account is blocked")

        user = self.repository.update(user, {"token_version": user.token_version + 1})
        logger.info("User %s logged in", user.id)
        return self._auth_response(user)

    def resolve_principal(self, token: str) -> Principal:
        """Turn a bearer token into the principal it identifies"""
        payload = decode_access_token(token)

        user = self.repository.get_by_id(payload.get("sub", ""))
        if not user:
            raise UnauthenticatedError("User not found")
        if not user.is_active:
            raise UnauthenticatedError("Account is blocked")
        if payload.get("ver") != user.token_version:
            raise UnauthenticatedError("Token has been revoked")

        return Principal(id=user.id, role=user.role, email=user.email)
