"""
User Service - Business Logic Layer
"""
import logging
from sqlalchemy.orm import Session

from ecommerce_api.errors import ConflictError, InvalidStateError, NotFoundError
from ecommerce_api.models.user import User
from ecommerce_api.policy import Principal, require_admin, require_owner_or_admin
from ecommerce_api.repositories.user_repository import UserRepository
from ecommerce_api.schemas.common import Page, page_window
from ecommerce_api.schemas.user import UserResponse, UserUpdate

logger = logging.getLogger(__name__)


class UserService:
    """Service layer for user accounts"""

    def __init__(self, db: Session):
        self.repository = UserRepository(db)

    def _get_user(self, user_id: str) -> User:
        user = self.repository.get_by_id(user_id)
        if not user:
            raise NotFoundError(f"User with id={user_id} not found")
        return user

    def get_user_by_id(self, user_id: str, requester: Principal) -> UserResponse:
        require_owner_or_admin(requester, user_id)
        return UserResponse.model_validate(self._get_user(user_id))

    def list_users(self, requester: Principal, page: int = 1, limit: int = 20) -> Page[UserResponse]:
        """List all users newest first (admin only)"""
        require_admin(requester)
        page, limit = page_window(page, limit)
        window = Page(items=[], total=self.repository.count(), page=page, limit=limit)
        users = self.repository.get_all(skip=window.skip, limit=limit)
        window.items = [UserResponse.model_validate(u) for u in users]
        return window

    def update_user(self, user_id: str, user_data: UserUpdate, requester: Principal) -> UserResponse:
        """
        Update a user's profile (self or admin)

        Raises:
            ConflictError: If the new email belongs to another account
        """
        require_owner_or_admin(requester, user_id)
        user = self._get_user(user_id)

        update_data = user_data.model_dump(exclude_unset=True)
        email = update_data.get("email")
        if email and email.lower() != user.email:
            if self.repository.get_by_email(email):
                raise ConflictError("A user with this email already exists")

        user = self.repository.update(user, update_data)
        return UserResponse.model_validate(user)

    def toggle_block(self, user_id: str, requester: Principal) -> UserResponse:
        """Flip the account's active flag (self or admin)"""
        require_owner_or_admin(requester, user_id)
        user = self._get_user(user_id)

        user = self.repository.update(user, {"is_active": not user.is_active})
        logger.info("User %s %s by %s", user_id, "unblocked" if user.is_active else "blocked", requester.id)
        return UserResponse.model_validate(user)

    def delete_user(self, user_id: str, requester: Principal) -> None:
        """Delete a user (admin only); accounts that own orders are kept"""
        require_admin(requester)
        user = self._get_user(user_id)

        if self.repository.has_orders(user_id):
            raise InvalidStateError("Cannot delete a user who has orders")

        self.repository.delete(user)
        logger.info("User %s deleted", user_id)
