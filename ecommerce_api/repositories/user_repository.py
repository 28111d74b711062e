"""
User Repository - Data Access Layer
"""
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import desc

from ecommerce_api.models.user import User
from ecommerce_api.models.order import Order


class UserRepository:
    """Repository for User CRUD operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID"""
        return self.db.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email (case-insensitive)"""
        return self.db.query(User).filter(User.email == email.lower()).first()

    def get_all(self, skip: int = 0, limit: int = 20) -> List[User]:
        """Get all users with pagination, newest first"""
        return self.db.query(User).order_by(
            desc(User.created_at)
        ).offset(skip).limit(limit).all()

    def count(self) -> int:
        """Get total count of users"""
        return self.db.query(User).count()

    def create(self, user_data: dict) -> User:
        """Create new user; ``user_data['password']`` must already be hashed"""
        user = User(**user_data)
        user.email = user.email.lower()
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def update(self, user: User, update_data: dict) -> User:
        """Update only the provided fields"""
        for field, value in update_data.items():
            if field == "email" and value is not None:
                value = value.lower()
            setattr(user, field, value)

        self.db.commit()
        self.db.refresh(user)
        return user

    def delete(self, user: User) -> None:
        """Delete user (reviews are removed with it)"""
        self.db.delete(user)
        self.db.commit()

    def has_orders(self, user_id: str) -> bool:
        return self.db.query(Order.id).filter(Order.user_id == user_id).first() is not None
