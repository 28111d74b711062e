"""
SQLAlchemy User model
"""
import enum

from sqlalchemy import Column, Integer, String, Date, Boolean, Enum
from sqlalchemy.orm import relationship

from ecommerce_api.database import Base
from ecommerce_api.models.base import id_column, created_at_column, updated_at_column


class Role(str, enum.Enum):
    ADMIN = "ADMIN"
    USER = "USER"


class User(Base):
    """User database model"""

    __tablename__ = "users"

    id = id_column()
    email = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    middle_name = Column(String(50), nullable=True)
    date_of_birth = Column(Date, nullable=False)
    role = Column(Enum(Role, name="user_role"), nullable=False, default=Role.USER)
    is_active = Column(Boolean, nullable=False, default=True)
    # Bumped on every login; tokens carrying an older version are rejected
    token_version = Column(Integer, nullable=False, default=0)
    created_at = created_at_column()
    updated_at = updated_at_column()

    orders = relationship("Order", back_populates="user")
    reviews = relationship("Review", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role={self.role})>"
