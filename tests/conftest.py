"""Pytest fixtures for ecommerce_api tests."""

import os

# Must be set before ecommerce_api.config builds its settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["EVENTS_ENABLED"] = "false"
os.environ["ENVIRONMENT"] = "test"

from datetime import date
from decimal import Decimal
from itertools import count

import pytest
from fastapi.testclient import TestClient

from ecommerce_api.database import Base, SessionLocal, engine, get_db
from ecommerce_api.models import Category, Product, Role, User
from ecommerce_api.policy import Principal
from ecommerce_api.security import create_access_token, hash_password

PASSWORD = "Secret@12345"

_sequence = count(1)


@pytest.fixture
def db():
    """Fresh schema and session for every test."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    """Test client whose requests share the test session."""
    from ecommerce_api.main import app

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    """Factory creating users with a known password."""

    def _make_user(role=Role.USER, email=None, is_active=True, first_name="Test"):
        n = next(_sequence)
        user = User(
            email=email or f"user{n}@example.com",
            password=hash_password(PASSWORD),
            first_name=first_name,
            last_name=f"User{n}",
            date_of_birth=date(1990, 1, 1),
            role=role,
            is_active=is_active,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def user(make_user):
    return make_user(first_name="Alice")


@pytest.fixture
def other_user(make_user):
    return make_user(first_name="Bob")


@pytest.fixture
def admin(make_user):
    return make_user(role=Role.ADMIN, first_name="Admin")


def principal_for(user):
    return Principal(id=user.id, role=user.role, email=user.email)


def auth_header(user):
    token = create_access_token(user.id, user.email, user.role.value, user.token_version)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def as_principal():
    """Principal for a user, as the API would resolve it."""
    return principal_for


@pytest.fixture
def headers_for():
    """Authorization headers for a user."""
    return auth_header


@pytest.fixture
def user_headers(user):
    return auth_header(user)


@pytest.fixture
def admin_headers(admin):
    return auth_header(admin)


@pytest.fixture
def category(db):
    category = Category(name="Electronics", slug="electronics", description="Devices")
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


@pytest.fixture
def make_product(db, category):
    """Factory creating active products in the default category."""

    def _make_product(name=None, price="10.00", stock=5, is_active=True, category_id=None):
        n = next(_sequence)
        product = Product(
            name=name or f"Product {n}",
            slug=f"product-{n}",
            description="Test product",
            price=Decimal(price),
            stock=stock,
            is_active=is_active,
            category_id=category_id or category.id,
            images=[],
        )
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make_product


@pytest.fixture
def product(make_product):
    return make_product(name="Phone", price="10.00", stock=5)
