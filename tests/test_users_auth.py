"""Tests for registration, login, token checks and user management."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from ecommerce_api.config import DEFAULT_JWT_SECRET, Settings, settings
from ecommerce_api.security import hash_password, verify_password
from conftest import PASSWORD


REGISTRATION = {
    "firstName": "Carol",
    "lastName": "Smith",
    "dateOfBirth": "1992-03-04",
    "email": "Carol@Example.com",
    "password": "Str0ng-pass",
}


class TestRegister:
    def test_register_returns_user_and_token(self, client):
        response = client.post("/api/auth/register", json=REGISTRATION)
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["user"]["email"] == "carol@example.com"
        assert data["user"]["role"] == "USER"
        assert "password" not in data["user"]

        me = client.get(
            f"/api/users/{data['user']['id']}",
            headers={"Authorization": f"Bearer {data['token']}"},
        )
        assert me.status_code == 200

    def test_duplicate_email_conflicts(self, client):
        client.post("/api/auth/register", json=REGISTRATION)
        response = client.post("/api/auth/register", json={**REGISTRATION, "email": "carol@example.com"})
        assert response.status_code == 409

    def test_short_password(self, client):
        response = client.post("/api/auth/register", json={**REGISTRATION, "password": "short"})
        assert response.status_code == 400

    def test_invalid_email(self, client):
        response = client.post("/api/auth/register", json={**REGISTRATION, "email": "not-an-email"})
        assert response.status_code == 400


class TestLogin:
    def test_login_success(self, client, user):
        response = client.post("/api/auth/login", json={"email": user.email, "password": PASSWORD})
        assert response.status_code == 200
        assert response.json()["data"]["user"]["id"] == user.id

    @pytest.mark.parametrize("email,password", [
        ("nobody@example.com", PASSWORD),
        (None, "wrong-password"),
    ])
    def test_bad_credentials(self, client, user, email, password):
        response = client.post("/api/auth/login", json={"email": email or user.email, "password": password})
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"

    def test_blocked_user_cannot_login(self, client, make_user):
        blocked = make_user(is_active=False)
        response = client.post("/api/auth/login", json={"email": blocked.email, "password": PASSWORD})
        assert response.status_code == 401

    def test_login_revokes_previous_tokens(self, client, user, user_headers):
        assert client.get(f"/api/users/{user.id}", headers=user_headers).status_code == 200

        login = client.post("/api/auth/login", json={"email": user.email, "password": PASSWORD})
        fresh = {"Authorization": f"Bearer {login.json()['data']['token']}"}

        assert client.get(f"/api/users/{user.id}", headers=user_headers).status_code == 401
        assert client.get(f"/api/users/{user.id}", headers=fresh).status_code == 200


class TestTokens:
    def test_expired_token(self, client, user):
        past = datetime.now(timezone.utc) - timedelta(hours=2)
        token = jwt.encode(
            {"sub": user.id, "ver": 0, "iat": past, "exp": past + timedelta(minutes=5)},
            settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
        )
        response = client.get(f"/api/users/{user.id}", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.json()["message"] == "Token has expired"

    def test_token_of_blocked_user(self, client, db, user, user_headers):
        user.is_active = False
        db.commit()
        response = client.get(f"/api/users/{user.id}", headers=user_headers)
        assert response.status_code == 401

    def test_password_hashing(self):
        hashed = hash_password("secret-value")
        assert hashed != "secret-value"
        assert verify_password(hashed, "secret-value")
        assert not verify_password(hashed, "other-value")
        assert not verify_password("not-a-hash", "secret-value")


class TestStartupConfiguration:
    def test_default_secret_refused_in_production(self):
        with pytest.raises(RuntimeError):
            Settings(ENVIRONMENT="production", JWT_SECRET=DEFAULT_JWT_SECRET).validate_for_startup()

    def test_custom_secret_accepted(self):
        Settings(ENVIRONMENT="production", JWT_SECRET="a-real-secret").validate_for_startup()


class TestUsers:
    def test_admin_lists_users(self, client, user, admin, admin_headers):
        response = client.get("/api/users", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["pagination"]["total"] == 2

    def test_user_cannot_list(self, client, user_headers):
        assert client.get("/api/users", headers=user_headers).status_code == 403

    def test_cannot_read_other_user(self, client, other_user, user_headers):
        assert client.get(f"/api/users/{other_user.id}", headers=user_headers).status_code == 403

    def test_update_self(self, client, user, user_headers):
        response = client.patch(
            f"/api/users/{user.id}", json={"firstName": "Alicia", "middleName": "M"}, headers=user_headers
        )
        assert response.status_code == 200
        assert response.json()["data"]["firstName"] == "Alicia"
        assert response.json()["data"]["middleName"] == "M"

    def test_update_email_taken(self, client, user, other_user, user_headers):
        response = client.patch(f"/api/users/{user.id}", json={"email": other_user.email}, headers=user_headers)
        assert response.status_code == 409

    def test_toggle_block(self, client, user, admin_headers):
        response = client.patch(f"/api/users/{user.id}/block", headers=admin_headers)
        assert response.json()["data"]["isActive"] is False
        assert response.json()["message"] == "User blocked"

        response = client.patch(f"/api/users/{user.id}/block", headers=admin_headers)
        assert response.json()["data"]["isActive"] is True

    def test_admin_deletes_user_without_orders(self, client, other_user, admin_headers):
        response = client.delete(f"/api/users/{other_user.id}", headers=admin_headers)
        assert response.status_code == 200
        assert client.get(f"/api/users/{other_user.id}", headers=admin_headers).status_code == 404

    def test_user_with_orders_is_kept(self, client, user, user_headers, admin_headers, product):
        client.post("/api/orders", json={"items": [{"productId": product.id, "quantity": 1}]}, headers=user_headers)
        response = client.delete(f"/api/users/{user.id}", headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["error"]["name"] == "InvalidStateError"

    def test_user_cannot_delete(self, client, user, user_headers):
        assert client.delete(f"/api/users/{user.id}", headers=user_headers).status_code == 403
