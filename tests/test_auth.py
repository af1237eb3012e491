"""Tests for registration, login, logout and token handling."""

from datetime import datetime, timedelta, timezone

from jose import jwt
from sqlmodel import select

from gallery.core.auth import create_access_token, decode_access_token
from gallery.core.config import get_settings
from gallery.core.security import hash_password, verify_password
from gallery.models.user import RevokedToken, User


def register(client, **overrides):
    payload = {"username": "newcollector", "email": "New@Example.com", "password": "s3cret!"}
    payload.update(overrides)
    return client.post("/auth/register", json=payload)


class TestRegister:
    def test_creates_user_role_account(self, client, session):
        response = register(client)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["username"] == "newcollector"
        assert data["email"] == "new@example.com"
        assert data["role"] == "USER"
        assert "passwordHash" not in data

        user = session.exec(select(User).where(User.email == "new@example.com")).one()
        assert str(user.id) == data["id"]
        assert user.password_hash != "s3cret!"

    def test_duplicate_email(self, client, user):
        response = register(client, email="buyer@example.com")

        assert response.status_code == 409
        assert response.json()["message"] == "User with this email already exists"

    def test_duplicate_username(self, client, user):
        response = register(client, username="buyer")

        assert response.status_code == 409
        assert response.json()["message"] == "Username already taken"

    def test_validation(self, client):
        assert register(client, password="short").status_code == 400
        assert register(client, email="not-an-email").status_code == 400
        assert register(client, username="ab").status_code == 400

    def test_password_limit_counts_utf8_bytes(self, client):
        # 40 chars but 80 bytes
        response = register(client, username="amani", email="amani@example.com", password="é" * 40)

        assert response.status_code == 400
        assert "password" in response.json()["message"]

    def test_multibyte_password_within_limit(self, client):
        password = "é" * 36  # exactly 72 bytes
        created = register(client, username="amani", email="amani@example.com", password=password)
        assert created.status_code == 201

        response = client.post(
            "/auth/login", json={"email": "amani@example.com", "password": password}
        )
        assert response.status_code == 200


class TestLogin:
    def test_returns_token_and_user(self, client, user):
        response = client.post(
            "/auth/login", json={"email": "BUYER@example.com", "password": "buyerpass"}
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["tokenType"] == "bearer"
        assert data["user"]["username"] == "buyer"

        claims = decode_access_token(data["accessToken"])
        assert claims["sub"] == str(user.id)
        assert claims["role"] == "USER"
        assert claims["jti"]

    def test_wrong_password(self, client, user):
        response = client.post("/auth/login", json={"email": "buyer@example.com", "password": "nope"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    def test_unknown_email(self, client):
        response = client.post("/auth/login", json={"email": "ghost@example.com", "password": "x"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    def test_oversized_multibyte_password_rejected(self, client, user):
        response = client.post(
            "/auth/login", json={"email": "buyer@example.com", "password": "é" * 40}
        )

        assert response.status_code == 400
        assert "password" in response.json()["message"]


class TestTokens:
    def test_me(self, client, user_headers):
        response = client.get("/users/me", headers=user_headers)

        assert response.status_code == 200
        assert response.json()["data"]["email"] == "buyer@example.com"

    def test_me_requires_auth(self, client):
        response = client.get("/users/me")

        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Authentication required"}

    def test_garbage_token(self, client):
        response = client.get("/users/me", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401

    def test_expired_token(self, client, user):
        settings = get_settings()
        token = jwt.encode(
            {
                "sub": str(user.id),
                "jti": "expired",
                "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
            },
            settings.JWT_SECRET,
            algorithm=settings.JWT_ALG,
        )

        response = client.get("/users/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_logout_revokes_token(self, client, user_headers):
        response = client.post("/auth/logout", headers=user_headers)

        assert response.status_code == 200
        assert client.get("/users/me", headers=user_headers).status_code == 401

    def test_logout_purges_expired_revocations(self, client, session, user, user_headers):
        session.add(
            RevokedToken(
                jti="old",
                user_id=user.id,
                expires_at=datetime.now(timezone.utc) - timedelta(days=1),
            )
        )
        session.commit()

        client.post("/auth/logout", headers=user_headers)

        session.expire_all()
        assert session.get(RevokedToken, "old") is None
        assert len(session.exec(select(RevokedToken)).all()) == 1

    def test_logout_requires_auth(self, client):
        assert client.post("/auth/logout").status_code == 401

    def test_deleted_user_token_rejected(self, client, session, user, user_headers):
        session.delete(user)
        session.commit()

        assert client.get("/users/me", headers=user_headers).status_code == 401


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = hash_password("correct horse")

        assert hashed != "correct horse"
        assert verify_password("correct horse", hashed)
        assert not verify_password("wrong horse", hashed)

    def test_malformed_hash(self):
        assert verify_password("anything", "not-a-bcrypt-hash") is False

    def test_token_expiry_is_returned(self, user):
        _, expires_at = create_access_token(user)

        assert expires_at > datetime.now(timezone.utc)
