"""
Session-cookie authentication: register, login, logout, me and admin bootstrap
"""
from datetime import timedelta
from uuid import uuid4

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy import func, select

from core.auth import AuthenticatedPrincipal, principal_from_token
from core.config import settings
from core.utils.auth.jwt_auth import JWTManager
from main import app
from models.user import User, UserRole, UserStatus

MEMBER_PASSWORD = "member-secret"


def client_with_token(token: str) -> AsyncClient:
    return AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        cookies={settings.SESSION_COOKIE_NAME: token},
    )


class TestRegisterAndLogin:

    async def test_register_sets_session_cookie(self, client):
        response = await client.post("/auth/register", json={
            "name": "João Lima",
            "email": "Joao@Example.com",
            "password": "segredo123",
        })

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["email"] == "joao@example.com"
        assert data["role"] == UserRole.USER

        token = response.cookies.get(settings.SESSION_COOKIE_NAME)
        assert token
        assert "httponly" in response.headers["set-cookie"].lower()

        async with client_with_token(token) as session_client:
            me = await session_client.get("/auth/me")
        assert me.status_code == 200
        assert me.json()["data"]["name"] == "João Lima"

    async def test_duplicate_email_conflicts(self, client, member_user):
        response = await client.post("/auth/register", json={
            "name": "Outra Maria",
            "email": "MEMBER@example.com",
            "password": "segredo123",
        })
        assert response.status_code == 409

    @pytest.mark.parametrize("payload", [
        {"name": "A", "email": "not-an-email", "password": "segredo123"},
        {"name": "A", "email": "a@example.com", "password": "123"},
        {"email": "a@example.com", "password": "segredo123"},
    ])
    async def test_invalid_registration(self, client, payload):
        response = await client.post("/auth/register", json=payload)
        assert response.status_code == 400
        assert response.json()["success"] is False

    async def test_login(self, client, member_user):
        response = await client.post("/auth/login", json={
            "email": member_user.email,
            "password": MEMBER_PASSWORD,
        })

        assert response.status_code == 200
        assert response.json()["data"]["id"] == str(member_user.id)
        assert response.cookies.get(settings.SESSION_COOKIE_NAME)

    async def test_wrong_password(self, client, member_user):
        response = await client.post("/auth/login", json={
            "email": member_user.email,
            "password": "wrong",
        })
        assert response.status_code == 401
        assert settings.SESSION_COOKIE_NAME not in response.cookies

    async def test_unknown_email(self, client):
        response = await client.post("/auth/login", json={
            "email": "nobody@example.com",
            "password": "whatever",
        })
        assert response.status_code == 401

    async def test_banned_user_cannot_login(self, client, db_session, member_user):
        member_user.status = UserStatus.BANNED
        await db_session.commit()

        response = await client.post("/auth/login", json={
            "email": member_user.email,
            "password": MEMBER_PASSWORD,
        })
        assert response.status_code == 403

    async def test_logout_clears_cookie(self, member_client):
        response = await member_client.post("/auth/logout")

        assert response.status_code == 200
        set_cookie = response.headers["set-cookie"].lower()
        assert settings.SESSION_COOKIE_NAME in set_cookie
        assert "max-age=0" in set_cookie


class TestMe:

    async def test_anonymous(self, client):
        response = await client.get("/auth/me")
        assert response.status_code == 401
        assert response.json()["error_code"] == "AUTH_ERROR"

    async def test_garbage_cookie_is_anonymous(self, db_engine):
        async with client_with_token("not-a-jwt") as bad_client:
            response = await bad_client.get("/auth/me")
        assert response.status_code == 401

    async def test_member(self, member_client, member_user):
        response = await member_client.get("/auth/me")
        data = response.json()["data"]
        assert data == {
            "id": str(member_user.id),
            "email": member_user.email,
            "name": "Maria Souza",
            "role": UserRole.USER,
        }


class TestDefaultAdmin:

    async def test_init_creates_admin_once(self, client, db_session):
        first = await client.post("/auth/init")
        second = await client.post("/auth/init")

        assert first.json()["data"] == {"created": True, "email": settings.DEFAULT_ADMIN_EMAIL}
        assert second.json()["data"] == {"created": False}

        result = await db_session.execute(
            select(func.count()).select_from(User).where(User.role == UserRole.ADMIN)
        )
        assert result.scalar_one() == 1

    async def test_init_is_noop_with_existing_admin(self, client, admin_user):
        response = await client.post("/auth/init")
        assert response.json()["data"]["created"] is False

    async def test_default_admin_can_login(self, client):
        await client.post("/auth/init")
        response = await client.post("/auth/login", json={
            "email": settings.DEFAULT_ADMIN_EMAIL,
            "password": settings.DEFAULT_ADMIN_PASSWORD,
        })
        assert response.status_code == 200
        assert response.json()["data"]["role"] == UserRole.ADMIN

    async def test_init_never_promotes_existing_account(self, client, db_session):
        registered = await client.post("/auth/register", json={
            "name": "Someone",
            "email": settings.DEFAULT_ADMIN_EMAIL,
            "password": "chosen-by-them",
        })
        assert registered.status_code == 201

        response = await client.post("/auth/init")
        assert response.json()["data"] == {"created": False}

        login = await client.post("/auth/login", json={
            "email": settings.DEFAULT_ADMIN_EMAIL,
            "password": "chosen-by-them",
        })
        assert login.json()["data"]["role"] == UserRole.USER

        result = await db_session.execute(
            select(func.count()).select_from(User).where(User.role == UserRole.ADMIN)
        )
        assert result.scalar_one() == 0


class TestSessionTokens:

    def principal(self) -> AuthenticatedPrincipal:
        return AuthenticatedPrincipal(user_id=uuid4(), email="a@example.com", name="A", role=UserRole.ADMIN)

    def test_round_trip(self):
        principal = self.principal()
        token = JWTManager().create_session_token(principal.to_claims())
        assert principal_from_token(token) == principal
        assert principal_from_token(token).is_admin

    def test_expired_token(self):
        token = JWTManager().create_session_token(self.principal().to_claims(), timedelta(seconds=-1))
        assert principal_from_token(token) is None

    def test_foreign_signature(self):
        token = JWTManager(secret_key="someone-else").create_session_token(self.principal().to_claims())
        assert principal_from_token(token) is None

    def test_missing_token(self):
        assert principal_from_token(None) is None
        assert principal_from_token("") is None
