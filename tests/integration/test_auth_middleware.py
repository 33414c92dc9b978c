"""Integration tests for AuthMiddleware."""

from datetime import timedelta

import jwt
from httpx import AsyncClient

from app.core.middleware import requires_auth
from tests.conftest import make_token


class TestRequiresAuth:
    """Path classification."""

    def test_api_paths_protected(self) -> None:
        assert requires_auth("/api/chats")
        assert requires_auth("/api/chats/abc")
        assert requires_auth("/api/userchats/")

    def test_public_paths(self) -> None:
        assert not requires_auth("/api/upload")
        assert not requires_auth("/")
        assert not requires_auth("/health")
        assert not requires_auth("/chats/abc")
        assert not requires_auth("/docs")


class TestPublicPaths:
    """Public paths are accessible without auth."""

    async def test_health_check(self, async_client: AsyncClient) -> None:
        resp = await async_client.get("/health")
        assert resp.status_code == 200

    async def test_docs(self, async_client: AsyncClient) -> None:
        resp = await async_client.get("/docs")
        assert resp.status_code == 200

    async def test_upload(self, async_client: AsyncClient) -> None:
        resp = await async_client.get("/api/upload")
        assert resp.status_code == 200


class TestProtectedPaths:
    """Protected paths require a verified session token."""

    async def test_without_token(self, async_client: AsyncClient) -> None:
        resp = await async_client.get("/api/userchats")
        assert resp.status_code == 401
        data = resp.json()
        assert data["status"] == 401
        assert data["code"] == "MISSING_TOKEN"

    async def test_with_invalid_token(self, async_client: AsyncClient) -> None:
        resp = await async_client.get(
            "/api/userchats",
            headers={"Authorization": "Bearer invalid.token.here"},
        )
        assert resp.status_code == 401
        assert resp.json()["code"] == "INVALID_TOKEN"

    async def test_with_expired_token(self, async_client: AsyncClient) -> None:
        token = make_token(expires_in=timedelta(minutes=-10))
        resp = await async_client.get(
            "/api/userchats", headers={"Authorization": f"Bearer {token}"}
        )
        assert resp.status_code == 401
        assert resp.json()["code"] == "TOKEN_EXPIRED"

    async def test_with_wrong_signing_key(self, async_client: AsyncClient) -> None:
        token = jwt.encode(
            {"sub": "user_x", "exp": 9999999999},
            "another-signing-key-0123456789abcdef0123",
            algorithm="HS256",
        )
        resp = await async_client.get(
            "/api/userchats", headers={"Authorization": f"Bearer {token}"}
        )
        assert resp.status_code == 401
        assert resp.json()["code"] == "INVALID_TOKEN"

    async def test_token_without_subject(self, async_client: AsyncClient) -> None:
        token = make_token(owner_id="")
        resp = await async_client.get(
            "/api/userchats", headers={"Authorization": f"Bearer {token}"}
        )
        assert resp.status_code == 401
        assert resp.json()["code"] == "INVALID_TOKEN"

    async def test_with_valid_token(self, async_client: AsyncClient) -> None:
        resp = await async_client.get(
            "/api/userchats",
            headers={"Authorization": f"Bearer {make_token()}"},
        )
        assert resp.status_code == 200
