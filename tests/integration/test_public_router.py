"""Integration tests for the upload endpoint and the frontend mount."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.api.common.frontend import create_frontend_app
from app.core.exceptions import AppException, app_exception_handler


class TestUploadCredentials:
    """GET /api/upload."""

    async def test_returns_signed_parameters(self, async_client: AsyncClient) -> None:
        resp = await async_client.get("/api/upload")

        assert resp.status_code == 200
        body = resp.json()
        assert set(body) == {"token", "expire", "signature"}
        assert len(body["token"]) == 36
        assert len(body["signature"]) == 40

    async def test_each_call_gets_a_fresh_token(
        self, async_client: AsyncClient
    ) -> None:
        first = (await async_client.get("/api/upload")).json()
        second = (await async_client.get("/api/upload")).json()
        assert first["token"] != second["token"]


def _frontend_client(static_dir: Path) -> AsyncClient:
    application = FastAPI()
    application.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
    application.mount("/", create_frontend_app(static_dir), name="frontend")
    return AsyncClient(transport=ASGITransport(app=application), base_url="http://test")


@pytest.fixture
async def frontend_client(tmp_path: Path) -> AsyncGenerator[AsyncClient, None]:
    """Serve a tiny frontend build from a temp directory."""
    (tmp_path / "index.html").write_text("<html>shell</html>")
    (tmp_path / "assets").mkdir()
    (tmp_path / "assets" / "app.js").write_text("console.log('app')")
    async with _frontend_client(tmp_path) as client:
        yield client


class TestFrontend:
    """Static mount serving the single-page application."""

    async def test_root_serves_shell(self, frontend_client: AsyncClient) -> None:
        resp = await frontend_client.get("/")
        assert resp.status_code == 200
        assert "shell" in resp.text

    async def test_client_route_serves_shell(
        self, frontend_client: AsyncClient
    ) -> None:
        resp = await frontend_client.get("/dashboard/chats/123")
        assert resp.status_code == 200
        assert "shell" in resp.text

    async def test_asset_served(self, frontend_client: AsyncClient) -> None:
        resp = await frontend_client.get("/assets/app.js")
        assert resp.status_code == 200
        assert "console.log" in resp.text

    async def test_api_paths_do_not_fall_back(
        self, frontend_client: AsyncClient
    ) -> None:
        resp = await frontend_client.get("/api/nothing-here")
        assert resp.status_code == 404
        assert resp.json()["code"] == "NOT_FOUND"

    async def test_missing_build_is_404(self, tmp_path: Path) -> None:
        async with _frontend_client(tmp_path / "missing") as client:
            resp = await client.get("/")
        assert resp.status_code == 404
        assert resp.json()["message"] == "Frontend build not found"


class TestFrontendMountedOnApp:
    """The application's own mount, with no build present in tests."""

    async def test_unknown_api_path_is_404(self, authed_client: AsyncClient) -> None:
        resp = await authed_client.get("/api/nothing-here")
        assert resp.status_code == 404
        assert resp.json()["code"] == "NOT_FOUND"

    async def test_shell_without_build_is_404(self, async_client: AsyncClient) -> None:
        resp = await async_client.get("/")
        assert resp.status_code == 404
        assert resp.json()["message"] == "Frontend build not found"
