"""Single-page application shell and static assets."""

from pathlib import Path

from starlette.exceptions import HTTPException
from starlette.responses import Response
from starlette.staticfiles import StaticFiles
from starlette.types import Scope

from app.core.exceptions import RouteNotFoundError


class SinglePageApp(StaticFiles):
    """Serve the frontend build, answering client-side routes with the shell.

    Paths under ``api/`` never fall back to the shell, so unknown API routes
    stay 404.
    """

    async def get_response(self, path: str, scope: Scope) -> Response:
        if path == "api" or path.startswith("api/"):
            raise RouteNotFoundError
        try:
            return await super().get_response(path, scope)
        except HTTPException as exc:
            if exc.status_code != 404:
                raise
        try:
            return await super().get_response("index.html", scope)
        except HTTPException as exc:
            if exc.status_code != 404:
                raise
            raise RouteNotFoundError(message="Frontend build not found") from exc


def create_frontend_app(static_dir: Path) -> SinglePageApp:
    """Static app for ``static_dir``; the directory may not exist yet."""
    return SinglePageApp(directory=static_dir, html=True, check_dir=False)
