"""ASGI authentication middleware."""

import json
from typing import Any

import jwt
import structlog
from starlette.types import ASGIApp, Receive, Scope, Send

from app.core.config import settings
from app.schemas.response_schema import error_response

logger = structlog.get_logger()

PROTECTED_PREFIX = "/api/"

PUBLIC_API_PATHS: set[str] = {
    "/api/upload",
}


def requires_auth(path: str) -> bool:
    """Only API routes are protected; the upload endpoint and the SPA are public."""
    normalized = path.rstrip("/") or "/"
    if normalized in PUBLIC_API_PATHS:
        return False
    return normalized == "/api" or normalized.startswith(PROTECTED_PREFIX)


class AuthMiddleware:
    """Pure ASGI middleware verifying identity provider session tokens.

    A verified token's ``sub`` claim becomes ``request.state.owner_id``.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        method = scope.get("method", "")
        if method == "OPTIONS" or not requires_auth(scope["path"]):
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers", []))
        auth_header = headers.get(b"authorization", b"").decode()

        if not auth_header.startswith("Bearer "):
            await self._send_error(
                send, 401, "MISSING_TOKEN", "Unauthorized access, please log in."
            )
            return

        token = auth_header[7:]
        auth = settings.auth
        options: dict[str, Any] = {"require": ["exp", "sub"]}

        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                auth.jwt_key.get_secret_value(),
                algorithms=[auth.algorithm],
                issuer=auth.issuer,
                leeway=auth.leeway_seconds,
                options=options,
            )
        except jwt.ExpiredSignatureError:
            await self._send_error(send, 401, "TOKEN_EXPIRED", "Token has expired")
            return
        except jwt.InvalidTokenError:
            logger.info("Rejected session token", path=scope["path"])
            await self._send_error(send, 401, "INVALID_TOKEN", "Invalid token")
            return

        owner_id = payload.get("sub")
        if not isinstance(owner_id, str) or not owner_id:
            await self._send_error(send, 401, "INVALID_TOKEN", "Invalid token subject")
            return

        scope.setdefault("state", {})
        scope["state"]["owner_id"] = owner_id

        await self.app(scope, receive, send)

    @staticmethod
    async def _send_error(send: Send, status: int, code: str, message: str) -> None:
        """Send a JSON error response directly."""
        body = json.dumps(error_response(status, message, code)).encode()

        await send(
            {
                "type": "http.response.start",
                "status": status,
                "headers": [
                    [b"content-type", b"application/json"],
                    [b"content-length", str(len(body)).encode()],
                ],
            }
        )
        await send({"type": "http.response.body", "body": body})
