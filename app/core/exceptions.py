"""Application exception classes and handlers."""

import structlog
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.schemas.response_schema import error_response

logger = structlog.get_logger()


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, code: str, status_code: int = 400) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        super().__init__(message)


# --- Authentication (401) ---


class AuthenticationError(AppException):
    """Base authentication error."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message=message, code="AUTHENTICATION_ERROR", status_code=401)


# --- Not Found (404) ---


class ChatIndexNotFoundError(AppException):
    """The user has no chat index yet."""

    def __init__(self) -> None:
        super().__init__(
            message="Chat index not found",
            code="CHAT_INDEX_NOT_FOUND",
            status_code=404,
        )


class RouteNotFoundError(AppException):
    """No API route or static asset matches the path."""

    def __init__(self, message: str = "Not found") -> None:
        super().__init__(message=message, code="NOT_FOUND", status_code=404)


# --- Conflict (409) ---


class ChatIndexAlreadyExistsError(AppException):
    """A chat index already exists for this user."""

    def __init__(self) -> None:
        super().__init__(
            message="Chat index already exists",
            code="CHAT_INDEX_ALREADY_EXISTS",
            status_code=409,
        )


# --- Server (500) ---


class StorageUnavailableError(AppException):
    """Durable store failed; detail stays in the server log."""

    def __init__(self, message: str = "Storage unavailable") -> None:
        super().__init__(
            message=message,
            code="STORAGE_UNAVAILABLE",
            status_code=500,
        )


class ChatNotFoundError(StorageUnavailableError):
    """Chat does not exist or belongs to someone else.

    Rendered exactly like the storage failure of the same operation so
    callers cannot tell which chat ids exist.
    """


# --- Exception Handlers ---


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Central exception handler for AppException."""
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(exc.status_code, exc.message, exc.code),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report request validation failures as 400 without echoing input."""
    errors = exc.errors()
    if any(err.get("type") == "missing" for err in errors):
        message = "Missing required fields."
    else:
        message = "; ".join(str(err.get("msg", "Invalid value")) for err in errors)
    return JSONResponse(
        status_code=400,
        content=error_response(400, message or "Invalid request", "VALIDATION_ERROR"),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected errors and hide their detail from the caller."""
    logger.exception(
        "Unhandled error",
        method=request.method,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=500,
        content=error_response(500, "Internal server error", "INTERNAL_ERROR"),
    )
