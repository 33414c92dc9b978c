"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from sqlalchemy.exc import SQLAlchemyError

from app.api.chats.chat_router import router as chat_router
from app.api.chats.user_chats_router import router as user_chats_router
from app.api.common.frontend import create_frontend_app
from app.api.common.upload_router import router as upload_router
from app.core.config import settings
from app.core.database import engine, init_database
from app.core.exceptions import (
    AppException,
    app_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from app.core.middleware import AuthMiddleware
from app.schemas.response_schema import ApiResponse, error_response, success_response

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.app.env,
        port=settings.server.port,
    )
    try:
        await init_database()
        logger.info("Connected to database")
    except (SQLAlchemyError, OSError):
        # Keep serving; storage-backed requests fail through their own path.
        logger.exception("Error connecting to database")
    yield
    await engine.dispose()
    logger.info("Shutting down application")


app = FastAPI(
    title=settings.app.name,
    description="Chat history backend: per-user chats, chat index and upload credentials",
    version=settings.app.version,
    lifespan=lifespan,
    debug=settings.app.debug,
)

# Rate limiter
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.rate_limit.default_limit],
    enabled=settings.rate_limit.enabled,
)
app.state.limiter = limiter


async def rate_limit_exceeded_handler(
    request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """Custom handler for rate limit exceeded errors."""
    return JSONResponse(
        status_code=429,
        content=error_response(429, "Rate limit exceeded", "RATE_LIMIT_EXCEEDED"),
    )


# Exception handlers
app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)  # type: ignore[arg-type]
app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
app.add_exception_handler(Exception, unhandled_exception_handler)

# Middleware (registration order: inner→outer, execution order: outer→inner)
app.add_middleware(AuthMiddleware)
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.server.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", response_model=ApiResponse[dict])
async def health_check() -> dict:
    """Health check endpoint."""
    return success_response({"status": "healthy"})


# Register routers; the frontend mount must stay last.
app.include_router(upload_router)
app.include_router(chat_router)
app.include_router(user_chats_router)
app.mount("/", create_frontend_app(settings.frontend.static_dir), name="frontend")


def run() -> None:
    """Console entry point."""
    uvicorn.run(
        "app.main:app",
        host=settings.server.host,
        port=settings.server.port,
    )
