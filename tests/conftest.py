"""Pytest configuration and fixtures."""

import os

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("IDENTITY_JWT_KEY", "test-identity-signing-key-0123456789abcdef")
os.environ.setdefault("IDENTITY_JWT_ALGORITHM", "HS256")
os.environ.setdefault("IMAGE_KIT_ENDPOINT", "https://ik.imagekit.io/test")
os.environ.setdefault("IMAGE_KIT_PUBLIC_KEY", "public_test_key")
os.environ.setdefault("IMAGE_KIT_PRIVATE_KEY", "private_test_key")
os.environ.setdefault("STATIC_DIR", "./tests/missing-frontend-build")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from collections.abc import AsyncGenerator  # noqa: E402
from datetime import UTC, datetime, timedelta  # noqa: E402
from typing import Any  # noqa: E402

import jwt  # noqa: E402
import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.core.config import settings  # noqa: E402
from app.core.database import Base  # noqa: E402
from app.models.chat import Chat  # noqa: E402, F401
from app.models.chat_turn import ChatTurn  # noqa: E402, F401
from app.models.user_chat_entry import UserChatEntry  # noqa: E402, F401
from app.models.user_chats import UserChats  # noqa: E402, F401

# --- Test DB (SQLite in-memory) ---

test_engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
test_session_factory = async_sessionmaker(
    test_engine, class_=AsyncSession, expire_on_commit=False
)


@pytest.fixture(autouse=True)
async def setup_db() -> AsyncGenerator[None, None]:
    """Create all tables before each test, drop after."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def override_get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a test database session."""
    async with test_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# --- Identity token helpers ---

OWNER_A = "user_2aAlice"
OWNER_B = "user_2bBob"


def make_token(
    owner_id: str = OWNER_A,
    expires_in: timedelta = timedelta(minutes=5),
    **claims: Any,
) -> str:
    """Sign a session token the way the identity provider would."""
    now = datetime.now(UTC)
    payload: dict[str, Any] = {
        "sub": owner_id,
        "iat": now,
        "exp": now + expires_in,
        **claims,
    }
    return jwt.encode(
        payload,
        settings.auth.jwt_key.get_secret_value(),
        algorithm=settings.auth.algorithm,
    )


def make_auth_headers(owner_id: str = OWNER_A) -> dict[str, str]:
    """Generate Authorization headers with a valid session token."""
    return {"Authorization": f"Bearer {make_token(owner_id)}"}


# --- App override & client fixtures ---


def _get_app():  # type: ignore[no-untyped-def]
    """Import app lazily and apply overrides."""
    from app.core.database import get_async_session as original_dep
    from app.main import app

    app.dependency_overrides[original_dep] = override_get_async_session
    return app


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """Create an unauthenticated async test client."""
    application = _get_app()
    transport = ASGITransport(app=application)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def authed_client() -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client authenticated as OWNER_A."""
    application = _get_app()
    transport = ASGITransport(app=application)
    async with AsyncClient(
        transport=transport, base_url="http://test", headers=make_auth_headers()
    ) as ac:
        yield ac


# --- DB session for tests ---


@pytest.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a raw async session for repository tests."""
    async with test_session_factory() as session:
        yield session
