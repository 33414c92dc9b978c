"""Global dependencies for the application."""

from functools import lru_cache

from fastapi import Depends, Request
from imagekitio import ImageKit
from pydantic import BaseModel, ConfigDict
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import get_async_session
from app.core.exceptions import AuthenticationError
from app.repositories.chat_repo import ChatRepository
from app.repositories.index_repo import ChatIndexRepository
from app.services.conversation_service import ConversationService
from app.services.upload_service import UploadCredentialService


class CurrentUser(BaseModel):
    """Authenticated caller extracted from request state."""

    model_config = ConfigDict(frozen=True)

    id: str


def get_current_user(request: Request) -> CurrentUser:
    """Extract the verified owner id populated by AuthMiddleware."""
    state = getattr(request, "state", None)
    owner_id = getattr(state, "owner_id", None) if state else None
    if not owner_id:
        raise AuthenticationError(message="Not authenticated")
    return CurrentUser(id=owner_id)


@lru_cache
def get_upload_service() -> UploadCredentialService:
    """Shared upload credential issuer, built once per process."""
    client = ImageKit(
        private_key=settings.media.private_key.get_secret_value(),
        public_key=settings.media.public_key,
        url_endpoint=settings.media.url_endpoint,
    )
    return UploadCredentialService(
        client=client,
        ttl_seconds=settings.media.upload_token_ttl_seconds,
    )


def get_chat_repository(
    session: AsyncSession = Depends(get_async_session),
) -> ChatRepository:
    """Get ChatRepository bound to the current session."""
    return ChatRepository(session)


def get_index_repository(
    session: AsyncSession = Depends(get_async_session),
) -> ChatIndexRepository:
    """Get ChatIndexRepository bound to the current session."""
    return ChatIndexRepository(session)


def get_conversation_service(
    chat_repo: ChatRepository = Depends(get_chat_repository),
    index_repo: ChatIndexRepository = Depends(get_index_repository),
    session: AsyncSession = Depends(get_async_session),
    current_user: CurrentUser = Depends(get_current_user),
) -> ConversationService:
    """Get ConversationService for the authenticated user."""
    return ConversationService(
        chat_repo=chat_repo,
        index_repo=index_repo,
        session=session,
        owner_id=current_user.id,
    )
