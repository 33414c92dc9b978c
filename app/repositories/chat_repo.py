"""Chat repository: the session store for chats and their turns."""

import uuid
from collections.abc import Sequence

from sqlalchemy import and_, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.chat import Chat
from app.models.chat_turn import ChatTurn
from app.schemas.chat_schema import ModelTurn, UserTurn


def _turn_row(chat_pk: int, turn: UserTurn | ModelTurn) -> ChatTurn:
    return ChatTurn(
        chat_pk=chat_pk,
        role=turn.role,
        parts=[part.model_dump() for part in turn.parts],
        img=turn.img if isinstance(turn, UserTurn) else None,
    )


class ChatRepository:
    """Encapsulates chat and turn database queries.

    Every read and write that takes an ``owner_id`` is scoped to it, so a
    chat owned by someone else looks exactly like a missing one.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create_chat(
        self,
        owner_id: str,
        turns: Sequence[UserTurn | ModelTurn],
    ) -> Chat:
        """Create a chat whose history starts with ``turns``."""
        if not turns:
            raise ValueError("A chat needs at least one turn")
        chat = Chat(chat_id=str(uuid.uuid4()), owner_id=owner_id)
        self._session.add(chat)
        await self._session.flush()
        self._session.add_all([_turn_row(chat.id, turn) for turn in turns])
        await self._session.flush()
        await self._session.refresh(chat)
        return chat

    async def find_chat(self, chat_id: str, owner_id: str) -> Chat | None:
        """Find a chat by public id, only if ``owner_id`` owns it."""
        result = await self._session.execute(
            select(Chat).where(
                and_(Chat.chat_id == chat_id, Chat.owner_id == owner_id)
            )
        )
        return result.scalar_one_or_none()

    async def find_turns(self, chat_pk: int) -> list[ChatTurn]:
        """Retrieve a chat's history in chronological order."""
        result = await self._session.execute(
            select(ChatTurn)
            .where(ChatTurn.chat_pk == chat_pk)
            .order_by(ChatTurn.id.asc())
        )
        return list(result.scalars().all())

    async def append_turns(
        self,
        chat_id: str,
        owner_id: str,
        turns: Sequence[UserTurn | ModelTurn],
    ) -> Chat | None:
        """Append ``turns`` in order to the end of an owned chat's history.

        Returns ``None`` when the chat is missing or not owned.
        """
        chat = await self.find_chat(chat_id, owner_id)
        if chat is None:
            return None
        self._session.add_all([_turn_row(chat.id, turn) for turn in turns])
        await self._session.execute(
            update(Chat)
            .where(Chat.id == chat.id)
            .values(updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        await self._session.flush()
        return chat

    async def find_chats_by_owner(self, owner_id: str) -> list[Chat]:
        """All chats of an owner in creation order."""
        result = await self._session.execute(
            select(Chat).where(Chat.owner_id == owner_id).order_by(Chat.id.asc())
        )
        return list(result.scalars().all())

    async def find_owner_ids(self) -> list[str]:
        """Distinct owners that have at least one chat."""
        result = await self._session.execute(
            select(Chat.owner_id).distinct().order_by(Chat.owner_id)
        )
        return list(result.scalars().all())

    async def find_first_user_text(self, chat_pk: int) -> str | None:
        """Text of the first part of the chat's earliest user turn."""
        result = await self._session.execute(
            select(ChatTurn.parts)
            .where(and_(ChatTurn.chat_pk == chat_pk, ChatTurn.role == "user"))
            .order_by(ChatTurn.id.asc())
            .limit(1)
        )
        parts = result.scalar_one_or_none()
        if not parts:
            return None
        return str(parts[0].get("text", ""))
