"""Conversation service: sequences the chat store and the per-user index."""

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    ChatIndexAlreadyExistsError,
    ChatIndexNotFoundError,
    ChatNotFoundError,
    StorageUnavailableError,
)
from app.models.chat import Chat
from app.models.chat_turn import ChatTurn
from app.repositories.chat_repo import ChatRepository
from app.repositories.index_repo import ChatIndexRepository
from app.schemas.chat_schema import (
    AppendResponse,
    ChatResponse,
    ModelTurn,
    TextPart,
    UserTurn,
    make_title,
    turn_adapter,
)
from app.schemas.index_schema import SessionSummary

logger = structlog.get_logger()


def _to_turn(row: ChatTurn) -> UserTurn | ModelTurn:
    data: dict = {"role": row.role, "parts": row.parts}
    if row.img is not None:
        data["img"] = row.img
    return turn_adapter.validate_python(data)


class ConversationService:
    """Creates, reads and extends chats on behalf of one authenticated owner.

    The chat store and the index are written in separate commits. If the
    index write fails after the chat was committed, the chat is still
    reported as created and stays reachable by id; ``reconcile_index``
    restores the missing summaries.
    """

    def __init__(
        self,
        chat_repo: ChatRepository,
        index_repo: ChatIndexRepository,
        session: AsyncSession,
        owner_id: str,
    ) -> None:
        self._chat_repo = chat_repo
        self._index_repo = index_repo
        self._session = session
        self._owner_id = owner_id

    async def create_chat(self, text: str) -> str:
        """Start a chat with ``text`` as the first user turn and return its id."""
        turn = UserTurn(parts=[TextPart(text=text)])
        try:
            chat = await self._chat_repo.create_chat(self._owner_id, [turn])
            await self._session.commit()
        except SQLAlchemyError as exc:
            await self._session.rollback()
            logger.exception("Failed to create chat", owner_id=self._owner_id)
            raise StorageUnavailableError("Error creating chat") from exc

        chat_id = chat.chat_id
        await self._index_summary(SessionSummary(id=chat_id, title=make_title(text)))

        logger.info("Chat created", chat_id=chat_id, owner_id=self._owner_id)
        return chat_id

    async def get_chat(self, chat_id: str) -> ChatResponse:
        """Return a chat with its full history if the caller owns it."""
        try:
            chat = await self._chat_repo.find_chat(chat_id, self._owner_id)
            if chat is None:
                raise ChatNotFoundError("Error fetching chat")
            turns = await self._chat_repo.find_turns(chat.id)
        except SQLAlchemyError as exc:
            logger.exception(
                "Failed to fetch chat", chat_id=chat_id, owner_id=self._owner_id
            )
            raise StorageUnavailableError("Error fetching chat") from exc
        return self._to_response(chat, turns)

    async def list_chats(self) -> list[SessionSummary]:
        """Summaries of the caller's chats in creation order.

        An owner without an index yet simply has no chats listed.
        """
        try:
            index = await self._index_repo.find_by_owner(self._owner_id)
            if index is None:
                return []
            entries = await self._index_repo.find_entries(index.id)
        except SQLAlchemyError as exc:
            logger.exception("Failed to fetch user chats", owner_id=self._owner_id)
            raise StorageUnavailableError("Error fetching userchats") from exc
        return [SessionSummary(id=entry.chat_id, title=entry.title) for entry in entries]

    async def append_turns(
        self,
        chat_id: str,
        answer: str,
        question: str | None = None,
        img: str | None = None,
    ) -> AppendResponse:
        """Record an exchange: the optional question, then the answer."""
        turns: list[UserTurn | ModelTurn] = []
        if question is not None:
            turns.append(UserTurn(parts=[TextPart(text=question)], img=img))
        turns.append(ModelTurn(parts=[TextPart(text=answer)]))

        try:
            chat = await self._chat_repo.append_turns(chat_id, self._owner_id, turns)
            if chat is None:
                raise ChatNotFoundError("Error adding conversations")
            await self._session.commit()
        except SQLAlchemyError as exc:
            await self._session.rollback()
            logger.exception(
                "Failed to append turns", chat_id=chat_id, owner_id=self._owner_id
            )
            raise StorageUnavailableError("Error adding conversations") from exc

        logger.info("Turns appended", chat_id=chat_id, count=len(turns))
        return AppendResponse(chat_id=chat_id, appended=len(turns))

    async def reconcile_index(self) -> int:
        """Add index summaries for chats the index is missing.

        Safe to repeat: chats already listed are skipped. Returns the number
        of summaries added.
        """
        try:
            added = await self._reconcile()
            await self._session.commit()
        except (SQLAlchemyError, ChatIndexAlreadyExistsError) as exc:
            await self._session.rollback()
            logger.exception("Failed to reconcile chat index", owner_id=self._owner_id)
            raise StorageUnavailableError("Error reconciling userchats") from exc
        if added:
            logger.info("Chat index reconciled", owner_id=self._owner_id, added=added)
        return added

    async def _reconcile(self) -> int:
        chats = await self._chat_repo.find_chats_by_owner(self._owner_id)
        index = await self._index_repo.find_by_owner(self._owner_id)
        listed: set[str] = set()
        if index is not None:
            listed = {e.chat_id for e in await self._index_repo.find_entries(index.id)}

        added = 0
        for chat in chats:
            if chat.chat_id in listed:
                continue
            text = await self._chat_repo.find_first_user_text(chat.id) or ""
            summary = SessionSummary(id=chat.chat_id, title=make_title(text))
            if index is None:
                index = await self._index_repo.create_index(self._owner_id, summary)
            else:
                await self._index_repo.add_summary(self._owner_id, summary)
            added += 1
        return added

    async def _index_summary(self, summary: SessionSummary) -> None:
        """Add a new chat to the owner's index, creating the index lazily.

        Failures are logged and swallowed; the chat itself is already stored.
        """
        try:
            created = False
            if await self._index_repo.find_by_owner(self._owner_id) is None:
                try:
                    await self._index_repo.create_index(self._owner_id, summary)
                    created = True
                except ChatIndexAlreadyExistsError:
                    # Another request created the index in between.
                    pass
            if not created:
                await self._index_repo.add_summary(self._owner_id, summary)
            await self._session.commit()
        except (SQLAlchemyError, ChatIndexNotFoundError):
            await self._session.rollback()
            logger.exception(
                "Failed to index chat",
                chat_id=summary.id,
                owner_id=self._owner_id,
            )

    def _to_response(self, chat: Chat, turns: list[ChatTurn]) -> ChatResponse:
        return ChatResponse(
            id=chat.chat_id,
            owner_id=chat.owner_id,
            history=[_to_turn(row) for row in turns],
            created_at=chat.created_at,
            updated_at=chat.updated_at,
        )
