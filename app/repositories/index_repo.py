"""Chat index repository: the per-user directory of chat summaries."""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ChatIndexAlreadyExistsError, ChatIndexNotFoundError
from app.models.user_chat_entry import UserChatEntry
from app.models.user_chats import UserChats
from app.schemas.index_schema import SessionSummary


class ChatIndexRepository:
    """Encapsulates user chat index queries."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_owner(self, owner_id: str) -> UserChats | None:
        """Find the index document of an owner."""
        result = await self._session.execute(
            select(UserChats).where(UserChats.owner_id == owner_id)
        )
        return result.scalar_one_or_none()

    async def find_entries(self, index_id: int) -> list[UserChatEntry]:
        """Summaries of an index in the order they were added."""
        result = await self._session.execute(
            select(UserChatEntry)
            .where(UserChatEntry.index_id == index_id)
            .order_by(UserChatEntry.id.asc())
        )
        return list(result.scalars().all())

    async def create_index(
        self, owner_id: str, first_summary: SessionSummary
    ) -> UserChats:
        """Create an owner's index holding one summary.

        Raises ChatIndexAlreadyExistsError if the owner already has one,
        including when a concurrent request created it first. In that case
        the pending transaction is rolled back, so callers commit earlier
        work before creating an index.
        """
        if await self.find_by_owner(owner_id) is not None:
            raise ChatIndexAlreadyExistsError
        index = UserChats(owner_id=owner_id)
        self._session.add(index)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            await self._session.rollback()
            raise ChatIndexAlreadyExistsError from exc
        self._session.add(self._entry(index.id, first_summary))
        await self._session.flush()
        return index

    async def add_summary(
        self, owner_id: str, summary: SessionSummary
    ) -> UserChatEntry:
        """Append a summary to an existing index."""
        index = await self.find_by_owner(owner_id)
        if index is None:
            raise ChatIndexNotFoundError
        entry = self._entry(index.id, summary)
        self._session.add(entry)
        await self._session.flush()
        return entry

    @staticmethod
    def _entry(index_id: int, summary: SessionSummary) -> UserChatEntry:
        return UserChatEntry(index_id=index_id, chat_id=summary.id, title=summary.title)
