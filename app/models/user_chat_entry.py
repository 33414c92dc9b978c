"""Chat summary entry within a user's chat index."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base


class UserChatEntry(Base):
    """Summary pointing at a chat by its public id. Never updated."""

    __tablename__ = "user_chat_entries"
    __table_args__ = (
        UniqueConstraint("index_id", "chat_id", name="uq_user_chat_entries_index_chat"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    index_id: Mapped[int] = mapped_column(
        ForeignKey("user_chats.id"), nullable=False, index=True
    )
    chat_id: Mapped[str] = mapped_column(String(36), nullable=False)
    title: Mapped[str] = mapped_column(String(40), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
