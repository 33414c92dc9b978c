"""Chat (conversation session) database model."""

from datetime import datetime

from sqlalchemy import DateTime, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base


class Chat(Base):
    """Conversation owned by a single user.

    ``id`` is internal and fixes creation order; ``chat_id`` is the public id.
    """

    __tablename__ = "chats"
    __table_args__ = (Index("ix_chats_owner_id_id", "owner_id", "id"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    chat_id: Mapped[str] = mapped_column(
        String(36), unique=True, nullable=False, index=True
    )
    owner_id: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )
