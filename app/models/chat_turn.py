"""Chat turn database model."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base


class ChatTurn(Base):
    """One message in a chat history; row id order is transcript order."""

    __tablename__ = "chat_turns"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    chat_pk: Mapped[int] = mapped_column(
        ForeignKey("chats.id"), nullable=False, index=True
    )
    role: Mapped[str] = mapped_column(String(10), nullable=False)
    parts: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False)
    img: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
