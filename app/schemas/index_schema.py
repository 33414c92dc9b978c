"""Per-user chat index schemas."""

from pydantic import BaseModel, ConfigDict, Field


class SessionSummary(BaseModel):
    """Lightweight pointer to a chat, as listed in the user's index."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str = Field(..., max_length=40)


class ReconcileResponse(BaseModel):
    """Result of rebuilding a user's index from stored chats."""

    model_config = ConfigDict(frozen=True)

    added: int
