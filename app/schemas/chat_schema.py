"""Chat document, turn and request schemas."""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    field_validator,
    model_validator,
)

TITLE_MAX_LENGTH = 40


class TextPart(BaseModel):
    """Text fragment of a turn."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    text: str


class UserTurn(BaseModel):
    """Human input, optionally carrying an uploaded image reference."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    role: Literal["user"] = "user"
    parts: list[TextPart] = Field(..., min_length=1)
    img: str | None = None


class ModelTurn(BaseModel):
    """Generated output. Images are not allowed here."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    role: Literal["model"] = "model"
    parts: list[TextPart] = Field(..., min_length=1)


Turn = Annotated[UserTurn | ModelTurn, Field(discriminator="role")]

turn_adapter: TypeAdapter[UserTurn | ModelTurn] = TypeAdapter(Turn)


class CreateChatRequest(BaseModel):
    """Body of POST /api/chats."""

    text: str = Field(..., min_length=1)


class AppendTurnsRequest(BaseModel):
    """Body of PUT /api/chats/{id}.

    ``question`` is omitted (or empty) when only a generated continuation is
    recorded. An empty ``img`` means no image.
    """

    question: str | None = None
    answer: str = Field(..., min_length=1)
    img: str | None = None

    @field_validator("question", "img", mode="before")
    @classmethod
    def empty_as_absent(cls, value: object) -> object:
        return None if value == "" else value

    @model_validator(mode="after")
    def image_requires_question(self) -> "AppendTurnsRequest":
        if self.img is not None and self.question is None:
            raise ValueError("img can only be attached together with a question")
        return self


class ChatResponse(BaseModel):
    """Full chat document with its history."""

    model_config = ConfigDict(frozen=True)

    id: str
    owner_id: str
    history: list[Turn]
    created_at: datetime
    updated_at: datetime


class AppendResponse(BaseModel):
    """Acknowledgement of an append."""

    model_config = ConfigDict(frozen=True)

    chat_id: str
    appended: int


def make_title(text: str) -> str:
    """Derive a chat title from the first user message."""
    return text[:TITLE_MAX_LENGTH]
