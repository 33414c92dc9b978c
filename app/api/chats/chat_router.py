"""Chat API router: create, read and extend chats."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.dependencies import get_conversation_service, get_current_user
from app.schemas.chat_schema import (
    AppendResponse,
    AppendTurnsRequest,
    ChatResponse,
    CreateChatRequest,
)
from app.schemas.response_schema import ApiResponse, success_response
from app.services.conversation_service import ConversationService

router = APIRouter(
    prefix="/api/chats",
    tags=["chats"],
    dependencies=[Depends(get_current_user)],
)

ConversationServiceDep = Annotated[
    ConversationService, Depends(get_conversation_service)
]


@router.post(
    "",
    response_model=ApiResponse[str],
    status_code=status.HTTP_201_CREATED,
)
async def create_chat(
    body: CreateChatRequest,
    service: ConversationServiceDep,
) -> dict:
    """Start a chat from the first user message; returns the chat id."""
    chat_id = await service.create_chat(body.text)
    return success_response(chat_id, status=201, message="Chat created")


@router.get("/{chat_id}", response_model=ApiResponse[ChatResponse])
async def get_chat(
    chat_id: str,
    service: ConversationServiceDep,
) -> dict:
    """Fetch a chat and its history."""
    result = await service.get_chat(chat_id)
    return success_response(result)


@router.put("/{chat_id}", response_model=ApiResponse[AppendResponse])
async def append_turns(
    chat_id: str,
    body: AppendTurnsRequest,
    service: ConversationServiceDep,
) -> dict:
    """Append a question/answer exchange to a chat."""
    result = await service.append_turns(
        chat_id,
        answer=body.answer,
        question=body.question,
        img=body.img,
    )
    return success_response(result)
