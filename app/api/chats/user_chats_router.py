"""User chat index API router."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.dependencies import get_conversation_service, get_current_user
from app.schemas.index_schema import ReconcileResponse, SessionSummary
from app.schemas.response_schema import ApiResponse, success_response
from app.services.conversation_service import ConversationService

router = APIRouter(
    prefix="/api/userchats",
    tags=["userchats"],
    dependencies=[Depends(get_current_user)],
)

ConversationServiceDep = Annotated[
    ConversationService, Depends(get_conversation_service)
]


@router.get("", response_model=ApiResponse[list[SessionSummary]])
async def list_user_chats(service: ConversationServiceDep) -> dict:
    """List the caller's chats in creation order."""
    result = await service.list_chats()
    return success_response(result)


@router.post("/reconcile", response_model=ApiResponse[ReconcileResponse])
async def reconcile_user_chats(service: ConversationServiceDep) -> dict:
    """Re-add chats missing from the caller's index."""
    added = await service.reconcile_index()
    return success_response(ReconcileResponse(added=added))
