"""Chat API routes: assistant conversations held in memory."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_chat_service
from api.v1.schemas.chat import (
    ChatMessageCreate,
    ChatSessionDetailResponse,
    ChatSessionResponse,
    ChatSubmitResponse,
)
from domain.services.chat_service import ChatService

router = APIRouter(prefix="/chat/sessions", tags=["chat"])


@router.post(
    "",
    response_model=ChatSessionDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Open a chat session",
)
async def open_session(
    user: CurrentUser,
    service: ChatService = Depends(get_chat_service),
) -> ChatSessionDetailResponse:
    """Start a conversation seeded with the assistant's greeting."""
    session = service.open_session(user.id)
    return ChatSessionDetailResponse(data=ChatSessionResponse.model_validate(session))


@router.get(
    "/{session_id}",
    response_model=ChatSessionDetailResponse,
    summary="Get a chat session",
    responses={404: {"description": "Chat session not found"}},
)
async def get_session(
    session_id: UUID,
    user: CurrentUser,
    service: ChatService = Depends(get_chat_service),
) -> ChatSessionDetailResponse:
    """Current transcript and state."""
    session = service.get_session(session_id, user.id)
    return ChatSessionDetailResponse(data=ChatSessionResponse.model_validate(session))


@router.post(
    "/{session_id}/messages",
    response_model=ChatSubmitResponse,
    summary="Send a message",
    responses={404: {"description": "Chat session not found"}},
)
async def submit_message(
    session_id: UUID,
    body: ChatMessageCreate,
    user: CurrentUser,
    service: ChatService = Depends(get_chat_service),
) -> ChatSubmitResponse:
    """Append the message, wait for the assistant and return the transcript."""
    session, accepted = await service.submit(session_id, user.id, body.content)
    return ChatSubmitResponse(
        accepted=accepted,
        data=ChatSessionResponse.model_validate(session),
    )


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Close a chat session",
    responses={404: {"description": "Chat session not found"}},
)
async def close_session(
    session_id: UUID,
    user: CurrentUser,
    service: ChatService = Depends(get_chat_service),
) -> None:
    """Discard the conversation."""
    service.close_session(session_id, user.id)
    return None
