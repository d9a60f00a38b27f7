"""Pydantic schemas for Chat API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.chat import ChatRole, ChatState


class ChatMessageResponse(BaseModel):
    """Schema for one transcript entry."""

    model_config = ConfigDict(from_attributes=True)

    role: ChatRole
    content: str


class ChatSessionResponse(BaseModel):
    """Schema for a chat session and its transcript."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "abc4567-e89b-12d3-a456-426614174000",
                "state": "idle",
                "created_at": "2026-01-28T10:00:00",
                "transcript": [
                    {
                        "role": "assistant",
                        "content": "Hello! I am your campus AI assistant. ...",
                    }
                ],
            }
        },
    )

    id: UUID
    state: ChatState
    created_at: datetime
    transcript: list[ChatMessageResponse]


class ChatSessionDetailResponse(BaseModel):
    """Schema for single chat session."""

    data: ChatSessionResponse


class ChatMessageCreate(BaseModel):
    """Schema for submitting a user message."""

    content: str = Field(..., max_length=4000)


class ChatSubmitResponse(BaseModel):
    """Schema for the result of a submit.

    ``accepted`` is false when the input was blank or a reply was still
    pending; the transcript is then unchanged.
    """

    accepted: bool
    data: ChatSessionResponse
