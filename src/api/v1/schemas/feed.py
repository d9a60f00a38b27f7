"""Pydantic schemas for Feed API (threads, posts, comments)."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ThreadResponse(BaseModel):
    """Schema for Thread response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    created_at: datetime


class ThreadListResponse(BaseModel):
    """Schema for list of Threads."""

    data: list[ThreadResponse]


class AuthorResponse(BaseModel):
    """Profile summary joined onto posts and comments."""

    model_config = ConfigDict(from_attributes=True)

    username: str | None = None
    avatar_url: str | None = None
    college: str | None = None


class PostCreate(BaseModel):
    """Schema for creating a Post."""

    thread_id: UUID
    content: str = Field(..., min_length=1, max_length=5000)


class PostResponse(BaseModel):
    """Schema for Post response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "789e4567-e89b-12d3-a456-426614174000",
                "author_id": "123e4567-e89b-12d3-a456-426614174000",
                "thread_id": "456e4567-e89b-12d3-a456-426614174000",
                "content": "Anyone up for a study group tonight?",
                "created_at": "2026-01-28T10:00:00",
                "author": {
                    "username": "CoolStudent123",
                    "avatar_url": None,
                    "college": "Stanford University",
                },
            }
        },
    )

    id: UUID
    author_id: UUID
    thread_id: UUID
    content: str
    created_at: datetime
    author: AuthorResponse | None = None


class PostListResponse(BaseModel):
    """Schema for list of Posts."""

    data: list[PostResponse]


class PostDetailResponse(BaseModel):
    """Schema for single Post."""

    data: PostResponse


class CommentCreate(BaseModel):
    """Schema for creating a Comment."""

    content: str = Field(..., min_length=1, max_length=2000)


class CommentResponse(BaseModel):
    """Schema for Comment response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    post_id: UUID
    author_id: UUID
    content: str
    created_at: datetime
    author: AuthorResponse | None = None


class CommentListResponse(BaseModel):
    """Schema for list of Comments."""

    data: list[CommentResponse]


class CommentDetailResponse(BaseModel):
    """Schema for single Comment."""

    data: CommentResponse


class LiveFeedMessage(BaseModel):
    """Frame pushed over the live feed socket."""

    type: str = "posts"
    data: list[PostResponse]
