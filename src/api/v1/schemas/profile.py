"""Pydantic schemas for Profile API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ProfileUpdate(BaseModel):
    """Schema for the full update of a profile's editable fields."""

    username: str = Field(..., max_length=50)
    college: str = Field(..., max_length=120)


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "email": "student@college.edu",
                "username": "CoolStudent123",
                "college": "Stanford University",
                "avatar_url": None,
                "created_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    email: str | None = None
    username: str | None = None
    college: str | None = None
    avatar_url: str | None = None
    created_at: datetime


class ProfileDetailResponse(BaseModel):
    """Schema for single Profile."""

    data: ProfileResponse


class ProfileUpdateResponse(BaseModel):
    """Schema for a successful profile update."""

    message: str
    data: ProfileResponse
