"""Pydantic schemas for Auth API."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from api.v1.schemas.profile import ProfileResponse


class Credentials(BaseModel):
    """Email and password pair."""

    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., max_length=72)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Basic email validation."""
        v = v.strip()
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Invalid email address")
        return v


class SignUpRequest(Credentials):
    """Schema for registering a user.

    Password length is checked by the auth service, not here.
    """

    username: str = Field(..., min_length=1, max_length=50)


class SignInRequest(Credentials):
    """Schema for signing in with email and password."""


class SessionUserResponse(BaseModel):
    """Schema for the user half of a session."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    username: str | None = None


class AuthSessionResponse(BaseModel):
    """Schema for sign-up and sign-in results."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "user": {
                    "id": "123e4567-e89b-12d3-a456-426614174000",
                    "email": "student@college.edu",
                    "username": "CoolStudent123",
                },
                "access_token": "eyJhbGciOiJFUzI1NiIsInR5cCI6IkpXVCJ9...",
                "refresh_token": "v1.Mq...",
                "expires_in": 3600,
                "redirect_to": "/",
            }
        },
    )

    user: SessionUserResponse
    access_token: str | None = None
    refresh_token: str | None = None
    expires_in: int | None = None
    redirect_to: str = "/"


class SignOutResponse(BaseModel):
    """Schema for sign-out result."""

    redirect_to: str = "/login"


class CurrentSessionResponse(BaseModel):
    """Schema for the signed-in user and their profile."""

    user: SessionUserResponse
    profile: ProfileResponse
