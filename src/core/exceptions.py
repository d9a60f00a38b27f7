"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"

    # Not found errors (404)
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    THREAD_NOT_FOUND = "THREAD_NOT_FOUND"
    POST_NOT_FOUND = "POST_NOT_FOUND"
    CHAT_SESSION_NOT_FOUND = "CHAT_SESSION_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Identity provider errors (passed through from Supabase Auth)
    IDENTITY_ERROR = "IDENTITY_ERROR"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class ValidationFailedError(AppException):
    """Input rejected before reaching the backend."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message=message,
            status_code=400,
            details={"field": field} if field else None,
        )


class IdentityError(AppException):
    """The identity service refused an auth operation.

    The message is whatever text the service returned.
    """

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(
            error_code=ErrorCode.IDENTITY_ERROR,
            message=message,
            status_code=status_code,
        )


class ProfileNotFoundError(AppException):
    """Profile not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message=f"Profile not found: {user_id}",
            status_code=404,
            details={"user_id": user_id},
        )


class ThreadNotFoundError(AppException):
    """Thread not found."""

    def __init__(self, thread_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.THREAD_NOT_FOUND,
            message=f"Thread not found: {thread_id}",
            status_code=404,
            details={"thread_id": thread_id},
        )


class PostNotFoundError(AppException):
    """Post not found."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.POST_NOT_FOUND,
            message=f"Post not found: {post_id}",
            status_code=404,
            details={"post_id": post_id},
        )


class ChatSessionNotFoundError(AppException):
    """Chat session not found (or owned by someone else)."""

    def __init__(self, session_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.CHAT_SESSION_NOT_FOUND,
            message=f"Chat session not found: {session_id}",
            status_code=404,
            details={"session_id": session_id},
        )
