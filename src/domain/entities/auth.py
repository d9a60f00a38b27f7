"""Auth session value objects returned by the identity service."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, slots=True)
class SessionUser:
    """The user half of an identity-service response."""

    id: UUID
    email: str
    username: str | None = None


@dataclass(frozen=True, slots=True)
class AuthSession:
    """Tokens issued on sign-in.

    ``access_token`` is ``None`` after a sign-up that still needs email
    confirmation.
    """

    user: SessionUser
    access_token: str | None = None
    refresh_token: str | None = None
    expires_in: int | None = None
