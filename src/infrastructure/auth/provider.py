"""Authentication provider protocol and the identity it yields."""

from dataclasses import dataclass
from typing import Optional, Protocol
from uuid import UUID

from domain.entities.auth import SessionUser


@dataclass(frozen=True)
class TokenUser:
    """The caller behind a validated access token.

    ``username`` comes from the ``user_metadata`` written at sign-up; tokens
    minted before a username existed carry None.
    """

    id: UUID
    email: str
    username: Optional[str] = None
    role: Optional[str] = None

    def as_session_user(self) -> SessionUser:
        return SessionUser(id=self.id, email=self.email, username=self.username)


class IAuthProvider(Protocol):
    """Anything that can turn a bearer token into a TokenUser."""

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """Return the token's user, or None if it is invalid or expired."""
        ...
