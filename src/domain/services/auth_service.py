"""Auth service: sign-up, sign-in and sign-out through the identity service."""

from typing import Protocol
from uuid import UUID

import structlog

from core.exceptions import ValidationFailedError
from domain.entities.auth import AuthSession
from domain.entities.profile import Profile
from domain.services.chat_service import ChatService
from domain.services.profile_service import ProfileService

logger = structlog.get_logger()

MIN_PASSWORD_LENGTH = 6


class IIdentityClient(Protocol):
    """The hosted identity subsystem."""

    async def sign_up(self, email: str, password: str, username: str) -> AuthSession:
        ...

    async def sign_in(self, email: str, password: str) -> AuthSession:
        ...

    async def sign_out(self, access_token: str) -> None:
        ...


class AuthService:
    """Forwards auth operations and maintains what hangs off a session."""

    def __init__(
        self,
        identity: IIdentityClient,
        profiles: ProfileService,
        chats: ChatService,
    ) -> None:
        self._identity = identity
        self._profiles = profiles
        self._chats = chats

    async def sign_up(self, email: str, password: str, username: str) -> AuthSession:
        """Register a user.

        Passwords shorter than MIN_PASSWORD_LENGTH are rejected before any
        network call.
        """
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationFailedError(
                f"Password should be at least {MIN_PASSWORD_LENGTH} characters",
                field="password",
            )

        session = await self._identity.sign_up(email, password, username)
        await self._profiles.ensure_profile(session.user.id, username)
        logger.info("user_signed_up", user_id=str(session.user.id))
        return session

    async def sign_in(self, email: str, password: str) -> AuthSession:
        """Exchange credentials for a session."""
        session = await self._identity.sign_in(email, password)
        logger.info("user_signed_in", user_id=str(session.user.id))
        return session

    async def sign_out(self, user_id: UUID, access_token: str) -> None:
        """Revoke the session and tear down the user's chat sessions."""
        await self._identity.sign_out(access_token)
        dropped = self._chats.close_all_for_user(user_id)
        logger.info("user_signed_out", user_id=str(user_id), chat_sessions_closed=dropped)

    async def get_session(self, user_id: UUID, username: str | None = None) -> Profile:
        """Profile behind the current session, provisioned on first sight."""
        return await self._profiles.ensure_profile(user_id, username)
