"""Chat service: transient assistant conversations."""

from typing import Protocol, Sequence
from uuid import UUID

import structlog

from core.config import settings
from core.exceptions import ChatSessionNotFoundError
from domain.entities.chat import ChatMessage, ChatSession

logger = structlog.get_logger()

# Substituted when the assistant call itself blows up.
SCREEN_APOLOGY = "Sorry, I encountered an error. Please try again."


class IAssistantBridge(Protocol):
    """Anything that turns a transcript into one reply."""

    async def reply(self, transcript: Sequence[ChatMessage]) -> str:
        ...


class ChatService:
    """Owns the in-memory chat sessions of every mounted chat screen.

    Sessions are never persisted. Opening one corresponds to mounting the
    screen and closing it to navigating away. Screens that never unmount
    are bounded by ``max_sessions_per_user``: the oldest is evicted first.
    """

    def __init__(
        self,
        assistant: IAssistantBridge,
        max_sessions_per_user: int = settings.chat_max_sessions_per_user,
    ) -> None:
        self._assistant = assistant
        self._max_sessions_per_user = max_sessions_per_user
        # Insertion order is opening order
        self._sessions: dict[UUID, ChatSession] = {}

    def _owned_by(self, owner_id: UUID) -> list[UUID]:
        return [sid for sid, s in self._sessions.items() if s.owner_id == owner_id]

    def open_session(self, owner_id: UUID) -> ChatSession:
        """Start a fresh conversation seeded with the greeting."""
        owned = self._owned_by(owner_id)
        excess = len(owned) - self._max_sessions_per_user + 1
        for sid in owned[: max(excess, 0)]:
            del self._sessions[sid]
            logger.info("chat_session_evicted", session_id=str(sid), owner_id=str(owner_id))

        session = ChatSession(owner_id=owner_id)
        self._sessions[session.id] = session
        logger.debug("chat_session_opened", session_id=str(session.id))
        return session

    def get_session(self, session_id: UUID, owner_id: UUID) -> ChatSession:
        """Look up a session; other users' sessions are reported missing."""
        session = self._sessions.get(session_id)
        if session is None or session.owner_id != owner_id:
            raise ChatSessionNotFoundError(str(session_id))
        return session

    def close_session(self, session_id: UUID, owner_id: UUID) -> None:
        """Discard a session and its transcript."""
        session = self.get_session(session_id, owner_id)
        del self._sessions[session.id]

    def close_all_for_user(self, owner_id: UUID) -> int:
        """Discard every session a user holds. Returns how many were dropped."""
        doomed = self._owned_by(owner_id)
        for sid in doomed:
            del self._sessions[sid]
        return len(doomed)

    async def submit(
        self, session_id: UUID, owner_id: UUID, text: str
    ) -> tuple[ChatSession, bool]:
        """Run one user turn.

        Returns the session and whether the submit was accepted. A rejected
        submit (blank text, or a reply still pending) leaves the session
        untouched.
        """
        session = self.get_session(session_id, owner_id)
        if session.begin_turn(text) is None:
            return session, False

        reply = SCREEN_APOLOGY
        try:
            reply = await self._assistant.reply(session.snapshot())
        # Broad on purpose: any bridge failure, bugs included, ends the turn
        # with the apology so the session never stays awaiting a reply.
        except Exception:
            logger.exception("assistant_bridge_raised", session_id=str(session.id))
        finally:
            session.complete_turn(reply)

        return session, True
