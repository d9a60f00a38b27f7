"""Chat domain entities (transient, never persisted)."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID, uuid4


class ChatRole(StrEnum):
    """Who authored a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatState(StrEnum):
    """Chat screen states."""

    IDLE = "idle"
    AWAITING_REPLY = "awaiting-reply"


@dataclass(frozen=True, slots=True)
class ChatMessage:
    """A single transcript entry."""

    role: ChatRole
    content: str

    def to_dict(self) -> dict[str, str]:
        """Wire shape expected by chat-completion APIs."""
        return {"role": self.role.value, "content": self.content}


GREETING = (
    "Hello! I am your campus AI assistant. Ask me anything about college life, "
    "study tips, or campus events!"
)


@dataclass
class ChatSession:
    """Transcript and pending flag of one mounted chat screen.

    ``state`` moves idle -> awaiting-reply on an accepted submit and back to
    idle once a reply (or substitute) is appended.
    """

    owner_id: UUID
    id: UUID = field(default_factory=uuid4)
    transcript: list[ChatMessage] = field(
        default_factory=lambda: [ChatMessage(ChatRole.ASSISTANT, GREETING)]
    )
    state: ChatState = ChatState.IDLE
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def is_pending(self) -> bool:
        return self.state is ChatState.AWAITING_REPLY

    def begin_turn(self, text: str) -> ChatMessage | None:
        """Append the user's message and enter awaiting-reply.

        Returns None, changing nothing, for blank input or while a reply
        is pending.
        """
        if not text.strip() or self.is_pending:
            return None
        message = ChatMessage(ChatRole.USER, text)
        self.transcript.append(message)
        self.state = ChatState.AWAITING_REPLY
        return message

    def complete_turn(self, reply: str) -> None:
        """Append the assistant's reply and return to idle."""
        self.transcript.append(ChatMessage(ChatRole.ASSISTANT, reply))
        self.state = ChatState.IDLE

    def snapshot(self) -> list[ChatMessage]:
        """Copy of the transcript, oldest first."""
        return list(self.transcript)
