"""Profile domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class Profile:
    """Domain entity for a student profile (one per Supabase auth user)."""

    id: UUID = field(default_factory=uuid4)
    username: str | None = None
    college: str | None = None
    avatar_url: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    def apply_update(self, username: str, college: str) -> None:
        """Replace both editable fields."""
        self.username = username
        self.college = college


@dataclass(frozen=True, slots=True)
class AuthorSummary:
    """Read-only slice of a Profile joined onto posts and comments."""

    username: str | None = None
    avatar_url: str | None = None
    college: str | None = None
