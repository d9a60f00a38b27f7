"""Post and Comment domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from domain.entities.profile import AuthorSummary


@dataclass
class Post:
    """Domain entity for a user-authored message in a thread."""

    author_id: UUID
    thread_id: UUID
    content: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)
    author: AuthorSummary | None = None


@dataclass
class Comment:
    """Domain entity for a reply attached to a post."""

    post_id: UUID
    author_id: UUID
    content: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)
    author: AuthorSummary | None = None
