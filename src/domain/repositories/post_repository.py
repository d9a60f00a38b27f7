"""Post and Comment repository protocols."""

from typing import Protocol
from uuid import UUID

from domain.entities.post import Comment, Post


class IPostRepository(Protocol):
    """Repository interface for Post entities."""

    async def get(self, id: UUID) -> Post | None:
        """Get a post by ID."""
        ...

    async def list_with_authors(self, thread_id: UUID | None = None) -> list[Post]:
        """Get posts newest first, joined with author summaries.

        When ``thread_id`` is given only posts of that thread are returned.
        """
        ...

    async def create(self, post: Post) -> Post:
        """Insert a new post."""
        ...


class ICommentRepository(Protocol):
    """Repository interface for Comment entities."""

    async def list_for_post(self, post_id: UUID) -> list[Comment]:
        """Get a post's comments oldest first, joined with author summaries."""
        ...

    async def create(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        ...
