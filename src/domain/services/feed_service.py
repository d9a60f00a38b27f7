"""Feed service: threads, posts, comments and the live post feed."""

from typing import Any, Awaitable, Callable
from uuid import UUID

import structlog

from core.exceptions import PostNotFoundError, ThreadNotFoundError, ValidationFailedError
from domain.entities.post import Comment, Post
from domain.entities.thread import Thread
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.profile_service import ProfileService
from infrastructure.realtime.provider import IRealtimeProvider, IRealtimeSubscription

logger = structlog.get_logger()

PostsListener = Callable[[list[Post]], Awaitable[None]]


class FeedService:
    """Service layer for the discussion feed."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        realtime: IRealtimeProvider,
        profiles: ProfileService | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._realtime = realtime
        self._profiles = profiles or ProfileService(uow_factory)

    async def list_threads(self) -> list[Thread]:
        """All threads ordered by title."""
        async with self._uow_factory() as uow:
            return await uow.threads.get_all()  # type: ignore[no-any-return]

    async def list_posts(self, thread_id: UUID | None = None) -> list[Post]:
        """Posts newest first; only the given thread's posts when one is selected."""
        async with self._uow_factory() as uow:
            return await uow.posts.list_with_authors(thread_id)  # type: ignore[no-any-return]

    async def create_post(
        self,
        author_id: UUID,
        thread_id: UUID,
        content: str,
        username: str | None = None,
    ) -> Post:
        """Insert a post into a thread.

        The new post is not merged into any listing here; readers see it on
        their next fetch (subscribers refetch on the insert notification).
        Subscribers are notified without waiting for their delivery.
        """
        if not content.strip():
            raise ValidationFailedError("Post content cannot be empty", field="content")

        # posts.author_id references profiles.id
        await self._profiles.ensure_profile(author_id, username)

        async with self._uow_factory() as uow:
            thread = await uow.threads.get(thread_id)
            if not thread:
                raise ThreadNotFoundError(str(thread_id))

            created = await uow.posts.create(
                Post(author_id=author_id, thread_id=thread_id, content=content)
            )
            await uow.commit()

        logger.info("post_created", post_id=str(created.id), thread_id=str(thread_id))
        await self._realtime.announce_post_insert(
            {
                "id": str(created.id),
                "author_id": str(created.author_id),
                "thread_id": str(created.thread_id),
                "content": created.content,
                "created_at": created.created_at.isoformat(),
            }
        )
        return created  # type: ignore[no-any-return]

    async def list_comments(self, post_id: UUID) -> list[Comment]:
        """A post's comments, oldest first."""
        async with self._uow_factory() as uow:
            post = await uow.posts.get(post_id)
            if not post:
                raise PostNotFoundError(str(post_id))
            return await uow.comments.list_for_post(post_id)  # type: ignore[no-any-return]

    async def create_comment(
        self,
        author_id: UUID,
        post_id: UUID,
        content: str,
        username: str | None = None,
    ) -> Comment:
        """Attach a comment to an existing post."""
        if not content.strip():
            raise ValidationFailedError("Comment cannot be empty", field="content")

        await self._profiles.ensure_profile(author_id, username)

        async with self._uow_factory() as uow:
            post = await uow.posts.get(post_id)
            if not post:
                raise PostNotFoundError(str(post_id))

            created = await uow.comments.create(
                Comment(post_id=post_id, author_id=author_id, content=content)
            )
            await uow.commit()
            return created  # type: ignore[no-any-return]

    async def open_live_feed(
        self, thread_id: UUID | None, listener: PostsListener
    ) -> IRealtimeSubscription:
        """Subscribe to post inserts and push a fresh listing on each one.

        The notification payload is ignored: it lacks the joined author
        profile, so every event triggers a full refetch with the same filter.
        The caller owns the returned subscription and must unsubscribe.
        """

        async def _on_insert(payload: dict[str, Any]) -> None:
            posts = await self.list_posts(thread_id)
            await listener(posts)

        return await self._realtime.subscribe_post_inserts(_on_insert)
