"""SQLAlchemy implementation of Post and Comment repositories."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.post import Comment, Post
from domain.entities.profile import AuthorSummary
from infrastructure.database.models import CommentModel, PostModel, ProfileModel


def _author_summary(profile: ProfileModel | None) -> AuthorSummary | None:
    """Project the joined profile columns a feed item displays."""
    if profile is None:
        return None
    return AuthorSummary(
        username=profile.username,
        avatar_url=profile.avatar_url,
        college=profile.college,
    )


class SQLAlchemyPostRepository:
    """SQLAlchemy implementation of IPostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Post | None:
        """Get a post by ID."""
        stmt = select(PostModel).where(PostModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_with_authors(self, thread_id: UUID | None = None) -> list[Post]:
        """Get posts newest first with the author's profile outer-joined."""
        stmt = (
            select(PostModel, ProfileModel)
            .outerjoin(ProfileModel, PostModel.author_id == ProfileModel.id)
            .order_by(PostModel.created_at.desc())
        )
        if thread_id is not None:
            stmt = stmt.where(PostModel.thread_id == thread_id)

        result = await self._session.execute(stmt)
        return [
            self._to_entity(post_model, author=_author_summary(profile_model))
            for post_model, profile_model in result
        ]

    async def create(self, post: Post) -> Post:
        """Insert a new post."""
        model = PostModel(
            id=post.id,
            author_id=post.author_id,
            thread_id=post.thread_id,
            content=post.content,
            created_at=post.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    def _to_entity(
        self, model: PostModel, author: AuthorSummary | None = None
    ) -> Post:
        """Convert ORM model to domain entity."""
        return Post(
            id=model.id,
            author_id=model.author_id,
            thread_id=model.thread_id,
            content=model.content,
            created_at=model.created_at,
            author=author,
        )


class SQLAlchemyCommentRepository:
    """SQLAlchemy implementation of ICommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_for_post(self, post_id: UUID) -> list[Comment]:
        """Get a post's comments oldest first with author profiles."""
        stmt = (
            select(CommentModel, ProfileModel)
            .outerjoin(ProfileModel, CommentModel.author_id == ProfileModel.id)
            .where(CommentModel.post_id == post_id)
            .order_by(CommentModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [
            self._to_entity(comment_model, author=_author_summary(profile_model))
            for comment_model, profile_model in result
        ]

    async def create(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        model = CommentModel(
            id=comment.id,
            post_id=comment.post_id,
            author_id=comment.author_id,
            content=comment.content,
            created_at=comment.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    def _to_entity(
        self, model: CommentModel, author: AuthorSummary | None = None
    ) -> Comment:
        """Convert ORM model to domain entity."""
        return Comment(
            id=model.id,
            post_id=model.post_id,
            author_id=model.author_id,
            content=model.content,
            created_at=model.created_at,
            author=author,
        )
