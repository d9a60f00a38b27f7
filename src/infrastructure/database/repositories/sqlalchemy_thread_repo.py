"""SQLAlchemy implementation of Thread repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.thread import Thread
from infrastructure.database.models import ThreadModel


class SQLAlchemyThreadRepository:
    """SQLAlchemy implementation of IThreadRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Thread | None:
        """Get a thread by ID."""
        stmt = select(ThreadModel).where(ThreadModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Thread]:
        """Get all threads ordered by title."""
        stmt = select(ThreadModel).order_by(ThreadModel.title)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    def _to_entity(self, model: ThreadModel) -> Thread:
        """Convert ORM model to domain entity."""
        return Thread(
            id=model.id,
            title=model.title,
            created_at=model.created_at,
        )
