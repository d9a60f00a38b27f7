"""Thread repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.thread import Thread


class IThreadRepository(Protocol):
    """Repository interface for Thread entities."""

    async def get(self, id: UUID) -> Thread | None:
        """Get a thread by ID."""
        ...

    async def get_all(self) -> list[Thread]:
        """Get all threads ordered by title."""
        ...
