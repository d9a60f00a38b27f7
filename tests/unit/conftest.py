"""Shared fixtures for unit tests."""

from typing import Any, Callable
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest


def _echo(entity: Any) -> Any:
    return entity


class FakeUnitOfWork:
    """Unit of work over AsyncMock repositories.

    ``create`` and ``update`` hand back the entity they were given, which is
    what the SQLAlchemy repositories do after a flush.
    """

    def __init__(self) -> None:
        self.profiles = AsyncMock()
        self.threads = AsyncMock()
        self.posts = AsyncMock()
        self.comments = AsyncMock()
        for repo in (self.profiles, self.posts, self.comments):
            repo.create.side_effect = _echo
        self.profiles.update.side_effect = _echo
        self.commits = 0
        self.rolled_back = False

    @property
    def committed(self) -> bool:
        return self.commits > 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(uow: FakeUnitOfWork) -> Callable[[], FakeUnitOfWork]:
    """Factory that always yields the same fake, so tests can inspect it."""
    return lambda: uow


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest.fixture
def thread_id() -> UUID:
    return uuid4()
