"""Realtime change-notification protocols."""

import asyncio
from typing import Any, Awaitable, Callable, Coroutine, Protocol

import structlog

logger = structlog.get_logger()

# Receives the raw change payload; feed consumers ignore it and refetch.
PostInsertHandler = Callable[[dict[str, Any]], Awaitable[None]]


class IRealtimeSubscription(Protocol):
    """A live subscription that must be released by its owner."""

    async def unsubscribe(self) -> None:
        """Stop delivering events and release the channel."""
        ...


class IRealtimeProvider(Protocol):
    """Source of insert notifications on the posts collection."""

    async def subscribe_post_inserts(
        self, handler: PostInsertHandler
    ) -> IRealtimeSubscription:
        """Open a subscription delivering every post INSERT to ``handler``."""
        ...

    async def announce_post_insert(self, record: dict[str, Any]) -> None:
        """Called after a post insert commits. Must not wait for delivery.

        Providers fed by the database change stream ignore this.
        """
        ...


class DeliveryTasks:
    """Handler invocations still running for one subscription.

    Failures are logged when a task finishes; nobody awaits the tasks
    otherwise.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[None]] = set()

    def __len__(self) -> int:
        return len(self._tasks)

    def spawn(self, delivery: Coroutine[Any, Any, None]) -> asyncio.Task[None]:
        task = asyncio.create_task(delivery)
        self._tasks.add(task)
        task.add_done_callback(self._finished)
        return task

    def _finished(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning(
                "realtime_handler_failed",
                error=str(exc),
                error_type=type(exc).__name__,
            )

    async def drain(self) -> None:
        """Wait for every in-flight delivery to finish."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def cancel(self) -> None:
        """Cancel in-flight deliveries and wait until they have stopped."""
        current = asyncio.current_task()
        pending = [task for task in self._tasks if task is not current]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
