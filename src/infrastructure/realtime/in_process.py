"""In-process realtime provider for local development and tests."""

from typing import Any

from infrastructure.realtime.provider import DeliveryTasks, PostInsertHandler


class InProcessSubscription:
    """Handle returned by InProcessRealtimeProvider."""

    def __init__(self, provider: "InProcessRealtimeProvider", handler: PostInsertHandler) -> None:
        self._provider = provider
        self._handler = handler

    async def unsubscribe(self) -> None:
        tasks = self._provider.remove(self._handler)
        if tasks is not None:
            await tasks.cancel()


class InProcessRealtimeProvider:
    """Fans post inserts out to subscribers living in this process.

    Each delivery runs as its own task, so a slow subscriber delays neither
    the poster nor the other subscribers.
    """

    def __init__(self) -> None:
        self._handlers: dict[PostInsertHandler, DeliveryTasks] = {}

    @property
    def subscriber_count(self) -> int:
        return len(self._handlers)

    async def subscribe_post_inserts(self, handler: PostInsertHandler) -> InProcessSubscription:
        self._handlers[handler] = DeliveryTasks()
        return InProcessSubscription(self, handler)

    def remove(self, handler: PostInsertHandler) -> DeliveryTasks | None:
        return self._handlers.pop(handler, None)

    async def announce_post_insert(self, record: dict[str, Any]) -> None:
        payload = {"eventType": "INSERT", "schema": "public", "table": "posts", "new": record}
        for handler, tasks in list(self._handlers.items()):
            tasks.spawn(handler(payload))

    async def drain(self) -> None:
        """Wait until every announced insert has been delivered."""
        for tasks in list(self._handlers.values()):
            await tasks.drain()
