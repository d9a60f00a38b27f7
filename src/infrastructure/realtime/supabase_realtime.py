"""Supabase Realtime provider (postgres_changes on public.posts)."""

from typing import Any, Awaitable, Callable
from uuid import uuid4

import structlog
from supabase import AsyncClient

from infrastructure.realtime.provider import DeliveryTasks, PostInsertHandler
from infrastructure.supabase.client import get_supabase_client

logger = structlog.get_logger()


class SupabaseSubscription:
    """One realtime channel bound to a single subscriber."""

    def __init__(self, client: AsyncClient, channel: Any, tasks: DeliveryTasks) -> None:
        self._client = client
        self._channel = channel
        self._tasks = tasks

    async def unsubscribe(self) -> None:
        """Remove the channel, then stop deliveries still in flight."""
        await self._client.remove_channel(self._channel)
        in_flight = len(self._tasks)
        await self._tasks.cancel()
        logger.debug(
            "realtime_channel_removed",
            topic=self._channel.topic,
            cancelled_deliveries=in_flight,
        )


class SupabaseRealtimeProvider:
    """Subscribes to INSERT events on ``public.posts`` through Supabase Realtime."""

    def __init__(
        self,
        client_factory: Callable[[], Awaitable[AsyncClient]] = get_supabase_client,
    ) -> None:
        self._client_factory = client_factory

    async def subscribe_post_inserts(self, handler: PostInsertHandler) -> SupabaseSubscription:
        client = await self._client_factory()
        channel = client.channel(f"public:posts:{uuid4().hex[:12]}")
        tasks = DeliveryTasks()

        def _on_insert(payload: dict[str, Any]) -> None:
            # Realtime invokes callbacks synchronously
            tasks.spawn(handler(payload))

        await channel.on_postgres_changes(
            "INSERT",
            schema="public",
            table="posts",
            callback=_on_insert,
        ).subscribe()
        logger.debug("realtime_channel_subscribed", topic=channel.topic)
        return SupabaseSubscription(client, channel, tasks)

    async def announce_post_insert(self, record: dict[str, Any]) -> None:
        # The database change stream already emits the event.
        return None
