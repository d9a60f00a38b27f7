"""Unit tests for realtime providers."""

import asyncio
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from infrastructure.realtime.in_process import InProcessRealtimeProvider
from infrastructure.realtime.supabase_realtime import SupabaseRealtimeProvider


class TestInProcessProvider:
    @pytest.mark.asyncio
    async def test_delivers_insert_payload_to_every_subscriber(self):
        provider = InProcessRealtimeProvider()
        received: list[tuple[str, dict]] = []

        async def first(payload: dict[str, Any]) -> None:
            received.append(("first", payload))

        async def second(payload: dict[str, Any]) -> None:
            received.append(("second", payload))

        await provider.subscribe_post_inserts(first)
        await provider.subscribe_post_inserts(second)
        await provider.announce_post_insert({"id": "p1"})
        await provider.drain()

        assert sorted(name for name, _ in received) == ["first", "second"]
        payload = received[0][1]
        assert payload["table"] == "posts"
        assert payload["new"] == {"id": "p1"}

    @pytest.mark.asyncio
    async def test_failing_subscriber_does_not_block_others(self):
        provider = InProcessRealtimeProvider()
        received: list[dict] = []

        async def broken(payload: dict[str, Any]) -> None:
            raise RuntimeError("socket gone")

        async def healthy(payload: dict[str, Any]) -> None:
            received.append(payload)

        await provider.subscribe_post_inserts(broken)
        await provider.subscribe_post_inserts(healthy)
        await provider.announce_post_insert({"id": "p1"})
        await provider.drain()

        assert len(received) == 1

    @pytest.mark.asyncio
    async def test_unsubscribe_stops_delivery(self):
        provider = InProcessRealtimeProvider()
        received: list[dict] = []

        async def handler(payload: dict[str, Any]) -> None:
            received.append(payload)

        subscription = await provider.subscribe_post_inserts(handler)
        await subscription.unsubscribe()
        await provider.announce_post_insert({"id": "p1"})
        await provider.drain()

        assert received == []
        assert provider.subscriber_count == 0

    @pytest.mark.asyncio
    async def test_announce_returns_while_subscriber_is_blocked(self):
        provider = InProcessRealtimeProvider()
        release = asyncio.Event()
        finished: list[dict] = []

        async def stalled(payload: dict[str, Any]) -> None:
            await release.wait()
            finished.append(payload)

        await provider.subscribe_post_inserts(stalled)

        await asyncio.wait_for(provider.announce_post_insert({"id": "p1"}), timeout=1)
        assert finished == []

        release.set()
        await provider.drain()
        assert [payload["new"] for payload in finished] == [{"id": "p1"}]

    @pytest.mark.asyncio
    async def test_unsubscribe_cancels_delivery_in_flight(self):
        provider = InProcessRealtimeProvider()
        started = asyncio.Event()
        finished: list[dict] = []

        async def slow(payload: dict[str, Any]) -> None:
            started.set()
            await asyncio.sleep(10)
            finished.append(payload)

        subscription = await provider.subscribe_post_inserts(slow)
        await provider.announce_post_insert({"id": "p1"})
        await started.wait()

        await asyncio.wait_for(subscription.unsubscribe(), timeout=1)

        assert finished == []
        assert provider.subscriber_count == 0


class FakeChannel:
    """Mimics the chained channel API of the Supabase realtime client."""

    def __init__(self, topic: str) -> None:
        self.topic = topic
        self.bindings: list[dict[str, Any]] = []
        self.subscribed = False

    def on_postgres_changes(
        self,
        event: str,
        callback: Any,
        table: str = "*",
        schema: str = "public",
        filter: str | None = None,
    ) -> "FakeChannel":
        self.bindings.append(
            {"event": event, "schema": schema, "table": table, "callback": callback}
        )
        return self

    async def subscribe(self) -> "FakeChannel":
        self.subscribed = True
        return self


class TestSupabaseProvider:
    @pytest.fixture
    def client(self) -> MagicMock:
        client = MagicMock()
        client.channel.side_effect = lambda topic: FakeChannel(topic)
        client.remove_channel = AsyncMock()
        return client

    @pytest.mark.asyncio
    async def test_callback_schedules_handler_and_unsubscribe_removes_channel(
        self, client: MagicMock
    ):
        channels: list[FakeChannel] = []

        def make_channel(topic: str) -> FakeChannel:
            channel = FakeChannel(topic)
            channels.append(channel)
            return channel

        client.channel.side_effect = make_channel
        provider = SupabaseRealtimeProvider(client_factory=AsyncMock(return_value=client))
        received: list[dict] = []

        async def handler(payload: dict[str, Any]) -> None:
            received.append(payload)

        subscription = await provider.subscribe_post_inserts(handler)

        channel = channels[0]
        assert channel.subscribed
        binding = channel.bindings[0]
        assert (binding["event"], binding["schema"], binding["table"]) == (
            "INSERT",
            "public",
            "posts",
        )

        binding["callback"]({"data": {"record": {"id": "p1"}}})
        await asyncio.sleep(0)
        assert received == [{"data": {"record": {"id": "p1"}}}]

        await subscription.unsubscribe()
        client.remove_channel.assert_awaited_once_with(channel)

    @pytest.mark.asyncio
    async def test_each_subscriber_gets_its_own_channel(self, client: MagicMock):
        provider = SupabaseRealtimeProvider(client_factory=AsyncMock(return_value=client))

        async def handler(payload: dict[str, Any]) -> None:
            pass

        await provider.subscribe_post_inserts(handler)
        await provider.subscribe_post_inserts(handler)

        topics = [call.args[0] for call in client.channel.call_args_list]
        assert len(set(topics)) == 2
        assert all(topic.startswith("public:posts:") for topic in topics)

    @pytest.mark.asyncio
    async def test_unsubscribe_cancels_pending_deliveries(self, client: MagicMock):
        channels: list[FakeChannel] = []

        def make_channel(topic: str) -> FakeChannel:
            channel = FakeChannel(topic)
            channels.append(channel)
            return channel

        client.channel.side_effect = make_channel
        provider = SupabaseRealtimeProvider(client_factory=AsyncMock(return_value=client))
        started = asyncio.Event()
        pushed: list[dict] = []

        async def refetch_and_push(payload: dict[str, Any]) -> None:
            started.set()
            await asyncio.sleep(10)
            pushed.append(payload)

        subscription = await provider.subscribe_post_inserts(refetch_and_push)
        channels[0].bindings[0]["callback"]({"data": {"record": {"id": "p1"}}})
        await started.wait()

        await asyncio.wait_for(subscription.unsubscribe(), timeout=1)

        assert pushed == []
        assert len(subscription._tasks) == 0
        client.remove_channel.assert_awaited_once_with(channels[0])

    @pytest.mark.asyncio
    async def test_failed_delivery_is_collected(self, client: MagicMock):
        channels: list[FakeChannel] = []

        def make_channel(topic: str) -> FakeChannel:
            channel = FakeChannel(topic)
            channels.append(channel)
            return channel

        client.channel.side_effect = make_channel
        provider = SupabaseRealtimeProvider(client_factory=AsyncMock(return_value=client))

        async def broken(payload: dict[str, Any]) -> None:
            raise RuntimeError("socket closed")

        subscription = await provider.subscribe_post_inserts(broken)
        channels[0].bindings[0]["callback"]({"data": {"record": {"id": "p1"}}})
        await subscription._tasks.drain()

        assert len(subscription._tasks) == 0
        await subscription.unsubscribe()
