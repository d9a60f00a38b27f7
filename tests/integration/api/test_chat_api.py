"""Integration tests for the Chat API."""

import pytest
from httpx import AsyncClient

from domain.entities.chat import GREETING


async def _open(client: AsyncClient) -> str:
    response = await client.post("/api/v1/chat/sessions")
    assert response.status_code == 201
    return response.json()["data"]["id"]


class TestChatAPI:
    @pytest.mark.asyncio
    async def test_open_session_starts_with_greeting(self, authenticated_client: AsyncClient):
        response = await authenticated_client.post("/api/v1/chat/sessions")

        data = response.json()["data"]
        assert data["state"] == "idle"
        assert data["transcript"] == [{"role": "assistant", "content": GREETING}]

    @pytest.mark.asyncio
    async def test_submit_appends_user_and_assistant(
        self, authenticated_client: AsyncClient, assistant
    ):
        session_id = await _open(authenticated_client)

        response = await authenticated_client.post(
            f"/api/v1/chat/sessions/{session_id}/messages", json={"content": "hi"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["accepted"] is True
        transcript = body["data"]["transcript"]
        assert len(transcript) == 3
        assert transcript[1] == {"role": "user", "content": "hi"}
        assert transcript[2] == {"role": "assistant", "content": assistant.reply_text}
        assert body["data"]["state"] == "idle"

    @pytest.mark.asyncio
    async def test_blank_submit_is_not_accepted(self, authenticated_client: AsyncClient):
        session_id = await _open(authenticated_client)

        response = await authenticated_client.post(
            f"/api/v1/chat/sessions/{session_id}/messages", json={"content": "   "}
        )

        body = response.json()
        assert body["accepted"] is False
        assert len(body["data"]["transcript"]) == 1

    @pytest.mark.asyncio
    async def test_close_session(self, authenticated_client: AsyncClient):
        session_id = await _open(authenticated_client)

        deleted = await authenticated_client.delete(f"/api/v1/chat/sessions/{session_id}")
        fetched = await authenticated_client.get(f"/api/v1/chat/sessions/{session_id}")

        assert deleted.status_code == 204
        assert fetched.status_code == 404
        assert fetched.json()["error_code"] == "CHAT_SESSION_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_sessions_are_private(self, authenticated_client: AsyncClient, auth_provider):
        from uuid import uuid4

        from infrastructure.auth.provider import TokenUser

        session_id = await _open(authenticated_client)
        stranger = auth_provider.create_token(TokenUser(id=uuid4(), email="x@college.edu"))

        response = await authenticated_client.get(
            f"/api/v1/chat/sessions/{session_id}",
            headers={"Authorization": f"Bearer {stranger}"},
        )

        assert response.status_code == 404
