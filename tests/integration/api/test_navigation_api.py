"""Integration tests for the Navigation API."""

import pytest
from httpx import AsyncClient


class TestNavigationAPI:
    @pytest.mark.asyncio
    async def test_anonymous_protected_path_redirects_to_login(self, client: AsyncClient):
        response = await client.get("/api/v1/navigation", params={"path": "/chatbot"})

        body = response.json()
        assert body["path"] == "/login"
        assert body["redirected"] is True
        assert body["authenticated"] is False
        assert body["nav_items"] == []

    @pytest.mark.asyncio
    async def test_signed_in_user_sees_page_and_links(self, authenticated_client: AsyncClient):
        response = await authenticated_client.get(
            "/api/v1/navigation", params={"path": "/profile"}
        )

        body = response.json()
        assert body["path"] == "/profile"
        assert body["redirected"] is False
        assert [item["label"] for item in body["nav_items"]] == [
            "Feed",
            "AI Assistant",
            "Profile",
        ]

    @pytest.mark.asyncio
    async def test_unknown_path_goes_home(self, authenticated_client: AsyncClient):
        response = await authenticated_client.get(
            "/api/v1/navigation", params={"path": "/does-not-exist"}
        )

        assert response.json()["path"] == "/"
