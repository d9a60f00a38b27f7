"""Unit tests for exception handlers."""

import json
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from api.exception_handlers import setup_exception_handlers
from core.exceptions import (
    AppException,
    ChatSessionNotFoundError,
    ErrorCode,
    IdentityError,
    ValidationFailedError,
)


def _create_test_app() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)
    return app


async def _get(app: FastAPI, path: str):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        return await c.get(path)


class TestExceptionHandlers:
    @pytest.mark.asyncio
    async def test_not_found_carries_code_message_and_details(self) -> None:
        app = _create_test_app()

        @app.get("/raise-app")
        async def _() -> None:
            raise ChatSessionNotFoundError("abc")

        response = await _get(app, "/raise-app")

        assert response.status_code == 404
        body = response.json()
        assert body["error_code"] == "CHAT_SESSION_NOT_FOUND"
        assert "abc" in body["message"]
        assert body["details"] == {"session_id": "abc"}

    @pytest.mark.asyncio
    async def test_identity_message_is_passed_through(self) -> None:
        app = _create_test_app()

        @app.get("/login")
        async def _() -> None:
            raise IdentityError("Invalid login credentials")

        response = await _get(app, "/login")

        assert response.status_code == 400
        assert response.json() == {
            "error_code": "IDENTITY_ERROR",
            "message": "Invalid login credentials",
            "details": None,
        }

    @pytest.mark.asyncio
    async def test_validation_failure_names_the_field(self) -> None:
        app = _create_test_app()

        @app.get("/signup")
        async def _() -> None:
            raise ValidationFailedError("Password should be at least 6 characters", "password")

        response = await _get(app, "/signup")

        assert response.status_code == 400
        assert response.json()["details"] == {"field": "password"}

    @pytest.mark.asyncio
    async def test_database_error_keeps_backend_text(self) -> None:
        app = _create_test_app()

        @app.get("/profile")
        async def _() -> None:
            raise AppException(ErrorCode.DATABASE_ERROR, "permission denied for table profiles", 500)

        response = await _get(app, "/profile")

        assert response.status_code == 500
        assert response.json()["message"] == "permission denied for table profiles"

    @pytest.mark.asyncio
    async def test_http_exception_returns_standard_format(self) -> None:
        from starlette.exceptions import HTTPException

        app = _create_test_app()

        @app.get("/raise-http")
        async def _() -> None:
            raise HTTPException(status_code=403, detail="Forbidden")

        response = await _get(app, "/raise-http")

        assert response.status_code == 403
        body = response.json()
        assert body["error_code"] == "HTTP_ERROR"
        assert body["message"] == "Forbidden"

    @pytest.mark.asyncio
    async def test_request_validation_error_lists_fields(self) -> None:
        from pydantic import BaseModel, Field

        app = _create_test_app()

        class Body(BaseModel):
            content: str = Field(..., min_length=1)

        @app.post("/validate")
        async def _(body: Body) -> dict[str, bool]:
            return {"ok": True}

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.post("/validate", json={"content": ""})

        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["details"][0]["field"] == "body.content"

    @pytest.mark.asyncio
    async def test_unhandled_exception_returns_500_with_request_id(self) -> None:
        app = _create_test_app()

        mock_request = MagicMock()
        mock_request.state.request_id = "test-req-id"

        handler = app.exception_handlers.get(Exception)
        assert handler is not None, "Global exception handler not registered"

        response = await handler(mock_request, RuntimeError("Something went wrong"))  # type: ignore[misc]

        assert response.status_code == 500
        body = json.loads(response.body)
        assert body["error_code"] == "INTERNAL_ERROR"
        assert body["details"]["request_id"] == "test-req-id"
