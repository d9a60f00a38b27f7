"""Supabase Auth (GoTrue) identity client.

Sign-up, sign-in and sign-out are forwarded to the project's
``/auth/v1`` REST API. Credentials are passed through as-is; nothing is
stored on this side.
"""

from typing import Any, Optional
from uuid import UUID

import httpx
import structlog

from core.config import settings
from core.exceptions import IdentityError
from domain.entities.auth import AuthSession, SessionUser

logger = structlog.get_logger()


def _error_message(response: httpx.Response) -> str:
    """Pull the human-readable message out of a GoTrue error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"Auth request failed with status {response.status_code}"

    if isinstance(body, dict):
        for key in ("msg", "message", "error_description", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return f"Auth request failed with status {response.status_code}"


def _parse_user(data: dict[str, Any]) -> SessionUser:
    metadata = data.get("user_metadata") or {}
    return SessionUser(
        id=UUID(data["id"]),
        email=data.get("email") or "",
        username=metadata.get("username"),
    )


def _parse_session(data: dict[str, Any]) -> AuthSession:
    """Build an AuthSession from either a session body or a bare user body.

    With email confirmation enabled, signup answers with the user object
    only and no tokens.
    """
    if "access_token" in data:
        return AuthSession(
            user=_parse_user(data["user"]),
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            expires_in=data.get("expires_in"),
        )
    return AuthSession(user=_parse_user(data))


class SupabaseIdentityClient:
    """Thin client for the Supabase identity subsystem."""

    def __init__(
        self,
        auth_url: str = settings.supabase_auth_url,
        api_key: str = settings.supabase_anon_key,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._auth_url = auth_url.rstrip("/")
        self._api_key = api_key
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        if not self._auth_url:
            raise IdentityError("Identity service is not configured", status_code=503)
        return httpx.AsyncClient(
            base_url=self._auth_url,
            headers={"apikey": self._api_key},
            transport=self._transport,
        )

    async def _post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        token: str | None = None,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        bearer = token or self._api_key
        try:
            async with self._client() as client:
                response = await client.post(
                    path,
                    json=json,
                    params=params,
                    headers={"Authorization": f"Bearer {bearer}"},
                )
        except httpx.HTTPError as exc:
            logger.warning("identity_request_failed", path=path, error=str(exc))
            raise IdentityError(str(exc) or "Identity service unreachable", status_code=502)

        if response.is_error:
            message = _error_message(response)
            logger.info(
                "identity_request_rejected",
                path=path,
                status_code=response.status_code,
                message=message,
            )
            status_code = response.status_code if response.status_code < 500 else 502
            raise IdentityError(message, status_code=status_code)
        return response

    async def sign_up(self, email: str, password: str, username: str) -> AuthSession:
        """Register a new user, forwarding the username as user metadata."""
        response = await self._post(
            "/signup",
            json={"email": email, "password": password, "data": {"username": username}},
        )
        return _parse_session(response.json())

    async def sign_in(self, email: str, password: str) -> AuthSession:
        """Exchange email/password for a session."""
        response = await self._post(
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        return _parse_session(response.json())

    async def sign_out(self, access_token: str) -> None:
        """Revoke the session behind an access token."""
        await self._post("/logout", token=access_token)
