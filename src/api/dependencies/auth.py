"""Authentication dependencies for FastAPI.

The caller is resolved per request from the bearer token (or, for the live
feed socket, from the ``token`` query parameter). Nothing about the session
is kept between requests.
"""

from typing import Annotated

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.exceptions import AuthenticationError, ErrorCode
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import IAuthProvider, TokenUser

# Security scheme for OpenAPI docs
security = HTTPBearer(auto_error=False)

Credentials = Annotated[HTTPAuthorizationCredentials | None, Depends(security)]

_auth_provider: JWTAuthProvider | None = None


def get_auth_provider() -> IAuthProvider:
    """Process-wide token validator (holds the JWKS cache)."""
    global _auth_provider
    if _auth_provider is None:
        _auth_provider = JWTAuthProvider()
    return _auth_provider


async def get_bearer_token(credentials: Credentials) -> str:
    """Raw bearer token; required to revoke the session upstream."""
    if not credentials:
        raise AuthenticationError(
            message="Authorization header required",
            error_code=ErrorCode.UNAUTHORIZED,
        )
    return credentials.credentials


async def get_current_user(
    credentials: Credentials,
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> TokenUser:
    """
    The signed-in user.

    Raises:
        AuthenticationError: UNAUTHORIZED without a token, INVALID_TOKEN
            when it does not validate
    """
    token = await get_bearer_token(credentials)
    user = await auth_provider.validate_token(token)
    if not user:
        raise AuthenticationError(
            message="Invalid or expired token",
            error_code=ErrorCode.INVALID_TOKEN,
        )
    return user


async def get_optional_user(
    credentials: Credentials,
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> TokenUser | None:
    """The signed-in user, or None for anonymous or invalid tokens."""
    if not credentials:
        return None
    return await auth_provider.validate_token(credentials.credentials)


async def get_websocket_user(
    token: Annotated[str | None, Query()] = None,
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> TokenUser | None:
    """User of a WebSocket handshake, which cannot carry headers from a browser.

    Returns None for a missing or invalid token; the route closes the socket.
    """
    if not token:
        return None
    return await auth_provider.validate_token(token)


# Type aliases for route handlers
CurrentUser = Annotated[TokenUser, Depends(get_current_user)]
OptionalUser = Annotated[TokenUser | None, Depends(get_optional_user)]
BearerToken = Annotated[str, Depends(get_bearer_token)]
WebSocketUser = Annotated[TokenUser | None, Depends(get_websocket_user)]
