"""JWT authentication provider.

Supabase signs access tokens with ES256 and publishes the public keys as a
JWKS document; tests and local tooling use HS256 tokens signed with
``JWT_SECRET_KEY``. The signing algorithm is read from the token header.

Claims used from a Supabase access token::

    {
        "sub": "user-uuid",
        "email": "student@college.edu",
        "role": "authenticated",
        "aud": "authenticated",
        "user_metadata": {"username": "CoolStudent123"},
        "exp": 1234567890
    }
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Optional
from uuid import UUID

import httpx
from jose import JWTError, jwt
from jose.backends import ECKey

from core.config import settings
from infrastructure.auth.provider import TokenUser

logger = logging.getLogger(__name__)

AUDIENCE = "authenticated"


class JWKSCache:
    """Public signing keys indexed by ``kid``, fetched lazily.

    A lookup miss triggers one refetch so rotated keys are picked up without
    a restart. Fetch failures leave the cache empty and are retried on the
    next lookup.
    """

    def __init__(self, jwks_url: str, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._jwks_url = jwks_url
        self._transport = transport
        self._keys: dict[str, dict[str, Any]] | None = None

    def clear(self) -> None:
        self._keys = None

    async def _fetch(self) -> dict[str, dict[str, Any]]:
        if not self._jwks_url:
            return {}
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(self._jwks_url, timeout=10.0)
                response.raise_for_status()
                document = response.json()
        except (httpx.HTTPError, ValueError):
            logger.exception("Failed to fetch JWKS from %s", self._jwks_url)
            return {}

        keys = {key["kid"]: key for key in document.get("keys", []) if key.get("kid")}
        self._keys = keys
        logger.info("Fetched %d JWKS keys", len(keys))
        return keys

    async def get(self, kid: str) -> Optional[dict[str, Any]]:
        keys = self._keys if self._keys is not None else await self._fetch()
        if kid in keys:
            return keys[kid]

        # Unknown kid: the signing key may have rotated
        self.clear()
        return (await self._fetch()).get(kid)


def _user_from_claims(claims: dict[str, Any]) -> Optional[TokenUser]:
    user_id = claims.get("sub")
    email = claims.get("email")
    if not user_id or not email:
        return None

    metadata = claims.get("user_metadata") or {}
    return TokenUser(
        id=UUID(user_id),
        email=email,
        username=metadata.get("username"),
        role=claims.get("role"),
    )


class JWTAuthProvider:
    """Validates Supabase (ES256) and local (HS256) access tokens."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
        jwks: Optional[JWKSCache] = None,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes
        self._jwks = jwks or JWKSCache(settings.supabase_jwks_url)

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """Return the token's user, or None for any invalid, expired or
        malformed token."""
        try:
            header = jwt.get_unverified_header(token)
            if header.get("alg") == "ES256":
                claims = await self._decode_es256(token, header.get("kid"))
            else:
                claims = jwt.decode(
                    token, self._secret_key, algorithms=[self._algorithm], audience=AUDIENCE
                )
            return _user_from_claims(claims) if claims is not None else None
        except (JWTError, ValueError):
            return None

    async def _decode_es256(self, token: str, kid: Optional[str]) -> Optional[dict[str, Any]]:
        if not kid:
            return None

        key_data = await self._jwks.get(kid)
        if not key_data:
            logger.warning("JWKS key not found for kid=%s", kid)
            return None

        return jwt.decode(
            token,
            ECKey(key_data, algorithm="ES256"),
            algorithms=["ES256"],
            audience=AUDIENCE,
        )

    def create_token(self, user: TokenUser) -> str:
        """Mint an HS256 token shaped like a Supabase one (tests, local tools)."""
        claims: dict[str, Any] = {
            "sub": str(user.id),
            "email": user.email,
            "aud": AUDIENCE,
            "role": user.role or "authenticated",
            "exp": datetime.utcnow() + timedelta(minutes=self._expire_minutes),
            "user_metadata": {"username": user.username},
        }
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)
