"""Process-wide Supabase client handle.

Created lazily on first use and released during application shutdown.
"""

from typing import Optional

import structlog
from supabase import AsyncClient, acreate_client

from core.config import settings

logger = structlog.get_logger()

_client: Optional[AsyncClient] = None


async def get_supabase_client() -> AsyncClient:
    """Get or create the shared Supabase client."""
    global _client
    if _client is None:
        if not settings.supabase_url or not settings.supabase_anon_key:
            raise RuntimeError("SUPABASE_URL and SUPABASE_ANON_KEY must be set")
        key = settings.supabase_service_role_key or settings.supabase_anon_key
        _client = await acreate_client(settings.supabase_url, key)
        logger.info("supabase_client_created", url=settings.supabase_url)
    return _client


async def close_supabase_client() -> None:
    """Drop every realtime channel and forget the client."""
    global _client
    if _client is not None:
        await _client.remove_all_channels()
        _client = None
        logger.info("supabase_client_closed")
