"""Database engine and session management."""

from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.config import settings


def connect_args_for(url: str) -> dict[str, Any]:
    """Driver arguments for a database URL.

    Supabase's pooler (Supavisor, transaction mode) cannot keep asyncpg's
    prepared statements across transactions, so the statement cache is off
    for pooled hosts.
    """
    if "supabase.com" in url:
        return {"statement_cache_size": 0}
    return {}


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    return create_async_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
        connect_args=connect_args_for(url),
    )


engine = build_engine(settings.async_database_url, echo=settings.debug)

async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session (used by the detailed health check)."""
    async with async_session_factory() as session:
        yield session


async def dispose_engine() -> None:
    """Close pooled connections on shutdown."""
    await engine.dispose()
