"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from core.config import settings
from domain.services.auth_service import AuthService
from domain.services.chat_service import ChatService
from domain.services.feed_service import FeedService
from domain.services.profile_service import ProfileService
from infrastructure.assistant.bridge import AssistantBridge
from infrastructure.auth.supabase_identity import SupabaseIdentityClient
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.realtime.in_process import InProcessRealtimeProvider
from infrastructure.realtime.provider import IRealtimeProvider
from infrastructure.realtime.supabase_realtime import SupabaseRealtimeProvider


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_realtime_provider() -> IRealtimeProvider:
    """Supabase Realtime when a project is configured, in-process otherwise."""
    if settings.supabase_url and settings.supabase_anon_key:
        return SupabaseRealtimeProvider()
    return InProcessRealtimeProvider()


@lru_cache
def get_assistant_bridge() -> AssistantBridge:
    """Get Assistant bridge instance."""
    return AssistantBridge()


@lru_cache
def get_identity_client() -> SupabaseIdentityClient:
    """Get identity client instance."""
    return SupabaseIdentityClient()


@lru_cache
def get_feed_service() -> FeedService:
    """Get Feed service instance."""
    return FeedService(get_uow_factory(), realtime=get_realtime_provider())


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(get_uow_factory())


@lru_cache
def get_chat_service() -> ChatService:
    """Get Chat service instance."""
    return ChatService(get_assistant_bridge())


@lru_cache
def get_auth_service() -> AuthService:
    """Get Auth service instance."""
    return AuthService(
        get_identity_client(),
        profiles=get_profile_service(),
        chats=get_chat_service(),
    )
