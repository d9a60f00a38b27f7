"""Main FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse

from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.middleware.security import SecurityHeadersMiddleware
from api.routes.health import router as health_router
from api.v1 import router as v1_router
from core.config import settings
from core.logging import setup_logging
from infrastructure.database.session import dispose_engine
from infrastructure.supabase.client import close_supabase_client

logger = structlog.get_logger()

# Initialize structured logging
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager for startup/shutdown tasks."""
    logger.info(
        "app_started",
        environment=settings.app_env,
        assistant_enabled=settings.assistant_enabled,
        realtime="supabase" if settings.supabase_url and settings.supabase_anon_key else "in-process",
    )
    yield
    await close_supabase_client()
    await dispose_engine()
    logger.info("app_stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        title=settings.app_name,
        description=(
            "## Campus social network\n\n"
            "CampusConnect lets students post in topic threads, keep a profile "
            "and talk to an AI study assistant.\n\n"
            "### Features\n"
            "- **Feed**: threads, posts and comments with a live WebSocket feed\n"
            "- **Profile**: username and college per account\n"
            "- **AI Assistant**: chat sessions backed by a completion API\n\n"
            "### Authentication\n"
            "Sign up or log in through `/api/v1/auth`. Every other endpoint "
            "(except `/health` and `/api/v1/navigation`) requires the Supabase "
            "access token in the Authorization header:\n"
            "```\nAuthorization: Bearer <your_token>\n```\n"
            "The live feed takes the token as `?token=` instead."
        ),
        version="1.0.0",
        debug=settings.debug,
        contact={
            "name": "CampusConnect Support",
        },
        license_info={
            "name": "MIT",
        },
        openapi_tags=[
            {"name": "health", "description": "Health check endpoints"},
            {"name": "auth", "description": "Sign-up, sign-in and sign-out"},
            {"name": "feed", "description": "Threads, posts, comments and live feed"},
            {"name": "profile", "description": "Own profile"},
            {"name": "chat", "description": "AI assistant conversations"},
            {"name": "navigation", "description": "Client route guard"},
        ],
    )

    # Security & tracking middleware (LIFO order - last added = outermost)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # GZip compression for responses > 1KB
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Include routers
    app.include_router(health_router)
    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
