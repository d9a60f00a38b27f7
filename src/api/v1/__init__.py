"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.auth import router as auth_router
from api.v1.routes.chat import router as chat_router
from api.v1.routes.feed import router as feed_router
from api.v1.routes.navigation import router as navigation_router
from api.v1.routes.profile import router as profile_router
from api.v1.schemas.common import ErrorResponse

router = APIRouter(
    responses={
        401: {"model": ErrorResponse, "description": "Missing or invalid token"},
        422: {"model": ErrorResponse, "description": "Request validation failed"},
    }
)
router.include_router(auth_router)
router.include_router(feed_router)
router.include_router(profile_router)
router.include_router(chat_router)
router.include_router(navigation_router)
