"""Navigation API route."""

from fastapi import APIRouter, Query

from api.dependencies.auth import OptionalUser
from api.v1.schemas.navigation import NavigationResponse, NavItemResponse
from domain.services import navigation_service

router = APIRouter(prefix="/navigation", tags=["navigation"])


@router.get(
    "",
    response_model=NavigationResponse,
    summary="Resolve a client path",
)
async def resolve_path(
    user: OptionalUser,
    path: str = Query("/", max_length=200),
) -> NavigationResponse:
    """Where the client should land for ``path``, plus the top-bar links."""
    authenticated = user is not None
    resolution = navigation_service.resolve(path, authenticated)
    return NavigationResponse(
        requested=path,
        path=resolution.path,
        redirected=resolution.redirected,
        authenticated=authenticated,
        nav_items=[
            NavItemResponse(path=item.path, label=item.label)
            for item in navigation_service.nav_items(authenticated)
        ],
    )
