"""Auth API routes: sign-up, sign-in, sign-out and the current session."""

from fastapi import APIRouter, Depends, status

from api.dependencies.auth import BearerToken, CurrentUser
from api.v1.dependencies import get_auth_service
from api.v1.schemas.auth import (
    AuthSessionResponse,
    CurrentSessionResponse,
    SessionUserResponse,
    SignInRequest,
    SignOutResponse,
    SignUpRequest,
)
from api.v1.schemas.profile import ProfileResponse
from domain.entities.auth import AuthSession
from domain.services.auth_service import AuthService
from domain.services.navigation_service import HOME_PATH, LOGIN_PATH

router = APIRouter(prefix="/auth", tags=["auth"])


def _session_response(session: AuthSession) -> AuthSessionResponse:
    return AuthSessionResponse(
        user=SessionUserResponse.model_validate(session.user),
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_in=session.expires_in,
        redirect_to=HOME_PATH,
    )


@router.post(
    "/signup",
    response_model=AuthSessionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Sign up",
    responses={
        201: {"description": "User registered"},
        400: {"description": "Password too short or rejected by the identity service"},
    },
)
async def sign_up(
    body: SignUpRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthSessionResponse:
    """Register with email, password and a username."""
    session = await service.sign_up(body.email, body.password, body.username)
    return _session_response(session)


@router.post(
    "/login",
    response_model=AuthSessionResponse,
    summary="Sign in",
    responses={
        200: {"description": "Signed in"},
        400: {"description": "Invalid login credentials"},
    },
)
async def sign_in(
    body: SignInRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthSessionResponse:
    """Exchange email and password for a session."""
    session = await service.sign_in(body.email, body.password)
    return _session_response(session)


@router.post(
    "/logout",
    response_model=SignOutResponse,
    summary="Sign out",
)
async def sign_out(
    user: CurrentUser,
    token: BearerToken,
    service: AuthService = Depends(get_auth_service),
) -> SignOutResponse:
    """Revoke the current session and close the user's chat sessions."""
    await service.sign_out(user.id, token)
    return SignOutResponse(redirect_to=LOGIN_PATH)


@router.get(
    "/session",
    response_model=CurrentSessionResponse,
    summary="Current session",
)
async def get_session(
    user: CurrentUser,
    service: AuthService = Depends(get_auth_service),
) -> CurrentSessionResponse:
    """The signed-in user and their profile."""
    profile = await service.get_session(user.id, user.username)
    return CurrentSessionResponse(
        user=SessionUserResponse.model_validate(user.as_session_user()),
        profile=ProfileResponse(
            id=profile.id,
            email=user.email,
            username=profile.username,
            college=profile.college,
            avatar_url=profile.avatar_url,
            created_at=profile.created_at,
        ),
    )
