"""Route table and access guard for the client's navigation surface."""

from dataclasses import dataclass

LOGIN_PATH = "/login"
SIGNUP_PATH = "/signup"
HOME_PATH = "/"


@dataclass(frozen=True, slots=True)
class Route:
    path: str
    label: str
    protected: bool


ROUTES: tuple[Route, ...] = (
    Route(LOGIN_PATH, "Login", protected=False),
    Route(SIGNUP_PATH, "Sign up", protected=False),
    Route(HOME_PATH, "Feed", protected=True),
    Route("/chatbot", "AI Assistant", protected=True),
    Route("/profile", "Profile", protected=True),
)

_ROUTES_BY_PATH = {route.path: route for route in ROUTES}


@dataclass(frozen=True, slots=True)
class Resolution:
    """Where a navigation request ends up."""

    path: str
    redirected: bool


def resolve(path: str, authenticated: bool) -> Resolution:
    """Decide which route a request for ``path`` should render.

    Protected routes without a session go to the login page; unknown paths
    fall back to the feed (which itself may bounce to login).
    """
    route = _ROUTES_BY_PATH.get(path)
    if route is None:
        target = resolve(HOME_PATH, authenticated)
        return Resolution(target.path, redirected=True)
    if route.protected and not authenticated:
        return Resolution(LOGIN_PATH, redirected=True)
    return Resolution(route.path, redirected=False)


def nav_items(authenticated: bool) -> list[Route]:
    """Links shown in the top bar; none before sign-in."""
    if not authenticated:
        return []
    return [route for route in ROUTES if route.protected]
