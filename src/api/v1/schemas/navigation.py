"""Pydantic schemas for Navigation API."""

from pydantic import BaseModel


class NavItemResponse(BaseModel):
    """Schema for a top-bar link."""

    path: str
    label: str


class NavigationResponse(BaseModel):
    """Schema for a resolved navigation request."""

    requested: str
    path: str
    redirected: bool
    authenticated: bool
    nav_items: list[NavItemResponse]
