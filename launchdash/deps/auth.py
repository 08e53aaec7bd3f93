from __future__ import annotations

from fastapi import HTTPException, Request, status

from ..core.config import AppSettings


def get_app_settings(request: Request) -> AppSettings:
    """The settings object the application was built with."""

    return request.app.state.settings


def is_logged_in(request: Request) -> bool:
    return bool(getattr(request.state, "authenticated", False))


async def require_login(request: Request) -> bool:
    """Dependency for routes that need the auth cookie even outside the gated prefix."""

    if not is_logged_in(request):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Login required")
    return True
