"""Per-request authentication gate.

The whole session model is one cookie: when ``auth`` equals the sentinel value
the visitor is treated as logged in, otherwise not. Nothing is stored on the
server. The flag is recomputed for every request and exposed to handlers as
``request.state.authenticated``. Only paths under the protected prefix are
enforced; anonymous visitors there are bounced to the login page with the
original path remembered in ``next``.
"""

from __future__ import annotations

from typing import Mapping
from urllib.parse import quote

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from ..core.config import AppSettings

# Characters encodeURIComponent leaves alone on top of quote()'s defaults.
_NEXT_SAFE_CHARS = "!*'()"


def is_authenticated(cookies: Mapping[str, str], settings: AppSettings) -> bool:
    return cookies.get(settings.AUTH_COOKIE_NAME) == settings.AUTH_COOKIE_VALUE


def is_protected(path: str, settings: AppSettings) -> bool:
    return path.startswith(settings.PROTECTED_PREFIX)


def login_redirect_url(path: str) -> str:
    return f"/login?next={quote(path, safe=_NEXT_SAFE_CHARS)}"


class AuthGateMiddleware(BaseHTTPMiddleware):
    """Redirect anonymous requests for protected paths to ``/login``."""

    def __init__(self, app, settings: AppSettings) -> None:  # type: ignore[override]
        super().__init__(app)
        self.settings = settings

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        authenticated = is_authenticated(request.cookies, self.settings)
        request.state.authenticated = authenticated
        path = request.url.path
        if not authenticated and is_protected(path, self.settings):
            return RedirectResponse(url=login_redirect_url(path), status_code=303)
        return await call_next(request)
