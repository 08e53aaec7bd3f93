from __future__ import annotations

from .auth_gate import AuthGateMiddleware, is_authenticated, login_redirect_url
from .request_id import RequestIdMiddleware, request_id_ctx_var

__all__ = [
    "AuthGateMiddleware",
    "RequestIdMiddleware",
    "is_authenticated",
    "login_redirect_url",
    "request_id_ctx_var",
]
