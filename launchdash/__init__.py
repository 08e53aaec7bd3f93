"""Application factory and top-level wiring for the Launch Dashboard.

This module brings together configuration, middleware, routers and error
handling. ``create_app`` receives one ``AppSettings`` object and hands it to
every part that needs it: the gate middleware directly and the route handlers
through ``app.state.settings``. Nothing reads the environment after startup.
"""

from __future__ import annotations

import httpx
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import AppSettings, get_settings
from .core.errors import http_exception_handler, validation_exception_handler
from .middlewares import AuthGateMiddleware, RequestIdMiddleware
from .routers import api_status, auth_ui, pages


def create_app(
    settings: AppSettings | None = None,
    *,
    upstream_transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title=settings.APP_NAME)
    app.state.settings = settings
    # Tests swap in an httpx.MockTransport here; production uses the network.
    app.state.upstream_transport = upstream_transport

    # Middleware added last runs first: request id wraps the gate so denied
    # requests are logged too.
    app.add_middleware(AuthGateMiddleware, settings=settings)
    app.add_middleware(RequestIdMiddleware)

    app.include_router(auth_ui.router)
    app.include_router(api_status.router)
    app.include_router(pages.router)
    app.include_router(pages.settings_router)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, bool]:
        return {"ok": True}

    return app


__all__ = ["create_app"]
