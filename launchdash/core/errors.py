from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..middlewares.auth_gate import login_redirect_url
from ..middlewares.request_id import request_id_ctx_var


class ErrorEnvelope(JSONResponse):
    """JSON error body carrying the request id so callers can quote it when reporting."""

    def __init__(
        self,
        *,
        status_code: int,
        code: str,
        message: str,
        details: Any | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        payload: dict[str, Any] = {"code": code, "message": message}
        if details is not None:
            payload["details"] = details
        request_id = request_id_ctx_var.get()
        if request_id:
            payload["request_id"] = request_id
        super().__init__(payload, status_code=status_code, headers=headers)


def wants_html(request: Request) -> bool:
    return "text/html" in (request.headers.get("accept") or "").lower()


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        path = request.url.path
        if wants_html(request) and not path.startswith("/api") and not path.startswith("/login"):
            return RedirectResponse(url=login_redirect_url(path), status_code=status.HTTP_303_SEE_OTHER)
    detail = exc.detail
    if isinstance(detail, str):
        message = detail
    else:
        message = "Error"
    details = detail if isinstance(detail, dict) else None
    return ErrorEnvelope(
        status_code=exc.status_code,
        code="http_error",
        message=message,
        details=details,
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return ErrorEnvelope(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        code="validation_error",
        message="Validation failed",
        details={"errors": jsonable_errors(exc)},
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in exc.errors()
    ]
