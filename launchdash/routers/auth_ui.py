"""Beginner-friendly overview for this module.

WHAT: Login and logout for the password-gated settings area.
WHEN: ``/login`` is reached directly or via the gate's redirect; ``/logout``
from the page header.
WHY: The settings pages trigger upstream simulations, so they sit behind a
single shared password.
HOW: A correct password earns the ``auth`` cookie and a redirect back to where
the visitor was heading. A wrong one re-renders the form with ``incorrect``.

File: launchdash/routers/auth_ui.py
"""


from __future__ import annotations

import hmac
import logging

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response

from ..core.config import AppSettings
from ..core.errors import wants_html
from ..core.jinja import get_templates
from ..deps.auth import get_app_settings, is_logged_in
from ..schemas.auth import LoginFailure

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])
templates = get_templates()


def _verify_password(plain: str, settings: AppSettings) -> bool:
    expected = settings.PASSWORD
    if not expected:
        logger.error("Login attempted but no PASSWORD is configured")
        return False
    return hmac.compare_digest(plain.encode("utf-8"), expected.encode("utf-8"))


def safe_next(next_path: str | None, default: str) -> str:
    """Only same-site paths are honoured as redirect targets."""

    if not next_path or not next_path.startswith("/") or next_path.startswith(("//", "/\\")):
        return default
    return next_path


@router.get("/login", response_class=HTMLResponse)
def login_page(
    request: Request,
    next: str = "",
    settings: AppSettings = Depends(get_app_settings),
):
    if is_logged_in(request):
        return RedirectResponse(
            url=safe_next(next, settings.LOGIN_REDIRECT_DEFAULT),
            status_code=status.HTTP_303_SEE_OTHER,
        )
    return templates.TemplateResponse(request, "login.html", {"next": next, "incorrect": False})


@router.post("/login")
def login_submit(
    request: Request,
    password: str = Form(""),
    next: str = "",
    settings: AppSettings = Depends(get_app_settings),
) -> Response:
    if not _verify_password(password, settings):
        logger.warning("Rejected login attempt")
        if wants_html(request):
            return templates.TemplateResponse(
                request,
                "login.html",
                {"next": next, "incorrect": True},
                status_code=status.HTTP_400_BAD_REQUEST,
            )
        return JSONResponse(LoginFailure().model_dump(), status_code=status.HTTP_400_BAD_REQUEST)

    response = RedirectResponse(
        url=safe_next(next, settings.LOGIN_REDIRECT_DEFAULT),
        status_code=status.HTTP_303_SEE_OTHER,
    )
    response.set_cookie(
        settings.AUTH_COOKIE_NAME,
        settings.AUTH_COOKIE_VALUE,
        max_age=settings.AUTH_COOKIE_MAX_AGE,
        path="/",
        secure=settings.secure_cookies,
        httponly=True,
        samesite="strict",
    )
    return response


@router.get("/logout")
def logout(settings: AppSettings = Depends(get_app_settings)):
    response = RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(
        settings.AUTH_COOKIE_NAME,
        path="/",
        secure=settings.secure_cookies,
        httponly=True,
        samesite="strict",
    )
    return response
