"""Server-rendered pages: the daily overview and the gated settings area.

The overview is public and renders whatever the upstream status service
reports. Everything under ``/settings`` is protected twice: by the gate
middleware before routing and by ``require_login`` on the router itself.
"""


from __future__ import annotations

import logging

import httpx
from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse
from pydantic import ValidationError

from ..core.config import AppSettings
from ..core.jinja import get_templates
from ..deps.auth import get_app_settings, is_logged_in, require_login
from ..schemas.status import MonteCarloSettings, as_days
from ..services.upstream import UpstreamError, check_status_payload, fetch_status, run_monte_carlo

logger = logging.getLogger(__name__)

templates = get_templates()

router = APIRouter()
settings_router = APIRouter(prefix="/settings", dependencies=[Depends(require_login)])

_FORM_DEFAULTS = {
    "number_simulations": "100",
    "fuel_mass": "",
    "wind_from_direction": "",
    "length": "",
}


@router.get("/", response_class=HTMLResponse)
async def index_page(request: Request, settings: AppSettings = Depends(get_app_settings)):
    days = []
    error = ""
    try:
        document = await fetch_status(settings, transport=request.app.state.upstream_transport)
        days = as_days(check_status_payload(document))
    except (UpstreamError, httpx.HTTPError, ValueError) as exc:
        logger.warning("Overview could not load upstream status: %s", exc)
        error = "Simulation results are unavailable right now."
    context = {"days": days, "error": error, "authenticated": is_logged_in(request)}
    return templates.TemplateResponse(request, "index.html", context)


def _settings_context(request: Request, **overrides):
    context = {
        "authenticated": is_logged_in(request),
        "form": dict(_FORM_DEFAULTS),
        "errors": [],
        "impacts": None,
        "error": "",
    }
    context.update(overrides)
    return context


@settings_router.get("", response_class=HTMLResponse)
def settings_page(request: Request):
    return templates.TemplateResponse(request, "settings.html", _settings_context(request))


@settings_router.post("/montecarlo", response_class=HTMLResponse)
async def submit_monte_carlo(
    request: Request,
    number_simulations: str = Form(""),
    fuel_mass: str = Form(""),
    wind_from_direction: str = Form(""),
    length: str = Form(""),
    settings: AppSettings = Depends(get_app_settings),
):
    form = {
        "number_simulations": number_simulations,
        "fuel_mass": fuel_mass,
        "wind_from_direction": wind_from_direction,
        "length": length,
    }
    try:
        params = MonteCarloSettings.model_validate(form)
    except ValidationError as exc:
        errors = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()]
        return templates.TemplateResponse(
            request,
            "settings.html",
            _settings_context(request, form=form, errors=errors),
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )

    try:
        result = await run_monte_carlo(settings, params, transport=request.app.state.upstream_transport)
    except UpstreamError as exc:
        logger.error("Monte Carlo run failed: %s", exc)
        return templates.TemplateResponse(
            request,
            "settings.html",
            _settings_context(request, form=form, error="The simulation service could not complete the run."),
            status_code=status.HTTP_502_BAD_GATEWAY,
        )
    return templates.TemplateResponse(
        request,
        "settings.html",
        _settings_context(request, form=form, impacts=result.data),
    )
