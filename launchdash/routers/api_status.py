from __future__ import annotations

import logging

import httpx
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from ..core.config import AppSettings
from ..deps.auth import get_app_settings
from ..services.upstream import (
    UpstreamPayloadError,
    UpstreamStatusError,
    check_status_payload,
    fetch_status,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["status"])

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}


@router.get("/api/status", summary="Relay the upstream simulation status")
@router.get("/status", include_in_schema=False)
async def get_status(request: Request, settings: AppSettings = Depends(get_app_settings)) -> Response:
    try:
        document = await fetch_status(settings, transport=request.app.state.upstream_transport)
    except UpstreamStatusError as exc:
        return PlainTextResponse(exc.reason, status_code=exc.status_code)
    except (httpx.HTTPError, ValueError):
        logger.exception("Status fetch from %s failed", settings.status_url)
        return PlainTextResponse("Internal Server Error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    headers = dict(CORS_HEADERS)
    if settings.STATUS_VALIDATION != "off":
        try:
            check_status_payload(document)
        except UpstreamPayloadError as exc:
            logger.warning("Upstream status payload failed validation: %s", exc)
            if settings.STATUS_VALIDATION == "strict":
                return PlainTextResponse("Bad Gateway", status_code=status.HTTP_502_BAD_GATEWAY)
            headers["X-Payload-Valid"] = "false"
    return JSONResponse(document, headers=headers)
