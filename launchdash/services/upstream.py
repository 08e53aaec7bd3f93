"""HTTP client for the upstream simulation/status service.

Each call opens a short-lived ``httpx.AsyncClient`` and makes exactly one
request (redirects are followed): no retries, no caching. The timeout comes
from configuration and is unset by default. Tests pass an ``httpx`` transport
to avoid the network.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from ..core.config import AppSettings
from ..schemas.status import (
    MonteCarloResponse,
    MonteCarloSettings,
    StatusPayload,
    status_payload_adapter,
)

logger = logging.getLogger(__name__)


class UpstreamError(Exception):
    """Base class for failures talking to the upstream service."""


class UpstreamStatusError(UpstreamError):
    """Upstream answered with a non-2xx status."""

    def __init__(self, status_code: int, reason: str) -> None:
        super().__init__(f"Upstream responded {status_code} {reason}")
        self.status_code = status_code
        self.reason = reason


class UpstreamPayloadError(UpstreamError):
    """Upstream answered 2xx but the body does not have the expected shape."""


def _client(settings: AppSettings, transport: httpx.AsyncBaseTransport | None) -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=settings.UPSTREAM_TIMEOUT, transport=transport, follow_redirects=True)


def _raise_for_status(response: httpx.Response, context: str) -> None:
    if response.is_success:
        return
    if response.status_code >= 500:
        logger.error("Upstream service error %s during %s", response.status_code, context)
    else:
        logger.warning("Upstream request error %s during %s", response.status_code, context)
    raise UpstreamStatusError(response.status_code, response.reason_phrase)


async def fetch_status(
    settings: AppSettings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Any:
    """Return the decoded status document exactly as upstream sent it.

    Raises ``UpstreamStatusError`` for non-2xx answers. Transport failures
    (``httpx.HTTPError``) and undecodable bodies (``ValueError``) propagate.
    """

    async with _client(settings, transport) as client:
        response = await client.get(settings.status_url)
    _raise_for_status(response, "status fetch")
    return response.json()


def check_status_payload(document: Any) -> StatusPayload:
    try:
        return status_payload_adapter.validate_python(document)
    except ValidationError as exc:
        raise UpstreamPayloadError(f"Unexpected status payload: {exc.error_count()} error(s)") from exc


async def run_monte_carlo(
    settings: AppSettings,
    params: MonteCarloSettings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> MonteCarloResponse:
    """Submit a Monte Carlo run and return the predicted impact points."""

    try:
        async with _client(settings, transport) as client:
            response = await client.post(settings.monte_carlo_url, json=params.model_dump())
        _raise_for_status(response, "monte carlo run")
        return MonteCarloResponse.model_validate(response.json())
    except UpstreamError:
        raise
    except ValidationError as exc:
        raise UpstreamPayloadError("Unexpected Monte Carlo payload") from exc
    except (httpx.HTTPError, ValueError) as exc:
        raise UpstreamError(str(exc) or exc.__class__.__name__) from exc
