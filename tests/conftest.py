"""Shared fixtures: an app wired to a fake upstream service."""

import sys
from pathlib import Path
from typing import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from launchdash import create_app
from launchdash.core.config import AppSettings

PASSWORD = "launch-secret"


def sample_day(time: str = "2024-06-01T12:00:00Z", apogee: float = 812.4) -> dict:
    return {
        "data": {
            "max_velocity": 143.2,
            "apogee_time": 11.8,
            "apogee_altitude": apogee,
            "apogee_x": 12.0,
            "apogee_y": -4.5,
            "impact_x": 210.3,
            "impact_y": -88.1,
            "impact_velocity": 6.2,
            "flight_data": {
                "time_stamps": [0.0, 0.5, 1.0],
                "coords": [[0, 0, 0], [0.1, 0.0, 20.5], [0.4, -0.1, 61.0]],
            },
        },
        "weather": {
            "time": time,
            "temperature": 14.5,
            "pressure": 1012.0,
            "wind_speed": 4.2,
            "wind_from_direction": 250.0,
            "humidity": 63.0,
        },
    }


def make_settings(**overrides) -> AppSettings:
    values = {"PASSWORD": PASSWORD, "APP_ENV": "production"}
    values.update(overrides)
    return AppSettings(_env_file=None, **values)


class FakeUpstream:
    """Records requests and answers them with a configurable handler."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(
            200, json=[sample_day()]
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


@pytest.fixture()
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture()
def settings() -> AppSettings:
    return make_settings()


@pytest.fixture()
def client(settings, upstream):
    app = create_app(settings, upstream_transport=httpx.MockTransport(upstream))
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client


AUTH_COOKIE = {"Cookie": "auth=yes"}
