"""Tests for the cookie gate in front of the settings area."""

import httpx
import pytest
from fastapi.testclient import TestClient

from conftest import AUTH_COOKIE, make_settings
from launchdash import create_app
from launchdash.middlewares.auth_gate import is_authenticated, login_redirect_url


@pytest.mark.parametrize("path", ["/settings", "/settings/advanced", "/settings/montecarlo"])
def test_anonymous_requests_to_settings_redirect_to_login(client, path):
    response = client.get(path)
    assert response.status_code == 303
    assert response.headers["location"] == login_redirect_url(path)


@pytest.mark.parametrize("cookie", ["auth=no", "auth=YES", "auth=", "auth=yes%20", "other=yes"])
def test_wrong_cookie_values_count_as_anonymous(client, cookie):
    response = client.get("/settings/advanced", headers={"Cookie": cookie})
    assert response.status_code == 303
    assert response.headers["location"] == "/login?next=%2Fsettings%2Fadvanced"


def test_authenticated_requests_reach_settings(client):
    response = client.get("/settings", headers=AUTH_COOKIE)
    assert response.status_code == 200
    assert "Monte Carlo" in response.text


def test_authenticated_unknown_settings_path_is_not_redirected(client):
    response = client.get("/settings/advanced", headers=AUTH_COOKIE)
    assert response.status_code == 404


def test_paths_outside_prefix_are_never_gated(client):
    assert client.get("/health").status_code == 200
    assert client.get("/login").status_code == 200
    assert client.get("/api/status").status_code == 200


def test_gate_exposes_flag_to_handlers(client):
    # The login page sends authenticated visitors straight on.
    response = client.get("/login?next=/settings", headers=AUTH_COOKIE)
    assert response.status_code == 303
    assert response.headers["location"] == "/settings"


def test_login_redirect_url_matches_encode_uri_component():
    assert login_redirect_url("/settings/a b") == "/login?next=%2Fsettings%2Fa%20b"
    assert login_redirect_url("/settings/(x)!") == "/login?next=%2Fsettings%2F(x)!"


def test_is_authenticated_uses_configured_cookie(settings):
    assert is_authenticated({"auth": "yes"}, settings)
    assert not is_authenticated({"auth": "true"}, settings)
    assert not is_authenticated({}, settings)


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"
    assert response.headers["X-Response-Time"].endswith("ms")


def test_settings_router_guards_itself_when_gate_prefix_differs():
    transport = httpx.MockTransport(lambda request: httpx.Response(200))
    app = create_app(make_settings(PROTECTED_PREFIX="/admin"), upstream_transport=transport)
    with TestClient(app, follow_redirects=False) as test_client:
        browser = test_client.get("/settings", headers={"Accept": "text/html"})
        api = test_client.get("/settings", headers={"Accept": "application/json", "X-Request-ID": "req-7"})
    assert browser.status_code == 303
    assert browser.headers["location"] == "/login?next=%2Fsettings"
    assert api.status_code == 401
    assert api.json() == {"code": "http_error", "message": "Login required", "request_id": "req-7"}
