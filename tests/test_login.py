"""Tests for the shared-password login and logout flow."""

from fastapi.testclient import TestClient

from conftest import PASSWORD, make_settings
from launchdash import create_app


def test_correct_password_sets_cookie_and_redirects_to_next(client):
    response = client.post("/login?next=%2Fsettings%2Fadvanced", data={"password": PASSWORD})
    assert response.status_code == 303
    assert response.headers["location"] == "/settings/advanced"
    cookie = response.headers["set-cookie"]
    assert cookie.startswith("auth=yes")
    assert "HttpOnly" in cookie
    assert "Max-Age=604800" in cookie
    assert "Path=/" in cookie
    assert "SameSite=strict" in cookie
    assert "Secure" in cookie


def test_correct_password_without_next_uses_default(client):
    response = client.post("/login", data={"password": PASSWORD})
    assert response.status_code == 303
    assert response.headers["location"] == "/settings"


def test_empty_next_uses_default(client):
    response = client.post("/login?next=", data={"password": PASSWORD})
    assert response.headers["location"] == "/settings"


def test_offsite_next_is_ignored(client):
    for target in ("https://example.com/", "//example.com/settings", "settings"):
        response = client.post("/login", params={"next": target}, data={"password": PASSWORD})
        assert response.status_code == 303
        assert response.headers["location"] == "/settings"


def test_wrong_password_returns_400_without_cookie(client):
    response = client.post("/login?next=%2Fsettings", data={"password": "nope"})
    assert response.status_code == 400
    assert response.json() == {"incorrect": True}
    assert "set-cookie" not in response.headers


def test_wrong_password_from_browser_redisplays_form(client):
    response = client.post(
        "/login?next=%2Fsettings",
        data={"password": "nope"},
        headers={"Accept": "text/html"},
    )
    assert response.status_code == 400
    assert "Incorrect password" in response.text
    assert "set-cookie" not in response.headers


def test_missing_password_field_is_rejected(client):
    response = client.post("/login", data={})
    assert response.status_code == 400


def test_login_disabled_without_configured_password():
    app = create_app(make_settings(PASSWORD=""))
    with TestClient(app, follow_redirects=False) as test_client:
        response = test_client.post("/login", data={"password": ""})
    assert response.status_code == 400
    assert "set-cookie" not in response.headers


def test_development_cookie_is_not_secure():
    app = create_app(make_settings(APP_ENV="development"))
    with TestClient(app, follow_redirects=False) as test_client:
        response = test_client.post("/login", data={"password": PASSWORD})
    assert response.status_code == 303
    assert "Secure" not in response.headers["set-cookie"]


def test_login_page_carries_next_into_form(client):
    response = client.get("/login?next=%2Fsettings%2Fadvanced")
    assert response.status_code == 200
    assert 'action="/login?next=/settings/advanced"' in response.text


def test_logout_expires_cookie(client):
    response = client.get("/logout")
    assert response.status_code == 303
    assert response.headers["location"] == "/"
    cookie = response.headers["set-cookie"]
    assert cookie.startswith("auth=")
    assert "Max-Age=0" in cookie
