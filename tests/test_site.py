"""Tests for the locale redirect, robots.txt and health endpoints."""

import pytest
from fastapi.testclient import TestClient

from shopper_site.config import Settings, get_settings
from shopper_site.main import app


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestLocaleRedirect:
    def test_negotiates_from_accept_language(self, client):
        response = client.get("/", headers={"Accept-Language": "es-MX,es;q=0.9,en;q=0.5"}, follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "/es/"
        assert "Accept-Language" in response.headers["vary"]
        cookie = response.headers["set-cookie"]
        assert "lang=es" in cookie
        assert "Max-Age=31536000" in cookie
        assert "samesite=lax" in cookie.lower()

    def test_default_locale_without_header(self, client):
        response = client.get("/", follow_redirects=False)
        assert response.headers["location"] == "/en/"

    def test_cookie_beats_header_and_is_not_reset(self, client):
        response = client.get("/", headers={"Accept-Language": "es", "Cookie": "lang=fr"}, follow_redirects=False)
        assert response.headers["location"] == "/fr/"
        assert "set-cookie" not in response.headers

    def test_invalid_cookie_is_replaced(self, client):
        response = client.get("/", headers={"Accept-Language": "fr-CA", "Cookie": "lang=de"}, follow_redirects=False)
        assert response.headers["location"] == "/fr/"
        assert "lang=fr" in response.headers["set-cookie"]


class TestRobots:
    def test_uses_request_origin_by_default(self, client):
        app.dependency_overrides[get_settings] = lambda: Settings(SITE_URL=None)
        response = client.get("/robots.txt")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "Sitemap: http://testserver/sitemap-index.xml" in response.text
        assert response.headers["cache-control"] == "public, max-age=3600"

    def test_uses_configured_site_url(self, client):
        app.dependency_overrides[get_settings] = lambda: Settings(SITE_URL="https://shop.example/")
        response = client.get("/robots.txt")
        assert response.text.startswith("User-agent: *\nAllow: /")
        assert "Sitemap: https://shop.example/sitemap.xml" in response.text


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
