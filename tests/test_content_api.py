"""Tests for the /api/{locale}/... content endpoints."""

import pytest
from fastapi.testclient import TestClient

from shopper_site.main import app
from shopper_site.routers.content import get_repository
from shopper_site.services.content import ContentRepository


@pytest.fixture
def client(content_root):
    app.dependency_overrides[get_repository] = lambda: ContentRepository.from_directory(content_root)
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestPagesApi:
    def test_home_defaults(self, client):
        response = client.get("/api/es/home")
        assert response.status_code == 200
        body = response.json()
        assert body["locale"] == "es"
        assert body["hero_cta_href"] == "/es/contact"

    def test_not_found_defaults(self, client):
        assert client.get("/api/fr/not-found").json()["title"] == "Page introuvable"

    def test_unsupported_locale(self, client):
        assert client.get("/api/de/home").status_code == 404
        assert client.get("/api/en-US/home").status_code == 404

    def test_page_with_rendered_html(self, client, write):
        write("pages/about.yml", 'title_en: About\nbody_en: "# About us"\n')
        response = client.get("/api/en/pages/about")
        assert response.status_code == 200
        body = response.json()
        assert body["page"]["frontmatter"]["title"] == "About"
        assert body["html"] == "<h1>About us</h1>"

    def test_missing_page(self, client):
        response = client.get("/api/en/pages/about")
        assert response.status_code == 404
        assert response.json() == {"detail": "Pages 'about' not found."}


class TestCollectionsApi:
    def test_blog_list_and_post(self, client, write):
        write("blog/en/hello.md", "---\ntitle: Hello\ndate: 2024-02-02\n---\n**Welcome**")
        posts = client.get("/api/en/blog").json()
        assert [p["slug"] for p in posts] == ["hello"]

        post = client.get("/api/en/blog/hello").json()
        assert post["post"]["title"] == "Hello"
        assert post["html"] == "<p><strong>Welcome</strong></p>"

    def test_missing_post(self, client):
        assert client.get("/api/en/blog/missing").status_code == 404

    def test_service(self, client, write):
        write("service_entries/styling.yml", "order: 1\ntitle_fr: Stylisme\nbody_fr: '- Conseils'\n")
        assert [s["title"] for s in client.get("/api/fr/services").json()] == ["Stylisme"]
        detail = client.get("/api/fr/services/styling").json()
        assert detail["service"]["slug"] == "styling"
        assert detail["html"] == "<ul>\n<li>Conseils</li>\n</ul>"

    def test_empty_collections(self, client):
        for path in ("faq", "testimonials", "how-it-works", "menus/header", "menus/footer", "navigation"):
            response = client.get(f"/api/en/{path}")
            assert response.status_code == 200, path
            assert response.json() == [], path

    def test_settings(self, client, write):
        write("settings.yml", "logo_text: Shopper\nheader_cta_href_en: /en/contact\n")
        body = client.get("/api/en/settings").json()
        assert body["logo_text"] == "Shopper"
        assert body["header_cta_href"] == "/en/contact"
