"""
HTTP Integration Tests
======================

Runs the FastAPI application against real font files on disk.
"""

import hashlib
import logging

import pytest
from fastapi.testclient import TestClient

from adrian.core.models import FontEvent, FontEventType
from adrian.fonts.identity import obfuscated_id
from adrian.server.app import create_app
from adrian.service import FontService

pytestmark = pytest.mark.integration


def make_client(config) -> TestClient:
    service = FontService(config)
    service.load()
    return TestClient(create_app(service, manage_lifecycle=False))


class TestPlainNames:
    """Fonts served under their full names."""

    @pytest.fixture
    def client(self, acme_semibold, plain_names_config):
        return make_client(plain_names_config)

    def test_font_css(self, client):
        response = client.get("/font/Acme Sans SemiBold.css")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/css")
        assert "font-weight: 600;" in response.text
        assert "url(Acme Sans SemiBold.ttf) format('ttf')" in response.text

    def test_font_file_by_full_name(self, client, acme_semibold):
        response = client.get("/font/Acme Sans SemiBold.ttf")

        assert response.status_code == 200
        assert response.content == acme_semibold.read_bytes()

    def test_unknown_name(self, client):
        response = client.get("/font/Acme Sans Heavy.css")

        assert response.status_code == 404
        assert response.text == "Not Found"


class TestObfuscatedFiles:
    """Fonts served under sha256 IDs."""

    @pytest.fixture
    def client(self, acme_semibold, default_config):
        return make_client(default_config)

    @pytest.fixture
    def font_id(self):
        return obfuscated_id("Acme Sans", "SemiBold")

    def test_css_points_at_hashed_url(self, client, font_id):
        response = client.get("/font/Acme Sans SemiBold.css")

        assert f"url({font_id}.ttf)" in response.text
        assert "local('Acme Sans SemiBold')" in response.text

    def test_serves_font_bytes(self, client, font_id, acme_semibold):
        data = acme_semibold.read_bytes()

        response = client.get(f"/font/{font_id}.ttf")

        assert response.status_code == 200
        assert response.content == data
        assert response.headers["content-type"] == "font/ttf"
        assert response.headers["etag"] == f'"{hashlib.md5(data).hexdigest()}"'
        assert f"{font_id}.ttf" in response.headers["content-disposition"]

    def test_not_modified(self, client, font_id):
        etag = client.get(f"/font/{font_id}.ttf").headers["etag"]

        response = client.get(f"/font/{font_id}.ttf", headers={"If-None-Match": etag})

        assert response.status_code == 304
        assert response.content == b""

    def test_stale_etag_gets_full_response(self, client, font_id):
        response = client.get(f"/font/{font_id}.ttf", headers={"If-None-Match": '"stale"'})

        assert response.status_code == 200

    def test_full_name_is_not_an_id(self, client):
        assert client.get("/font/Acme Sans SemiBold.ttf").status_code == 404

    def test_unknown_id(self, client):
        response = client.get(f"/font/{'0' * 64}.ttf")

        assert response.status_code == 404
        assert response.text == "Not Found"

    def test_unsupported_extension(self, client, font_id):
        assert client.get(f"/font/{font_id}.eot").status_code == 404

    def test_file_deleted_behind_index(self, client, font_id, acme_semibold):
        acme_semibold.unlink()

        assert client.get(f"/font/{font_id}.ttf").status_code == 404


class TestFamilyCSS:
    """Family and query-string stylesheets."""

    @pytest.fixture
    def client(self, font_factory, plain_names_config):
        font_factory("Acme-Regular.ttf", "Acme Sans", "Regular")
        font_factory("Acme-Bold.woff2", "Acme Sans", "Bold", flavor="woff2")
        font_factory("Other-Regular.otf", "Other Serif", "Regular", cff=True)
        return make_client(plain_names_config)

    def test_family_stylesheet(self, client):
        response = client.get("/font/family/Acme Sans.css")

        assert response.status_code == 200
        assert response.text.count("@font-face") == 2
        assert "url(Acme Sans Bold.woff2) format('woff2')" in response.text

    def test_missing_family(self, client):
        assert client.get("/font/family/Nothing.css").status_code == 404

    def test_query_stylesheet(self, client):
        response = client.get("/css/?family=Acme+Sans:700|Other+Serif&display=swap")

        assert response.status_code == 200
        assert response.text.count("@font-face") == 2
        assert response.text.count("font-display: swap;") == 2
        assert "Acme Sans Regular" not in response.text
        assert "format('otf')" in response.text

    def test_query_without_family(self, client):
        assert client.get("/css/").status_code == 400

    def test_query_unknown_family(self, client):
        assert client.get("/css/?family=Acme+Sans|Nothing").status_code == 404


class TestCachingAndHealth:
    """Response cache and service status."""

    @pytest.fixture
    def service(self, acme_semibold, plain_names_config):
        service = FontService(plain_names_config)
        service.load()
        return service

    @pytest.fixture
    def client(self, service):
        return TestClient(create_app(service, manage_lifecycle=False))

    def test_repeat_requests_hit_cache(self, client, service):
        first = client.get("/font/family/Acme Sans.css")
        second = client.get("/font/family/Acme Sans.css")

        assert first.text == second.text
        assert service.cache.get_stats().hits == 1

    def test_index_change_refreshes_css(self, client, service, font_factory):
        assert client.get("/font/family/Acme Sans.css").text.count("@font-face") == 1

        bold = font_factory("Acme-Bold.ttf", "Acme Sans", "Bold")
        service.pipeline.handle(FontEvent(FontEventType.ADDED, str(bold)))

        assert client.get("/font/family/Acme Sans.css").text.count("@font-face") == 2

    def test_removed_font_disappears(self, client, service, acme_semibold):
        assert client.get("/font/Acme Sans SemiBold.css").status_code == 200

        service.pipeline.handle(FontEvent(FontEventType.REMOVED, str(acme_semibold)))

        assert client.get("/font/Acme Sans SemiBold.css").status_code == 404

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["fonts"] == 1
        assert body["families"] == 1
        assert "cache" in body

    def test_access_log(self, client, caplog):
        caplog.set_level(logging.INFO, logger="adrian.access")

        client.get("/health")

        lines = [r.getMessage() for r in caplog.records if r.name == "adrian.access"]
        assert len(lines) == 1
        assert '"GET /health HTTP/1.1" 200' in lines[0]


class TestSameStyleInSeveralFormats:
    """One style shipped as TrueType and WOFF2 shares an ID."""

    @pytest.fixture
    def fonts(self, font_factory):
        return {
            "ttf": font_factory("A-Regular.ttf", "Acme Sans", "Regular"),
            "woff2": font_factory("B-Regular.woff2", "Acme Sans", "Regular", flavor="woff2"),
        }

    @pytest.fixture
    def client(self, fonts, default_config):
        return make_client(default_config)

    @pytest.fixture
    def font_id(self):
        return obfuscated_id("Acme Sans", "Regular")

    def test_family_css_lists_both_urls(self, client, font_id):
        css = client.get("/font/family/Acme Sans.css").text

        assert f"url({font_id}.ttf) format('ttf')" in css
        assert f"url({font_id}.woff2) format('woff2')" in css

    @pytest.mark.parametrize(
        ("ext", "mime_type"), [("ttf", "font/ttf"), ("woff2", "font/woff2")]
    )
    def test_extension_selects_file(self, client, fonts, font_id, ext, mime_type):
        response = client.get(f"/font/{font_id}.{ext}")

        assert response.status_code == 200
        assert response.content == fonts[ext].read_bytes()
        assert response.headers["content-type"] == mime_type
        assert f"{font_id}.{ext}" in response.headers["content-disposition"]

    def test_missing_format_is_not_substituted(self, client, font_id):
        assert client.get(f"/font/{font_id}.woff").status_code == 404
