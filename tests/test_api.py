"""
API tests for the audit endpoints.

The pipeline runs for real; only the request payloads are synthetic.
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from config import settings
from main import app

# Test client
client = TestClient(app, raise_server_exceptions=False)


def page(url: str, body: str = "<h1>Hello</h1><p>Welcome to our site.</p>") -> dict:
    return {
        "url": url,
        "html": f"<html><head><title>Example</title></head><body>{body}</body></html>",
        "headers": {"Content-Type": "text/html"},
        "load_time_ms": 500,
    }


def payload(pages=None, origin: str = "https://example.com", **extra) -> dict:
    body = {
        "pages": pages if pages is not None else [page("https://example.com/")],
        "resources": {"origin": origin},
    }
    body.update(extra)
    return body


class TestHealthEndpoint:
    """Tests for health endpoint."""

    def test_health_returns_ok(self):
        """Health endpoint should return healthy status."""
        response = client.get("/audit/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "1.0.0"
        assert data["services"]["content_categories"] == 11
        assert "local-business" in data["services"]["archetypes"]
        assert data["services"]["max_pages"] == settings.max_pages


class TestBenchmarksEndpoint:
    """Tests for benchmarks endpoint."""

    def test_every_archetype_listed(self):
        """Each archetype has its label and four anchors."""
        response = client.get("/audit/benchmarks")
        assert response.status_code == 200

        data = response.json()
        assert set(data) == {"saas-api", "ecommerce", "local-business", "content-publisher", "general"}
        assert data["saas-api"] == {"label": "SaaS sites", "median": 58, "p25": 42, "p75": 74, "top10": 85}


class TestAnalyzeEndpointValidation:
    """Tests for analyze endpoint input validation."""

    def test_missing_body_returns_422(self):
        """Missing required fields should return 422."""
        response = client.post("/audit/analyze", json={})
        assert response.status_code == 422

    def test_invalid_origin_returns_400(self):
        """A non-http origin should return 400."""
        response = client.post("/audit/analyze", json=payload(origin="ftp://example.com"))
        assert response.status_code == 400
        assert response.json()["error_code"] == "HTTP_400"
        assert "Invalid origin" in response.json()["message"]

    def test_too_many_pages_returns_400(self):
        """More than max_pages snapshots is rejected before analysis."""
        pages = [page(f"https://example.com/p{i}") for i in range(3)]
        with patch.object(settings, "max_pages", 2):
            response = client.post("/audit/analyze", json=payload(pages))
        assert response.status_code == 400

    def test_empty_pages_returns_422_with_code(self):
        """An empty page list surfaces the pipeline's NO_PAGES error."""
        response = client.post("/audit/analyze", json=payload([]))
        assert response.status_code == 422

        data = response.json()
        assert data["error_code"] == "NO_PAGES"
        assert data["message"]


class TestAnalyzeEndpoint:
    """Tests for a successful analysis."""

    def test_analysis_response_shape(self):
        """A valid request returns scores, grades, profiles and a benchmark."""
        pages = [page("https://example.com/"), page("https://example.com/about")]
        response = client.post("/audit/analyze", json=payload(pages, client_request_id="req-1"))
        assert response.status_code == 200

        data = response.json()
        assert data["url"] == "https://example.com"
        assert data["pages_analyzed"] == 2
        assert data["archetype"] == "general"
        assert data["aeo"]["archetype"] == "general"
        for key in ("geo_score", "aeo_score", "overall_score"):
            assert 0 <= data[key] <= 100
        assert data["overall_grade"] in ["A+", "A", "B", "C", "D", "F"]
        assert len(data["geo"]) == 11
        assert "percentile" in data["benchmark"]

    def test_none_fields_are_excluded(self):
        """Unset optional fields are left out of the response."""
        response = client.post("/audit/analyze", json=payload())
        data = response.json()

        findings = data["geo"]["schema_markup"]["findings"]
        assert findings
        assert all("page_urls" not in finding for finding in findings)

    def test_unexpected_error_returns_500(self):
        """Unexpected pipeline failures map to INTERNAL_ERROR."""
        with patch("main.analyze_site", side_effect=RuntimeError("boom")):
            response = client.post("/audit/analyze", json=payload())
        assert response.status_code == 500
        assert response.json()["error_code"] == "INTERNAL_ERROR"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
