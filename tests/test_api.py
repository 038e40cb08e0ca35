"""
HTTP surface: routing, error mapping and rate limiting.
"""
import pytest

from pagegrade.config import Settings
from pagegrade.middleware import rate_limit
from pagegrade.routers import site_router
from pagegrade.utils.exceptions import RetrievalError

TEXT = " ".join(["Plain words keep coming."] * 30)


class TestHealth:

    def test_root(self, client):
        r = client.get("/")
        assert r.status_code == 200
        assert r.json()["service"] == "PageGrade API"

    def test_health_get_and_head(self, client):
        assert client.get("/health").json()["status"] == "ok"
        assert client.head("/health").status_code == 200


class TestPageEndpoints:

    @pytest.mark.parametrize("path,battery", [
        ("/analyze/seo", "seo"),
        ("/analyze/adsense", "adsense"),
        ("/analyze/static-site", "static_site"),
    ])
    def test_inline_html(self, client, well_built_page, path, battery):
        r = client.post(path, json={"url": "https://example.com", "html": well_built_page})
        assert r.status_code == 200
        body = r.json()
        assert body["battery"] == battery
        assert 0 <= body["score"] <= 100
        assert body["checks"][0]["status"] in ("pass", "warning", "fail")

    def test_static_site_reports_platform(self, client, well_built_page):
        r = client.post("/analyze/static-site",
                        json={"url": "https://myproject.netlify.app", "html": well_built_page})
        body = r.json()
        assert body["platform"] == "Netlify"
        assert body["checks"][0]["score"] == 3

    def test_fetches_when_html_missing(self, client, well_built_page, monkeypatch):
        fetched = []

        async def fake_fetch(url):
            fetched.append(url)
            return well_built_page

        monkeypatch.setattr(site_router, "fetch_page", fake_fetch)
        r = client.post("/analyze/seo", json={"url": "https://example.com/guide"})
        assert r.status_code == 200
        assert r.json()["score"] == 100
        assert fetched == ["https://example.com/guide"]

    def test_retrieval_failure_is_502(self, client, monkeypatch):
        async def failing_fetch(url):
            raise RetrievalError(
                "Could not access the website. The site may be blocking requests or unavailable.",
                url=url,
                attempts=4,
            )

        monkeypatch.setattr(site_router, "fetch_page", failing_fetch)
        r = client.post("/analyze/adsense", json={"url": "https://example.com"})
        assert r.status_code == 502
        assert r.json()["detail"] == (
            "Unable to analyze the website. Could not access the website. "
            "The site may be blocking requests or unavailable."
        )

    def test_invalid_url_is_400(self, client):
        r = client.post("/analyze/seo", json={"url": "example"})
        assert r.status_code == 400
        assert r.json()["detail"] == "Please enter a valid URL (e.g., https://example.com)"

    def test_static_site_messages(self, client):
        r = client.post("/analyze/static-site", json={"url": ""})
        assert r.status_code == 400
        assert r.json()["detail"] == "Please enter your static website URL."

    def test_ssrf_blocked(self, client, localhost_url):
        r = client.post("/analyze/seo", json={"url": localhost_url, "html": "<html></html>"})
        assert r.status_code == 400
        assert r.json()["detail"] == "URL blocked by SSRF protection."

    def test_missing_url_is_422(self, client):
        assert client.post("/analyze/seo", json={}).status_code == 422


class TestContentEndpoints:

    def test_analyze(self, client):
        r = client.post("/content/analyze", json={"text": TEXT})
        assert r.status_code == 200
        body = r.json()
        assert body["battery"] == "content_quality"
        assert body["word_count"] == 120
        assert len(body["checks"]) == 8

    def test_analyze_too_short(self, client):
        r = client.post("/content/analyze", json={"text": "Just a few words."})
        assert r.status_code == 400
        assert r.json()["detail"] == "Please enter at least 100 words for meaningful analysis."

    def test_humanize_seeded(self, client):
        payload = {"text": TEXT, "tone": "professional", "seed": 3}
        first = client.post("/content/humanize", json=payload).json()
        second = client.post("/content/humanize", json=payload).json()
        assert first == second
        assert first["tone"] == "professional"
        assert first["original_words"] == 120

    def test_humanize_bad_tone_is_422(self, client):
        r = client.post("/content/humanize", json={"text": TEXT, "tone": "pirate"})
        assert r.status_code == 422


class TestRateLimit:

    def test_limit_enforced(self, client, monkeypatch):
        monkeypatch.setattr(rate_limit, "get_settings", lambda: Settings(rate_limit_per_minute=2))
        payload = {"text": TEXT}
        assert client.post("/content/analyze", json=payload).status_code == 200
        assert client.post("/content/analyze", json=payload).status_code == 200
        r = client.post("/content/analyze", json=payload)
        assert r.status_code == 429
        assert int(r.headers["Retry-After"]) > 0

    def test_get_requests_not_limited(self, client, monkeypatch):
        monkeypatch.setattr(rate_limit, "get_settings", lambda: Settings(rate_limit_per_minute=1))
        for _ in range(3):
            assert client.get("/health").status_code == 200

    def test_forwarded_for_separates_clients(self, client, monkeypatch):
        monkeypatch.setattr(rate_limit, "get_settings", lambda: Settings(rate_limit_per_minute=1))
        payload = {"text": TEXT}
        assert client.post("/content/analyze", json=payload,
                           headers={"X-Forwarded-For": "203.0.113.1"}).status_code == 200
        assert client.post("/content/analyze", json=payload,
                           headers={"X-Forwarded-For": "203.0.113.2"}).status_code == 200
        assert client.post("/content/analyze", json=payload,
                           headers={"X-Forwarded-For": "203.0.113.1"}).status_code == 429
