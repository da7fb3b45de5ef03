import httpx
import pytest
from unittest.mock import patch
from fastapi.testclient import TestClient
from pagescraper.fetch.http_fetcher import HttpxFetcher
from pagescraper.main import app

# Test client
client = TestClient(app)

PAGE = """
<html>
<head><title>Test Page</title></head>
<body>
    <h1>Welcome</h1>
    <div class="content"><p>Hello <b>world</b></p></div>
    <img src="/logo.png" alt="Logo">
    <a href="/about">About us</a>
</body>
</html>
"""

def fetcher_for(handler):
    return HttpxFetcher(transport=httpx.MockTransport(handler))

def page_handler(request):
    return httpx.Response(200, text=PAGE)

def not_found_handler(request):
    return httpx.Response(404)

def unreachable_handler(request):
    raise httpx.ConnectError("unreachable", request=request)

def slow_handler(request):
    raise httpx.ReadTimeout("slow", request=request)

class TestScrapeEndpoint:
    """Integration tests for the /scrape endpoint"""

    @patch("pagescraper.services.web_scraper.default_fetcher")
    def test_summary_default(self, mock_default_fetcher):
        """Test default summary scrape of a page"""
        mock_default_fetcher.return_value = fetcher_for(page_handler)

        response = client.post("/scrape", json={"url": "https://site.example/"})

        assert response.status_code == 200
        body = response.json()
        assert body["mode"] == "summary"
        assert body["data"]["title"] == "Test Page"
        assert body["data"]["images"] == [
            {"url": "https://site.example/logo.png", "alt": "Logo", "width": None, "height": None}
        ]
        assert body["data"]["links"] == [{"url": "https://site.example/about", "text": "About us"}]

    @patch("pagescraper.services.web_scraper.default_fetcher")
    def test_structured_mapping(self, mock_default_fetcher):
        """Test structured scrape with a field mapping"""
        mock_default_fetcher.return_value = fetcher_for(page_handler)

        response = client.post("/scrape", json={
            "url": "https://site.example/",
            "mode": "structured",
            "mapping": {
                "heading": "h1",
                "body": {"selector": ".content", "mode": "html"},
                "logo": {"selector": "img", "mode": "attr", "attrName": "src"},
            },
        })

        assert response.status_code == 200
        assert response.json()["data"] == {
            "heading": "Welcome",
            "body": "<p>Hello <b>world</b></p>",
            "logo": "/logo.png",
        }

    @patch("pagescraper.services.web_scraper.default_fetcher")
    def test_auth_cookies_and_headers_are_sent(self, mock_default_fetcher):
        """Test auth, cookies and headers reach the target site"""
        seen = {}

        def handler(request):
            seen.update(request.headers)
            return httpx.Response(200, text=PAGE)

        mock_default_fetcher.return_value = fetcher_for(handler)

        response = client.post("/scrape", json={
            "url": "https://site.example/private",
            "mode": "text",
            "selector": "h1",
            "auth": {"username": "user", "password": "pass"},
            "cookies": "session=abc",
            "headers": {"X-Client": "tests"},
        })

        assert response.status_code == 200
        assert response.json()["data"] == {"text": "Welcome"}
        assert seen["authorization"] == "Basic dXNlcjpwYXNz"
        assert seen["cookie"] == "session=abc"
        assert seen["x-client"] == "tests"

    def test_invalid_url(self):
        """Test endpoint with invalid URL"""
        response = client.post("/scrape", json={"url": "not-a-url"})

        assert response.status_code == 400
        assert "must start with http" in response.json()["detail"]

    def test_missing_url(self):
        """Test endpoint with missing URL"""
        response = client.post("/scrape", json={})

        assert response.status_code == 422

    def test_invalid_timeout(self):
        """Test a non-positive timeout fails validation"""
        response = client.post("/scrape", json={"url": "https://site.example/", "timeout_ms": 0})

        assert response.status_code == 422

    def test_text_mode_without_selector(self):
        """Test text mode without a selector returns 400"""
        response = client.post("/scrape", json={"url": "https://site.example/", "mode": "text"})

        assert response.status_code == 400
        assert "selector" in response.json()["detail"]

    @pytest.mark.parametrize("handler,expected_status", [
        (not_found_handler, 502),
        (unreachable_handler, 502),
        (slow_handler, 504),
    ])
    @patch("pagescraper.services.web_scraper.default_fetcher")
    def test_fetch_errors(self, mock_default_fetcher, handler, expected_status):
        """Test fetch errors map to gateway status codes"""
        mock_default_fetcher.return_value = fetcher_for(handler)

        response = client.post("/scrape", json={"url": "https://site.example/"})

        assert response.status_code == expected_status

class TestExtractEndpoint:
    """Integration tests for the /extract endpoint"""

    def test_extract_links(self):
        """Test link extraction from posted HTML"""
        response = client.post("/extract", json={
            "html": PAGE,
            "base_url": "https://site.example",
            "mode": "links",
        })

        assert response.status_code == 200
        assert response.json()["data"]["links"] == [{"url": "https://site.example/about", "text": "About us"}]

    def test_extract_structured_missing_attr_name(self):
        """Test attr field without a name returns 400"""
        response = client.post("/extract", json={
            "html": PAGE,
            "mode": "structured",
            "mapping": {"logo": {"selector": "img", "mode": "attr"}},
        })

        assert response.status_code == 400

    def test_extract_invalid_selector(self):
        """Test a malformed selector returns 400"""
        response = client.post("/extract", json={"html": PAGE, "mode": "text", "selector": "div["})

        assert response.status_code == 400
        assert "Invalid CSS selector" in response.json()["detail"]

class TestHealthEndpoints:
    """Test health and utility endpoints"""

    def test_health_endpoint(self):
        """Test health check endpoint"""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root_endpoint(self):
        """Test root endpoint"""
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert "service" in data
        assert "endpoints" in data

    def test_lifespan_startup(self, caplog):
        """Test that app startup configures logging and serves requests"""
        with caplog.at_level("INFO"), TestClient(app) as lifespan_client:
            response = lifespan_client.get("/health")
        assert response.status_code == 200
        assert "Starting Page Scraper" in caplog.text
