import httpx
import pytest
from pagescraper.core import config
from pagescraper.fetch.http_fetcher import HttpxFetcher

PRODUCT_PAGE = """
<html>
<head><title> Acme Store </title></head>
<body>
    <h1>Rocket Skates</h1>
    <h2>Details</h2>
    <div class="product" id="main">
        <p class="price" data-currency="USD">$199</p>
        <p class="description">Fast. <b>Very</b> fast.</p>
        <span class="tag">outdoor</span>
        <span class="tag">sport</span>
    </div>
    <img src="/img/skates.png" alt="Skates" width="640" height="480">
    <img data-src="https://cdn.example.com/lazy.jpg">
    <img alt="no source">
    <a href="/catalog">Catalog</a>
    <a href="https://other.example.com/x"> External </a>
    <a name="anchor">No href</a>
</body>
</html>
"""

@pytest.fixture
def product_page():
    return PRODUCT_PAGE

@pytest.fixture(autouse=True)
def reset_settings():
    """Keep settings changes from leaking between tests"""
    original_strict = config.settings.STRICT_FIELD_MODES
    original_backend = config.settings.FETCH_BACKEND
    original_accept_language = config.settings.ACCEPT_LANGUAGE
    config.settings.STRICT_FIELD_MODES = False
    config.settings.FETCH_BACKEND = "httpx"
    config.settings.ACCEPT_LANGUAGE = ""

    yield

    config.settings.STRICT_FIELD_MODES = original_strict
    config.settings.FETCH_BACKEND = original_backend
    config.settings.ACCEPT_LANGUAGE = original_accept_language

@pytest.fixture
def mock_fetcher():
    """Build an HttpxFetcher whose requests are answered by `handler`."""
    def build(handler):
        return HttpxFetcher(transport=httpx.MockTransport(handler))
    return build
