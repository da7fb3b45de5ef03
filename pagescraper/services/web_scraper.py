import dataclasses
import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from pagescraper.core.config import settings
from pagescraper.core.errors import ConfigError
from pagescraper.extract import extractor
from pagescraper.fetch.base import BaseFetcher, BasicAuth, FetchOptions, FetchResult
from pagescraper.schemas import ImageRecord, LinkRecord

logger = logging.getLogger(__name__)

def default_fetcher() -> BaseFetcher:
    """Fetcher backend selected by FETCH_BACKEND."""
    backend = settings.FETCH_BACKEND
    if backend == "httpx":
        from pagescraper.fetch.http_fetcher import HttpxFetcher
        return HttpxFetcher()
    if backend == "requests":
        from pagescraper.fetch.requests_fetcher import RequestsFetcher
        return RequestsFetcher()
    raise ConfigError(f"Unknown FETCH_BACKEND {backend!r}, expected 'httpx' or 'requests'")

class WebScraper:
    """
    Reusable scraper: owns default fetch options and delegates to the fetcher
    and the extractor.

    The options object is immutable; set_auth, set_cookies and set_headers
    swap in an updated copy, so a fetch already in flight keeps the options
    it started with.
    """

    def __init__(
        self,
        options: Optional[FetchOptions] = None,
        fetcher: Optional[BaseFetcher] = None,
        strict_field_modes: Optional[bool] = None,
    ):
        self._options = options or FetchOptions()
        self._fetcher = fetcher or default_fetcher()
        self.strict_field_modes = settings.STRICT_FIELD_MODES if strict_field_modes is None else strict_field_modes

    @property
    def options(self) -> FetchOptions:
        return self._options

    async def fetch(self, url: str) -> FetchResult:
        return await self._fetcher.fetch(url, self._options)

    async def fetch_html(self, url: str) -> str:
        result = await self.fetch(url)
        return result.html

    def extract_text(self, html: str, selectors: Union[str, Mapping[str, str]]) -> Union[str, Dict[str, str]]:
        return extractor.extract_text(html, selectors)

    def extract_images(self, html: str, selector: str = "img", base_url: str = "") -> List[ImageRecord]:
        return extractor.extract_images(html, selector, base_url)

    def extract_links(self, html: str, selector: str = "a", base_url: str = "") -> List[LinkRecord]:
        return extractor.extract_links(html, selector, base_url)

    def extract_structured_data(self, html: str, mapping: Mapping[str, Any]) -> Dict[str, Union[str, List[str]]]:
        return extractor.extract_structured_data(html, mapping, strict=self.strict_field_modes)

    def set_auth(self, username: Optional[str], password: str = "") -> None:
        """Set basic-auth credentials; pass None to clear them."""
        auth = BasicAuth(username, password) if username is not None else None
        self._options = dataclasses.replace(self._options, basic_auth=auth)

    def set_headers(self, headers: Mapping[str, str]) -> None:
        """Merge headers over the current defaults."""
        merged = dict(self._options.headers)
        merged.update(headers)
        self._options = dataclasses.replace(self._options, headers=merged)

    def set_cookies(self, cookie_header: Optional[str]) -> None:
        """Send a raw Cookie header with every request; None clears it."""
        self._options = dataclasses.replace(self._options, cookie_header=cookie_header or None)
