"""
Error kinds raised by the fetcher and the extractor.

Fetch errors carry the URL that failed; extraction errors describe a bad
input or a bad field configuration. A selector that matches nothing is never
an error.
"""

from typing import Optional


class ScraperError(Exception):
    """Base class for everything this package raises on purpose."""


class FetchError(ScraperError):
    def __init__(self, url: str, message: str):
        super().__init__(message)
        self.url = url


class FetchTimeoutError(FetchError):
    def __init__(self, url: str, timeout_ms: int):
        super().__init__(url, f"Timeout after {timeout_ms} ms while fetching {url}")
        self.timeout_ms = timeout_ms


class NetworkError(FetchError):
    def __init__(self, url: str, cause: Optional[BaseException] = None):
        super().__init__(url, f"Failed to fetch {url}: {cause}")
        self.cause = cause


class HttpStatusError(FetchError):
    def __init__(self, url: str, status_code: int):
        super().__init__(url, f"HTTP error {status_code} for {url}")
        self.status_code = status_code


class ExtractionError(ScraperError):
    pass


class ParseError(ExtractionError):
    pass


class ConfigError(ExtractionError):
    pass


class SelectorError(ConfigError):
    def __init__(self, selector: str, cause: Optional[BaseException] = None):
        super().__init__(f"Invalid CSS selector {selector!r}: {cause}")
        self.selector = selector
        self.cause = cause
