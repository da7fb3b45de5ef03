import datetime as dt
from dataclasses import dataclass, field
from typing import Dict, Optional

from pagescraper.core.config import settings
from pagescraper.core.errors import ConfigError

@dataclass(frozen=True)
class BasicAuth:
    username: str
    password: str

@dataclass(frozen=True)
class FetchOptions:
    timeout_ms: int = settings.REQUEST_TIMEOUT_MS
    headers: Dict[str, str] = field(default_factory=dict)
    basic_auth: Optional[BasicAuth] = None
    cookie_header: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.timeout_ms, bool) or not isinstance(self.timeout_ms, int) or self.timeout_ms <= 0:
            raise ConfigError(f"timeout_ms must be a positive integer, got {self.timeout_ms!r}")

    @property
    def timeout_sec(self) -> float:
        return self.timeout_ms / 1000

    def request_headers(self) -> Dict[str, str]:
        """Headers to send: defaults, then caller headers, then the cookie slot."""
        headers = {"User-Agent": settings.USER_AGENT}
        if settings.ACCEPT_LANGUAGE:
            headers["Accept-Language"] = settings.ACCEPT_LANGUAGE
        for name, value in self.headers.items():
            _set_header(headers, name, value)
        if self.cookie_header:
            _set_header(headers, "Cookie", self.cookie_header)
        return headers

def _set_header(headers: Dict[str, str], name: str, value: str) -> None:
    # header names are case-insensitive
    for existing in [k for k in headers if k.lower() == name.lower()]:
        del headers[existing]
    headers[name] = value

@dataclass
class FetchResult:
    url: str
    status_code: int
    final_url: str
    html: str
    fetched_at: str  # ISO 8601

def utc_now_iso() -> str:
    return dt.datetime.now(dt.timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")

class BaseFetcher:
    async def fetch(self, url: str, options: FetchOptions) -> FetchResult:
        raise NotImplementedError
