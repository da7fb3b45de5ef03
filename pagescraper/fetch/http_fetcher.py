import asyncio
import logging
from typing import Optional

import httpx

from pagescraper.core.errors import FetchTimeoutError, HttpStatusError, NetworkError
from pagescraper.fetch.base import BaseFetcher, FetchOptions, FetchResult, utc_now_iso

logger = logging.getLogger(__name__)

class HttpxFetcher(BaseFetcher):
    """Async fetcher backed by httpx. One client per request, nothing shared."""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._transport = transport

    async def fetch(self, url: str, options: FetchOptions) -> FetchResult:
        auth = None
        if options.basic_auth is not None:
            auth = httpx.BasicAuth(options.basic_auth.username, options.basic_auth.password)

        logger.debug("GET %s (timeout %d ms)", url, options.timeout_ms)
        try:
            async with httpx.AsyncClient(
                timeout=options.timeout_sec,
                headers=options.request_headers(),
                auth=auth,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                # httpx timeouts are per phase; wait_for makes timeout_ms a deadline
                response = await asyncio.wait_for(client.get(url), timeout=options.timeout_sec)
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            logger.warning("Timeout while fetching %s", url)
            raise FetchTimeoutError(url, options.timeout_ms) from e
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as e:
            # InvalidURL and header encoding errors are not HTTPError subclasses
            logger.warning("Failed to fetch %s: %s", url, e)
            raise NetworkError(url, e) from e

        if not response.is_success:
            logger.warning("HTTP error %d for %s", response.status_code, url)
            raise HttpStatusError(url, response.status_code)

        logger.debug("Fetched %s: %d characters", url, len(response.text))
        return FetchResult(
            url=url,
            status_code=response.status_code,
            final_url=str(response.url),
            html=response.text,
            fetched_at=utc_now_iso(),
        )
