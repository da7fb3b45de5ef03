import asyncio
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError

import requests
from requests.auth import HTTPBasicAuth

from pagescraper.core.errors import FetchTimeoutError, HttpStatusError, NetworkError
from pagescraper.fetch.base import BaseFetcher, FetchOptions, FetchResult, utc_now_iso

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024

# requests only times out per socket operation; the whole request runs here
# so the caller can stop waiting at the deadline
_executor = ThreadPoolExecutor(thread_name_prefix="pagescraper-requests")

class RequestsFetcher(BaseFetcher):
    """
    Blocking fetcher backed by requests.

    `fetch_sync` is for callers without an event loop; `fetch` runs it in a
    worker thread so the backend can stand in for HttpxFetcher.
    """

    def fetch_sync(self, url: str, options: FetchOptions) -> FetchResult:
        deadline = time.monotonic() + options.timeout_sec
        future = _executor.submit(self._get, url, options, deadline)
        try:
            return future.result(timeout=options.timeout_sec)
        except FutureTimeoutError as e:
            logger.warning("Timeout while fetching %s", url)
            raise FetchTimeoutError(url, options.timeout_ms) from e

    def _get(self, url: str, options: FetchOptions, deadline: float) -> FetchResult:
        auth = None
        if options.basic_auth is not None:
            auth = HTTPBasicAuth(options.basic_auth.username, options.basic_auth.password)

        logger.debug("GET %s (timeout %d ms)", url, options.timeout_ms)
        try:
            with requests.get(
                url,
                headers=options.request_headers(),
                auth=auth,
                timeout=options.timeout_sec,
                stream=True,
            ) as resp:
                status = int(resp.status_code)
                if not 200 <= status < 300:
                    logger.warning("HTTP error %d for %s", status, url)
                    raise HttpStatusError(url, status)

                chunks = []
                for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                    if time.monotonic() > deadline:
                        raise FetchTimeoutError(url, options.timeout_ms)
                    chunks.append(chunk)
                final_url = str(resp.url)
                encoding = resp.encoding or "utf-8"
        except requests.Timeout as e:
            logger.warning("Timeout while fetching %s", url)
            raise FetchTimeoutError(url, options.timeout_ms) from e
        except (requests.RequestException, UnicodeEncodeError) as e:
            logger.warning("Failed to fetch %s: %s", url, e)
            raise NetworkError(url, e) from e

        return FetchResult(
            url=url,
            status_code=status,
            final_url=final_url,
            html=_decode(b"".join(chunks), encoding),
            fetched_at=utc_now_iso(),
        )

    async def fetch(self, url: str, options: FetchOptions) -> FetchResult:
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self.fetch_sync, url, options),
                timeout=options.timeout_sec,
            )
        except asyncio.TimeoutError as e:
            raise FetchTimeoutError(url, options.timeout_ms) from e

def _decode(content: bytes, encoding: str) -> str:
    try:
        return content.decode(encoding, errors="replace")
    except LookupError:
        return content.decode("utf-8", errors="replace")
