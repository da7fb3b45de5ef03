from fastapi import APIRouter, HTTPException, status
from pagescraper.core.errors import (
    ConfigError,
    FetchTimeoutError,
    HttpStatusError,
    NetworkError,
    ParseError,
    ScraperError,
)
from pagescraper.fetch.base import FetchOptions
from pagescraper.schemas import ExtractRequest, ScrapeRequest, ScrapeResponse
from pagescraper.services import scrape
from pagescraper.services.web_scraper import WebScraper

router = APIRouter()

def _error_status(error: ScraperError) -> int:
    if isinstance(error, ConfigError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(error, ParseError):
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    if isinstance(error, FetchTimeoutError):
        return status.HTTP_504_GATEWAY_TIMEOUT
    if isinstance(error, (HttpStatusError, NetworkError)):
        return status.HTTP_502_BAD_GATEWAY
    return status.HTTP_500_INTERNAL_SERVER_ERROR

def _build_scraper(request: ScrapeRequest) -> WebScraper:
    options = FetchOptions()
    if request.timeout_ms is not None:
        options = FetchOptions(timeout_ms=request.timeout_ms)
    scraper = WebScraper(options)
    scraper.set_headers(request.headers)
    if request.auth is not None:
        scraper.set_auth(request.auth.username, request.auth.password)
    scraper.set_cookies(request.cookies)
    return scraper

@router.post("/scrape", response_model=ScrapeResponse)
async def scrape_url(request: ScrapeRequest):
    """
    Fetch a URL and extract data from it.

    Credentials and cookies apply to this request only.
    """
    if not request.url.startswith(("http://", "https://")):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="URL must start with http:// or https://"
        )

    try:
        scraper = _build_scraper(request)
        data = await scrape.scrape_page(
            scraper,
            request.url,
            mode=request.mode,
            selector=request.selector,
            mapping=request.mapping,
        )
    except ScraperError as e:
        raise HTTPException(status_code=_error_status(e), detail=str(e))
    return ScrapeResponse(url=request.url, mode=request.mode, data=data)

@router.post("/extract", response_model=ScrapeResponse)
async def extract_html(request: ExtractRequest):
    """Extract data from HTML supplied in the request body."""
    try:
        data = scrape.extract_page(
            request.html,
            request.base_url,
            request.mode,
            selector=request.selector,
            mapping=request.mapping,
        )
    except ScraperError as e:
        raise HTTPException(status_code=_error_status(e), detail=str(e))
    return ScrapeResponse(url=request.base_url, mode=request.mode, data=data)

@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "Page Scraper"}
