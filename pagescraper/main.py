import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager
from pagescraper.api.routes import router
from pagescraper.core.config import settings
from pagescraper.core.log import configure_logging

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Configure logging on startup.
    """
    configure_logging()
    logger.info("Starting Page Scraper (fetch backend: %s)", settings.FETCH_BACKEND)

    yield

    logger.info("Shutting down Page Scraper")

app = FastAPI(
    title="Page Scraper",
    description="API for fetching web pages and extracting data with CSS selectors",
    version="1.0.0",
    lifespan=lifespan
)

# Include API routes
app.include_router(router)

@app.get("/")
async def root():
    """Root endpoint with basic info"""
    return {
        "service": "Page Scraper",
        "version": "1.0.0",
        "endpoints": {
            "scrape": "POST /scrape",
            "extract": "POST /extract",
            "health": "GET /health"
        }
    }
