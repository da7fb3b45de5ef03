import logging
from typing import Any, Dict, Mapping, Optional

from pagescraper.core.errors import ConfigError
from pagescraper.extract import extractor
from pagescraper.services.web_scraper import WebScraper

logger = logging.getLogger(__name__)

HEADINGS_SELECTOR = "h1, h2, h3"
SCRAPE_MODES = ("text", "images", "links", "summary", "structured")

def check_mode_args(mode: str, selector: Optional[str], mapping: Optional[Mapping[str, Any]]) -> None:
    if mode not in SCRAPE_MODES:
        raise ConfigError(f"Unknown scrape mode {mode!r}")
    if mode == "text" and not selector:
        raise ConfigError("A CSS selector is required for text extraction")
    if mode == "structured" and not mapping:
        raise ConfigError("A field mapping is required for structured extraction")

def extract_page(
    html: str,
    base_url: str,
    mode: str,
    selector: Optional[str] = None,
    mapping: Optional[Mapping[str, Any]] = None,
    strict: Optional[bool] = None,
) -> Dict[str, Any]:
    """
    Run one of the scrape modes against already-fetched HTML.

    Modes:
    - text: text of `selector` (required)
    - images / links: records for `selector`, defaulting to img / a
    - summary: title, images and links; with a selector also headings
      and the selector's text as main_content
    - structured: `mapping` evaluated as structured data (required)
    """
    check_mode_args(mode, selector, mapping)

    if mode == "text":
        return {"text": extractor.extract_text(html, selector)}

    if mode == "images":
        images = extractor.extract_images(html, selector or "img", base_url)
        return {"images": [image.model_dump() for image in images]}

    if mode == "links":
        links = extractor.extract_links(html, selector or "a", base_url)
        return {"links": [link.model_dump() for link in links]}

    if mode == "summary":
        data: Dict[str, Any] = {"title": extractor.extract_text(html, "title")}
        if selector:
            structured = extractor.extract_structured_data(html, {
                "headings": {"mode": "list", "selector": HEADINGS_SELECTOR},
                "main_content": {"mode": "text", "selector": selector},
            }, strict=strict)
            data.update(structured)
        data["images"] = [image.model_dump() for image in extractor.extract_images(html, "img", base_url)]
        data["links"] = [link.model_dump() for link in extractor.extract_links(html, "a", base_url)]
        return data

    return extractor.extract_structured_data(html, mapping, strict=strict)

async def scrape_page(
    scraper: WebScraper,
    url: str,
    mode: str = "summary",
    selector: Optional[str] = None,
    mapping: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Fetch a page and extract from it.

    Relative image and link URLs resolve against the final URL of the
    response, i.e. after redirects.
    """
    check_mode_args(mode, selector, mapping)
    logger.info("Scraping %s (mode=%s)", url, mode)
    result = await scraper.fetch(url)
    logger.debug("HTML received from %s: %d characters", result.final_url, len(result.html))
    return extract_page(
        result.html,
        result.final_url,
        mode,
        selector=selector,
        mapping=mapping,
        strict=scraper.strict_field_modes,
    )
