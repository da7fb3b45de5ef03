"""
Selector-based extraction over fetched HTML.

Every function parses its own tree from the HTML string it is given, so calls
never share state and the caller's markup is never modified. A selector that
matches nothing yields an empty result; only bad input or bad configuration
raises.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Union
from urllib.parse import urljoin

from bs4 import BeautifulSoup, FeatureNotFound, Tag
from bs4.builder import ParserRejectedMarkup
from soupsieve import SelectorSyntaxError

from pagescraper.core.config import settings
from pagescraper.core.errors import ConfigError, ParseError, SelectorError
from pagescraper.extract.fields import parse_mapping
from pagescraper.schemas import AttrField, HtmlField, ImageRecord, LinkRecord, ListField, TextField

logger = logging.getLogger(__name__)

HtmlInput = Union[str, bytes]


def parse_html(html: HtmlInput, parser: Optional[str] = None) -> BeautifulSoup:
    """Parse markup into a queryable tree. Broken markup gives a best-effort tree."""
    if not isinstance(html, (str, bytes)):
        raise ParseError(f"HTML must be str or bytes, got {type(html).__name__}")
    parser = parser or settings.HTML_PARSER
    try:
        return BeautifulSoup(html, parser)
    except FeatureNotFound as e:
        raise ConfigError(f"HTML parser {parser!r} is not available") from e
    except ParserRejectedMarkup as e:
        raise ParseError(f"Could not parse HTML: {e}") from e


def select(soup: BeautifulSoup, selector: str) -> List[Tag]:
    if not isinstance(selector, str):
        raise ConfigError(f"Selector must be a string, got {type(selector).__name__}")
    try:
        return soup.select(selector)
    except SelectorSyntaxError as e:
        raise SelectorError(selector, e) from e


def resolve_url(url: str, base_url: str) -> str:
    """Absolutize root-relative URLs; anything else passes through."""
    if url.startswith("/") and base_url:
        return urljoin(base_url, url)
    return url


def _attr(element: Tag, name: str) -> Optional[str]:
    value = element.get(name)
    if isinstance(value, list):  # class, rel and friends
        return " ".join(value)
    return value


def _text(nodes: List[Tag]) -> str:
    return "".join(node.get_text() for node in nodes).strip()


def extract_text(html: HtmlInput, selectors: Union[str, Mapping[str, str]]) -> Union[str, Dict[str, str]]:
    """
    Text of a selector's node-set, or a dict of name -> text for a mapping
    of selectors. Texts of all matched elements are joined and trimmed.
    """
    soup = parse_html(html)
    if isinstance(selectors, str):
        return _text(select(soup, selectors))
    if isinstance(selectors, Mapping):
        return {name: _text(select(soup, sel)) for name, sel in selectors.items()}
    raise ConfigError(f"Selectors must be a string or a mapping, got {type(selectors).__name__}")


def extract_images(html: HtmlInput, selector: str = "img", base_url: str = "") -> List[ImageRecord]:
    soup = parse_html(html)
    images = []
    for element in select(soup, selector):
        url = _attr(element, "src") or _attr(element, "data-src")
        if not url:
            continue
        images.append(ImageRecord(
            url=resolve_url(url, base_url),
            alt=_attr(element, "alt") or "",
            width=_attr(element, "width") or None,
            height=_attr(element, "height") or None,
        ))
    return images


def extract_links(html: HtmlInput, selector: str = "a", base_url: str = "") -> List[LinkRecord]:
    soup = parse_html(html)
    links = []
    for element in select(soup, selector):
        href = _attr(element, "href")
        if not href:
            continue
        links.append(LinkRecord(url=resolve_url(href, base_url), text=element.get_text().strip()))
    return links


def extract_structured_data(
    html: HtmlInput,
    mapping: Mapping[str, Any],
    strict: Optional[bool] = None,
) -> Dict[str, Union[str, List[str]]]:
    """
    Evaluate a field mapping against one document.

    Values are strings for text/html/attr fields and lists of strings for list
    fields. The result has exactly the mapping's keys.
    """
    if strict is None:
        strict = settings.STRICT_FIELD_MODES
    fields = parse_mapping(mapping, strict=strict)
    soup = parse_html(html)

    result: Dict[str, Union[str, List[str]]] = {}
    for name, spec in fields.items():
        nodes = select(soup, spec.selector)
        if isinstance(spec, TextField):
            result[name] = _text(nodes)
        elif isinstance(spec, HtmlField):
            result[name] = nodes[0].decode_contents() if nodes else ""
        elif isinstance(spec, AttrField):
            result[name] = (_attr(nodes[0], spec.attr_name) or "") if nodes else ""
        elif isinstance(spec, ListField):
            result[name] = [node.get_text().strip() for node in nodes]
        else:
            raise ConfigError(f"Field {name!r}: unsupported spec {spec!r}")
    logger.debug("Extracted %d fields", len(result))
    return result
