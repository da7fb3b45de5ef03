import logging
from typing import Optional

from pagescraper.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for the API service."""
    logging.basicConfig(level=level or settings.LOG_LEVEL, format=LOG_FORMAT)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
