import os

class Settings:
    # Fetching
    REQUEST_TIMEOUT_MS: int = int(os.getenv("REQUEST_TIMEOUT_MS", "10000"))
    USER_AGENT: str = os.getenv(
        "USER_AGENT",
        "Mozilla/5.0 (iPhone; CPU iPhone OS 14_0 like Mac OS X) "
        "AppleWebKit/605.1.15 (KHTML, like Gecko) Mobile/15E148",
    )
    ACCEPT_LANGUAGE: str = os.getenv("ACCEPT_LANGUAGE", "")
    FETCH_BACKEND: str = os.getenv("FETCH_BACKEND", "httpx").lower()

    # Extraction
    HTML_PARSER: str = os.getenv("HTML_PARSER", "html.parser")
    STRICT_FIELD_MODES: bool = os.getenv("STRICT_FIELD_MODES", "0").lower() in ("1", "true", "yes")

    # Service
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

settings = Settings()
