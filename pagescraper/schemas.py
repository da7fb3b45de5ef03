from pydantic import BaseModel, Field
from typing import Any, Dict, List, Literal, Optional, Union

class ImageRecord(BaseModel):
    url: str
    alt: str = ""
    width: Optional[str] = None
    height: Optional[str] = None

class LinkRecord(BaseModel):
    url: str
    text: str = ""

# Field specs for structured extraction, one model per mode

class TextField(BaseModel):
    mode: Literal["text"] = "text"
    selector: str

class HtmlField(BaseModel):
    mode: Literal["html"] = "html"
    selector: str

class AttrField(BaseModel):
    mode: Literal["attr"] = "attr"
    selector: str
    attr_name: str = Field(min_length=1)

class ListField(BaseModel):
    mode: Literal["list"] = "list"
    selector: str

FieldSpec = Union[TextField, HtmlField, AttrField, ListField]

# Raw form accepted from callers: a bare selector or a dict with selector/mode
RawFieldSpec = Union[str, Dict[str, Any]]

ScrapeMode = Literal["text", "images", "links", "summary", "structured"]

class AuthSettings(BaseModel):
    username: str
    password: str = ""

class ScrapeRequest(BaseModel):
    url: str
    mode: ScrapeMode = "summary"
    selector: Optional[str] = None
    mapping: Optional[Dict[str, RawFieldSpec]] = None
    auth: Optional[AuthSettings] = None
    cookies: Optional[str] = None
    headers: Dict[str, str] = Field(default_factory=dict)
    timeout_ms: Optional[int] = Field(None, gt=0, description="Fetch deadline in milliseconds")

class ExtractRequest(BaseModel):
    html: str
    base_url: str = ""
    mode: ScrapeMode = "summary"
    selector: Optional[str] = None
    mapping: Optional[Dict[str, RawFieldSpec]] = None

class ScrapeResponse(BaseModel):
    url: str
    mode: ScrapeMode
    data: Dict[str, Any]
