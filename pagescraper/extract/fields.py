"""
Normalisation of caller-supplied field specs into typed FieldSpec models.

Callers may describe a field as a bare selector string (text mode) or as a dict
with a selector and a mode. The mode key may also be spelled ``type`` and the
attribute name ``attr_name``, ``attrName`` or ``attr``.
"""

import logging
from typing import Any, Dict, Mapping

from pydantic import BaseModel, ValidationError

from pagescraper.core.errors import ConfigError
from pagescraper.schemas import AttrField, FieldSpec, HtmlField, ListField, TextField

logger = logging.getLogger(__name__)

FIELD_MODES = {
    "text": TextField,
    "html": HtmlField,
    "attr": AttrField,
    "list": ListField,
}

_ATTR_NAME_KEYS = ("attr_name", "attrName", "attr")


def parse_field_spec(name: str, raw: Any, strict: bool = False) -> FieldSpec:
    if isinstance(raw, (TextField, HtmlField, AttrField, ListField)):
        return raw
    if isinstance(raw, BaseModel):
        raise ConfigError(f"Field {name!r}: unsupported spec type {type(raw).__name__}")
    if isinstance(raw, str):
        return TextField(selector=raw)
    if not isinstance(raw, Mapping):
        raise ConfigError(f"Field {name!r}: expected a selector string or a mapping, got {type(raw).__name__}")

    selector = raw.get("selector")
    if not isinstance(selector, str) or not selector:
        raise ConfigError(f"Field {name!r}: 'selector' must be a non-empty string")

    mode = raw.get("mode", raw.get("type"))
    if mode is None:
        mode = "text"
    elif not isinstance(mode, str) or mode not in FIELD_MODES:
        if strict:
            raise ConfigError(f"Field {name!r}: unknown mode {mode!r}")
        logger.warning("Field %r: unknown mode %r, falling back to text", name, mode)
        mode = "text"

    kwargs: Dict[str, Any] = {"selector": selector}
    if mode == "attr":
        attr_name = next((raw[k] for k in _ATTR_NAME_KEYS if raw.get(k)), None)
        if attr_name is None:
            raise ConfigError(f"Field {name!r}: mode 'attr' requires an attribute name")
        kwargs["attr_name"] = attr_name

    try:
        return FIELD_MODES[mode](**kwargs)
    except ValidationError as e:
        raise ConfigError(f"Field {name!r}: {e}") from e


def parse_mapping(mapping: Mapping[str, Any], strict: bool = False) -> Dict[str, FieldSpec]:
    if not isinstance(mapping, Mapping):
        raise ConfigError(f"Extraction mapping must be a mapping, got {type(mapping).__name__}")
    return {name: parse_field_spec(name, raw, strict=strict) for name, raw in mapping.items()}
