import json
import sys
from typing import Any, Mapping

import pandas as pd
from loguru import logger

MISSING = "—"


def configure_logging(level: str = "INFO") -> None:
    """Route loguru output to stderr at `level`, replacing any earlier sinks."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def clean_property_value(x) -> str | None:
    """Turn messy ArcGIS attribute values into a readable string (handles JSON/list-like strings)."""
    if x is None or (isinstance(x, float) and pd.isna(x)):
        return None
    s = str(x).strip()
    if s in ("", "nan", "None", "null", "<Null>"):
        return None

    # If it looks like JSON, try to parse
    if s[0] in "[{":
        try:
            obj = json.loads(s)
            if isinstance(obj, list) and obj:
                return str(obj[0])
            if isinstance(obj, dict) and obj:
                return str(next(iter(obj.values())))
        except ValueError:
            pass

    return s


class _Props(dict):
    def __missing__(self, key):
        return MISSING


def popup_text(template: str | None, properties: Any, fallback: str = "") -> str:
    """Fill a `{field}` display template from a loosely-typed property bag.

    Unknown fields render as the placeholder dash; a broken template or a
    non-mapping property bag falls back to `fallback`.
    """
    if not template:
        return fallback
    props = properties if isinstance(properties, Mapping) else {}
    cleaned = _Props()
    for k, v in props.items():
        value = clean_property_value(v)
        cleaned[str(k)] = value if value is not None else MISSING
    try:
        return template.format_map(cleaned)
    except (IndexError, ValueError, AttributeError):
        return fallback
