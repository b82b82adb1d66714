"""Firestore REST value codec.

The REST API wraps every value in a typed envelope
(``{"stringValue": "x"}``, ``{"mapValue": {"fields": {...}}}``, ...).
These helpers convert between that envelope and plain JSON-compatible
Python values.
"""

from __future__ import annotations

import base64
import math
import re
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

_SIMPLE_FIELD_NAME = re.compile(r"^[A-Za-z_][A-Za-z_0-9]*$")


def encode_value(value: Any) -> dict[str, Any]:
    """Encode a Python value as a Firestore ``Value``."""
    if value is None:
        return {"nullValue": None}
    # bool before int: bool is an int subclass.
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        if math.isnan(value):
            return {"doubleValue": "NaN"}
        return {"doubleValue": value}
    if isinstance(value, str):
        return {"stringValue": value}
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        text = value.astimezone(UTC).isoformat().replace("+00:00", "Z")
        return {"timestampValue": text}
    if isinstance(value, (bytes, bytearray)):
        return {"bytesValue": base64.b64encode(bytes(value)).decode("ascii")}
    if isinstance(value, Mapping):
        return {"mapValue": {"fields": encode_fields(value)}}
    if isinstance(value, (list, tuple)):
        return {"arrayValue": {"values": [encode_value(item) for item in value]}}
    raise TypeError(f"cannot encode {type(value).__name__} as a Firestore value")


def encode_fields(data: Mapping[str, Any]) -> dict[str, Any]:
    """Encode a document body (``fields`` map)."""
    return {str(key): encode_value(value) for key, value in data.items()}


def decode_value(value: Mapping[str, Any]) -> Any:
    """Decode a Firestore ``Value`` into a plain Python value."""
    if not isinstance(value, Mapping) or len(value) != 1:
        raise ValueError(f"malformed Firestore value: {value!r}")
    kind, inner = next(iter(value.items()))
    if kind == "nullValue":
        return None
    if kind == "booleanValue":
        return bool(inner)
    if kind == "integerValue":
        return int(inner)
    if kind == "doubleValue":
        return float(inner)
    if kind in {"stringValue", "timestampValue", "referenceValue", "bytesValue"}:
        return str(inner)
    if kind == "geoPointValue":
        return {"latitude": inner.get("latitude", 0.0), "longitude": inner.get("longitude", 0.0)}
    if kind == "mapValue":
        return decode_fields(inner.get("fields") or {})
    if kind == "arrayValue":
        return [decode_value(item) for item in inner.get("values") or []]
    raise ValueError(f"unsupported Firestore value type: {kind}")


def decode_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Decode a document's ``fields`` map."""
    return {key: decode_value(value) for key, value in fields.items()}


def document_id(name: str) -> str:
    """Last path segment of a full document resource name."""
    return name.rstrip("/").rsplit("/", 1)[-1]


def quote_field_path(field: str) -> str:
    """Quote a top-level field name for use in an update mask."""
    if _SIMPLE_FIELD_NAME.match(field):
        return field
    escaped = field.replace("\\", "\\\\").replace("`", "\\`")
    return f"`{escaped}`"
