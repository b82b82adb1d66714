"""Redaction of secrets before payloads reach DEBUG logs.

Request bodies are Firestore documents, so almost every key is a site
field name and must stay readable. Only the handful of secrets this
package handles are masked: the web API key, bearer headers, and the
admin UI's password and credentials entries should they ever end up in a
cached or remote document.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_MASK = "<redacted>"
_MAX_DEPTH = 20

# Compared after lowercasing and dropping underscores and dashes.
_SECRET_KEYS: frozenset[str] = frozenset({"apikey", "authorization", "password", "admincredentials"})


def _is_secret(key: object) -> bool:
    return str(key).lower().replace("_", "").replace("-", "") in _SECRET_KEYS


def _redact_mapping(value: Mapping[Any, Any], max_string: int, depth: int) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, item in value.items():
        out[str(key)] = _MASK if _is_secret(key) else redact_for_log(item, max_string=max_string, _depth=depth + 1)
    return out


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Copy *value* with secrets masked and long strings cut to *max_string*."""
    if _depth > _MAX_DEPTH:
        return "<max-depth>"
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return value if len(value) <= max_string else f"{value[:max_string]}…<truncated>"
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"
    if isinstance(value, Mapping):
        return _redact_mapping(value, max_string, _depth)
    if isinstance(value, (list, tuple)):
        return [redact_for_log(item, max_string=max_string, _depth=_depth + 1) for item in value]
    return repr(value)
