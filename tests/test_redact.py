from __future__ import annotations

from sitesync._redact import redact_for_log


def test_redact_for_log_redacts_sensitive_keys() -> None:
    payload = {
        "fields": {"hero-title": {"stringValue": "Hi"}},
        "apiKey": "AIza...",
        "Authorization": "Bearer tok",
        "nested": [{"adminCredentials": {"username": "admin", "password": "pw"}}],
        "admin": ({"password": "pw"},),
    }

    redacted = redact_for_log(payload)
    assert redacted["fields"] == {"hero-title": {"stringValue": "Hi"}}
    assert redacted["apiKey"] == "<redacted>"
    assert redacted["Authorization"] == "<redacted>"
    assert redacted["nested"][0]["adminCredentials"] == "<redacted>"
    assert redacted["admin"] == [{"password": "<redacted>"}]


def test_redact_for_log_keeps_site_fields_named_like_secrets() -> None:
    payload = {"fields": {"key": {"stringValue": "k"}, "token": {"stringValue": "t"}}}
    assert redact_for_log(payload) == payload


def test_redact_for_log_truncates_long_strings() -> None:
    long_value = "x" * 600
    redacted = redact_for_log({"value": long_value}, max_string=10)
    assert redacted["value"].startswith("x" * 10)
    assert "<truncated>" in redacted["value"]


def test_redact_for_log_handles_none_and_bytes() -> None:
    assert redact_for_log(None) is None
    assert redact_for_log({"blob": b"\x00" * 4}) == {"blob": "<bytes:4b>"}
