"""Redaction of setting values for debug logs.

Settings frequently carry credentials (passwords, API keys, tokens). Values
written under a secret-looking key are replaced before they reach a log line.
"""

from __future__ import annotations

from typing import Any

from pyfacet._merge import MAPPING, SEQUENCE, kind_of

REDACTED = "<redacted>"

_SENSITIVE_KEY_PARTS: tuple[str, ...] = (
    "password",
    "passwd",
    "secret",
    "token",
    "apikey",
    "api_key",
    "credential",
    "authorization",
    "cookie",
    "private_key",
)

_MAX_STRING = 256
_MAX_DEPTH = 20


def is_sensitive_key(key: str) -> bool:
    """Return True if a setting at *key* likely holds a secret.

    Only the last segment of a dotted path counts: ``"db.password"`` is
    sensitive, ``"password_policy.min_length"`` is not.
    """
    last = key.rsplit(".", 1)[-1].lower()
    return any(part in last for part in _SENSITIVE_KEY_PARTS)


def redact_setting(key: str, value: Any, *, _depth: int = 0) -> Any:
    """Return a log-safe copy of *value* as written at *key*.

    Nested mappings are checked key by key; list items inherit the key of
    their list. Long strings are cut and unknown objects shown by ``repr``.
    """
    if key and is_sensitive_key(key):
        return REDACTED
    if _depth > _MAX_DEPTH:
        return "<max-depth>"

    kind = kind_of(value)
    if kind == MAPPING:
        return {str(k): redact_setting(str(k), v, _depth=_depth + 1) for k, v in value.items()}
    if kind == SEQUENCE:
        return [redact_setting(key, item, _depth=_depth + 1) for item in value]

    if isinstance(value, str) and len(value) > _MAX_STRING:
        return f"{value[:_MAX_STRING]}…<truncated>"
    if isinstance(value, bytes):
        return f"<bytes:{len(value)}b>"
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return repr(value)
