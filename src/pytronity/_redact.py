"""Redaction of API payloads before they are logged or dumped.

Grant request bodies carry the client secret and refresh token; token
responses carry the issued tokens.  Everything passed in is decoded JSON,
so only dicts, lists and scalars need handling.
"""

from __future__ import annotations

from typing import Any

# Lower-cased with underscores removed, so snake_case and camelCase both match.
_SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "clientsecret",
        "accesstoken",
        "refreshtoken",
        "idtoken",
        "authorization",
    }
)


def _is_sensitive(key: str) -> bool:
    return key.lower().replace("_", "") in _SENSITIVE_KEYS


def redact_for_log(value: Any, *, max_string: int = 512) -> Any:
    """Return a copy of a JSON value with secrets replaced and long strings cut."""
    if isinstance(value, dict):
        return {
            key: "<redacted>" if _is_sensitive(str(key)) else redact_for_log(item, max_string=max_string)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [redact_for_log(item, max_string=max_string) for item in value]
    if isinstance(value, str) and len(value) > max_string:
        return f"{value[:max_string]}…<truncated>"
    return value
