"""Helpers for safe debug logging.

The tile-service API key travels in query strings and config objects.
URLs and configuration dumps pass through here before they are logged.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

_SENSITIVE_VALUE_KEYS: frozenset[str] = frozenset(
    {
        "key",
        "api_key",
        "apikey",
        "token",
        "authorization",
        "cookie",
    }
)


def redact_url(url: str) -> str:
    """Return *url* with sensitive query parameters replaced."""
    parts = urlsplit(url)
    if not parts.query:
        return url
    query = [
        (name, "<redacted>" if name.lower() in _SENSITIVE_VALUE_KEYS else value)
        for name, value in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urlunsplit(parts._replace(query=urlencode(query, safe="<>")))


def redact_for_log(value: Any) -> Any:
    """Redacted copy of a configuration dump.

    Sensitive keys of nested mappings are masked and URLs inside string
    values lose their credentials. Other values are returned as they are.
    """
    if isinstance(value, Mapping):
        return {
            str(k): "<redacted>" if str(k).lower() in _SENSITIVE_VALUE_KEYS else redact_for_log(v)
            for k, v in value.items()
        }
    if isinstance(value, str) and "?" in value:
        return redact_url(value)
    return value
