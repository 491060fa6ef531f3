"""Helpers that keep credentials out of log records."""

from collections.abc import Mapping
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

REDACTED = "[REDACTED]"
SENSITIVE_HEADERS = {"ocp-apim-subscription-key", "x-goog-api-key", "authorization"}
SENSITIVE_QUERY_PARAMS = {"key", "api_key"}


def redact_sensitive_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """
    Redact auth-bearing headers before logging.
    """
    redacted: dict[str, str] = {}
    for key, value in headers.items():
        if key.lower() in SENSITIVE_HEADERS and value:
            redacted[key] = REDACTED
        else:
            redacted[key] = value
    return redacted


def redact_url(url: str) -> str:
    """Replace credential query parameters (e.g. ``?key=...``) in a URL."""
    parts = urlsplit(str(url))
    if not parts.query:
        return str(url)

    query = [
        (name, REDACTED if name.lower() in SENSITIVE_QUERY_PARAMS and value else value)
        for name, value in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urlunsplit(parts._replace(query=urlencode(query, safe="[]")))
