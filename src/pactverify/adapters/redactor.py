"""Regex-based redactor for sanitizing secrets from headers and URLs.

This module provides a Redactor implementation that masks sensitive values
(credentials, tokens, API keys, cookies) found in HTTP headers replayed against
a provider and in URLs (userinfo and secret query parameters). It supports
lenient and strict modes (strict also redacts user identifiers).
"""

import re
from collections.abc import Mapping

from pactverify.interfaces import redactor
from pactverify.interfaces.redactor import RedactorMode

# pylint: disable=too-few-public-methods

PLACEHOLDER = "***"
SECRET_KEYWORDS = [
    "password",
    "passwd",
    "pwd",
    "secret",
    "token",
    "api_key",
    "apikey",
    "access_token",
    "refresh_token",
    "id_token",
    "authorization",
    "sig",
    "signature",
]
STRICT_MODE_ADDITIONAL_KEYWORDS = ["user", "username", "uid"]
STRICT_MODE_SECRET_KEYWORDS = SECRET_KEYWORDS + STRICT_MODE_ADDITIONAL_KEYWORDS
SECRET_KEYWORDS_PATTERN = "|".join(kw.replace("_", "[-_]?") for kw in (SECRET_KEYWORDS))
STRICT_MODE_SECRET_KEYWORDS_PATTERN = "|".join(
    kw.replace("_", "[-_]?") for kw in (STRICT_MODE_SECRET_KEYWORDS)
)
QUERY_STRING_PATTERN = re.compile(
    rf"([?&](?:{SECRET_KEYWORDS_PATTERN})=)[^&#\s;]*", re.IGNORECASE
)
STRICT_MODE_QUERY_STRING_PATTERN = re.compile(
    rf"([?&](?:{STRICT_MODE_SECRET_KEYWORDS_PATTERN})=)[^&#\s;]*", re.IGNORECASE
)
URL_PASSWORD_PATTERN = re.compile(r"(?<=://)([^:@/]+):([^@/]+)@")
URL_USER_PATTERN = re.compile(r"(?<=://)([^:@/]+)(?=:(?:\*\*\*|[^@/]*)@)")

# Header names whose whole value is a credential.
SENSITIVE_HEADERS = {
    "cookie",
    "set-cookie",
    "proxy-authorization",
    "x-api-key",
    "api-key",
    "x-auth-token",
    "x-csrf-token",
    "x-xsrf-token",
}
STRICT_MODE_SENSITIVE_HEADERS = SENSITIVE_HEADERS | {"x-user-id", "x-forwarded-user", "from"}
SECRET_HEADER_NAME_PATTERN = re.compile(rf"(?:{SECRET_KEYWORDS_PATTERN})", re.IGNORECASE)
AUTH_SCHEME_PATTERN = re.compile(r"^(\w+)\s+.+$")


class Redactor(redactor.Redactor):
    """Redactor implementation using regex-based sanitization."""

    def __init__(self, mode: RedactorMode = RedactorMode.LENIENT) -> None:
        self._mode = mode

    def sanitize_headers(self, headers: Mapping[str, str]) -> dict[str, str]:
        sensitive = (
            STRICT_MODE_SENSITIVE_HEADERS
            if self._mode == RedactorMode.STRICT
            else SENSITIVE_HEADERS
        )
        sanitized: dict[str, str] = {}
        for name, value in headers.items():
            lowered = name.lower()
            if lowered == "authorization":
                # keep the scheme visible: "Bearer ***"
                sanitized[name] = (
                    AUTH_SCHEME_PATTERN.sub(rf"\1 {PLACEHOLDER}", value)
                    if AUTH_SCHEME_PATTERN.match(value)
                    else PLACEHOLDER
                )
            elif lowered in sensitive or SECRET_HEADER_NAME_PATTERN.search(lowered):
                sanitized[name] = PLACEHOLDER
            else:
                sanitized[name] = value
        return sanitized

    def sanitize_url(self, raw_url: str) -> str:
        sanitized = str(raw_url)

        # 1) user:pass@  → user:***@
        sanitized = re.sub(
            URL_PASSWORD_PATTERN,
            r"\1:***@",  # pragma: no mutate
            sanitized,
        )

        # 2) Strict: redact visible username before '@' (but only if one exists)
        if self._mode == RedactorMode.STRICT:
            sanitized = re.sub(URL_USER_PATTERN, PLACEHOLDER, sanitized)

        # 3) Query-string secrets
        query_pattern = (
            STRICT_MODE_QUERY_STRING_PATTERN
            if self._mode == RedactorMode.STRICT
            else QUERY_STRING_PATTERN
        )
        return re.sub(query_pattern, rf"\1{PLACEHOLDER}", sanitized)
