"""Interfaces for redacting sensitive values.

This module defines the Redactor interface and the RedactorMode enumeration
used by adapters to sanitize secrets (credentials, tokens, API keys, cookies)
from replayed HTTP headers and URLs before they reach logs or reports.
"""

import abc
from collections.abc import Mapping
from enum import Enum

# pylint: disable=too-few-public-methods


class RedactorMode(Enum):
    """Enumeration for redactor modes.

    Modes:
    - LENIENT: redact credentials/tokens but keep user identifiers visible.
    - STRICT: redact credentials/tokens and also user identifiers.
    """

    LENIENT = "lenient"
    STRICT = "strict"


class Redactor(abc.ABC):
    """Interface for sanitizing sensitive information before display."""

    _mode: RedactorMode

    @abc.abstractmethod
    def sanitize_headers(self, headers: Mapping[str, str]) -> dict[str, str]:
        """Return a copy of ``headers`` with sensitive values masked.

        Args:
            headers: Header names and values.

        Returns:
            A new mapping with the same names and display-safe values.
        """

    @abc.abstractmethod
    def sanitize_url(self, raw_url: str) -> str:
        """Return a display-safe URL.

        Args:
            raw_url: Raw URL, possibly with userinfo or secret query parameters.

        Returns:
            The URL with sensitive parts redacted.
        """

    @property
    def mode(self) -> RedactorMode:
        """Return the redaction mode."""
        return self._mode
