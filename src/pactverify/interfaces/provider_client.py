"""Provider HTTP client interface.

The verifier replays requests through a `ProviderClient`. Connection pooling,
retries, base URL and timeout policy belong to the concrete client, which the
caller owns.
"""

import abc
from collections.abc import Mapping
from dataclasses import dataclass, field

# pylint: disable=too-few-public-methods


class ProviderUnavailableError(Exception):
    """Raised when a request cannot be completed (connection failure, timeout)."""


@dataclass(frozen=True)
class ProviderRequest:
    """A request about to be sent to the provider."""

    method: str
    path: str
    query: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    content: bytes = b""

    @property
    def target(self) -> str:
        """Path plus query string, as it appears in the request line."""
        return f"{self.path}?{self.query}" if self.query else self.path


@dataclass(frozen=True)
class ProviderResponse:
    """The response actually returned by the provider.

    Repeated headers are joined with ``", "``.
    """

    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    content: bytes = b""


class ProviderClient(abc.ABC):
    """Abstract base class for sending replayed requests to a provider."""

    @abc.abstractmethod
    def send(self, request: ProviderRequest) -> ProviderResponse:
        """Send one request and block until the full response is available.

        Args:
            request (ProviderRequest): The request to send. ``path`` is relative
                to the provider's base URL.

        Returns:
            ProviderResponse: Status, headers and raw body bytes.

        Raises:
            ProviderUnavailableError: If no response could be obtained.
        """
