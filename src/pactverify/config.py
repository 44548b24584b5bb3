"""Configuration utilities for PACTVERIFY.

This module centralizes small helpers and constants related to runtime
configuration read from the environment.
"""

import os

PROVIDER_BASE_URL_ENV = "PACTVERIFY_PROVIDER_BASE_URL"  # pragma: no mutate
TIMEOUT_ENV = "PACTVERIFY_TIMEOUT"  # pragma: no mutate
DEFAULT_TIMEOUT = 10.0


class ProviderUrlNotSetError(Exception):
    """Raised when the PACTVERIFY_PROVIDER_BASE_URL environment variable is not set."""


class InvalidTimeoutError(ValueError):
    """Raised when PACTVERIFY_TIMEOUT is not a positive number."""

    def __init__(self, raw: str) -> None:
        super().__init__(f"{TIMEOUT_ENV} must be a positive number of seconds, got {raw!r}")
        self.raw = raw


def get_provider_base_url() -> str:
    """Get the provider base URL from the environment.

    Returns:
        The value of the `PACTVERIFY_PROVIDER_BASE_URL` environment variable.

    Raises:
        ProviderUrlNotSetError: If `PACTVERIFY_PROVIDER_BASE_URL` is not set.
    """
    if not (url := os.environ.get(PROVIDER_BASE_URL_ENV)):
        raise ProviderUrlNotSetError
    return url


def get_timeout() -> float:
    """Get the provider request timeout (seconds) from the environment.

    Returns:
        The parsed value of `PACTVERIFY_TIMEOUT`, or `DEFAULT_TIMEOUT` if unset.

    Raises:
        InvalidTimeoutError: If the value is not a positive number.
    """
    if not (raw := os.environ.get(TIMEOUT_ENV)):
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        raise InvalidTimeoutError(raw) from None
    if timeout <= 0:
        raise InvalidTimeoutError(raw)
    return timeout
