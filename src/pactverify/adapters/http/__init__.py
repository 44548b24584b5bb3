"""Provider HTTP client adapters."""

from .httpx_client import HttpxProviderClient

__all__ = ["HttpxProviderClient"]
