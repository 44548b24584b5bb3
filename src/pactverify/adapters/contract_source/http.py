"""HTTP(S) contract source adapter, e.g. for contracts published to a broker."""

import logging

import httpx

from pactverify.interfaces.contract_source import (
    ContractEncodingError,
    ContractSource,
    ContractSourceError,
)

logger = logging.getLogger(__name__)


class HttpContractSource(ContractSource):
    """Fetches contract documents with ``GET <location>``.

    Args:
        client: Optional caller-owned `httpx.Client` (auth, proxies, TLS).
            When omitted, a short-lived client is created per read.
        timeout: Timeout in seconds for the short-lived client.
    """

    def __init__(self, client: httpx.Client | None = None, timeout: float = 10.0) -> None:
        self._client = client
        self._timeout = timeout

    def read_text(self, location: str) -> str:
        logger.debug("Fetching contract from %s", location)
        try:
            if self._client is not None:
                response = self._client.get(location)
            else:
                with httpx.Client(timeout=self._timeout) as client:
                    response = client.get(location)
        except httpx.HTTPError as e:
            raise ContractSourceError(location, str(e) or type(e).__name__) from e

        if not response.is_success:
            raise ContractSourceError(location, f"HTTP {response.status_code}")

        try:
            return response.content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ContractEncodingError(location, f"not valid UTF-8: {e}") from e
