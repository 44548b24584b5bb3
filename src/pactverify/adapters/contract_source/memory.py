"""In-memory contract source.

Keeps documents in a dict keyed by location. Meant for tests and for callers
that already hold the contract text (e.g. fetched from a broker by other means).
"""

from pactverify.interfaces.contract_source import (
    ContractEncodingError,
    ContractSource,
    ContractSourceError,
)


class MemoryContractSource(ContractSource):
    """Contract source backed by a dict of location -> text or bytes."""

    def __init__(self, documents: dict[str, str | bytes] | None = None) -> None:
        self._documents: dict[str, str | bytes] = dict(documents or {})

    def put(self, location: str, document: str | bytes) -> None:
        """Store (or replace) the document at ``location``."""
        self._documents[location] = document

    def read_text(self, location: str) -> str:
        try:
            document = self._documents[location]
        except KeyError:
            raise ContractSourceError(location, "no such document") from None

        if isinstance(document, str):
            return document
        try:
            return document.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ContractEncodingError(location, f"not valid UTF-8: {e}") from e
