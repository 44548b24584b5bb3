"""Local filesystem contract source adapter."""

from pathlib import Path
from urllib.parse import unquote, urlparse

from pactverify.interfaces.contract_source import (
    ContractEncodingError,
    ContractSource,
    ContractSourceError,
)


class LocalContractSource(ContractSource):
    """Reads contract documents from the local filesystem.

    Locations are plain paths or ``file://`` URIs. Relative paths resolve
    against ``root`` when given, otherwise against the working directory.
    """

    def __init__(self, root: str | Path | None = None) -> None:
        self._root = Path(root) if root is not None else None

    def read_text(self, location: str) -> str:
        path = self._resolve(location)
        try:
            raw = path.read_bytes()
        except OSError as e:
            raise ContractSourceError(location, e.strerror or str(e)) from e

        try:
            return raw.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ContractEncodingError(location, f"not valid UTF-8: {e}") from e

    # --- Internal Helpers ---

    def _resolve(self, location: str) -> Path:
        if location.startswith("file://"):
            path = Path(unquote(urlparse(location).path))
        else:
            path = Path(location)
        if self._root is not None and not path.is_absolute():
            path = self._root / path
        return path
