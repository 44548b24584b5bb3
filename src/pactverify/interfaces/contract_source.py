"""Contract source interface definitions."""

import abc

# pylint: disable=too-few-public-methods


class ContractSourceError(Exception):
    """Raised when a contract document cannot be read from its location.

    Attributes:
        location (str): The location that was requested.
        reason (str): Short description of the underlying failure.
    """

    def __init__(self, location: str, reason: str) -> None:
        super().__init__(f"Cannot read contract at '{location}': {reason}")
        self.location = location
        self.reason = reason


class ContractEncodingError(ContractSourceError):
    """Raised when a contract document was read but is not valid UTF-8."""


class ContractSource(abc.ABC):
    """Abstract base class for reading contract documents by location."""

    @abc.abstractmethod
    def read_text(self, location: str) -> str:
        """Read a whole contract document as text.

        Args:
            location (str): Where the document lives (a path or URI understood
                by the implementation).

        Returns:
            str: The decoded (UTF-8) document text.

        Raises:
            ContractEncodingError: If the bytes are not valid UTF-8.
            ContractSourceError: If the document cannot be read.
        """
