"""Contract source adapters."""

from .http import HttpContractSource
from .local import LocalContractSource
from .memory import MemoryContractSource

__all__ = ["HttpContractSource", "LocalContractSource", "MemoryContractSource"]
