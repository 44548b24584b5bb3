"""Mismatches found when comparing an actual response with an expected one."""

from __future__ import annotations

import json
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, ClassVar

# pylint: disable=too-few-public-methods


class _Missing:
    """Sentinel for a value absent from the actual response."""

    def __repr__(self) -> str:
        return "<missing>"


MISSING: Any = _Missing()


def _render(value: Any) -> str:
    if value is MISSING:
        return repr(value)
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(value)


@dataclass(frozen=True)
class Mismatch:
    """A single violation of an expectation.

    Attributes:
        path: Where the violation occurred (``status``, a header name, or a
            body path such as ``items[0].name``; empty for the body root).
        expected: The expected value.
        actual: The actual value, or `MISSING`.
        reason: Optional explanation when the violation is not a plain inequality.
    """

    KIND: ClassVar[str] = "Mismatch"

    path: str
    expected: Any
    actual: Any
    reason: str | None = None

    def describe(self) -> str:
        """One-line human-readable description."""
        where = self.path or "<root>"
        detail = f"expected {_render(self.expected)}, actual {_render(self.actual)}"
        if self.reason:
            detail = f"{self.reason} ({detail})"
        return f"{self.KIND} at {where}: {detail}"


@dataclass(frozen=True)
class StatusMismatch(Mismatch):
    """Response status differs from the expected status."""

    KIND: ClassVar[str] = "StatusMismatch"


@dataclass(frozen=True)
class HeaderMismatch(Mismatch):
    """An expected header is missing or has a different value."""

    KIND: ClassVar[str] = "HeaderMismatch"


@dataclass(frozen=True)
class BodyMismatch(Mismatch):
    """The body violates the expected template at ``path``."""

    KIND: ClassVar[str] = "BodyMismatch"


@dataclass(frozen=True)
class ComparisonResult:
    """Ordered mismatches (status, then headers, then body) for one interaction."""

    mismatches: tuple[Mismatch, ...] = ()

    @property
    def passed(self) -> bool:
        return not self.mismatches

    def __iter__(self) -> Iterator[Mismatch]:
        return iter(self.mismatches)

    def __len__(self) -> int:
        return len(self.mismatches)
