"""Matching rules that weaken exact equality during comparison.

Rules are read from a response's ``matchingRules`` object, keyed by
JSONPath-like expressions rooted at ``$.body`` or ``$.headers``:

    "$.body.id":               {"match": "type"}
    "$.body.items":            {"min": 1, "match": "type"}
    "$.body.items[*].sku":     {"match": "regex", "regex": "^[A-Z]{3}-\\d+$"}
    "$.headers.Content-Type":  {"regex": "application/json.*"}

Supported segments are ``.name``, ``['name']``, ``[n]`` and the wildcards
``.*`` / ``[*]``. When several keys match a path, the one with the most
literal (non-wildcard) segments wins.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pactverify.domain.errors import ContractFormatError

Segment = str | int
Path = tuple[Segment, ...]


class RuleKind(Enum):
    """Enumeration of supported matching rule kinds."""

    TYPE = "type"
    REGEX = "regex"
    EQUALITY = "equality"


class _Wildcard:
    """Path segment matching any key or index."""

    def __repr__(self) -> str:
        return "*"


WILDCARD = _Wildcard()

_TOKEN_PATTERN = re.compile(
    r"""
    \.(?P<name>[^.\[\]]+)            # .name or .*
    | \[(?P<index>\d+|\*)\]          # [0] or [*]
    | \[['"](?P<quoted>[^'"]+)['"]\] # ['name']
    """,
    re.VERBOSE,
)


@dataclass(frozen=True)
class MatchingRule:
    """A single matching rule.

    Attributes:
        kind: What predicate replaces equality at the annotated path.
        regex: Pattern for `RuleKind.REGEX` (full match).
        min: Minimum array length, if constrained.
        max: Maximum array length, if constrained.
    """

    kind: RuleKind
    regex: str | None = None
    min: int | None = None
    max: int | None = None

    @property
    def cascades(self) -> bool:
        """Type matching also applies to every descendant of the annotated node."""
        return self.kind is RuleKind.TYPE

    @property
    def constrains_length(self) -> bool:
        return self.min is not None or self.max is not None

    def describe(self) -> str:
        """Short human-readable form used in mismatch messages."""
        parts = [self.kind.value]
        if self.regex is not None:
            parts.append(f"/{self.regex}/")
        if self.min is not None:
            parts.append(f"min={self.min}")
        if self.max is not None:
            parts.append(f"max={self.max}")
        return " ".join(parts)

    @classmethod
    def from_dict(cls, key: str, raw: Any) -> MatchingRule:
        """Decode a rule definition.

        Raises:
            ContractFormatError: If the definition is not a supported rule.
        """
        if not isinstance(raw, Mapping):
            raise ContractFormatError(f"matching rule {key!r} must be an object")

        regex = raw.get("regex")
        bounds = {name: raw.get(name) for name in ("min", "max")}
        for name, bound in bounds.items():
            if bound is not None and (
                isinstance(bound, bool) or not isinstance(bound, int) or bound < 0
            ):
                raise ContractFormatError(
                    f"matching rule {key!r}: {name} must be a non-negative integer"
                )

        if (match := raw.get("match")) is None:
            if regex is not None:
                match = RuleKind.REGEX.value
            elif any(bound is not None for bound in bounds.values()):
                match = RuleKind.TYPE.value
            else:
                raise ContractFormatError(f"matching rule {key!r} has no 'match' kind")

        try:
            kind = RuleKind(match)
        except ValueError:
            raise ContractFormatError(
                f"matching rule {key!r}: unsupported match kind {match!r}"
            ) from None

        if kind is RuleKind.REGEX:
            if not isinstance(regex, str):
                raise ContractFormatError(f"matching rule {key!r} requires a 'regex'")
            try:
                re.compile(regex)
            except re.error as e:
                raise ContractFormatError(
                    f"matching rule {key!r}: invalid regex: {e}"
                ) from e

        return cls(kind=kind, regex=regex, min=bounds["min"], max=bounds["max"])

    def matches_pattern(self, actual: Any) -> bool:
        """Return True if a scalar satisfies this rule's regular expression."""
        assert self.regex is not None
        if actual is None or isinstance(actual, (dict, list)):
            return False
        text = actual if isinstance(actual, str) else _scalar_text(actual)
        return re.fullmatch(self.regex, text) is not None


def _scalar_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def parse_path(expression: str) -> tuple[str, Path]:
    """Split a rule key into its category (``body``/``headers``) and segments.

    Header names are lower-cased since headers compare case-insensitively.

    Raises:
        ContractFormatError: If the expression is not a supported path.
    """
    if not expression.startswith("$"):
        raise ContractFormatError(f"matching rule path {expression!r} must start with '$'")

    segments: list[Segment | _Wildcard] = []
    pos = 1
    while pos < len(expression):
        if (token := _TOKEN_PATTERN.match(expression, pos)) is None:
            raise ContractFormatError(f"unsupported matching rule path {expression!r}")
        if (name := token.group("name")) is not None:
            segments.append(WILDCARD if name == "*" else name)
        elif (index := token.group("index")) is not None:
            segments.append(WILDCARD if index == "*" else int(index))
        else:
            segments.append(token.group("quoted"))
        pos = token.end()

    if not segments or segments[0] not in ("body", "headers", "header"):
        raise ContractFormatError(
            f"matching rule path {expression!r} must start with '$.body' or '$.headers'"
        )
    category = "body" if segments[0] == "body" else "headers"
    rest = tuple(segments[1:])
    if category == "headers":
        rest = tuple(s.lower() if isinstance(s, str) else s for s in rest)
    return category, rest  # type: ignore[return-value]


def format_path(path: Path) -> str:
    """Render a body path relative to the body root, e.g. ``items[0].name``."""
    out = ""
    for segment in path:
        if isinstance(segment, int):
            out += f"[{segment}]"
        else:
            out += f".{segment}" if out else segment
    return out


class MatchingRules:
    """Lookup table of matching rules for one expected response."""

    def __init__(
        self,
        body: list[tuple[Path, MatchingRule]] | None = None,
        headers: dict[str, MatchingRule] | None = None,
    ) -> None:
        self._body = body or []
        self._headers = headers or {}

    @classmethod
    def from_dict(cls, raw: Any) -> MatchingRules:
        """Decode a ``matchingRules`` object.

        Raises:
            ContractFormatError: If the object or any of its rules is malformed.
        """
        if raw is None:
            return cls()
        if not isinstance(raw, Mapping):
            raise ContractFormatError("matchingRules must be an object")

        body: list[tuple[Path, MatchingRule]] = []
        headers: dict[str, MatchingRule] = {}
        for key, definition in raw.items():
            category, path = parse_path(key)
            rule = MatchingRule.from_dict(key, definition)
            if category == "body":
                body.append((path, rule))
            elif len(path) == 1 and isinstance(path[0], str):
                headers[path[0]] = rule
            else:
                raise ContractFormatError(f"unsupported header rule path {key!r}")
        return cls(body, headers)

    def __bool__(self) -> bool:
        return bool(self._body or self._headers)

    def for_header(self, name: str) -> MatchingRule | None:
        """Return the rule for a header name, compared case-insensitively."""
        return self._headers.get(name.lower())

    def for_body(self, path: Path) -> MatchingRule | None:
        """Return the most specific rule whose key matches ``path`` exactly."""
        best: MatchingRule | None = None
        best_score = -1
        for pattern, rule in self._body:
            if len(pattern) != len(path):
                continue
            if all(p is WILDCARD or p == s for p, s in zip(pattern, path)):
                score = sum(1 for p in pattern if p is not WILDCARD)
                if score > best_score:
                    best, best_score = rule, score
        return best
