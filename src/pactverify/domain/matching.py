"""Comparison engine: diffs an actual provider response against an expected one.

Comparison never raises on a mismatch; it returns every violation found, in
order (status, headers, body). Only a body that cannot be read in the form the
comparison needs (e.g. JSON that does not parse) raises, as a
`MalformedBodyError`.

Matching is subset-based:

- Headers: every expected header must be present with an equal value; extra
  actual headers are ignored.
- Objects: every expected key must be present and match recursively; extra
  actual keys are ignored.
- Arrays: expected elements are compared position by position; the actual
  array must be at least as long as the expected one.
- Scalars: exact equality, unless a matching rule at that path replaces it.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from pactverify.domain.body import HttpBodyContent, JsonBody, TextBody, media_type
from pactverify.domain.contract import Response, header_value
from pactverify.domain.matching_rules import (
    MatchingRule,
    MatchingRules,
    Path,
    RuleKind,
    format_path,
)
from pactverify.domain.mismatches import (
    MISSING,
    BodyMismatch,
    ComparisonResult,
    HeaderMismatch,
    Mismatch,
    StatusMismatch,
)

_COMMA_WHITESPACE = re.compile(r",\s+")


# ============================================================================
#                               Scalars
# ============================================================================


def _json_type(value: Any) -> str:
    match value:
        case None:
            return "null"
        case bool():
            return "boolean"
        case int() | float():
            return "number"
        case str():
            return "string"
        case Mapping():
            return "object"
        case list() | tuple():
            return "array"
        case _:
            return type(value).__name__


def json_equal(expected: Any, actual: Any) -> bool:
    """Equality that keeps JSON booleans distinct from numbers."""
    if _json_type(expected) != _json_type(actual):
        return False
    return bool(expected == actual)


# ============================================================================
#                               Status & headers
# ============================================================================


def compare_status(expected: int, actual: int) -> list[Mismatch]:
    """Exact status comparison."""
    if expected == actual:
        return []
    return [StatusMismatch("status", expected, actual)]


def _normalize_header_value(value: str) -> str:
    return _COMMA_WHITESPACE.sub(",", value.strip())


def _content_type_matches(expected: str, actual: str) -> bool:
    """Media types must be equal; expected parameters must be present in actual."""
    if media_type(expected) != media_type(actual):
        return False
    actual_params = {
        p.split("=", 1)[0].strip().lower(): p.split("=", 1)[-1].strip().strip('"').lower()
        for p in actual.split(";")[1:]
    }
    for param in expected.split(";")[1:]:
        name, _, value = param.partition("=")
        if actual_params.get(name.strip().lower()) != value.strip().strip('"').lower():
            return False
    return True


def compare_headers(
    expected: Mapping[str, str],
    actual: Mapping[str, str],
    rules: MatchingRules | None = None,
) -> list[Mismatch]:
    """Subset header comparison; names compare case-insensitively."""
    rules = rules or MatchingRules()
    mismatches: list[Mismatch] = []
    for name, expected_value in expected.items():
        actual_value = header_value(actual, name)
        if actual_value is None:
            mismatches.append(
                HeaderMismatch(name, expected_value, MISSING, "header is missing")
            )
            continue

        rule = rules.for_header(name)
        if rule is not None and rule.kind is RuleKind.REGEX:
            if not rule.matches_pattern(actual_value):
                mismatches.append(
                    HeaderMismatch(
                        name, expected_value, actual_value, f"does not match /{rule.regex}/"
                    )
                )
            continue

        if name.lower() == "content-type":
            matched = _content_type_matches(expected_value, actual_value)
        else:
            matched = _normalize_header_value(expected_value) == _normalize_header_value(
                actual_value
            )
        if not matched:
            mismatches.append(HeaderMismatch(name, expected_value, actual_value))
    return mismatches


# ============================================================================
#                               Body
# ============================================================================


class _BodyComparer:
    """Path-tracked recursive comparison of structured bodies."""

    def __init__(self, rules: MatchingRules) -> None:
        self._rules = rules
        self.mismatches: list[Mismatch] = []

    def record(self, path: Path, expected: Any, actual: Any, reason: str | None = None) -> None:
        self.mismatches.append(BodyMismatch(format_path(path), expected, actual, reason))

    def compare(
        self, path: Path, expected: Any, actual: Any, inherited: MatchingRule | None = None
    ) -> None:
        own = self._rules.for_body(path)
        rule = own or inherited
        if own is None:
            cascade = inherited
        elif own.cascades:
            cascade = own
        elif own.kind is RuleKind.EQUALITY:
            cascade = None
        else:
            cascade = inherited

        if isinstance(expected, Mapping):
            self._compare_object(path, expected, actual, cascade)
        elif isinstance(expected, list):
            self._compare_array(path, expected, actual, own, cascade)
        else:
            self._compare_scalar(path, expected, actual, rule)

    def _compare_object(
        self,
        path: Path,
        expected: Mapping[str, Any],
        actual: Any,
        cascade: MatchingRule | None,
    ) -> None:
        if not isinstance(actual, Mapping):
            self.record(path, expected, actual, f"expected an object, got {_json_type(actual)}")
            return
        for key, expected_value in expected.items():
            if key not in actual:
                self.record((*path, key), expected_value, MISSING, "key is missing")
                continue
            self.compare((*path, key), expected_value, actual[key], cascade)

    def _compare_array(
        self,
        path: Path,
        expected: list[Any],
        actual: Any,
        rule: MatchingRule | None,
        cascade: MatchingRule | None,
    ) -> None:
        if not isinstance(actual, list):
            self.record(path, expected, actual, f"expected an array, got {_json_type(actual)}")
            return

        if rule is not None and rule.constrains_length:
            if rule.min is not None and len(actual) < rule.min:
                self.record(
                    path, expected, actual,
                    f"expected at least {rule.min} element(s), got {len(actual)}",
                )
            if rule.max is not None and len(actual) > rule.max:
                self.record(
                    path, expected, actual,
                    f"expected at most {rule.max} element(s), got {len(actual)}",
                )
            if expected:
                for index, item in enumerate(actual):
                    self.compare((*path, index), expected[0], item, cascade)
            return

        if len(actual) < len(expected):
            self.record(
                path, expected, actual,
                f"expected at least {len(expected)} element(s), got {len(actual)}",
            )
        for index, (expected_item, actual_item) in enumerate(zip(expected, actual)):
            self.compare((*path, index), expected_item, actual_item, cascade)

    def _compare_scalar(
        self, path: Path, expected: Any, actual: Any, rule: MatchingRule | None
    ) -> None:
        if rule is None or rule.kind is RuleKind.EQUALITY:
            if not json_equal(expected, actual):
                self.record(path, expected, actual)
        elif rule.kind is RuleKind.TYPE:
            if _json_type(expected) != _json_type(actual):
                self.record(
                    path, expected, actual,
                    f"expected a {_json_type(expected)}, got {_json_type(actual)}",
                )
        elif not rule.matches_pattern(actual):
            self.record(path, expected, actual, f"does not match /{rule.regex}/")


def _raw_text(body: HttpBodyContent) -> str:
    if not body.is_json and isinstance(view := body.view(), TextBody):
        return view.text
    return body.content


def compare_body(
    expected: HttpBodyContent | None,
    actual: HttpBodyContent | None,
    rules: MatchingRules | None = None,
) -> list[Mismatch]:
    """Compare bodies through their structured views.

    A text expectation is compared with the actual body's raw text, so a
    JSON-typed actual body is only parsed when the expectation is JSON.

    Raises:
        MalformedBodyError: If a JSON expectation meets an actual body that
            claims JSON but does not parse.
    """
    if expected is None:
        return []
    rules = rules or MatchingRules()
    comparer = _BodyComparer(rules)
    expected_view = expected.view()

    if actual is None:
        if isinstance(expected_view, TextBody) and not expected_view.text:
            return []
        comparer.record((), expected.body, MISSING, "body is missing")
        return comparer.mismatches

    # text expectations never parse the actual body
    if isinstance(expected_view, TextBody):
        comparer.compare((), expected_view.text, _raw_text(actual))
        return comparer.mismatches

    match expected_view, actual.view():
        case JsonBody(value=value), JsonBody(value=actual_value):
            comparer.compare((), value, actual_value)
        case JsonBody(value=value), TextBody(text=actual_text):
            comparer.record(
                (), value, actual_text,
                f"expected a JSON body, got '{actual.content_type}'",
            )
    return comparer.mismatches


# ============================================================================
#                               Response
# ============================================================================


def compare_response(
    expected: Response,
    status: int,
    headers: Mapping[str, str],
    body: HttpBodyContent | None,
) -> ComparisonResult:
    """Compare an actual provider outcome with the expected response.

    Raises:
        MalformedBodyError: If a body needed for structured comparison is not valid JSON.
    """
    mismatches = [
        *compare_status(expected.status, status),
        *compare_headers(expected.headers, headers, expected.matching_rules),
        *compare_body(expected.body, body, expected.matching_rules),
    ]
    return ComparisonResult(tuple(mismatches))
