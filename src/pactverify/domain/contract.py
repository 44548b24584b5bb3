"""Contract file model.

A contract (pact) file records what one consumer expects from one provider:

    {
      "consumer": {"name": "order-ui"},
      "provider": {"name": "order-api"},
      "interactions": [
        {
          "description": "order exists",
          "providerState": "order 1 exists",
          "request": {"method": "GET", "path": "/orders/1"},
          "response": {"status": 200, "body": {"id": 1}}
        }
      ],
      "metadata": {"pactSpecification": {"version": "2.0.0"}}
    }

The model is rebuilt from the raw document on every verification run and is
never written back.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any
from urllib.parse import urlencode

from pactverify.domain.body import HttpBodyContent, charset_of
from pactverify.domain.errors import ContractFormatError
from pactverify.domain.matching_rules import MatchingRules

Headers = dict[str, str]


def header_value(headers: Mapping[str, str], name: str) -> str | None:
    """Case-insensitive header lookup."""
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def build_body(raw: Any, headers: Mapping[str, str]) -> HttpBodyContent | None:
    """Build a body from a structured contract value using the surrounding headers."""
    if raw is None:
        return None
    content_type = header_value(headers, "Content-Type")
    return HttpBodyContent.from_value(
        raw, content_type=content_type, encoding=charset_of(content_type)
    )


# ============================================================================
#                               Decoding helpers
# ============================================================================


def _require(raw: Mapping[str, Any], key: str, kind: type | tuple[type, ...], where: str) -> Any:
    if key not in raw:
        raise ContractFormatError(f"{where} is missing required field '{key}'")
    value = raw[key]
    if not isinstance(value, kind) or isinstance(value, bool) and kind is int:
        raise ContractFormatError(f"{where}.{key} has an invalid type")
    return value


def _object(raw: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        raise ContractFormatError(f"{where} must be an object")
    return raw


def _headers(raw: Any, where: str) -> Headers:
    if raw is None:
        return {}
    raw = _object(raw, f"{where}.headers")
    headers: Headers = {}
    for name, value in raw.items():
        if not isinstance(value, str):
            raise ContractFormatError(f"{where}.headers.{name} must be a string")
        headers[name] = value
    return headers


def _query(raw: Any, where: str) -> str | None:
    if raw is None or isinstance(raw, str):
        return raw or None
    if isinstance(raw, Mapping):
        return urlencode(raw, doseq=True)
    raise ContractFormatError(f"{where}.query must be a string or an object")


def _party_name(raw: Mapping[str, Any], key: str) -> str:
    party = _require(raw, key, (Mapping, str), "contract")
    if isinstance(party, str):
        return party
    return _require(party, "name", str, key)


def _provider_state(raw: Mapping[str, Any], where: str) -> str | None:
    for key in ("providerState", "provider_state"):
        if (state := raw.get(key)) is not None:
            if not isinstance(state, str):
                raise ContractFormatError(f"{where}.{key} must be a string")
            return state
    if states := raw.get("providerStates"):
        if not isinstance(states, list):
            raise ContractFormatError(f"{where}.providerStates must be an array")
        return _require(_object(states[0], f"{where}.providerStates[0]"), "name", str, where)
    return None


# ============================================================================
#                               Model
# ============================================================================


@dataclass(frozen=True)
class Request:
    """The request a consumer sends, replayed verbatim against the provider."""

    method: str
    path: str
    query: str | None = None
    headers: Headers = field(default_factory=dict)
    body: HttpBodyContent | None = None

    @classmethod
    def from_dict(cls, raw: Any, where: str = "request") -> Request:
        raw = _object(raw, where)
        headers = _headers(raw.get("headers"), where)
        return cls(
            method=_require(raw, "method", str, where).upper(),
            path=_require(raw, "path", str, where),
            query=_query(raw.get("query"), where),
            headers=headers,
            body=build_body(raw.get("body"), headers),
        )


@dataclass(frozen=True)
class Response:
    """The minimal response a consumer expects."""

    status: int
    headers: Headers = field(default_factory=dict)
    body: HttpBodyContent | None = None
    matching_rules: MatchingRules = field(default_factory=MatchingRules)

    @classmethod
    def from_dict(cls, raw: Any, where: str = "response") -> Response:
        raw = _object(raw, where)
        headers = _headers(raw.get("headers"), where)
        return cls(
            status=_require(raw, "status", int, where),
            headers=headers,
            body=build_body(raw.get("body"), headers),
            matching_rules=MatchingRules.from_dict(raw.get("matchingRules")),
        )


@dataclass(frozen=True)
class Interaction:
    """One request/response expectation plus its metadata."""

    description: str
    request: Request
    response: Response
    provider_state: str | None = None

    @classmethod
    def from_dict(cls, raw: Any, index: int = 0) -> Interaction:
        where = f"interactions[{index}]"
        raw = _object(raw, where)
        return cls(
            description=_require(raw, "description", str, where),
            provider_state=_provider_state(raw, where),
            request=Request.from_dict(raw.get("request"), f"{where}.request"),
            response=Response.from_dict(raw.get("response"), f"{where}.response"),
        )

    def __str__(self) -> str:
        if self.provider_state:
            return f"{self.description!r} given {self.provider_state!r}"
        return repr(self.description)


@dataclass(frozen=True)
class ContractFile:
    """Consumer/provider names and the ordered interactions between them."""

    consumer_name: str
    provider_name: str
    interactions: tuple[Interaction, ...] = ()
    specification_version: str | None = None

    @classmethod
    def from_json(cls, text: str, location: str | None = None) -> ContractFile:
        """Decode a contract document.

        Raises:
            ContractFormatError: If the text is not JSON or lacks required structure.
        """
        try:
            raw = json.loads(text)
        except ValueError as e:
            raise ContractFormatError(f"not valid JSON: {e}", location) from e
        try:
            return cls.from_dict(raw)
        except ContractFormatError as e:
            if location is None or e.location is not None:
                raise
            raise ContractFormatError(e.reason, location) from e

    @classmethod
    def from_dict(cls, raw: Any) -> ContractFile:
        raw = _object(raw, "contract")
        interactions = raw.get("interactions") or []
        if not isinstance(interactions, list):
            raise ContractFormatError("contract.interactions must be an array")

        version = None
        metadata = raw.get("metadata")
        if isinstance(metadata, Mapping):
            spec = metadata.get("pactSpecification") or metadata.get("pact-specification")
            if isinstance(spec, Mapping) and isinstance(spec.get("version"), str):
                version = spec["version"]

        return cls(
            consumer_name=_party_name(raw, "consumer"),
            provider_name=_party_name(raw, "provider"),
            interactions=tuple(
                Interaction.from_dict(item, i) for i, item in enumerate(interactions)
            ),
            specification_version=version,
        )

    def filter_by(
        self, description: str | None = None, provider_state: str | None = None
    ) -> ContractFile:
        """Return a copy keeping only interactions matching every given filter.

        Filters compare by exact string equality; ``None`` disables a filter.
        Relative order is preserved and an empty result is valid.
        """
        selected = tuple(
            interaction
            for interaction in self.interactions
            if (description is None or interaction.description == description)
            and (provider_state is None or interaction.provider_state == provider_state)
        )
        return replace(self, interactions=selected)
