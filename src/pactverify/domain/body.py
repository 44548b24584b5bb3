"""Body content normalization.

`HttpBodyContent` canonicalizes an HTTP body into two views of the same data:

- `content`: the canonical text, as it would travel on the wire.
- `body`: the structured value for JSON content types, otherwise the text.

A body is built either from a structured value (``body=``) or from raw text
(``content=``). For JSON content types built from text, parsing is deferred
until the structured view is first requested, so an invalid payload only
surfaces when something actually needs its fields.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from pactverify.domain.errors import InvalidBodyError, MalformedBodyError

DEFAULT_CONTENT_TYPE = "text/plain"
DEFAULT_ENCODING = "utf-8"

_UNPARSED = object()


def media_type(content_type: str) -> str:
    """Return the lower-cased media type of a Content-Type value, without parameters."""
    return content_type.split(";", 1)[0].strip().lower()


def is_json_content_type(content_type: str | None) -> bool:
    """Return True for ``application/json`` and ``+json`` structured-syntax types."""
    if not content_type:
        return False
    mtype = media_type(content_type)
    return mtype == "application/json" or mtype.endswith("+json")


def charset_of(content_type: str | None) -> str | None:
    """Extract the ``charset`` parameter from a Content-Type value, if present."""
    if not content_type:
        return None
    for param in content_type.split(";")[1:]:
        name, _, value = param.partition("=")
        if name.strip().lower() == "charset" and value.strip():
            return value.strip().strip('"')
    return None


def serialize_json(value: Any) -> str:
    """Serialize a structured value to compact JSON, preserving key names verbatim."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


# ============================================================================
#                           Structured views
# ============================================================================


@dataclass(frozen=True)
class JsonBody:
    """Structured view of a JSON body."""

    value: Any


@dataclass(frozen=True)
class TextBody:
    """Opaque view of a non-JSON body."""

    text: str


BodyView = JsonBody | TextBody


# ============================================================================
#                           Normalizer
# ============================================================================


class HttpBodyContent:
    """Canonical representation of an HTTP body.

    Args:
        body: A structured value (any JSON-serializable object, or a string).
        content: Raw body text.
        content_type: Content-Type of the body. ``None`` or empty resolves to
            ``text/plain``.
        encoding: Text encoding used for `content_bytes`. ``None`` resolves to
            UTF-8.

    Raises:
        InvalidBodyError: If neither or both of ``body`` and ``content`` are given.
    """

    def __init__(
        self,
        *,
        body: Any = None,
        content: str | None = None,
        content_type: str | None = None,
        encoding: str | None = None,
    ) -> None:
        if body is None and content is None:
            raise InvalidBodyError("Please supply a non null body or content")
        if body is not None and content is not None:
            raise InvalidBodyError("Please supply either a body or content, not both")

        self._content_type = content_type or DEFAULT_CONTENT_TYPE
        self._encoding = encoding or DEFAULT_ENCODING

        if body is not None:
            if isinstance(body, str) and not self.is_json:
                self._content = body
            else:
                self._content = serialize_json(body)
            self._body: Any = body
        else:
            assert content is not None
            self._content = content
            self._body = _UNPARSED if self.is_json else content

    @classmethod
    def from_value(
        cls, value: Any, content_type: str | None = None, encoding: str | None = None
    ) -> HttpBodyContent:
        """Build a body from a structured value."""
        return cls(body=value, content_type=content_type, encoding=encoding)

    @classmethod
    def from_text(
        cls, text: str, content_type: str | None = None, encoding: str | None = None
    ) -> HttpBodyContent:
        """Build a body from raw text."""
        return cls(content=text, content_type=content_type, encoding=encoding)

    # --- Resolved attributes ---

    @property
    def content_type(self) -> str:
        return self._content_type

    @property
    def encoding(self) -> str:
        return self._encoding

    @property
    def is_json(self) -> bool:
        return is_json_content_type(self._content_type)

    @property
    def content(self) -> str:
        return self._content

    @property
    def content_bytes(self) -> bytes:
        """Canonical text encoded with the resolved encoding.

        Empty content always yields ``b""`` (no byte-order mark).
        """
        if not self._content:
            return b""
        return self._content.encode(self._encoding)

    @property
    def body(self) -> Any:
        """Structured view of the body.

        Raises:
            MalformedBodyError: If the content type is JSON and the text does not parse.
        """
        if self._body is _UNPARSED:
            try:
                self._body = json.loads(self._content)
            except ValueError as e:
                raise MalformedBodyError(self._content_type, str(e)) from e
        return self._body

    def view(self) -> BodyView:
        """Return the body as a tagged `JsonBody` or `TextBody`."""
        if self.is_json:
            return JsonBody(self.body)
        if isinstance(self._body, str):
            return TextBody(self._body)
        return JsonBody(self._body)

    def __repr__(self) -> str:
        return (
            f"HttpBodyContent(content_type={self._content_type!r}, "
            f"encoding={self._encoding!r}, content={self._content!r})"
        )


def decode_body(content: bytes, content_type: str | None) -> HttpBodyContent | None:
    """Normalize raw response bytes, or return None when there is no content.

    The charset parameter of ``content_type`` selects the text encoding,
    falling back to UTF-8 when it is absent or unknown.
    """
    if not content:
        return None
    encoding = charset_of(content_type) or DEFAULT_ENCODING
    try:
        text = content.decode(encoding, errors="replace")
    except LookupError:
        encoding = DEFAULT_ENCODING
        text = content.decode(encoding, errors="replace")
    return HttpBodyContent.from_text(text, content_type=content_type, encoding=encoding)
