"""Building and sending the actual request for an interaction."""

from __future__ import annotations

import logging

from pactverify.domain.body import decode_body
from pactverify.domain.contract import Request, Response, header_value
from pactverify.domain.errors import ProviderRequestError
from pactverify.domain.matching import compare_response
from pactverify.domain.mismatches import ComparisonResult
from pactverify.interfaces.provider_client import (
    ProviderClient,
    ProviderRequest,
    ProviderResponse,
    ProviderUnavailableError,
)
from pactverify.interfaces.redactor import Redactor

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


def build_request(request: Request) -> ProviderRequest:
    """Derive the request to send from an interaction's recorded request.

    When the recording has a body but no Content-Type header, one is added:
    ``application/json`` for structured bodies, otherwise the body's resolved
    content type.
    """
    headers = dict(request.headers)
    content = b""
    if request.body is not None:
        content = request.body.content_bytes
        if header_value(headers, "Content-Type") is None:
            if isinstance(request.body.body, str):
                content_type = request.body.content_type
            else:
                content_type = JSON_CONTENT_TYPE
            headers["Content-Type"] = f"{content_type}; charset={request.body.encoding}"
    return ProviderRequest(
        method=request.method,
        path=request.path,
        query=request.query,
        headers=headers,
        content=content,
    )


def send(
    client: ProviderClient, request: ProviderRequest, redactor: Redactor | None = None
) -> ProviderResponse:
    """Send a request, translating any client failure into `ProviderRequestError`.

    In-process providers (ASGI/WSGI or mock transports) re-raise application
    exceptions through the client; those are reported against the interaction
    like transport failures.
    """
    if redactor is not None:
        logger.debug(
            "Replaying %s %s headers=%s",
            request.method,
            request.target,
            redactor.sanitize_headers(request.headers),
        )
    try:
        response = client.send(request)
    except ProviderUnavailableError as e:
        raise ProviderRequestError(request.method, request.target, str(e)) from e
    except Exception as e:  # pylint: disable=broad-except
        raise ProviderRequestError(
            request.method, request.target, f"{type(e).__name__}: {e}"
        ) from e

    if redactor is not None:
        logger.debug(
            "Received %s headers=%s",
            response.status,
            redactor.sanitize_headers(response.headers),
        )
    return response


def compare(expected: Response, actual: ProviderResponse) -> ComparisonResult:
    """Compare a provider response with the expected response.

    Raises:
        MalformedBodyError: If a body needed for structured comparison is not valid JSON.
    """
    body = decode_body(actual.content, header_value(actual.headers, "Content-Type"))
    return compare_response(expected, actual.status, actual.headers, body)
