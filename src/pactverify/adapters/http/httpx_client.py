"""Provider client backed by `httpx.Client`."""

import httpx

from pactverify.interfaces.provider_client import (
    ProviderClient,
    ProviderRequest,
    ProviderResponse,
    ProviderUnavailableError,
)


class HttpxProviderClient(ProviderClient):
    """Sends replayed requests through a caller-owned `httpx.Client`.

    The client should be configured with the provider's ``base_url``; request
    paths are sent relative to it. Timeouts, retries and pooling are whatever
    the client was built with. The adapter never closes the client.
    """

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    def send(self, request: ProviderRequest) -> ProviderResponse:
        try:
            response = self._client.request(
                request.method,
                request.target,
                headers=dict(request.headers),
                content=request.content or None,
            )
        except httpx.HTTPError as e:
            raise ProviderUnavailableError(
                f"{type(e).__name__}: {e}" if str(e) else type(e).__name__
            ) from e

        # items() joins repeated headers with ", "
        return ProviderResponse(
            status=response.status_code,
            headers=dict(response.headers.items()),
            content=response.content,
        )
