"""Wire adapters into a configured verifier."""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from pactverify import config
from pactverify.adapters.contract_source import HttpContractSource, LocalContractSource
from pactverify.adapters.http import HttpxProviderClient
from pactverify.adapters.redactor import Redactor
from pactverify.interfaces.contract_source import ContractSource
from pactverify.interfaces.redactor import RedactorMode
from pactverify.service_layer.verifier import PactVerifier

HTTP_SCHEMES = ("http://", "https://")


@dataclass(frozen=True)
class AppContainer:
    """A class to hold the wired verifier and the resources it owns.

    The container owns ``http_client`` and must be closed when done.
    """

    verifier: PactVerifier
    http_client: httpx.Client
    redactor: Redactor

    def close(self) -> None:
        self.http_client.close()

    def __enter__(self) -> AppContainer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def build_contract_source(location: str, timeout: float | None = None) -> ContractSource:
    """Pick a contract source for a location: HTTP(S) URLs or local paths."""
    if location.lower().startswith(HTTP_SCHEMES):
        return HttpContractSource(timeout=timeout or config.DEFAULT_TIMEOUT)
    return LocalContractSource()


def build_http_client(
    base_url: str, timeout: float, transport: httpx.BaseTransport | None = None
) -> httpx.Client:
    """Build the provider-facing `httpx.Client`; the caller owns and closes it."""
    return httpx.Client(base_url=base_url, timeout=timeout, transport=transport)


def bootstrap(  # pylint: disable=too-many-arguments
    *,
    consumer_name: str,
    provider_name: str,
    location: str,
    base_url: str | None = None,
    timeout: float | None = None,
    redactor_mode: RedactorMode = RedactorMode.LENIENT,
    transport: httpx.BaseTransport | None = None,
) -> AppContainer:
    """Build a verifier bound to a consumer, a provider and a contract location.

    ``base_url`` and ``timeout`` fall back to the environment (see
    `pactverify.config`). ``transport`` replaces httpx's network transport
    for the provider client (e.g. ``httpx.MockTransport`` or an ASGI/WSGI
    transport for an in-process provider).

    Raises:
        config.ProviderUrlNotSetError: If no base URL is given or configured.
        config.InvalidTimeoutError: If the configured timeout is invalid.
        ConfigurationError: If any name or the location is empty.
    """
    base_url = base_url or config.get_provider_base_url()
    timeout = timeout or config.get_timeout()

    http_client = build_http_client(base_url, timeout, transport)
    redactor = Redactor(redactor_mode)
    try:
        verifier = (
            PactVerifier(build_contract_source(location, timeout), redactor=redactor)
            .bind_consumer(consumer_name)
            .set_provider(provider_name, HttpxProviderClient(http_client))
            .set_contract_location(location)
        )
    except Exception:
        http_client.close()
        raise
    return AppContainer(verifier=verifier, http_client=http_client, redactor=redactor)
