"""Pytest fixtures for contract source contract tests.

Provided fixtures
-----------------
- **backend**: Parametrized fixture returning a `Backend` for every
  `ContractSource` implementation (``memory``, ``local``, ``http``). Each
  backend pairs a fresh source with a ``publish`` function storing raw
  bytes under a name and returning the location the source reads it from.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path

import httpx
import pytest

from pactverify.adapters.contract_source import (
    HttpContractSource,
    LocalContractSource,
    MemoryContractSource,
)
from pactverify.interfaces.contract_source import ContractSource

BROKER_URL = "http://broker.test"


@dataclass
class Backend:
    """A contract source plus a way to put documents where it reads them."""

    source: ContractSource
    publish: Callable[[str, bytes], str]
    missing: str


def _memory_backend() -> Backend:
    source = MemoryContractSource()

    def publish(name: str, document: bytes) -> str:
        source.put(name, document)
        return name

    return Backend(source, publish, missing="nowhere.json")


def _local_backend(root: Path) -> Backend:
    def publish(name: str, document: bytes) -> str:
        (root / name).write_bytes(document)
        return name

    return Backend(LocalContractSource(root), publish, missing="nowhere.json")


def _http_backend() -> tuple[Backend, httpx.Client]:
    documents: dict[str, bytes] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        name = request.url.path.lstrip("/")
        if name not in documents:
            return httpx.Response(404)
        return httpx.Response(200, content=documents[name])

    client = httpx.Client(transport=httpx.MockTransport(handler))

    def publish(name: str, document: bytes) -> str:
        documents[name] = document
        return f"{BROKER_URL}/{name}"

    return Backend(HttpContractSource(client), publish, f"{BROKER_URL}/nowhere.json"), client


@pytest.fixture(params=["memory", "local", "http"])
def backend(request: pytest.FixtureRequest, tmp_path: Path) -> Iterator[Backend]:
    """Return a fresh backend for the requested contract source."""
    match request.param:
        case "memory":
            yield _memory_backend()
        case "local":
            yield _local_backend(tmp_path)
        case "http":
            http_backend, client = _http_backend()
            with client:
                yield http_backend
        case _:
            raise ValueError(f"unknown contract source: {request.param}")
