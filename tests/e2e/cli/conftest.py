"""Fixtures for end-to-end CLI tests.

The ``verify`` command builds its own provider client; the ``cli_provider``
fixture points that client at the fake provider by handing `bootstrap` a
`httpx.MockTransport`, so the whole command runs in-process.
"""

import functools
import json

import httpx
import pytest
from click.testing import CliRunner

import pactverify.entrypoints.cli.verify as verify_module
from pactverify.bootstrap import bootstrap

# pylint: disable=redefined-outer-name

CONTRACT_FILE = "order-ui-order-api.json"


@pytest.fixture
def runner():
    """Return a Click CliRunner; a wide COLUMNS keeps Rich tables unwrapped."""
    return CliRunner(env={"COLUMNS": "200"})


@pytest.fixture
def fs(runner):
    """Run the test inside an isolated working directory."""
    with runner.isolated_filesystem():
        yield


@pytest.fixture
def cli_provider(monkeypatch, fake_provider):
    """Route the CLI's provider client to the fake provider."""
    monkeypatch.setattr(
        verify_module,
        "bootstrap",
        functools.partial(bootstrap, transport=httpx.MockTransport(fake_provider)),
    )
    return fake_provider


@pytest.fixture
def contract_file(fs, make_contract):
    """Write the default contract into the isolated directory."""

    def _write(document=None, name: str = CONTRACT_FILE) -> str:
        with open(name, "w", encoding="utf-8") as f:
            json.dump(document if document is not None else make_contract(), f)
        return name

    return _write


@pytest.fixture
def verify_args():
    """Build ``verify`` arguments for the default consumer and provider."""

    def _args(location: str = CONTRACT_FILE, *extra: str) -> list[str]:
        return [
            "--no-flight-recorder",
            "verify",
            location,
            "--consumer",
            "order-ui",
            "--provider",
            "order-api",
            "--provider-base-url",
            "http://provider.test",
            *extra,
        ]

    return _args
