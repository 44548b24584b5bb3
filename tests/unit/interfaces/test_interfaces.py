"""Unit tests for the small DTOs and errors of the interfaces package."""

import pytest

from pactverify.interfaces.contract_source import (
    ContractEncodingError,
    ContractSource,
    ContractSourceError,
)
from pactverify.interfaces.provider_client import ProviderClient, ProviderRequest


@pytest.mark.parametrize(
    ("query", "target"),
    [(None, "/orders"), ("", "/orders"), ("page=2&size=10", "/orders?page=2&size=10")],
)
def test_provider_request_target(query, target):
    assert ProviderRequest("GET", "/orders", query=query).target == target


def test_provider_request_defaults():
    request = ProviderRequest("GET", "/")
    assert request.headers == {}
    assert request.content == b""


def test_contract_source_error_message():
    error = ContractSourceError("pacts/x.json", "Permission denied")
    assert str(error) == "Cannot read contract at 'pacts/x.json': Permission denied"
    assert (error.location, error.reason) == ("pacts/x.json", "Permission denied")


def test_encoding_error_is_a_source_error():
    assert issubclass(ContractEncodingError, ContractSourceError)


@pytest.mark.parametrize("abstract", [ContractSource, ProviderClient])
def test_ports_cannot_be_instantiated(abstract):
    with pytest.raises(TypeError):
        abstract()  # pylint: disable=abstract-class-instantiated
