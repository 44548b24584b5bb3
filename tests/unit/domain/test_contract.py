"""Unit tests for :mod:`pactverify.domain.contract`."""

import json

import pytest

from pactverify.domain.contract import ContractFile, Interaction, Request, header_value
from pactverify.domain.errors import ContractFormatError
from pactverify.domain.matching_rules import RuleKind

# pylint: disable=redefined-outer-name


@pytest.fixture
def three_interactions(make_interaction):
    return [
        make_interaction(description="order exists", providerState="order 1 exists"),
        make_interaction(description="order missing", providerState=None),
        make_interaction(description="order exists", providerState="order 2 exists"),
    ]


# ============================================================================
#                               Decoding
# ============================================================================


def test_decodes_names_interactions_and_version(make_contract):
    contract = ContractFile.from_dict(make_contract())

    assert contract.consumer_name == "order-ui"
    assert contract.provider_name == "order-api"
    assert contract.specification_version == "2.0.0"
    assert len(contract.interactions) == 1

    interaction = contract.interactions[0]
    assert interaction.description == "order exists"
    assert interaction.provider_state == "order 1 exists"
    assert interaction.request.method == "GET"
    assert interaction.request.path == "/orders/1"
    assert interaction.response.status == 200
    assert interaction.response.body is not None
    assert interaction.response.body.body == {"id": 1}


def test_response_body_takes_content_type_and_charset_from_headers(make_interaction):
    raw = make_interaction(
        response={
            "status": 200,
            "headers": {"content-type": "application/json; charset=utf-16"},
            "body": {"id": 1},
        }
    )
    body = Interaction.from_dict(raw).response.body
    assert body is not None
    assert body.is_json
    assert body.encoding == "utf-16"


def test_body_without_content_type_is_plain_text():
    request = Request.from_dict({"method": "post", "path": "/notes", "body": "hello"})
    assert request.method == "POST"
    assert request.body is not None
    assert request.body.content_type == "text/plain"
    assert request.body.content == "hello"


def test_party_names_may_be_plain_strings(make_contract):
    contract = ContractFile.from_dict(make_contract(consumer="x") | {"provider": "y"})
    assert contract.consumer_name == "x"
    assert contract.provider_name == "y"


@pytest.mark.parametrize(
    "state_fields",
    [
        {"providerState": "ready"},
        {"provider_state": "ready"},
        {"providerStates": [{"name": "ready", "params": {}}]},
    ],
)
def test_provider_state_spellings(make_interaction, state_fields):
    raw = make_interaction()
    del raw["providerState"]
    raw.update(state_fields)
    assert Interaction.from_dict(raw).provider_state == "ready"


def test_query_mapping_is_urlencoded():
    request = Request.from_dict(
        {"method": "GET", "path": "/orders", "query": {"status": ["open", "held"], "q": "a b"}}
    )
    assert request.query == "status=open&status=held&q=a+b"


def test_query_string_is_kept():
    request = Request.from_dict({"method": "GET", "path": "/orders", "query": "page=2"})
    assert request.query == "page=2"


def test_missing_interactions_yield_an_empty_contract(make_contract):
    raw = make_contract()
    del raw["interactions"]
    assert ContractFile.from_dict(raw).interactions == ()


def test_matching_rules_are_decoded(make_interaction):
    raw = make_interaction()
    raw["response"]["matchingRules"] = {"$.body.id": {"match": "type"}}
    rules = Interaction.from_dict(raw).response.matching_rules
    rule = rules.for_body(("id",))
    assert rule is not None
    assert rule.kind is RuleKind.TYPE


def test_interaction_str_names_description_and_state(make_interaction):
    interaction = Interaction.from_dict(make_interaction())
    assert str(interaction) == "'order exists' given 'order 1 exists'"


# ============================================================================
#                               Errors
# ============================================================================


def test_invalid_json_raises_contract_format_error_with_location():
    with pytest.raises(ContractFormatError) as excinfo:
        ContractFile.from_json("{nope", "pacts/x.json")
    assert excinfo.value.location == "pacts/x.json"
    assert "pacts/x.json" in str(excinfo.value)


@pytest.mark.parametrize(
    "mutate",
    [
        lambda doc: doc.pop("consumer"),
        lambda doc: doc.update(interactions={"not": "a list"}),
        lambda doc: doc["interactions"][0].pop("description"),
        lambda doc: doc["interactions"][0]["request"].pop("path"),
        lambda doc: doc["interactions"][0]["response"].update(status="200"),
        lambda doc: doc["interactions"][0]["response"].update(status=True),
        lambda doc: doc["interactions"][0]["request"].update(headers={"X-Count": 1}),
        lambda doc: doc["interactions"][0].update(request=[]),
    ],
)
def test_structural_problems_raise_contract_format_error(make_contract, mutate):
    document = make_contract()
    mutate(document)
    with pytest.raises(ContractFormatError):
        ContractFile.from_json(json.dumps(document), "pacts/x.json")


def test_top_level_must_be_an_object():
    with pytest.raises(ContractFormatError):
        ContractFile.from_json("[]")


# ============================================================================
#                               Filtering
# ============================================================================


def test_filter_by_description_keeps_order(make_contract, three_interactions):
    contract = ContractFile.from_dict(make_contract(three_interactions))
    selected = contract.filter_by(description="order exists")
    assert [i.provider_state for i in selected.interactions] == [
        "order 1 exists",
        "order 2 exists",
    ]


def test_filter_by_both_fields_requires_both_to_match(make_contract, three_interactions):
    contract = ContractFile.from_dict(make_contract(three_interactions))
    selected = contract.filter_by("order exists", "order 2 exists")
    assert len(selected.interactions) == 1
    assert selected.interactions[0].provider_state == "order 2 exists"


def test_filter_matching_nothing_is_empty_not_an_error(make_contract, three_interactions):
    contract = ContractFile.from_dict(make_contract(three_interactions))
    selected = contract.filter_by(description="no such interaction")
    assert selected.interactions == ()
    assert selected.consumer_name == contract.consumer_name


def test_filter_without_arguments_keeps_everything(make_contract, three_interactions):
    contract = ContractFile.from_dict(make_contract(three_interactions))
    assert contract.filter_by() == contract


def test_filter_does_not_mutate_the_original(make_contract, three_interactions):
    contract = ContractFile.from_dict(make_contract(three_interactions))
    contract.filter_by(description="order missing")
    assert len(contract.interactions) == 3


def test_header_value_is_case_insensitive():
    headers = {"Content-Type": "application/json"}
    assert header_value(headers, "content-type") == "application/json"
    assert header_value(headers, "Accept") is None
