from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from pxweb_extractor.core.errors import PxWebProtocolError
from pxweb_extractor.pxweb.models import (
    DatasetMetadata,
    PxWebQuery,
    QueryConfig,
    RawDataset,
    ResponseFormat,
    Selection,
    Variable,
    VariableSelection,
)
from tests.shared.payloads import make_variable


def test_variable_values_are_tuples_and_immutable():
    variable = make_variable("Vuosi", ["2023", "2024"], time=True)
    assert variable.values == ("2023", "2024")
    assert isinstance(variable.value_texts, tuple)
    with pytest.raises(FrozenInstanceError):
        variable.values = ()  # type: ignore[misc]


def test_variable_rejects_mismatched_value_texts():
    with pytest.raises(ValueError, match="equal length"):
        Variable(code="Vuosi", text="Year", values=["2024"], value_texts=[])


def test_metadata_rejects_duplicate_codes():
    with pytest.raises(ValueError, match="unique"):
        DatasetMetadata(
            title="t",
            variables=[make_variable("Vuosi", ["2024"]), make_variable("Vuosi", ["2023"])],
        )


def test_metadata_find_variable_by_code():
    metadata = DatasetMetadata(
        title="t",
        variables=[make_variable("Postinumero", ["00100"]), make_variable("Vuosi", ["2024"], time=True)],
    )
    assert metadata.find_variable("Postinumero").values == ("00100",)
    assert metadata.find_variable("missing") is None


def test_query_config_rejects_bare_string():
    with pytest.raises(TypeError):
        QueryConfig(postal_codes="00100", years=["2024"])  # type: ignore[arg-type]


def test_query_config_with_postal_codes_returns_copy():
    config = QueryConfig(postal_codes=["00100", "00200"], years=["2024"], metrics=["m"])
    replaced = config.with_postal_codes(["00300"])
    assert replaced.postal_codes == ("00300",)
    assert replaced.metrics == ("m",)
    assert config.postal_codes == ("00100", "00200")


def test_query_payload_uses_wire_field_names():
    query = PxWebQuery(
        query=[VariableSelection(code="Vuosi", selection=Selection(filter="top", values=["2"]))],
        response=ResponseFormat(format="json-stat2"),
    )
    assert query.to_payload() == {
        "query": [{"code": "Vuosi", "selection": {"filter": "top", "values": ["2"]}}],
        "response": {"format": "json-stat2"},
    }


@pytest.mark.parametrize(
    "payload",
    [
        {"query": {}, "response": {"format": "csv"}},
        {"query": [], "response": {}},
        {"query": ["x"], "response": {"format": "csv"}},
        {"query": [{"code": "A"}], "response": {"format": "csv"}},
        {"query": [{"code": "A", "selection": {"filter": "item", "values": [1]}}], "response": {"format": "csv"}},
    ],
)
def test_query_from_payload_rejects_malformed_shapes(payload):
    with pytest.raises(PxWebProtocolError):
        PxWebQuery.from_payload(payload)


def test_raw_dataset_size_is_body_length():
    metadata = DatasetMetadata(title="t", variables=[])
    assert RawDataset(format="csv", data="abc", metadata=metadata).size == 3
