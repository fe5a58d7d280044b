"""PX-Web dataset, query and result models."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace

from ..core.errors import PxWebProtocolError

FILTER_ITEM = "item"
FILTER_TOP = "top"


def _as_str_tuple(values: Sequence[str], *, name: str) -> tuple[str, ...]:
    if isinstance(values, str):
        raise TypeError(f"{name} must be a sequence of str, not str")
    out: list[str] = []
    for value in values:
        if not isinstance(value, str):
            raise TypeError(f"{name} entries must be str")
        out.append(value)
    return tuple(out)


@dataclass(slots=True, frozen=True)
class Variable:
    """One dimension of a dataset and its legal value codes."""

    code: str
    text: str
    values: tuple[str, ...] | list[str]
    value_texts: tuple[str, ...] | list[str]
    elimination: bool = False
    time: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", _as_str_tuple(self.values, name="values"))
        object.__setattr__(
            self, "value_texts", _as_str_tuple(self.value_texts, name="value_texts")
        )
        if len(self.values) != len(self.value_texts):
            raise ValueError(
                f"variable {self.code!r}: values and value_texts must have equal length"
            )


@dataclass(slots=True, frozen=True)
class DatasetMetadata:
    title: str
    variables: tuple[Variable, ...] | list[Variable]
    source: str | None = None
    updated: str | None = None
    description: str | None = None

    def __post_init__(self) -> None:
        variables = tuple(self.variables)
        codes = [variable.code for variable in variables]
        if len(codes) != len(set(codes)):
            raise ValueError("variable codes must be unique within a dataset")
        object.__setattr__(self, "variables", variables)

    def find_variable(self, code: str) -> Variable | None:
        for variable in self.variables:
            if variable.code == code:
                return variable
        return None


@dataclass(slots=True, frozen=True)
class Selection:
    filter: str
    values: tuple[str, ...] | list[str]

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", _as_str_tuple(self.values, name="values"))


@dataclass(slots=True, frozen=True)
class VariableSelection:
    code: str
    selection: Selection


@dataclass(slots=True, frozen=True)
class ResponseFormat:
    format: str


@dataclass(slots=True, frozen=True)
class PxWebQuery:
    """Wire payload POSTed to a PX-Web table endpoint."""

    query: tuple[VariableSelection, ...] | list[VariableSelection]
    response: ResponseFormat

    def __post_init__(self) -> None:
        if isinstance(self.query, tuple):
            return
        object.__setattr__(self, "query", tuple(self.query))

    def selection_codes(self) -> tuple[str, ...]:
        return tuple(item.code for item in self.query)

    def to_payload(self) -> dict[str, object]:
        return {
            "query": [
                {
                    "code": item.code,
                    "selection": {
                        "filter": item.selection.filter,
                        "values": list(item.selection.values),
                    },
                }
                for item in self.query
            ],
            "response": {"format": self.response.format},
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, object]) -> "PxWebQuery":
        raw_query = payload.get("query")
        raw_response = payload.get("response")
        if not isinstance(raw_query, list):
            raise PxWebProtocolError("query must be a list")
        if not isinstance(raw_response, Mapping) or not isinstance(
            raw_response.get("format"), str
        ):
            raise PxWebProtocolError("response.format must be a string")

        selections: list[VariableSelection] = []
        for item in raw_query:
            if not isinstance(item, Mapping):
                raise PxWebProtocolError("query element must be an object")
            code = item.get("code")
            selection = item.get("selection")
            if not isinstance(code, str) or not isinstance(selection, Mapping):
                raise PxWebProtocolError("query element needs code and selection")
            filter_name = selection.get("filter")
            values = selection.get("values")
            if not isinstance(filter_name, str) or not isinstance(values, list):
                raise PxWebProtocolError("selection needs filter and values")
            try:
                parsed = Selection(filter=filter_name, values=values)
            except TypeError as exc:
                raise PxWebProtocolError("selection values must be strings") from exc
            selections.append(VariableSelection(code=code, selection=parsed))

        return cls(query=tuple(selections), response=ResponseFormat(format=raw_response["format"]))


@dataclass(slots=True, frozen=True)
class QueryConfig:
    """Caller-facing selection request, not yet checked against metadata."""

    postal_codes: tuple[str, ...] | list[str]
    years: tuple[str, ...] | list[str]
    building_types: tuple[str, ...] | list[str] | None = None
    metrics: tuple[str, ...] | list[str] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "postal_codes", _as_str_tuple(self.postal_codes, name="postal_codes")
        )
        object.__setattr__(self, "years", _as_str_tuple(self.years, name="years"))
        if self.building_types is not None:
            object.__setattr__(
                self,
                "building_types",
                _as_str_tuple(self.building_types, name="building_types"),
            )
        if self.metrics is not None:
            object.__setattr__(self, "metrics", _as_str_tuple(self.metrics, name="metrics"))

    def with_postal_codes(self, postal_codes: Sequence[str]) -> "QueryConfig":
        return replace(self, postal_codes=tuple(postal_codes))


@dataclass(slots=True, frozen=True)
class RawDataset:
    """Unparsed response body of one successful query."""

    format: str
    data: str
    metadata: DatasetMetadata

    @property
    def size(self) -> int:
        return len(self.data)


__all__ = [
    "FILTER_ITEM",
    "FILTER_TOP",
    "Variable",
    "DatasetMetadata",
    "Selection",
    "VariableSelection",
    "ResponseFormat",
    "PxWebQuery",
    "QueryConfig",
    "RawDataset",
]
