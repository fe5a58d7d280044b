"""Builders turning metadata or query configs into PX-Web queries."""

from __future__ import annotations

from collections.abc import Sequence

from ..config import AxisCodes
from ..core.errors import PxWebValidationError
from ..defaults import DEFAULT_BUILDING_TYPES, DEFAULT_METRICS, DEFAULT_RESPONSE_FORMAT
from .models import (
    FILTER_ITEM,
    FILTER_TOP,
    DatasetMetadata,
    PxWebQuery,
    QueryConfig,
    ResponseFormat,
    Selection,
    Variable,
    VariableSelection,
)


def _select_items(code: str, values: Sequence[str]) -> VariableSelection:
    return VariableSelection(code=code, selection=Selection(filter=FILTER_ITEM, values=tuple(values)))


def _select_all(variable: Variable) -> VariableSelection:
    return _select_items(variable.code, variable.values)


def build_default_query(
    metadata: DatasetMetadata,
    response_format: str = DEFAULT_RESPONSE_FORMAT,
) -> PxWebQuery:
    """Select every declared value of every variable."""

    return PxWebQuery(
        query=tuple(_select_all(variable) for variable in metadata.variables),
        response=ResponseFormat(format=response_format),
    )


def build_query_from_config(
    config: QueryConfig,
    response_format: str = DEFAULT_RESPONSE_FORMAT,
    *,
    default_building_types: Sequence[str] = DEFAULT_BUILDING_TYPES,
    default_metrics: Sequence[str] = DEFAULT_METRICS,
    axes: AxisCodes | None = None,
) -> PxWebQuery:
    """Build the four-axis query for an already validated config.

    Nothing is checked against metadata here; run the config through
    ``validate_query_config`` first.
    """

    axes = axes or AxisCodes()
    building_types = (
        config.building_types if config.building_types is not None else default_building_types
    )
    metrics = config.metrics if config.metrics is not None else default_metrics
    return PxWebQuery(
        query=(
            _select_items(axes.year, config.years),
            _select_items(axes.postal_code, config.postal_codes),
            _select_items(axes.building_type, building_types),
            _select_items(axes.metric, metrics),
        ),
        response=ResponseFormat(format=response_format),
    )


def build_latest_query(
    metadata: DatasetMetadata,
    top_n: int = 1,
    response_format: str = DEFAULT_RESPONSE_FORMAT,
) -> PxWebQuery:
    """Select the latest ``top_n`` periods of the time variable and everything else."""

    if isinstance(top_n, bool) or not isinstance(top_n, int):
        raise PxWebValidationError("top_n must be int", cause="validation")
    if top_n <= 0:
        raise PxWebValidationError("top_n must be > 0", cause="validation")

    selections: list[VariableSelection] = []
    for variable in metadata.variables:
        if variable.time:
            selections.append(
                VariableSelection(
                    code=variable.code,
                    selection=Selection(filter=FILTER_TOP, values=(str(top_n),)),
                )
            )
        else:
            selections.append(_select_all(variable))
    return PxWebQuery(query=tuple(selections), response=ResponseFormat(format=response_format))


__all__ = [
    "build_default_query",
    "build_query_from_config",
    "build_latest_query",
]
