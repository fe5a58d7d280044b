"""Filtering of query configs against dataset metadata."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ..config import AxisCodes
from ..defaults import DEFAULT_BUILDING_TYPES, DEFAULT_METRICS
from .models import DatasetMetadata, QueryConfig

logger = logging.getLogger("pxweb_extractor")


@dataclass(slots=True, frozen=True)
class ValidatedConfig:
    """Config restricted to codes the metadata declares, plus drop counts."""

    config: QueryConfig
    dropped_postal_codes: int = 0
    dropped_years: int = 0
    dropped_building_types: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.config.postal_codes or not self.config.years


def _filter_axis(
    metadata: DatasetMetadata,
    code: str,
    requested: Sequence[str],
) -> tuple[str, ...]:
    variable = metadata.find_variable(code)
    if variable is None:
        return tuple(requested)
    legal = set(variable.values)
    return tuple(value for value in requested if value in legal)


def validate_query_config(
    metadata: DatasetMetadata,
    config: QueryConfig,
    *,
    default_building_types: Sequence[str] = DEFAULT_BUILDING_TYPES,
    default_metrics: Sequence[str] = DEFAULT_METRICS,
    axes: AxisCodes | None = None,
) -> ValidatedConfig:
    """Drop requested codes that the metadata does not declare.

    An axis without a matching metadata variable passes through unfiltered.
    Metrics are never filtered. An empty result is not an error.
    """

    axes = axes or AxisCodes()
    building_types = (
        config.building_types if config.building_types is not None else tuple(default_building_types)
    )
    metrics = config.metrics if config.metrics is not None else tuple(default_metrics)

    postal_codes = _filter_axis(metadata, axes.postal_code, config.postal_codes)
    years = _filter_axis(metadata, axes.year, config.years)
    valid_types = _filter_axis(metadata, axes.building_type, building_types)

    dropped_postal = len(config.postal_codes) - len(postal_codes)
    dropped_years = len(config.years) - len(years)
    dropped_types = len(building_types) - len(valid_types)
    if dropped_postal > 0:
        logger.info("filtered out postal codes not found in metadata count=%s", dropped_postal)
    if dropped_years > 0:
        logger.info("filtered out years not found in metadata count=%s", dropped_years)
    if dropped_types > 0:
        logger.info("filtered out building types not found in metadata count=%s", dropped_types)

    return ValidatedConfig(
        config=QueryConfig(
            postal_codes=postal_codes,
            years=years,
            building_types=valid_types,
            metrics=metrics,
        ),
        dropped_postal_codes=dropped_postal,
        dropped_years=dropped_years,
        dropped_building_types=dropped_types,
    )


__all__ = [
    "ValidatedConfig",
    "validate_query_config",
]
