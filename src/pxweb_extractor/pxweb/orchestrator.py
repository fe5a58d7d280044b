"""Extraction orchestration for PX-Web tables."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..config import AxisCodes, QueryDefaults
from ..core.errors import PxWebApiError, PxWebValidationError, cause_from_error
from ..core.throttling import FixedDelayThrottler
from ..defaults import DEFAULT_BATCH_SIZE, DEFAULT_INTER_BATCH_DELAY_SECONDS
from .models import DatasetMetadata, PxWebQuery, QueryConfig, RawDataset
from .planner import plan_postal_batches
from .queries import build_default_query, build_query_from_config
from .results import BatchedExtraction, BatchOutcome
from .strict import StrictQueryExecutor
from .validators import validate_query_config

logger = logging.getLogger("pxweb_extractor")


def _ensure_batch_size(batch_size: int) -> int:
    if isinstance(batch_size, bool) or not isinstance(batch_size, int):
        raise PxWebValidationError("batch_size must be int", cause="validation")
    if batch_size <= 0:
        raise PxWebValidationError("batch_size must be > 0", cause="validation")
    return batch_size


class ExtractionService:
    """Runs single-shot and batched extractions, one request at a time."""

    def __init__(
        self,
        strict_executor: StrictQueryExecutor,
        *,
        throttler: FixedDelayThrottler | None = None,
        query_defaults: QueryDefaults | None = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        self._strict = strict_executor
        self._throttler = throttler or FixedDelayThrottler(DEFAULT_INTER_BATCH_DELAY_SECONDS)
        self._defaults = query_defaults or QueryDefaults()
        self._batch_size = batch_size

    def extract(
        self,
        metadata: DatasetMetadata,
        api_url: str,
        *,
        response_format: str | None = None,
    ) -> RawDataset:
        """Fetch every value of every variable in one request.

        No size bound is applied; large tables may be refused by the API.
        Any failure propagates.
        """

        logger.info("extract start title=%s variables=%s", metadata.title, len(metadata.variables))
        fmt = self._defaults.response_format if response_format is None else response_format
        query = build_default_query(metadata, fmt)
        dataset = self._strict.execute_query(api_url, metadata, query)
        logger.info("extract done format=%s bytes=%s", dataset.format, dataset.size)
        return dataset

    def extract_with_query(
        self,
        metadata: DatasetMetadata,
        api_url: str,
        query: PxWebQuery,
    ) -> RawDataset:
        logger.info(
            "extract_with_query start variables=%s format=%s",
            ",".join(query.selection_codes()),
            query.response.format,
        )
        return self._strict.execute_query(api_url, metadata, query)

    def extract_batched(
        self,
        metadata: DatasetMetadata,
        api_url: str,
        config: QueryConfig,
        *,
        batch_size: int | None = None,
        response_format: str | None = None,
        default_building_types: Sequence[str] | None = None,
        default_metrics: Sequence[str] | None = None,
    ) -> list[RawDataset]:
        """Return one dataset per successful batch; failed batches are skipped."""

        return self.run_batched(
            metadata,
            api_url,
            config,
            batch_size=batch_size,
            response_format=response_format,
            default_building_types=default_building_types,
            default_metrics=default_metrics,
        ).datasets

    def run_batched(
        self,
        metadata: DatasetMetadata,
        api_url: str,
        config: QueryConfig,
        *,
        batch_size: int | None = None,
        response_format: str | None = None,
        default_building_types: Sequence[str] | None = None,
        default_metrics: Sequence[str] | None = None,
    ) -> BatchedExtraction:
        size = _ensure_batch_size(self._batch_size if batch_size is None else batch_size)
        fmt = self._defaults.response_format if response_format is None else response_format
        axes: AxisCodes = self._defaults.axes
        building_defaults = (
            self._defaults.default_building_types
            if default_building_types is None
            else tuple(default_building_types)
        )
        metric_defaults = (
            self._defaults.default_metrics if default_metrics is None else tuple(default_metrics)
        )

        validated = validate_query_config(
            metadata,
            config,
            default_building_types=building_defaults,
            default_metrics=metric_defaults,
            axes=axes,
        )
        if validated.is_empty:
            logger.info(
                "batched extract has nothing to request postal_codes=%s years=%s",
                len(validated.config.postal_codes),
                len(validated.config.years),
            )
            return BatchedExtraction(validated=validated, outcomes=[])
        plans = plan_postal_batches(validated.config, batch_size=size)
        logger.info(
            "batched extract start postal_codes=%s batches=%s years=%s",
            len(validated.config.postal_codes),
            len(plans),
            ",".join(validated.config.years),
        )

        outcomes: list[BatchOutcome] = []
        for position, plan in enumerate(plans):
            logger.info(
                "batch start batch=%s/%s postal_codes=%s range=%s",
                plan.batch_index + 1,
                len(plans),
                len(plan.postal_codes),
                plan.describe(),
            )
            query = build_query_from_config(
                plan.config,
                fmt,
                default_building_types=building_defaults,
                default_metrics=metric_defaults,
                axes=axes,
            )
            try:
                dataset = self._strict.execute_query(api_url, metadata, query)
            except PxWebApiError as exc:
                logger.warning(
                    "batch failed batch=%s/%s cause=%s error=%s",
                    plan.batch_index + 1,
                    len(plans),
                    cause_from_error(exc),
                    exc,
                )
                outcomes.append(BatchOutcome.failure(plan, exc))
            else:
                logger.info(
                    "batch done batch=%s/%s bytes=%s",
                    plan.batch_index + 1,
                    len(plans),
                    dataset.size,
                )
                outcomes.append(BatchOutcome.success(plan, dataset))

            if position < len(plans) - 1:
                self._throttler.wait()

        result = BatchedExtraction(validated=validated, outcomes=outcomes)
        logger.info(
            "batched extract done succeeded=%s/%s",
            len(result.datasets),
            result.planned_batches,
        )
        return result


__all__ = [
    "ExtractionService",
]
