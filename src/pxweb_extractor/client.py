"""Public client entrypoint."""

from __future__ import annotations

from collections.abc import Sequence
from types import TracebackType

from .config import ExtractorConfig
from .core.errors import PxWebClientClosedError, PxWebValidationError
from .core.throttling import FixedDelayThrottler
from .core.transport import SyncTransport
from .pxweb.models import DatasetMetadata, PxWebQuery, QueryConfig, RawDataset
from .pxweb.orchestrator import ExtractionService
from .pxweb.queries import build_latest_query
from .pxweb.results import BatchedExtraction
from .pxweb.source import PxWebMetadataSource
from .pxweb.strict import StrictQueryExecutor


def validate_extractor_config(config: ExtractorConfig) -> None:
    try:
        config.validate()
    except ValueError as exc:
        raise PxWebValidationError(str(exc), cause="validation") from exc


class PxWebExtractor:
    """Public PX-Web extraction client."""

    def __init__(
        self,
        *,
        config: ExtractorConfig | None = None,
        transport: SyncTransport | None = None,
        service: ExtractionService | None = None,
    ) -> None:
        self._config = config or ExtractorConfig()
        validate_extractor_config(self._config)

        self._transport = transport or SyncTransport(self._config)
        self._service = service or ExtractionService(
            StrictQueryExecutor(self._transport),
            throttler=FixedDelayThrottler(self._config.throttling.inter_batch_delay_seconds),
            query_defaults=self._config.query,
            batch_size=self._config.batching.batch_size,
        )
        self._closed = False

    @property
    def config(self) -> ExtractorConfig:
        return self._config

    def metadata_source(self, dataset_url: str) -> PxWebMetadataSource:
        return PxWebMetadataSource(dataset_url, self._transport)

    def fetch_metadata(self, dataset_url: str) -> DatasetMetadata:
        self._ensure_open()
        return self.metadata_source(dataset_url).fetch_metadata()

    def extract(
        self,
        metadata: DatasetMetadata,
        api_url: str,
        *,
        response_format: str | None = None,
    ) -> RawDataset:
        self._ensure_open()
        return self._service.extract(metadata, api_url, response_format=response_format)

    def extract_with_query(
        self,
        metadata: DatasetMetadata,
        api_url: str,
        query: PxWebQuery,
    ) -> RawDataset:
        self._ensure_open()
        return self._service.extract_with_query(metadata, api_url, query)

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
        self._ensure_open()
        return self._service.extract_batched(
            metadata,
            api_url,
            config,
            batch_size=batch_size,
            response_format=response_format,
            default_building_types=default_building_types,
            default_metrics=default_metrics,
        )

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
        self._ensure_open()
        return self._service.run_batched(
            metadata,
            api_url,
            config,
            batch_size=batch_size,
            response_format=response_format,
            default_building_types=default_building_types,
            default_metrics=default_metrics,
        )

    def build_latest_query(
        self,
        metadata: DatasetMetadata,
        top_n: int = 1,
        response_format: str | None = None,
    ) -> PxWebQuery:
        return build_latest_query(
            metadata,
            top_n,
            self._config.query.response_format if response_format is None else response_format,
        )

    def _ensure_open(self) -> None:
        if self._closed:
            raise PxWebClientClosedError("PxWebExtractor is already closed")

    def close(self) -> None:
        if self._closed:
            return
        self._transport.close()
        self._closed = True

    def __enter__(self) -> "PxWebExtractor":
        self._ensure_open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        self.close()
        return False


__all__ = [
    "PxWebExtractor",
    "validate_extractor_config",
]
