"""Extractor configuration."""

from __future__ import annotations

from dataclasses import dataclass, field

from .defaults import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_BUILDING_TYPES,
    DEFAULT_INTER_BATCH_DELAY_SECONDS,
    DEFAULT_METRICS,
    DEFAULT_RESPONSE_FORMAT,
)


@dataclass(slots=True, frozen=True)
class TransportConfig:
    """Transport-related settings."""

    timeout_connect_seconds: float = 5.0
    timeout_read_seconds: float = 60.0
    timeout_write_seconds: float = 30.0
    timeout_pool_seconds: float = 5.0

    def validate(self) -> None:
        for field_name in (
            "timeout_connect_seconds",
            "timeout_read_seconds",
            "timeout_write_seconds",
            "timeout_pool_seconds",
        ):
            if getattr(self, field_name) <= 0:
                raise ValueError(f"transport.{field_name} must be > 0")


@dataclass(slots=True, frozen=True)
class ThrottlingConfig:
    """Throttling-related settings."""

    inter_batch_delay_seconds: float = DEFAULT_INTER_BATCH_DELAY_SECONDS

    def validate(self) -> None:
        if self.inter_batch_delay_seconds < 0:
            raise ValueError("throttling.inter_batch_delay_seconds must be >= 0")


@dataclass(slots=True, frozen=True)
class BatchingConfig:
    """Batch planning settings."""

    batch_size: int = DEFAULT_BATCH_SIZE

    def validate(self) -> None:
        if isinstance(self.batch_size, bool) or not isinstance(self.batch_size, int):
            raise ValueError("batching.batch_size must be int")
        if self.batch_size <= 0:
            raise ValueError("batching.batch_size must be > 0")


@dataclass(slots=True, frozen=True)
class AxisCodes:
    """Variable codes of the four axes a config query selects on."""

    year: str = "Vuosi"
    postal_code: str = "Postinumero"
    building_type: str = "Talotyyppi"
    metric: str = "Tiedot"

    def as_tuple(self) -> tuple[str, str, str, str]:
        return (self.year, self.postal_code, self.building_type, self.metric)

    def validate(self) -> None:
        codes = self.as_tuple()
        for code in codes:
            if not isinstance(code, str) or code.strip() == "":
                raise ValueError("axes codes must be non-empty str")
        if len(set(codes)) != len(codes):
            raise ValueError("axes codes must be distinct")


@dataclass(slots=True, frozen=True)
class QueryDefaults:
    """Fallback selections used when a query config omits an axis."""

    response_format: str = DEFAULT_RESPONSE_FORMAT
    default_building_types: tuple[str, ...] = DEFAULT_BUILDING_TYPES
    default_metrics: tuple[str, ...] = DEFAULT_METRICS
    axes: AxisCodes = field(default_factory=AxisCodes)

    def validate(self) -> None:
        if not self.response_format:
            raise ValueError("query.response_format must not be empty")
        if isinstance(self.default_building_types, str):
            raise ValueError("query.default_building_types must be a sequence of str")
        if isinstance(self.default_metrics, str):
            raise ValueError("query.default_metrics must be a sequence of str")
        self.axes.validate()


@dataclass(slots=True, frozen=True)
class ExtractorConfig:
    """Runtime configuration for the PX-Web extractor."""

    user_agent: str = "pxweb-extractor/0.1.0"

    transport: TransportConfig = field(default_factory=TransportConfig)
    throttling: ThrottlingConfig = field(default_factory=ThrottlingConfig)
    batching: BatchingConfig = field(default_factory=BatchingConfig)
    query: QueryDefaults = field(default_factory=QueryDefaults)

    def validate(self) -> None:
        if not self.user_agent:
            raise ValueError("user_agent must not be empty")
        self.transport.validate()
        self.throttling.validate()
        self.batching.validate()
        self.query.validate()


__all__ = [
    "TransportConfig",
    "ThrottlingConfig",
    "BatchingConfig",
    "AxisCodes",
    "QueryDefaults",
    "ExtractorConfig",
]
