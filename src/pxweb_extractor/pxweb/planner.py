"""Batch planning helpers for extraction orchestration."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..defaults import DEFAULT_BATCH_SIZE
from .models import QueryConfig


def chunk_values(
    values: Sequence[str],
    *,
    chunk_size: int = DEFAULT_BATCH_SIZE,
) -> tuple[tuple[str, ...], ...]:
    if chunk_size <= 0:
        raise ValueError("chunk_size must be > 0")
    return tuple(
        tuple(values[i : i + chunk_size])
        for i in range(0, len(values), chunk_size)
    )


@dataclass(slots=True, frozen=True)
class BatchPlan:
    """One postal-code slice; every other axis is held fixed."""

    batch_index: int
    config: QueryConfig

    @property
    def postal_codes(self) -> tuple[str, ...]:
        return tuple(self.config.postal_codes)

    def describe(self) -> str:
        codes = self.postal_codes
        if not codes:
            return "empty"
        return f"{codes[0]}-{codes[-1]}"


def plan_postal_batches(
    config: QueryConfig,
    *,
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> list[BatchPlan]:
    return [
        BatchPlan(batch_index=index, config=config.with_postal_codes(codes))
        for index, codes in enumerate(chunk_values(config.postal_codes, chunk_size=batch_size))
    ]


__all__ = [
    "BatchPlan",
    "chunk_values",
    "plan_postal_batches",
]
