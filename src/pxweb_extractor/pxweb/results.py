"""Per-batch outcomes of a batched extraction."""

from __future__ import annotations

from dataclasses import dataclass

from ..core.errors import PxWebApiError, cause_from_error
from .models import RawDataset
from .planner import BatchPlan
from .validators import ValidatedConfig


@dataclass(slots=True, frozen=True)
class BatchOutcome:
    """Either a dataset or the error that made the batch fail."""

    plan: BatchPlan
    dataset: RawDataset | None = None
    error: PxWebApiError | None = None

    def __post_init__(self) -> None:
        if (self.dataset is None) == (self.error is None):
            raise ValueError("BatchOutcome needs exactly one of dataset or error")

    @classmethod
    def success(cls, plan: BatchPlan, dataset: RawDataset) -> "BatchOutcome":
        return cls(plan=plan, dataset=dataset)

    @classmethod
    def failure(cls, plan: BatchPlan, error: PxWebApiError) -> "BatchOutcome":
        return cls(plan=plan, error=error)

    @property
    def ok(self) -> bool:
        return self.dataset is not None

    @property
    def cause(self) -> str | None:
        if self.error is None:
            return None
        return cause_from_error(self.error)


@dataclass(slots=True, frozen=True)
class BatchedExtraction:
    validated: ValidatedConfig
    outcomes: tuple[BatchOutcome, ...] | list[BatchOutcome]

    def __post_init__(self) -> None:
        if isinstance(self.outcomes, tuple):
            return
        object.__setattr__(self, "outcomes", tuple(self.outcomes))

    @property
    def planned_batches(self) -> int:
        return len(self.outcomes)

    @property
    def datasets(self) -> list[RawDataset]:
        return [outcome.dataset for outcome in self.outcomes if outcome.dataset is not None]

    @property
    def failures(self) -> tuple[BatchOutcome, ...]:
        return tuple(outcome for outcome in self.outcomes if not outcome.ok)

    @property
    def is_complete(self) -> bool:
        return not self.failures


__all__ = [
    "BatchOutcome",
    "BatchedExtraction",
]
