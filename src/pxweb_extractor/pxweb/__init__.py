"""PX-Web extraction package."""

from .models import (
    DatasetMetadata,
    PxWebQuery,
    QueryConfig,
    RawDataset,
    ResponseFormat,
    Selection,
    Variable,
    VariableSelection,
)
from .results import BatchedExtraction, BatchOutcome
from .validators import ValidatedConfig

__all__ = [
    "Variable",
    "DatasetMetadata",
    "Selection",
    "VariableSelection",
    "ResponseFormat",
    "PxWebQuery",
    "QueryConfig",
    "RawDataset",
    "ValidatedConfig",
    "BatchOutcome",
    "BatchedExtraction",
]
