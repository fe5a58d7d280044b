"""Strict fail-fast query execution (single request unit)."""

from __future__ import annotations

from ..core.transport import SyncTransport
from .models import DatasetMetadata, PxWebQuery, RawDataset


class StrictQueryExecutor:
    """Single-request strict executor."""

    def __init__(self, transport: SyncTransport) -> None:
        self._transport = transport

    def execute_query(
        self,
        api_url: str,
        metadata: DatasetMetadata,
        query: PxWebQuery,
    ) -> RawDataset:
        data = self._transport.post_json(api_url, query.to_payload())
        return RawDataset(format=query.response.format, data=data, metadata=metadata)


__all__ = [
    "StrictQueryExecutor",
]
