"""Metadata providers for PX-Web tables."""

from __future__ import annotations

import logging
from typing import Protocol

from ..core.transport import SyncTransport
from .models import DatasetMetadata
from .parser import parse_metadata

logger = logging.getLogger("pxweb_extractor")

_UI_PATH = "/PXWeb/pxweb/"
_API_PATH = "/PXWeb/api/v1/"


class MetadataProvider(Protocol):
    url: str

    def fetch_metadata(self) -> DatasetMetadata: ...


def to_api_url(url: str) -> str:
    """Turn a PX-Web UI table URL into its API URL.

    ``.../PXWeb/pxweb/fi/StatFin/x/table.px/`` becomes
    ``.../PXWeb/api/v1/fi/StatFin/x/table.px``.
    """

    clean = url.rstrip("/")
    if "/api/v1/" in clean:
        return clean
    return clean.replace(_UI_PATH, _API_PATH)


class PxWebMetadataSource:
    """Fetches table metadata with a GET on the table's API URL."""

    def __init__(self, dataset_url: str, transport: SyncTransport) -> None:
        self.url = dataset_url
        self._transport = transport

    @property
    def api_url(self) -> str:
        return to_api_url(self.url)

    def fetch_metadata(self) -> DatasetMetadata:
        payload = self._transport.get_json(self.api_url, context="fetch metadata")
        metadata = parse_metadata(payload)
        logger.info(
            "metadata fetched title=%s variables=%s",
            metadata.title,
            len(metadata.variables),
        )
        return metadata


__all__ = [
    "MetadataProvider",
    "PxWebMetadataSource",
    "to_api_url",
]
