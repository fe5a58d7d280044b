"""Sync HTTP transport with status evaluation."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Protocol

import httpx

from ..config import ExtractorConfig
from .errors import PxWebTransportError, classify_http_status
from .response_parsing import parse_json_payload, response_text

logger = logging.getLogger("pxweb_extractor")

JSON_HEADERS: Mapping[str, str] = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class TransportClient(Protocol):
    def get(self, url: str, *, headers: Mapping[str, str]) -> object: ...
    def post(self, url: str, *, content: str, headers: Mapping[str, str]) -> object: ...
    def close(self) -> None: ...


def build_default_headers(config: ExtractorConfig) -> Mapping[str, str]:
    return {
        "Accept-Encoding": "gzip",
        "User-Agent": config.user_agent,
    }


def build_default_timeout(config: ExtractorConfig) -> httpx.Timeout:
    return httpx.Timeout(
        connect=config.transport.timeout_connect_seconds,
        read=config.transport.timeout_read_seconds,
        write=config.transport.timeout_write_seconds,
        pool=config.transport.timeout_pool_seconds,
    )


def encode_payload(payload: Mapping[str, object]) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


class SyncTransport:
    """Synchronous transport for PX-Web API.

    One call is one HTTP exchange: nothing is retried here.
    """

    def __init__(
        self,
        config: ExtractorConfig,
        *,
        client: TransportClient | None = None,
    ) -> None:
        self._config = config
        self._closed = False
        self._owns_client = client is None
        self._client = client or httpx.Client(
            headers=build_default_headers(config),
            timeout=build_default_timeout(config),
            follow_redirects=True,
        )

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_client:
            self._client.close()

    def post_json(
        self,
        url: str,
        payload: Mapping[str, object],
        *,
        context: str = "extract dataset",
    ) -> str:
        """POST ``payload`` as JSON and return the raw response body."""

        self._ensure_open()
        body = encode_payload(payload)
        logger.debug("request start method=POST url=%s bytes=%s", url, len(body))
        try:
            response = self._client.post(url, content=body, headers=JSON_HEADERS)
        except (httpx.HTTPError, OSError) as exc:
            logger.error(
                "request network error method=POST url=%s error=%s",
                url,
                exc.__class__.__name__,
            )
            raise PxWebTransportError(
                f"network/transport error: {exc}",
                cause="network",
            ) from exc

        http_status = getattr(response, "status_code", None)
        text = response_text(response)
        logger.debug(
            "response received method=POST url=%s http_status=%s bytes=%s",
            url,
            http_status,
            len(text),
        )
        mapped_error = classify_http_status(http_status, body=text, context=context)
        if mapped_error is not None:
            logger.error("request failed method=POST url=%s http_status=%s", url, http_status)
            raise mapped_error
        return text

    def get_json(self, url: str, *, context: str = "fetch metadata") -> dict[str, object]:
        """GET ``url`` and decode the JSON object it returns."""

        self._ensure_open()
        logger.debug("request start method=GET url=%s", url)
        try:
            response = self._client.get(url, headers={"Accept": "application/json"})
        except (httpx.HTTPError, OSError) as exc:
            logger.error(
                "request network error method=GET url=%s error=%s",
                url,
                exc.__class__.__name__,
            )
            raise PxWebTransportError(
                f"network/transport error: {exc}",
                cause="network",
            ) from exc

        http_status = getattr(response, "status_code", None)
        logger.debug("response received method=GET url=%s http_status=%s", url, http_status)
        mapped_error = classify_http_status(
            http_status,
            body=response_text(response),
            context=context,
        )
        if mapped_error is not None:
            logger.error("request failed method=GET url=%s http_status=%s", url, http_status)
            raise mapped_error
        return parse_json_payload(response, http_status=http_status)

    def _ensure_open(self) -> None:
        if self._closed:
            raise PxWebTransportError("transport is already closed")


__all__ = [
    "JSON_HEADERS",
    "SyncTransport",
    "build_default_headers",
    "build_default_timeout",
    "encode_payload",
]
