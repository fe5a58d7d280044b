"""Response parsing helpers for the HTTP transport."""

from __future__ import annotations

from typing import Protocol

from .errors import PxWebProtocolError


class JsonPayloadResponse(Protocol):
    def json(self) -> object: ...


def parse_json_payload(
    response: JsonPayloadResponse,
    *,
    http_status: int | None,
) -> dict[str, object]:
    """Parse response JSON payload and map parse failures to domain errors."""

    try:
        payload = response.json()
    except Exception as exc:
        raise PxWebProtocolError(
            "response body is not valid JSON",
            http_status=http_status,
            cause="protocol",
        ) from exc

    if not isinstance(payload, dict):
        raise PxWebProtocolError(
            "response JSON root must be an object",
            http_status=http_status,
            cause="protocol",
        )
    if any(not isinstance(key, str) for key in payload):
        raise PxWebProtocolError(
            "response JSON object keys must be strings",
            http_status=http_status,
            cause="protocol",
        )
    return payload


def response_text(response: object) -> str:
    text = getattr(response, "text", None)
    if text is None:
        return ""
    return str(text)


__all__ = [
    "parse_json_payload",
    "response_text",
]
