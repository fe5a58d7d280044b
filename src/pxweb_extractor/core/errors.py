"""Error types and status mapping."""

from __future__ import annotations

_BODY_PREVIEW_LIMIT = 500


def _body_preview(body: str | None) -> str:
    if not body:
        return ""
    text = body.strip()
    if len(text) > _BODY_PREVIEW_LIMIT:
        return text[:_BODY_PREVIEW_LIMIT] + "..."
    return text


class PxWebApiError(Exception):
    """Base exception for this package."""

    def __init__(
        self,
        message: str,
        *,
        http_status: int | None = None,
        body: str | None = None,
        cause: str | None = None,
    ) -> None:
        super().__init__(message)
        self.http_status = http_status
        self.body = body
        self.cause = cause


class PxWebTransportError(PxWebApiError):
    """Network/transport-level failure."""


class PxWebHttpError(PxWebApiError):
    """Non-success HTTP status returned by the API."""


class PxWebClientClosedError(PxWebApiError):
    """Raised when client is used after close."""


class PxWebValidationError(PxWebApiError):
    """Invalid input rejected before any request is sent."""


class PxWebProtocolError(PxWebApiError):
    """Response or payload shape does not match the PX-Web contract."""


def classify_http_status(
    http_status: int | None,
    *,
    body: str | None = None,
    context: str = "request",
) -> PxWebApiError | None:
    """Map an HTTP status to a domain exception; ``None`` means success."""

    if http_status == 200:
        return None

    message = f"Failed to {context}. Status code: {http_status}, Body: {_body_preview(body)}"
    if http_status is None:
        return PxWebProtocolError(f"Failed to {context}. Missing HTTP status", body=body)
    if 400 <= http_status < 500:
        cause = "client_error"
    elif http_status >= 500:
        cause = "server_error"
    else:
        cause = "unexpected_status"
    return PxWebHttpError(message, http_status=http_status, body=body, cause=cause)


def cause_from_error(exc: Exception) -> str:
    if isinstance(exc, PxWebApiError) and exc.cause:
        return exc.cause
    if isinstance(exc, PxWebValidationError):
        return "validation"
    if isinstance(exc, PxWebProtocolError):
        return "protocol"
    return "network"


__all__ = [
    "PxWebApiError",
    "PxWebTransportError",
    "PxWebHttpError",
    "PxWebClientClosedError",
    "PxWebValidationError",
    "PxWebProtocolError",
    "classify_http_status",
    "cause_from_error",
]
