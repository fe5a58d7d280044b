"""Parsers from PX-Web metadata JSON into typed models."""

from __future__ import annotations

from ..core.errors import PxWebProtocolError
from .models import DatasetMetadata, Variable

JsonObject = dict[str, object]


def _normalize_text(value: object) -> str | None:
    if value is None:
        return None
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def _as_flag(value: object) -> bool:
    return value if isinstance(value, bool) else False


def _as_text_list(item: JsonObject, key: str) -> list[str]:
    raw = item.get(key, [])
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise PxWebProtocolError(f"{key} must be a list")
    return [_normalize_text(value) or "" for value in raw]


def _variable_from_item(item: JsonObject) -> Variable:
    code = _normalize_text(item.get("code")) or ""
    try:
        return Variable(
            code=code,
            text=_normalize_text(item.get("text")) or "",
            values=_as_text_list(item, "values"),
            value_texts=_as_text_list(item, "valueTexts"),
            elimination=_as_flag(item.get("elimination")),
            time=_as_flag(item.get("time")),
        )
    except ValueError as exc:
        raise PxWebProtocolError(str(exc)) from exc


def parse_metadata(payload: JsonObject) -> DatasetMetadata:
    if not isinstance(payload, dict):
        raise PxWebProtocolError("metadata JSON root must be an object")
    raw_variables = payload.get("variables", [])
    if raw_variables is None:
        raw_variables = []
    if not isinstance(raw_variables, list):
        raise PxWebProtocolError("variables must be a list")
    for item in raw_variables:
        if not isinstance(item, dict):
            raise PxWebProtocolError("variables element must be an object")

    try:
        return DatasetMetadata(
            title=_normalize_text(payload.get("title")) or "Unknown",
            variables=tuple(_variable_from_item(item) for item in raw_variables),
            source=_normalize_text(payload.get("source")),
            updated=_normalize_text(payload.get("updated")),
            description=_normalize_text(payload.get("description")),
        )
    except ValueError as exc:
        raise PxWebProtocolError(str(exc)) from exc


__all__ = [
    "parse_metadata",
]
