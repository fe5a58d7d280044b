from __future__ import annotations

import json
from collections.abc import Sequence

from pxweb_extractor.config import BatchingConfig, ExtractorConfig, ThrottlingConfig


class Response:
    def __init__(self, status_code: int, text: str = "", payload: object = None):
        self.status_code = status_code
        self.text = text
        self._payload = payload

    def json(self) -> object:
        if isinstance(self._payload, Exception):
            raise self._payload
        if self._payload is None:
            return json.loads(self.text)
        return self._payload


Step = Response | Exception


class SequencedClient:
    """Replays one step per call and records what was sent."""

    def __init__(self, steps: Sequence[Step], *, events: list[tuple[str, object]] | None = None):
        self.steps = list(steps)
        self.calls = 0
        self.closed = False
        self.posted: list[dict[str, object]] = []
        self.posted_headers: list[dict[str, str]] = []
        self.fetched: list[str] = []
        self.events = events if events is not None else []

    def _next(self) -> Response:
        self.calls += 1
        step = self.steps.pop(0)
        if isinstance(step, Exception):
            raise step
        return step

    def post(self, url: str, *, content: str, headers: dict[str, str]):
        payload = json.loads(content)
        self.posted.append(payload)
        self.posted_headers.append(dict(headers))
        self.events.append(("post", payload))
        return self._next()

    def get(self, url: str, *, headers: dict[str, str]):
        self.fetched.append(url)
        self.events.append(("get", url))
        return self._next()

    def close(self):
        self.closed = True


def build_config(*, delay_seconds: float = 0.0, batch_size: int = 30) -> ExtractorConfig:
    cfg = ExtractorConfig(
        throttling=ThrottlingConfig(inter_batch_delay_seconds=delay_seconds),
        batching=BatchingConfig(batch_size=batch_size),
    )
    cfg.validate()
    return cfg
