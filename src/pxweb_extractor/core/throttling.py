"""Rate throttling utilities."""

from __future__ import annotations

import time
from typing import Callable


class FixedDelayThrottler:
    """Pauses for a fixed delay between outbound batch requests.

    The delay does not adapt to elapsed time, load or earlier failures.
    """

    def __init__(
        self,
        delay_seconds: float,
        *,
        sleeper: Callable[[float], None] | None = None,
    ) -> None:
        self._delay_seconds = max(0.0, float(delay_seconds))
        self._sleep = sleeper or time.sleep

    @property
    def delay_seconds(self) -> float:
        return self._delay_seconds

    def wait(self) -> None:
        if self._delay_seconds > 0:
            self._sleep(self._delay_seconds)


__all__ = [
    "FixedDelayThrottler",
]
