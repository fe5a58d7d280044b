from __future__ import annotations

from pxweb_extractor.core.throttling import FixedDelayThrottler


def test_throttler_sleeps_fixed_delay_every_time():
    sleeps: list[float] = []
    throttler = FixedDelayThrottler(0.5, sleeper=sleeps.append)
    throttler.wait()
    throttler.wait()
    assert sleeps == [0.5, 0.5]


def test_throttler_with_zero_delay_does_not_sleep():
    sleeps: list[float] = []
    FixedDelayThrottler(0.0, sleeper=sleeps.append).wait()
    assert sleeps == []


def test_throttler_clamps_negative_delay():
    assert FixedDelayThrottler(-1.0).delay_seconds == 0.0
