"""Tests for the animation ticker thread."""

import time

import pytest

from manpager.ticker import AnimationTicker


def test_tick_increments_frame():
    ticker = AnimationTicker()
    assert ticker.frame == 0
    assert ticker.tick() == 1
    assert ticker.tick() == 2
    assert ticker.frame == 2


def test_thread_advances_frames_until_stopped():
    ticker = AnimationTicker(interval=0.01)
    ticker.start()
    try:
        deadline = time.monotonic() + 5
        while ticker.frame < 3 and time.monotonic() < deadline:
            time.sleep(0.01)
        assert ticker.frame >= 3
        assert ticker.running
    finally:
        ticker.stop()
    assert not ticker.running
    stopped_at = ticker.frame
    time.sleep(0.05)
    assert ticker.frame == stopped_at


def test_stop_is_idempotent():
    ticker = AnimationTicker(interval=0.01)
    ticker.stop()
    ticker.start()
    ticker.stop()
    ticker.stop()
    assert not ticker.running


def test_start_twice_keeps_one_thread():
    with AnimationTicker(interval=0.01) as ticker:
        first = ticker._thread
        ticker.start()
        assert ticker._thread is first
    assert not ticker.running


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        AnimationTicker(interval=0)
