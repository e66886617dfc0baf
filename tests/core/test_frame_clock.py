"""
engine.core.frame_clock モジュールのテスト
"""

from __future__ import annotations

import pytest

from epidraw.engine.core.frame_clock import FrameClock


class _Recorder:
    def __init__(self, name: str, log: list) -> None:
        self.name = name
        self.log = log

    def tick(self, dt: float) -> None:
        self.log.append((self.name, dt))


def test_ticks_in_registration_order() -> None:
    log: list = []
    clock = FrameClock([_Recorder("a", log), _Recorder("b", log)])
    clock.tick(0.25)
    assert log == [("a", 0.25), ("b", 0.25)]


def test_measures_dt_when_not_given() -> None:
    log: list = []
    clock = FrameClock([_Recorder("a", log)])
    clock.tick()
    clock.tick()
    assert len(log) == 2
    assert all(dt >= 0.0 for _, dt in log)


def test_max_dt_clamps_long_stalls() -> None:
    log: list = []
    clock = FrameClock([_Recorder("a", log)], max_dt=0.1)
    clock.tick(0.05)
    clock.tick(3.0)
    assert log == [("a", 0.05), ("a", 0.1)]
    assert clock.frames == 2


def test_max_dt_must_be_positive() -> None:
    with pytest.raises(ValueError):
        FrameClock([], max_dt=0.0)


def test_session_and_recorder_satisfy_tickable() -> None:
    from epidraw.engine.core.session import Session
    from epidraw.engine.core.tickable import Tickable

    assert isinstance(Session(max_points=4, degree=1), Tickable)
    assert isinstance(_Recorder("a", []), Tickable)
