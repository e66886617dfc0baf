"""
engine.core.session モジュールのテスト

What this tests (TL;DR):
- IDLE → READY → ANIMATING の遷移と、どの状態からでも効く reset。
- 3 点未満の確定は拒否され、状態が変わらないこと（警告ログ付き）。
- 確定後はスケッチが凍結され、アニメーション中の軌跡セグメントが連続すること。
"""

from __future__ import annotations

import logging

import numpy as np
import pytest

from epidraw.engine.core.events import AddPoint, Commit, Reset
from epidraw.engine.core.session import Session, SessionState


def _session(**kwargs) -> Session:
    params = {"max_points": 16, "degree": 2}
    params.update(kwargs)
    return Session(**params)


def _sketch_square(session: Session) -> None:
    for x, y in [(0.0, 0.0), (0.5, 0.0), (0.5, 0.5), (0.0, 0.5)]:
        session.add_point(x, y)


def test_initial_frame_is_empty_idle() -> None:
    s = _session()
    f = s.frame()
    assert s.state is SessionState.IDLE
    assert f.state is SessionState.IDLE
    assert f.sketch.shape == (0, 3)
    assert f.chain is None
    assert f.trace_segment is None


def test_points_appear_in_frame_while_sketching() -> None:
    s = _session(point_radius=0.02)
    assert s.add_point(0.1, 0.2)
    f = s.frame()
    assert f.sketch.shape == (1, 3)
    np.testing.assert_allclose(f.sketch[0], [0.1, 0.2, 0.02], rtol=1e-6)


@pytest.mark.parametrize("count", [0, 1, 2])
def test_commit_with_too_few_points_is_refused(count: int, caplog) -> None:
    s = _session()
    for i in range(count):
        s.add_point(0.1 * i, 0.0)
    with caplog.at_level(logging.WARNING, logger="epidraw.engine.core.session"):
        assert s.commit() is False
    assert s.state is SessionState.IDLE
    assert s.series is None
    assert s.buffer.count() == count
    assert any("commit refused" in r.getMessage() for r in caplog.records)


def test_commit_analyzes_and_becomes_ready() -> None:
    s = _session()
    _sketch_square(s)
    assert s.commit()
    assert s.state is SessionState.READY
    assert s.samples is not None and s.samples.shape == (5, 2)
    assert s.series is not None and len(s.series) == 5


def test_first_tick_starts_animation_at_zero() -> None:
    s = _session()
    _sketch_square(s)
    s.commit()
    s.tick(0.5)
    f = s.frame()
    assert s.state is SessionState.ANIMATING
    assert f.t == 0.0
    assert f.chain is not None
    np.testing.assert_allclose(f.chain.tip, s.series.evaluate(0.0))
    assert f.trace_segment is None


def test_ticks_advance_time_and_emit_contiguous_segments() -> None:
    s = _session(time_scale=2.0)
    _sketch_square(s)
    s.commit()
    s.tick(0.0)
    tips = [s.frame().chain.tip.copy()]
    segments = []
    for _ in range(3):
        s.tick(0.1)
        f = s.frame()
        tips.append(f.chain.tip.copy())
        segments.append(f.trace_segment)
    assert s.elapsed == pytest.approx(0.6)
    for i, seg in enumerate(segments):
        assert seg is not None
        np.testing.assert_allclose(seg[0], tips[i])
        np.testing.assert_allclose(seg[1], tips[i + 1])
    # 直前フレームの終点 == 次フレームの始点
    for a, b in zip(segments[:-1], segments[1:]):
        np.testing.assert_allclose(a[1], b[0])


def test_sketch_is_frozen_after_commit() -> None:
    s = _session()
    _sketch_square(s)
    s.commit()
    assert s.add_point(0.9, 0.9) is False
    assert s.handle(AddPoint(0.9, 0.9)) is False
    assert s.buffer.count() == 4
    s.tick(0.0)
    assert s.add_point(0.9, 0.9) is False


def test_second_commit_is_ignored() -> None:
    s = _session()
    _sketch_square(s)
    assert s.commit()
    series = s.series
    assert s.commit() is False
    assert s.series is series


def test_tick_while_idle_does_nothing() -> None:
    s = _session()
    s.add_point(0.0, 0.0)
    before = s.frame()
    s.tick(1.0)
    assert s.frame() is before
    assert s.elapsed == 0.0


@pytest.mark.parametrize("ticks", [0, 1, 3])
def test_reset_from_any_state(ticks: int) -> None:
    s = _session()
    _sketch_square(s)
    s.commit()
    for _ in range(ticks):
        s.tick(0.1)
    s.reset()
    f = s.frame()
    assert s.state is SessionState.IDLE
    assert s.series is None and s.samples is None
    assert s.elapsed == 0.0
    assert f.sketch.shape == (0, 3)
    assert f.chain is None and f.trace_segment is None
    assert not s.trace.has_previous


def test_reset_then_new_sketch_starts_fresh_trace() -> None:
    s = _session()
    _sketch_square(s)
    s.commit()
    s.tick(0.0)
    s.tick(0.1)
    s.reset()
    for x, y in [(-0.5, -0.5), (0.5, -0.5), (0.0, 0.5)]:
        s.add_point(x, y)
    assert s.commit()
    assert s.samples.shape == (3, 2)
    s.tick(0.1)
    assert s.frame().t == 0.0
    assert s.frame().trace_segment is None


def test_handle_dispatches_events() -> None:
    s = _session()
    for x, y in [(0.0, 0.0), (0.3, 0.0), (0.3, 0.3)]:
        assert s.handle(AddPoint(x, y))
    assert s.handle(Commit())
    assert s.state is SessionState.READY
    assert s.handle(Reset())
    assert s.state is SessionState.IDLE


def test_handle_rejects_unknown_event() -> None:
    with pytest.raises(TypeError):
        _session().handle("commit")  # type: ignore[arg-type]


def test_capacity_caps_sketch() -> None:
    s = _session(max_points=5)
    added = [s.add_point(0.1 * i, 0.05 * i) for i in range(8)]
    assert added.count(True) == 5
    assert s.buffer.count() == 5
    assert s.commit()
    assert s.samples.shape == (5, 2)


@pytest.mark.parametrize("kwargs", [{"degree": -1}, {"time_scale": -0.5}, {"max_points": 0}])
def test_invalid_parameters_raise(kwargs) -> None:
    with pytest.raises(ValueError):
        _session(**kwargs)


def test_from_settings_uses_environment(restore_settings) -> None:
    from epidraw.common import settings as settings_mod

    restore_settings.setenv("EPI_MAX_POINTS", "12")
    restore_settings.setenv("EPI_FOURIER_DEGREE", "5")
    settings_mod.reload_from_env()
    s = Session.from_settings(degree=None, min_distance=0.05)
    assert s.buffer.capacity == 12
    assert s.degree == 5
    assert s.buffer.min_distance == pytest.approx(0.05)


def test_commit_warns_when_degree_aliases(caplog) -> None:
    s = _session(degree=3)
    _sketch_square(s)
    with caplog.at_level(logging.WARNING, logger="epidraw.engine.core.session"):
        assert s.commit()
    assert any("alias" in r.getMessage() for r in caplog.records)


def test_commit_does_not_warn_within_half_interval_count(caplog) -> None:
    s = _session(degree=2)
    _sketch_square(s)
    with caplog.at_level(logging.WARNING, logger="epidraw.engine.core.session"):
        assert s.commit()
    assert not any("alias" in r.getMessage() for r in caplog.records)
