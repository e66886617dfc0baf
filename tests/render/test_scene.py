"""
engine.render.scene モジュールのテスト（GPU 不要）
"""

from __future__ import annotations

import numpy as np
import pytest

from epidraw.engine.core.session import Session
from epidraw.engine.render.scene import build_layers, circle_outlines, trace_layer, unit_circle
from epidraw.engine.render.types import ScenePalette


def _animating_session() -> Session:
    s = Session(max_points=8, degree=2)
    for x, y in [(0.0, 0.0), (0.5, 0.0), (0.5, 0.5), (0.0, 0.5)]:
        s.add_point(x, y)
    s.commit()
    s.tick(0.0)
    s.tick(0.1)
    return s


def test_unit_circle_is_closed() -> None:
    ring = unit_circle(16)
    assert ring.shape == (16, 2)
    np.testing.assert_allclose(ring[0], ring[-1], atol=1e-12)
    np.testing.assert_allclose(np.hypot(ring[:, 0], ring[:, 1]), 1.0)
    with pytest.raises(ValueError):
        unit_circle(2)


def test_circle_outlines_scale_and_translate() -> None:
    g = circle_outlines(np.array([[1.0, 2.0, 0.5], [0.0, 0.0, 2.0]]), 12)
    assert len(g) == 2
    first, second = g.lines()
    np.testing.assert_allclose(np.hypot(first[:, 0] - 1.0, first[:, 1] - 2.0), 0.5, atol=1e-6)
    np.testing.assert_allclose(np.hypot(second[:, 0], second[:, 1]), 2.0, atol=1e-6)
    assert circle_outlines(np.empty((0, 3)), 12).is_empty


def test_idle_empty_frame_has_no_layers() -> None:
    s = Session(max_points=4, degree=1)
    assert build_layers(s.frame()) == []
    assert trace_layer(s.frame()) is None


def test_sketch_layer_contains_markers_and_outline() -> None:
    s = Session(max_points=4, degree=1)
    s.add_point(0.0, 0.0)
    s.add_point(0.5, 0.5)
    layers = build_layers(s.frame(), circle_samples=32)
    assert [layer.name for layer in layers] == ["sketch"]
    # 2 つのマーカー円 + 1 本の折れ線
    assert len(layers[0].geometry) == 3
    assert layers[0].geometry.lines()[0].shape == (8, 2)


def test_single_point_sketch_has_no_outline() -> None:
    s = Session(max_points=4, degree=1)
    s.add_point(0.0, 0.0)
    (layer,) = build_layers(s.frame())
    assert len(layer.geometry) == 1


def test_animating_frame_layers_follow_chain() -> None:
    s = _animating_session()
    palette = ScenePalette(chain=(0.0, 0.0, 1.0, 1.0))
    layers = build_layers(s.frame(), circle_samples=16, palette=palette)
    names = [layer.name for layer in layers]
    assert names == ["circles", "chain", "sketch"]
    chain = s.frame().chain
    assert len(layers[0].geometry) == len(chain)
    np.testing.assert_allclose(layers[1].geometry.coords, chain.points(), atol=1e-6)
    assert layers[1].color == (0.0, 0.0, 1.0, 1.0)


def test_trace_layer_wraps_segment() -> None:
    s = _animating_session()
    layer = trace_layer(s.frame())
    assert layer is not None
    assert layer.name == "trace"
    np.testing.assert_allclose(layer.geometry.coords, s.frame().trace_segment, atol=1e-6)
    assert layer.thickness == ScenePalette().trace_thickness
