"""
engine.core.epicycles モジュールのテスト
"""

from __future__ import annotations

import numpy as np
import pytest

from epidraw.engine.core.closer import close_curve
from epidraw.engine.core.epicycles import compose_chain
from epidraw.engine.core.fourier import compute_fourier_series


@pytest.fixture()
def series(harmonic64):
    return compute_fourier_series(harmonic64[0], 4)


@pytest.mark.parametrize("t", [0.0, 0.3, 1.7, np.pi, 5.9])
def test_tip_equals_reconstruction(series, t: float) -> None:
    chain = compose_chain(series, t)
    np.testing.assert_allclose(chain.tip, series.evaluate(t), atol=1e-12)


def test_chain_is_periodic(series) -> None:
    a = compose_chain(series, 0.8)
    b = compose_chain(series, 0.8 + 2.0 * np.pi)
    np.testing.assert_allclose(a.tips, b.tips, atol=1e-12)
    np.testing.assert_allclose(a.centers, b.centers, atol=1e-12)


def test_link_structure(series) -> None:
    chain = compose_chain(series, 1.1)
    n_links = len(series) - 1
    assert len(chain) == n_links
    assert chain.centers.shape == (n_links, 2)
    assert chain.tips.shape == (n_links, 2)
    # 原点は DC 項、各中心は直前の先端
    np.testing.assert_allclose(chain.origin, series.dc)
    np.testing.assert_allclose(chain.centers[0], chain.origin)
    np.testing.assert_allclose(chain.centers[1:], chain.tips[:-1])
    # 半径は係数の大きさで時刻に依存しない
    np.testing.assert_allclose(chain.radii, series.magnitudes[1:])
    seg = np.hypot(*(chain.tips - chain.centers).T)
    np.testing.assert_allclose(seg, chain.radii, atol=1e-12)


def test_links_at_zero_are_the_coefficients(series) -> None:
    chain = compose_chain(series, 0.0)
    np.testing.assert_allclose(chain.tips - chain.centers, series.coeffs[1:], atol=1e-12)


def test_points_and_circles_descriptors(series) -> None:
    chain = compose_chain(series, 2.0)
    pts = chain.points()
    assert pts.shape == (len(series), 2)
    np.testing.assert_allclose(pts[0], chain.origin)
    np.testing.assert_allclose(pts[-1], chain.tip)
    circles = chain.circles()
    assert circles.shape == (len(chain), 3)
    np.testing.assert_allclose(circles[:, 2], chain.radii)


def test_degree_zero_chain_is_just_the_origin(square4: np.ndarray) -> None:
    s = compute_fourier_series(close_curve(square4), 0)
    chain = compose_chain(s, 1.0)
    assert len(chain) == 0
    np.testing.assert_allclose(chain.tip, s.dc)
    assert chain.points().shape == (1, 2)


def test_chain_arrays_are_read_only(series) -> None:
    chain = compose_chain(series, 0.4)
    with pytest.raises(ValueError):
        chain.tips[0, 0] = 0.0


def test_compose_is_deterministic(series) -> None:
    first = compose_chain(series, 0.9)
    second = compose_chain(series, 0.9)
    np.testing.assert_array_equal(first.tips, second.tips)
    np.testing.assert_array_equal(first.centers, second.centers)
    np.testing.assert_array_equal(first.radii, second.radii)
    np.testing.assert_array_equal(first.origin, second.origin)


def test_compose_has_no_memory_between_calls(series) -> None:
    a = compose_chain(series, 0.25)
    compose_chain(series, 4.0)
    b = compose_chain(series, 0.25)
    np.testing.assert_array_equal(a.tips, b.tips)
    np.testing.assert_array_equal(a.centers, b.centers)
    np.testing.assert_array_equal(a.radii, b.radii)
