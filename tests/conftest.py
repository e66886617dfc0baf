"""共通フィクスチャ。

- 乱数シード固定
- 小さなスケッチ/閉サンプル列の試料
- 設定（環境変数）の退避と復元
"""

from __future__ import annotations

from typing import Iterator

import numpy as np
import pytest

from epidraw.common import settings as settings_mod


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    """NumPy の乱数を固定。"""
    np.random.seed(12345)


@pytest.fixture()
def square4() -> np.ndarray:
    """4 点の正方形スケッチ（偶数個 → 閉曲線化で中点が追加される）。"""
    return np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]], dtype=np.float64)


def harmonic_curve(n_intervals: int) -> tuple[np.ndarray, dict[int, complex]]:
    """既知の係数を持つ閉曲線を `n_intervals + 1` 点（末尾 = 先頭）でサンプルする。"""
    coeffs = {0: 0.25 - 0.1j, 1: 0.6 + 0.2j, -1: 0.3 - 0.05j, 3: 0.1 + 0.08j}
    s = np.arange(n_intervals + 1) * (2.0 * np.pi / n_intervals)
    z = sum(c * np.exp(1j * n * s) for n, c in coeffs.items())
    return np.column_stack([z.real, z.imag]), coeffs


@pytest.fixture()
def make_harmonic():
    """`harmonic_curve` を返すファクトリ（区間数を変えたいテスト用）。"""
    return harmonic_curve


@pytest.fixture()
def harmonic64() -> tuple[np.ndarray, dict[int, complex]]:
    return harmonic_curve(64)


@pytest.fixture()
def restore_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[pytest.MonkeyPatch]:
    """テスト中に EPI_* を書き換え、終了後に設定を再読込して元に戻す。"""
    yield monkeypatch
    monkeypatch.undo()
    settings_mod.reload_from_env()
