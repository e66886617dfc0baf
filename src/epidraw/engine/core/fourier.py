"""
どこで: `epidraw.engine.core.fourier`
何を: 閉サンプル列から周波数 `-N..N` の複素フーリエ係数を合成シンプソン則で求める。
なぜ: エピサイクルの半径/初期位相を与える係数集合を、スケッチ確定時に 1 度だけ計算するため。

数式:
    c_n = (1/T) ∮ z(s) e^{-i n ω s} ds,   T = M 区間, ω = 2π/T

    サンプル z_0..z_M（M = L-1 は偶数）をパラメータ s_j = j·Δ（Δ = 2π/M）に置き、
    factor = (1/3)/M として

    - 境界:   +factor·K(z_0, 0) − factor·K(z_M, n·Δ·M)
    - 内部:   奇数 j = 1, 3, ..., M-1 について
              4·factor·K(z_j, n·Δ·j) + 2·factor·K(z_{j+1}, n·Δ·(j+1))

    を足し合わせる。内部ループが z_M に 2·factor を与えるため、境界の −factor と合わせて
    正味の重みは通常の合成シンプソン則 `1, 4, 2, ..., 2, 4, 1`（× factor）になる。

    K(p, a) は点 p を −a だけ回転する積分核（e^{-ia} の乗算を複素型なしで行う）:
        re = x·cos a + y·sin a
        im = y·cos a − x·sin a

訪問順:
- 係数は生の `-N..N` 順で計算した後、`0, +1, -1, +2, -2, ..., +N, -N` の訪問順で
  新しい配列として組み直す（`visiting_order`）。
- 組み直し後は全周波数がちょうど 1 回ずつ現れることを検証する（`validate_order`）。

次数の上限:
- 区間数 M に対して N > M/2 の周波数はサンプル格子上で低い周波数と区別できない（エイリアス）。
  この範囲では次数を上げてもサンプル点での再構成誤差はむしろ増える。
- シンプソン則の重み 4, 2 の交代は半区間格子の成分 `c_{n+M/2}/3` を各係数へ混ぜ込む。
  高周波が十分減衰する曲線では、誤差が次数に対して単調に減るのは N <= M/4 程度までと考える。
- `Session.commit` は N > M/2 のとき警告を出す（計算自体は行う）。
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import numpy as np
from numba import njit  # type: ignore[attr-defined]

logger = logging.getLogger(__name__)

TWO_PI = 2.0 * np.pi


class CoefficientOrderError(ValueError):
    """訪問順が `[-N, N]` の全周波数をちょうど 1 回ずつ含んでいない。"""


def visiting_order(degree: int) -> np.ndarray:
    """訪問位置 → 符号付き周波数の対応表 `(2N+1,) int64` を返す。

    例: degree=2 → `[0, 1, -1, 2, -2]`
    """
    n = int(degree)
    if n < 0:
        raise ValueError(f"degree must be >= 0, got {degree}")
    order = np.empty(2 * n + 1, dtype=np.int64)
    order[0] = 0
    for k in range(1, n + 1):
        order[2 * k - 1] = k
        order[2 * k] = -k
    return order


def validate_order(freqs: np.ndarray, degree: int) -> None:
    """`freqs` が `[-degree, degree]` の各整数をちょうど 1 回ずつ含むことを検証する。"""
    arr = np.asarray(freqs)
    n = int(degree)
    expected = 2 * n + 1
    if arr.ndim != 1 or arr.shape[0] != expected:
        raise CoefficientOrderError(
            f"expected {expected} frequencies for degree {n}, got shape {arr.shape}"
        )
    if not np.array_equal(np.sort(arr), np.arange(-n, n + 1)):
        missing = sorted(set(range(-n, n + 1)) - set(int(f) for f in arr))
        raise CoefficientOrderError(
            f"frequency order must cover [-{n}, {n}] exactly once; missing={missing}"
        )


@njit(cache=True)
def _integrant(x: float, y: float, angle: float) -> tuple[float, float]:
    """点 (x, y) を −angle だけ回転する（e^{-i·angle} の乗算）。"""
    c = np.cos(angle)
    s = np.sin(angle)
    return x * c + y * s, y * c - x * s


@njit(cache=True)
def _simpson_coefficients(samples: np.ndarray, freqs: np.ndarray) -> np.ndarray:
    """各周波数について合成シンプソン則で係数 `(K, 2)` を積分する（Numba 最適化）。"""
    m = samples.shape[0] - 1
    delta = TWO_PI / m
    factor = (1.0 / 3.0) / m
    out = np.zeros((freqs.shape[0], 2), dtype=np.float64)

    for k in range(freqs.shape[0]):
        step = freqs[k] * delta

        # 境界（端点補正を 1 周分に畳み込む）
        re0, im0 = _integrant(samples[0, 0], samples[0, 1], 0.0)
        rem, imm = _integrant(samples[m, 0], samples[m, 1], step * m)
        re = factor * re0 - factor * rem
        im = factor * im0 - factor * imm

        for j in range(1, m, 2):
            ro, io = _integrant(samples[j, 0], samples[j, 1], step * j)
            re_, ie_ = _integrant(samples[j + 1, 0], samples[j + 1, 1], step * (j + 1))
            re += 4.0 * factor * ro + 2.0 * factor * re_
            im += 4.0 * factor * io + 2.0 * factor * ie_

        out[k, 0] = re
        out[k, 1] = im
    return out


@dataclass(frozen=True, eq=False)
class FourierSeries:
    """訪問順に並んだ係数集合（不変）。

    フィールド:
    - `degree`: 最高周波数 N。
    - `freqs (2N+1,) int64`: 訪問順の符号付き周波数（先頭は 0）。
    - `coeffs (2N+1, 2) float64`: 各周波数の係数 `(re, im)`。
    """

    degree: int
    freqs: np.ndarray
    coeffs: np.ndarray

    def __post_init__(self) -> None:
        freqs = np.array(self.freqs, dtype=np.int64)
        coeffs = np.array(self.coeffs, dtype=np.float64)
        if coeffs.shape != (freqs.shape[0], 2):
            raise ValueError(
                f"coeffs must have shape ({freqs.shape[0]}, 2), got {coeffs.shape}"
            )
        validate_order(freqs, self.degree)
        freqs.setflags(write=False)
        coeffs.setflags(write=False)
        object.__setattr__(self, "freqs", freqs)
        object.__setattr__(self, "coeffs", coeffs)

    def __len__(self) -> int:
        return int(self.freqs.shape[0])

    def coefficient(self, n: int) -> tuple[float, float]:
        """周波数 `n` の係数 `(re, im)` を返す。範囲外は `KeyError`。"""
        idx = np.flatnonzero(self.freqs == int(n))
        if idx.size == 0:
            raise KeyError(n)
        re, im = self.coeffs[int(idx[0])]
        return float(re), float(im)

    @property
    def dc(self) -> tuple[float, float]:
        """周波数 0（平均/オフセット）の係数。"""
        return self.coefficient(0)

    @property
    def magnitudes(self) -> np.ndarray:
        """訪問順の各係数の大きさ `(2N+1,)`。"""
        return np.hypot(self.coeffs[:, 0], self.coeffs[:, 1])

    def evaluate(self, s: float | np.ndarray) -> np.ndarray:
        """再構成 `Σ c_n e^{i n s}` を評価する。

        スカラー `s` には `(2,)`、配列には `(K, 2)` を返す。
        """
        scalar = np.ndim(s) == 0
        params = np.atleast_1d(np.asarray(s, dtype=np.float64))
        angles = np.outer(params, self.freqs.astype(np.float64))
        cos = np.cos(angles)
        sin = np.sin(angles)
        re = self.coeffs[:, 0]
        im = self.coeffs[:, 1]
        x = cos @ re - sin @ im
        y = sin @ re + cos @ im
        out = np.stack([x, y], axis=1)
        return out[0] if scalar else out


def sample_parameters(n_samples: int) -> np.ndarray:
    """解析に用いたパラメータ値 `s_j = j·2π/(n_samples-1)` を返す。"""
    n = int(n_samples)
    if n < 2:
        raise ValueError(f"n_samples must be >= 2, got {n_samples}")
    return np.arange(n, dtype=np.float64) * (TWO_PI / (n - 1))


def compute_fourier_series(samples: np.ndarray, degree: int) -> FourierSeries:
    """閉サンプル列 `(L, 2)`（L は奇数, L >= 3）から係数集合を計算する。

    Parameters
    ----------
    samples : np.ndarray
        `close_curve` の出力。区間数 `L-1` は偶数である必要がある。
    degree : int
        最高周波数 N（0 以上）。

    Returns
    -------
    FourierSeries
        訪問順 `0, +1, -1, ..., +N, -N` に並んだ `2N+1` 個の係数。

    Raises
    ------
    ValueError
        形状不正、長さが偶数または 3 未満、degree が負の場合。
    """
    arr = np.ascontiguousarray(np.asarray(samples, dtype=np.float64))
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"samples must have shape (L, 2), got {arr.shape}")
    length = int(arr.shape[0])
    if length < 3 or length % 2 == 0:
        raise ValueError(f"samples length must be odd and >= 3, got {length}")
    order = visiting_order(degree)
    n = int(degree)

    t0 = time.perf_counter()
    raw_freqs = np.arange(-n, n + 1, dtype=np.int64)
    raw = _simpson_coefficients(arr, raw_freqs)
    # raw[i] は周波数 i - N。訪問順の配列を新規に構築する。
    coeffs = raw[order + n].copy()
    series = FourierSeries(degree=n, freqs=order, coeffs=coeffs)
    logger.debug(
        "fourier analysis: samples=%d degree=%d elapsed=%.3fms",
        length,
        n,
        (time.perf_counter() - t0) * 1e3,
    )
    return series


def reconstruct(series: FourierSeries, n_samples: int) -> np.ndarray:
    """解析時と同じ `n_samples` 個のパラメータ値で再構成した点列 `(n_samples, 2)`。"""
    return series.evaluate(sample_parameters(n_samples))


__all__ = [
    "CoefficientOrderError",
    "FourierSeries",
    "compute_fourier_series",
    "reconstruct",
    "sample_parameters",
    "validate_order",
    "visiting_order",
]
