"""
どこで: `epidraw.engine.core.epicycles`
何を: 係数集合と時刻 `t` から回転ベクトルの連鎖（エピサイクル）を合成する。

連鎖の組み立て（訪問順で走査）:
- リンク 0 は周波数 0 の項で回転しない。連鎖の原点になる。
- リンク k（k >= 1）は係数 `(re_k, im_k)` を角度 `freq_k · t` だけ回転したベクトル。
  中心は直前リンクの先端、先端は中心 + 回転ベクトル、半径は係数の大きさ。
- 最終リンクの先端が時刻 `t` における再構成曲線上の点。

`compose_chain` は `t` と係数集合だけの純関数で、フレーム間に状態を持たない。
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .fourier import FourierSeries


@dataclass(frozen=True, eq=False)
class EpicycleChain:
    """時刻 `t` における連鎖の状態。

    - `origin (2,)`: 周波数 0 の項（連鎖の起点）。
    - `centers (2N, 2)`: 各円の中心。
    - `radii (2N,)`: 各円の半径。
    - `tips (2N, 2)`: 各円の先端（次の円の中心）。
    """

    t: float
    origin: np.ndarray
    centers: np.ndarray
    radii: np.ndarray
    tips: np.ndarray

    def __len__(self) -> int:
        return int(self.radii.shape[0])

    @property
    def tip(self) -> np.ndarray:
        """連鎖の最終先端（再構成曲線上の点）。"""
        if self.tips.shape[0] == 0:
            return self.origin
        return self.tips[-1]

    def points(self) -> np.ndarray:
        """原点と各先端を結ぶ折れ線 `(2N+1, 2)`。"""
        return np.vstack([self.origin[None, :], self.tips])

    def circles(self) -> np.ndarray:
        """描画用の円記述子 `(2N, 3)`（cx, cy, r）。"""
        return np.column_stack([self.centers, self.radii])


def compose_chain(series: FourierSeries, t: float) -> EpicycleChain:
    """係数集合 `series` から時刻 `t` の連鎖を合成する。"""
    tt = float(t)
    coeffs = series.coeffs
    origin = coeffs[0].copy()

    re = coeffs[1:, 0]
    im = coeffs[1:, 1]
    angles = series.freqs[1:].astype(np.float64) * tt
    c = np.cos(angles)
    s = np.sin(angles)
    rotated = np.column_stack([re * c - im * s, re * s + im * c])

    tips = origin[None, :] + np.cumsum(rotated, axis=0)
    if tips.shape[0] > 0:
        centers = np.vstack([origin[None, :], tips[:-1]])
    else:
        centers = np.empty((0, 2), dtype=np.float64)
    radii = np.hypot(re, im)

    for arr in (origin, centers, radii, tips):
        arr.setflags(write=False)
    return EpicycleChain(t=tt, origin=origin, centers=centers, radii=radii, tips=tips)


__all__ = ["EpicycleChain", "compose_chain"]
