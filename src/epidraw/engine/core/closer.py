"""
どこで: `epidraw.engine.core.closer`
何を: スケッチ点列を、合成シンプソン則が要求する奇数長の閉じたサンプル列へ変換する。

規則:
- 点数が奇数: そのまま（暗黙に末尾→先頭で閉じる）。
- 点数が偶数: 先頭と末尾の平均（閉じ区間の中点）を末尾に 1 点追加する。
- 点数 < 3: 解析不能として `InsufficientPointsError`。
"""

from __future__ import annotations

import numpy as np

MIN_SAMPLES = 3


class InsufficientPointsError(ValueError):
    """閉曲線化に必要な点数（3 点）に満たない。"""


def close_curve(points: np.ndarray) -> np.ndarray:
    """点列 `(K, 2)` から奇数長の閉サンプル列 `(L, 2) float64` を返す。

    入力は変更せず、常に新しい配列を返す。`(K, 3)` の行（半径付き）を渡した場合は
    先頭 2 列のみを使う。
    """
    arr = np.asarray(points, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] < 2:
        raise ValueError(f"points must have shape (K, 2), got {arr.shape}")
    arr = arr[:, :2]
    count = int(arr.shape[0])
    if count < MIN_SAMPLES:
        raise InsufficientPointsError(
            f"at least {MIN_SAMPLES} points are required to close a curve, got {count}"
        )
    if count % 2 == 1:
        return arr.copy()
    midpoint = (arr[0] + arr[-1]) * 0.5
    return np.vstack([arr, midpoint[None, :]])


__all__ = ["close_curve", "InsufficientPointsError", "MIN_SAMPLES"]
