"""
どこで: `epidraw.engine.core.curve_buffer`
何を: 手描きスケッチの点列を時系列順に保持する、容量上限付きの追記専用バッファ。
なぜ: 入力取り込み側から `append/count/clear` だけで扱え、容量超過を静かに無視するため。

データモデル:
- 内部は `float32 ndarray (capacity, 3)` を 1 本確保し、行は `(x, y, radius)`。
- `radius` は描画専用の属性で、数値計算には使わない（保持のみ）。
- 有効行は先頭 `count` 行。追記は末尾のみで、既存行は書き換えない。

容量超過:
- `append` は例外を投げず `False` を返す（スケッチを途切れさせない）。
"""

from __future__ import annotations

import numpy as np


class CurveBuffer:
    """容量上限付きのスケッチ点バッファ。

    Parameters
    ----------
    max_points : int
        保持できる最大点数（1 以上）。
    min_distance : float, default 0.0
        直前の点からこの距離未満の点を捨てる（0 で無効）。
    point_radius : float, default 0.01
        `append` で半径が省略されたときに付与する描画用半径。
    """

    __slots__ = ("_data", "_count", "_min_distance", "_point_radius")

    def __init__(
        self,
        max_points: int,
        *,
        min_distance: float = 0.0,
        point_radius: float = 0.01,
    ) -> None:
        if int(max_points) < 1:
            raise ValueError(f"max_points must be >= 1, got {max_points}")
        if float(min_distance) < 0.0:
            raise ValueError(f"min_distance must be >= 0, got {min_distance}")
        self._data = np.zeros((int(max_points), 3), dtype=np.float32)
        self._count = 0
        self._min_distance = float(min_distance)
        self._point_radius = float(point_radius)

    # ── 状態 ───────────────────
    @property
    def capacity(self) -> int:
        return int(self._data.shape[0])

    @property
    def min_distance(self) -> float:
        return self._min_distance

    @property
    def is_full(self) -> bool:
        return self._count >= self.capacity

    def count(self) -> int:
        """現在の点数を返す。"""
        return self._count

    def __len__(self) -> int:
        return self._count

    # ── 操作 ───────────────────
    def append(self, x: float, y: float, radius: float | None = None) -> bool:
        """点を末尾に追加する。

        Returns
        -------
        bool
            保存したら True。容量切れ、または直前点に近すぎる場合は何もせず False。
        """
        if self._count >= self.capacity:
            return False
        if self._count > 0 and self._min_distance > 0.0:
            px, py = self._data[self._count - 1, :2]
            dx = float(x) - float(px)
            dy = float(y) - float(py)
            if dx * dx + dy * dy < self._min_distance * self._min_distance:
                return False
        r = self._point_radius if radius is None else float(radius)
        self._data[self._count] = (float(x), float(y), r)
        self._count += 1
        return True

    def clear(self) -> None:
        """空に戻す（確保済み配列は再利用）。"""
        self._count = 0

    # ── 参照 ───────────────────
    def as_array(self) -> np.ndarray:
        """有効行 `(count, 3)` の読み取り専用ビューを返す。"""
        view = self._data[: self._count]
        view.setflags(write=False)
        return view

    def points(self) -> np.ndarray:
        """有効な XY `(count, 2)` の読み取り専用ビューを返す。"""
        view = self._data[: self._count, :2]
        view.setflags(write=False)
        return view

    def __repr__(self) -> str:
        return f"CurveBuffer(count={self._count}, capacity={self.capacity})"


__all__ = ["CurveBuffer"]
