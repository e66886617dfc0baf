"""
2D ポリライン集合 `Geometry`（描画側へ渡す唯一の線表現）

データモデル（不変条件）:
- `coords: float32 ndarray (N, 2)` — 全頂点を 1 本の連続メモリで保持（行は XY）。
- `offsets: int32 ndarray (M+1,)` — 各ポリラインの開始 index（末尾は必ず N）。
- i 本目の線は `coords[offsets[i] : offsets[i+1]]` で取り出せる。

直感図:

    # 2 本のポリライン（線0は3点、線1は2点）
    # coords (N=5): [[0,0], [1,0], [1,1], [2,2], [3,2]]
    # offsets (M+1=3): [0, 3, 5]
    #   線0 = coords[0:3]
    #   線1 = coords[3:5]

補足:
- 空ジオメトリは `coords.shape==(0,2)`, `offsets==[0]`。
- `concat` は後続の `offsets[1:]` に先行頂点数を加算して結合する。
"""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

LineLike = np.ndarray | Sequence[Sequence[float]]


def _normalize_geometry_input(
    coords: np.ndarray,
    offsets: np.ndarray,
) -> tuple[np.ndarray, np.ndarray]:
    """`Geometry` 生成時の内部正規化ヘルパ。"""

    coords_arr = np.ascontiguousarray(coords, dtype=np.float32)
    if coords_arr.ndim != 2 or coords_arr.shape[1] != 2:
        raise ValueError(f"coords must have shape (N, 2), got {coords_arr.shape}")

    offsets_arr = np.ascontiguousarray(offsets, dtype=np.int32)
    if offsets_arr.ndim != 1 or offsets_arr.size == 0:
        raise ValueError("offsets must be a non-empty 1-D array")
    if offsets_arr[0] != 0:
        raise ValueError("offsets[0] must be 0")
    if offsets_arr[-1] != coords_arr.shape[0]:
        raise ValueError("offsets[-1] must equal the number of coords")
    if np.any(np.diff(offsets_arr) < 0):
        raise ValueError("offsets must be non-decreasing")

    return coords_arr, offsets_arr


class Geometry:
    """2D ポリライン集合。

    フィールド:
    - `coords (N,2) float32`: すべての点列を連結した配列。
    - `offsets (M+1,) int32`: 各ポリラインの開始 index（末尾は N）。
    """

    __slots__ = ("coords", "offsets")

    coords: np.ndarray
    offsets: np.ndarray

    def __init__(self, coords: np.ndarray, offsets: np.ndarray) -> None:
        self.coords, self.offsets = _normalize_geometry_input(coords, offsets)

    # ── ファクトリ ───────────────────
    @classmethod
    def empty(cls) -> "Geometry":
        return cls(np.empty((0, 2), dtype=np.float32), np.zeros(1, dtype=np.int32))

    @classmethod
    def from_lines(cls, lines: Iterable[LineLike]) -> "Geometry":
        """`(K, 2)` 座標列の集合から `Geometry` を生成する。

        `(K, 3)` 以上の列を持つ入力は先頭 2 列（XY）のみを使う。

        Raises
        ------
        ValueError
            2 次元配列でない、または列数が 2 未満の場合。
        """
        np_lines: list[np.ndarray] = []
        for line in lines:
            arr = np.asarray(line, dtype=np.float32)
            if arr.ndim != 2 or arr.shape[1] < 2:
                raise ValueError(f"invalid line shape: {arr.shape}")
            np_lines.append(arr[:, :2])

        if not np_lines:
            return cls.empty()

        offsets = np.zeros(len(np_lines) + 1, dtype=np.int32)
        offsets[1:] = np.cumsum([arr.shape[0] for arr in np_lines])
        coords = np.concatenate(np_lines, axis=0)
        return cls(coords, offsets)

    # ── 基本操作（すべて純粋） ────────
    def as_arrays(self, *, copy: bool = False) -> tuple[np.ndarray, np.ndarray]:
        """`(coords, offsets)` を返す。`copy=False` は読み取り専用ビュー。"""
        if copy:
            return self.coords.copy(), self.offsets.copy()
        c = self.coords.view()
        o = self.offsets.view()
        c.setflags(write=False)
        o.setflags(write=False)
        return c, o

    @property
    def is_empty(self) -> bool:
        return self.coords.shape[0] == 0

    @property
    def n_vertices(self) -> int:
        return int(self.coords.shape[0])

    def __len__(self) -> int:
        return int(self.offsets.shape[0] - 1)

    def lines(self) -> list[np.ndarray]:
        """各ポリラインのビューを返す。"""
        return [self.coords[a:b] for a, b in zip(self.offsets[:-1], self.offsets[1:])]

    def concat(self, other: "Geometry") -> "Geometry":
        """2 つのジオメトリを連結した新しいインスタンスを返す。"""
        coords = np.concatenate([self.coords, other.coords], axis=0)
        offsets = np.concatenate([self.offsets, other.offsets[1:] + self.coords.shape[0]])
        return Geometry(coords, offsets)

    def __repr__(self) -> str:
        return f"Geometry(lines={len(self)}, vertices={self.n_vertices})"


__all__ = ["Geometry"]
