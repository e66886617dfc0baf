"""
どこで: `epidraw.engine.core.trace`
何を: 連鎖先端の軌跡を「直前フレーム → 現フレーム」の 2 点セグメントとして出力する。

- 履歴は直前の先端 1 点のみ保持する。軌跡の蓄積は描画側（永続テクスチャ）が担う。
- 最初のフレーム（直前が無い）ではセグメントを出さない。
"""

from __future__ import annotations

import numpy as np


class TraceRecorder:
    """先端位置からトレースセグメントを生成する。"""

    def __init__(self) -> None:
        self._previous: np.ndarray | None = None
        self.segments_emitted = 0

    @property
    def has_previous(self) -> bool:
        return self._previous is not None

    def record(self, tip: np.ndarray) -> np.ndarray | None:
        """現フレームの先端を記録し、`(previous, current)` の `(2, 2)` を返す。

        直前の先端が無い場合は None。
        """
        current = np.asarray(tip, dtype=np.float64).reshape(2).copy()
        previous = self._previous
        self._previous = current
        if previous is None:
            return None
        self.segments_emitted += 1
        return np.stack([previous, current])

    def reset(self) -> None:
        self._previous = None
        self.segments_emitted = 0


__all__ = ["TraceRecorder"]
