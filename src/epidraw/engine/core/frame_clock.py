"""
どこで: `epidraw.engine.core` のフレームドライバ。
何を: 登録順に `Tickable.tick(dt)` を呼ぶ。セッションが先、レンダラが後という順序がそのまま
「計算したフレームを同じフレームで描く」ことを保証する。

- `dt` が渡されない場合は前回呼び出しからの実時間を測る。
- `max_dt` を指定すると、ウィンドウのドラッグ等で止まった後の巨大な `dt` を切り詰める
  （連鎖が一気に何周も進んで軌跡が飛ぶのを防ぐ）。
"""

from __future__ import annotations

import logging
import time
from typing import Sequence

from .tickable import Tickable

logger = logging.getLogger(__name__)


class FrameClock:
    """Tickable 列を固定順序で実行する。"""

    def __init__(self, tickables: Sequence[Tickable], *, max_dt: float | None = None):
        if max_dt is not None and max_dt <= 0:
            raise ValueError(f"max_dt must be positive, got {max_dt}")
        self._tickables = tuple(tickables)
        self._max_dt = max_dt
        self._last_time = time.perf_counter()
        self.frames = 0

    # pyglet.clock.schedule_interval から dt 付きで呼ばれる
    def tick(self, dt: float | None = None) -> None:
        if dt is None:
            now = time.perf_counter()
            dt = now - self._last_time
            self._last_time = now
        if self._max_dt is not None and dt > self._max_dt:
            logger.debug("frame dt clamped: %.3fs -> %.3fs", dt, self._max_dt)
            dt = self._max_dt

        for t in self._tickables:
            t.tick(dt)
        self.frames += 1
