"""
どこで: `epidraw.engine.core.session`
何を: スケッチ 1 件ぶんの状態機械。入力イベントを受け、確定時に閉曲線化→フーリエ解析を行い、
毎フレーム連鎖と軌跡セグメントを合成して `SessionFrame` として公開する。
なぜ: 入力/描画ツールキットへの参照を持たず、イベント受け渡しだけで駆動できるようにするため。

状態遷移:
    IDLE（スケッチ中） --commit--> READY --tick--> ANIMATING
          ^                                           |
          +------------------- reset -----------------+

- `commit` は 3 点未満、または IDLE 以外では拒否（状態は変わらない）。
- READY → ANIMATING は確定後最初の `tick` で起こり、そのフレームが `t = 0`。
- `reset` はどの状態からでも安全に呼べる。
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

import numpy as np

from .closer import InsufficientPointsError, close_curve
from .curve_buffer import CurveBuffer
from .epicycles import EpicycleChain, compose_chain
from .events import AddPoint, Commit, Reset, SessionEvent
from .fourier import FourierSeries, compute_fourier_series
from .trace import TraceRecorder

logger = logging.getLogger(__name__)


class SessionState(enum.Enum):
    IDLE = "idle"
    READY = "ready"
    ANIMATING = "animating"


@dataclass(frozen=True, eq=False)
class SessionFrame:
    """描画側へ渡す 1 フレーム分のデータ。

    - `sketch (K, 3)`: スケッチ点 `(x, y, radius)`。
    - `chain`: アニメーション中の連鎖（それ以外は None）。
    - `trace_segment (2, 2)`: 直前→現在の先端（無ければ None）。
    """

    state: SessionState
    t: float
    sketch: np.ndarray
    chain: EpicycleChain | None = None
    trace_segment: np.ndarray | None = None


class Session:
    """スケッチ → 解析 → アニメーションを束ねるセッション。

    Parameters
    ----------
    max_points : int
        スケッチ点の最大数。
    degree : int
        フーリエ次数 N（周波数 `-N..N`）。
    min_distance : float, default 0.0
        直前点からこの距離未満の点を捨てる。
    point_radius : float, default 0.01
        スケッチ点に付与する描画用半径。
    time_scale : float, default 1.0
        `tick(dt)` で進める時間の倍率。
    """

    def __init__(
        self,
        *,
        max_points: int,
        degree: int,
        min_distance: float = 0.0,
        point_radius: float = 0.01,
        time_scale: float = 1.0,
    ) -> None:
        if int(degree) < 0:
            raise ValueError(f"degree must be >= 0, got {degree}")
        if float(time_scale) < 0.0:
            raise ValueError(f"time_scale must be >= 0, got {time_scale}")
        self.buffer = CurveBuffer(
            max_points, min_distance=min_distance, point_radius=point_radius
        )
        self.degree = int(degree)
        self.time_scale = float(time_scale)
        self.trace = TraceRecorder()
        self._state = SessionState.IDLE
        self._samples: np.ndarray | None = None
        self._series: FourierSeries | None = None
        self._t = 0.0
        self._frame = SessionFrame(state=self._state, t=0.0, sketch=self.buffer.as_array())

    @classmethod
    def from_settings(cls, **overrides: float | int | None) -> "Session":
        """`common.settings` の値で生成する（キーワード引数で個別に上書き可能）。"""
        from epidraw.common.settings import get as get_settings

        s = get_settings()
        params: dict[str, float | int] = {
            "max_points": s.MAX_POINTS,
            "degree": s.FOURIER_DEGREE,
            "min_distance": s.MIN_POINT_DISTANCE,
            "point_radius": s.POINT_RADIUS,
            "time_scale": s.TIME_SCALE,
        }
        params.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**params)  # type: ignore[arg-type]

    # ── 参照 ───────────────────
    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def elapsed(self) -> float:
        """確定後の経過アニメーション時間 [sec]。"""
        return self._t

    @property
    def samples(self) -> np.ndarray | None:
        """確定時に作った閉サンプル列（未確定なら None）。"""
        return self._samples

    @property
    def series(self) -> FourierSeries | None:
        """確定時に計算した係数集合（未確定なら None）。"""
        return self._series

    def frame(self) -> SessionFrame:
        """最新フレームを返す。"""
        return self._frame

    # ── イベント ───────────────────
    def handle(self, event: SessionEvent) -> bool:
        """イベントを処理し、状態/内容が変化したら True を返す。"""
        if isinstance(event, AddPoint):
            return self.add_point(event.x, event.y)
        if isinstance(event, Commit):
            return self.commit()
        if isinstance(event, Reset):
            self.reset()
            return True
        raise TypeError(f"unsupported event: {event!r}")

    def add_point(self, x: float, y: float) -> bool:
        """スケッチ中なら点を追加する（確定後/容量切れは無視）。"""
        if self._state is not SessionState.IDLE:
            return False
        added = self.buffer.append(x, y)
        if added:
            self._frame = SessionFrame(state=self._state, t=0.0, sketch=self.buffer.as_array())
        return added

    def commit(self) -> bool:
        """スケッチを確定し、閉曲線化とフーリエ解析を行う。

        Returns
        -------
        bool
            READY へ遷移したら True。拒否した場合は False（状態は変わらない）。
        """
        if self._state is not SessionState.IDLE:
            logger.info("commit ignored: session is %s", self._state.value)
            return False
        try:
            samples = close_curve(self.buffer.points())
        except InsufficientPointsError as e:
            logger.warning("commit refused: %s", e)
            return False
        nyquist = (samples.shape[0] - 1) // 2
        if self.degree > nyquist:
            logger.warning(
                "degree %d exceeds half the interval count (%d); high frequencies will alias",
                self.degree,
                nyquist,
            )
        series = compute_fourier_series(samples, self.degree)

        # 計算が完了してから状態をまとめて差し替える
        self._samples = samples
        self._series = series
        self._t = 0.0
        self.trace.reset()
        self._state = SessionState.READY
        logger.info(
            "sketch committed: points=%d samples=%d degree=%d",
            self.buffer.count(),
            samples.shape[0],
            self.degree,
        )
        return True

    def reset(self) -> None:
        """スケッチと解析結果を破棄して IDLE に戻る。"""
        previous = self._state
        self.buffer.clear()
        self.trace.reset()
        self._samples = None
        self._series = None
        self._t = 0.0
        self._state = SessionState.IDLE
        self._frame = SessionFrame(state=self._state, t=0.0, sketch=self.buffer.as_array())
        if previous is not SessionState.IDLE:
            logger.info("session reset from %s", previous.value)

    # ── Tickable ───────────────────
    def tick(self, dt: float) -> None:
        """アニメーション時間を進め、連鎖と軌跡セグメントを更新する。"""
        if self._state is SessionState.IDLE:
            return
        if self._state is SessionState.READY:
            self._state = SessionState.ANIMATING
            self._t = 0.0
            logger.debug("animation started")
        else:
            self._t += float(dt) * self.time_scale

        assert self._series is not None
        chain = compose_chain(self._series, self._t)
        segment = self.trace.record(chain.tip)
        self._frame = SessionFrame(
            state=self._state,
            t=self._t,
            sketch=self.buffer.as_array(),
            chain=chain,
            trace_segment=segment,
        )


__all__ = ["Session", "SessionFrame", "SessionState"]
