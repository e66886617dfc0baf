"""
どこで: `epidraw.engine.core` サブパッケージ。
何を: 曲線バッファ・閉曲線化・フーリエ解析・エピサイクル合成・軌跡記録・セッションと、
フレーム駆動（Tickable/FrameClock）・描画ウィンドウを提供。
"""

from .closer import InsufficientPointsError, close_curve
from .curve_buffer import CurveBuffer
from .epicycles import EpicycleChain, compose_chain
from .events import AddPoint, Commit, Reset, SessionEvent
from .fourier import (
    CoefficientOrderError,
    FourierSeries,
    compute_fourier_series,
    reconstruct,
    validate_order,
    visiting_order,
)
from .session import Session, SessionFrame, SessionState
from .trace import TraceRecorder

__all__ = [
    "AddPoint",
    "CoefficientOrderError",
    "Commit",
    "CurveBuffer",
    "EpicycleChain",
    "FourierSeries",
    "InsufficientPointsError",
    "Reset",
    "Session",
    "SessionEvent",
    "SessionFrame",
    "SessionState",
    "TraceRecorder",
    "close_curve",
    "compose_chain",
    "compute_fourier_series",
    "reconstruct",
    "validate_order",
    "visiting_order",
]
