"""
どこで: `epidraw.engine.core.events`
何を: 入力側からセッションへ渡す型付きイベント（AddPoint/Commit/Reset）。
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AddPoint:
    """正規化描画座標の点を 1 つ追加する。"""

    x: float
    y: float


@dataclass(frozen=True)
class Commit:
    """スケッチを確定して解析とアニメーションを開始する。"""


@dataclass(frozen=True)
class Reset:
    """セッションを初期状態（スケッチ中）に戻す。"""


SessionEvent = AddPoint | Commit | Reset


__all__ = ["AddPoint", "Commit", "Reset", "SessionEvent"]
