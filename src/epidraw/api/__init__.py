"""
どこで: `epidraw.api` 入口（高レベル公開 API）。
何を: ランナー `run_epicycles` とセッション関連の型を再輸出する。

Usage:
    from epidraw.api import run_epicycles

    run_epicycles(degree=16, max_points=128)
"""

from epidraw.engine.core.events import AddPoint, Commit, Reset
from epidraw.engine.core.session import Session, SessionState

from .runner import run_epicycles
from .runner import run_epicycles as run

__all__ = [
    "run_epicycles",
    "run",
    "Session",
    "SessionState",
    "AddPoint",
    "Commit",
    "Reset",
]
