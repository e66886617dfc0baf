"""
どこで: `epidraw.engine.core` のフレーム更新インターフェース。
何を: `Session`（時間を進める側）と `EpicycleRenderer`（結果を描く側）が共有する `tick(dt)`。
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Tickable(Protocol):
    """`FrameClock` から毎フレーム呼ばれるオブジェクト。"""

    def tick(self, dt: float) -> None:
        """経過秒 `dt` を受け取り、1 フレーム分の状態を更新する。"""
