"""
どこで: `epidraw.engine.core.input`
何を: ポインタ座標（ピクセル）を正規化描画座標へ写し、押下/ドラッグ状態を明示的に保持して
`AddPoint` イベントを生成する。
なぜ: ボタン押下フラグをプロセス全体の可変状態にせず、ウィンドウごとのオブジェクトに閉じ込めるため。
"""

from __future__ import annotations

from typing import Callable

from .events import AddPoint, SessionEvent

EventSink = Callable[[SessionEvent], object]


def pointer_to_normalized(
    x: float, y: float, width: int, height: int, *, y_down: bool = False
) -> tuple[float, float]:
    """ピクセル座標を `[-1, 1]` の描画座標へ変換する。

    `y_down=True` は原点が左上の座標系（y が下向き）。pyglet は左下原点なので既定は False。
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"invalid viewport size: {(width, height)}")
    nx = float(x) / width * 2.0 - 1.0
    ny = float(y) / height * 2.0 - 1.0
    return nx, (-ny if y_down else ny)


class PointerCapture:
    """左ボタンの押下中だけ点を送るポインタ状態。

    Parameters
    ----------
    sink : EventSink
        生成したイベントの送り先（通常は `Session.handle`）。
    size : tuple[int, int]
        ビューポートのピクセルサイズ。
    capture_drag : bool, default True
        True ならドラッグ中の移動でも点を送る。False ならクリックのみ。
    """

    def __init__(
        self, sink: EventSink, size: tuple[int, int], *, capture_drag: bool = True
    ) -> None:
        self._sink = sink
        self.size = (int(size[0]), int(size[1]))
        self.capture_drag = bool(capture_drag)
        self.pressed = False

    def resize(self, width: int, height: int) -> None:
        self.size = (int(width), int(height))

    def _emit(self, x: float, y: float) -> None:
        nx, ny = pointer_to_normalized(x, y, *self.size)
        self._sink(AddPoint(nx, ny))

    def press(self, x: float, y: float) -> None:
        self.pressed = True
        self._emit(x, y)

    def drag(self, x: float, y: float) -> None:
        if self.pressed and self.capture_drag:
            self._emit(x, y)

    def release(self) -> None:
        self.pressed = False


__all__ = ["EventSink", "PointerCapture", "pointer_to_normalized"]
