"""
どこで: `epidraw.engine.core` の描画ウィンドウ薄ラッパ。
何を: Pyglet Window（背景クリア/描画コールバック登録）と、ポインタ/キー入力をセッションイベントへ
変換して送る入力境界。

キー割り当て:
- 左クリック/ドラッグ: 点を追加
- SPACE / ENTER: 確定（Commit）
- R / BACKSPACE: リセット（Reset）
- ESC: 終了（pyglet 既定）
"""

from typing import Callable

import pyglet
from pyglet.gl import Config, glClearColor
from pyglet.window import key, mouse

from .events import Commit, Reset
from .input import EventSink, PointerCapture

COMMIT_KEYS = (key.SPACE, key.ENTER, key.RETURN)
RESET_KEYS = (key.R, key.BACKSPACE)


class RenderWindow(pyglet.window.Window):
    def __init__(
        self,
        width: int,
        height: int,
        *,
        sink: EventSink,
        bg_color: tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0),
        caption: str = "epidraw",
        capture_drag: bool = True,
    ):
        """ウィンドウを生成する。

        引数:
            width: ウィンドウ幅（ピクセル）。
            height: ウィンドウ高さ（ピクセル）。
            sink: 入力イベントの送り先。
            bg_color: 背景色 RGBA（0.0〜1.0）。
        """
        config = Config(double_buffer=True, vsync=True, major_version=3, minor_version=3)
        super().__init__(
            width=width, height=height, caption=caption, config=config, resizable=False
        )
        self._bg_color = bg_color
        self._sink = sink
        self._draw_callbacks: list[Callable[[], None]] = []
        self.pointer = PointerCapture(sink, (width, height), capture_drag=capture_drag)

    def add_draw_callback(self, func: Callable[[], None]) -> None:
        """`on_draw` 中に呼び出す描画関数を登録する（登録順に呼ぶ）。"""
        self._draw_callbacks.append(func)

    def on_draw(self):  # Pyglet 既定のイベント名
        r, g, b, a = self._bg_color
        glClearColor(r, g, b, a)
        self.clear()
        for cb in self._draw_callbacks:
            cb()

    # ---- input ----
    def on_mouse_press(self, x, y, button, modifiers):
        if button == mouse.LEFT:
            self.pointer.press(x, y)

    def on_mouse_drag(self, x, y, dx, dy, buttons, modifiers):
        if buttons & mouse.LEFT:
            self.pointer.drag(x, y)

    def on_mouse_release(self, x, y, button, modifiers):
        if button == mouse.LEFT:
            self.pointer.release()

    def on_key_press(self, symbol, modifiers):
        if symbol in COMMIT_KEYS:
            self._sink(Commit())
            return None
        if symbol in RESET_KEYS:
            self._sink(Reset())
            return None
        return super().on_key_press(symbol, modifiers)
