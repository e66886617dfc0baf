"""
どこで: `epidraw.api.runner`（実行ランナー）。
何を: セッション・ウィンドウ・レンダラを結線し、`FrameClock` でフレームを駆動する。

実行フロー（概要）:
1) 設定解決: 引数 > `configs/default.yaml`/`config.yaml` > 環境変数由来の `common.settings`。
2) セッション生成: 最大点数・フーリエ次数・重複除去距離を確定。
3) `init_only=True` ならここでセッションを返す（pyglet/ModernGL を import しない）。
4) ウィンドウ/GL: `RenderWindow` と ModernGL コンテキスト、`EpicycleRenderer` を生成。
5) フレーム駆動: `FrameClock([session, renderer])` を `pyglet.clock` で駆動。
   `ESC` でウィンドウを閉じ、GL リソースを解放する。

ロギング:
- 初期化や確定/リセットは `logging` で通知。ハンドラは呼び出し側（CLI）で設定する。
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from epidraw.common.settings import get as get_settings
from epidraw.engine.core.events import Reset, SessionEvent
from epidraw.engine.core.session import Session
from epidraw.util.constants import MAX_FRAME_DT
from epidraw.util.utils import config_section, load_config

from .utils import resolve_background, resolve_fps, resolve_palette, resolve_window_size

logger = logging.getLogger(__name__)


def run_epicycles(
    *,
    degree: int | None = None,
    max_points: int | None = None,
    min_distance: float | None = None,
    time_scale: float | None = None,
    window_size: tuple[int, int] | None = None,
    fps: int | None = None,
    background: str | tuple[float, ...] | None = None,
    line_color: str | tuple[float, ...] | None = None,
    config: Mapping[str, Any] | None = None,
    init_only: bool = False,
) -> Session | None:
    """スケッチ → エピサイクル描画のウィンドウを開いて実行する。

    Parameters
    ----------
    degree : int | None
        フーリエ次数 N。None で `EPI_FOURIER_DEGREE`（既定 16）。
    max_points : int | None
        スケッチ点の最大数。None で `EPI_MAX_POINTS`（既定 128）。
    min_distance : float | None
        直前点からこの距離未満の点を捨てる。None で `EPI_MIN_POINT_DISTANCE`。
    time_scale : float | None
        アニメーション速度の倍率。None で `EPI_TIME_SCALE`。
    window_size : tuple[int, int] | None
        ウィンドウのピクセルサイズ。None で設定ファイル（既定 800x600）。
    fps : int | None
        更新レート。None で設定ファイルから解決、未設定時は 60。
    background, line_color : 色指定 | None
        背景色と連鎖の線色（RGBA 0–1 または #RRGGBB/#RRGGBBAA）。
    config : Mapping | None
        構成辞書。None で `load_config()` を読む。
    init_only : bool, default False
        True で重い依存の初期化をスキップし、生成したセッションを返す。

    Returns
    -------
    Session | None
        `init_only=True` のときのみセッション。通常実行はウィンドウ終了後に None。
    """
    cfg = dict(config) if config is not None else load_config()
    settings = get_settings()

    fps_value = resolve_fps(fps, cfg)
    width, height = resolve_window_size(window_size, cfg)
    bg_rgba = resolve_background(background, cfg)
    palette = resolve_palette(cfg, line_color=line_color)

    session = Session.from_settings(
        degree=degree,
        max_points=max_points,
        min_distance=min_distance,
        time_scale=time_scale,
    )
    logger.info(
        "session ready: degree=%d max_points=%d min_distance=%.4f window=%dx%d fps=%d",
        session.degree,
        session.buffer.capacity,
        session.buffer.min_distance,
        width,
        height,
        fps_value,
    )

    if init_only:
        return session

    # 遅延インポート（ヘッドレス環境でのウィンドウ生成を避ける）
    import moderngl
    import pyglet

    from epidraw.engine.core.frame_clock import FrameClock
    from epidraw.engine.core.render_window import RenderWindow
    from epidraw.engine.render.renderer import EpicycleRenderer

    renderer: EpicycleRenderer | None = None

    def _dispatch(event: SessionEvent) -> None:
        session.handle(event)
        if isinstance(event, Reset) and renderer is not None:
            renderer.clear_trace()

    window = RenderWindow(
        width,
        height,
        sink=_dispatch,
        bg_color=bg_rgba,
        caption=str(config_section(cfg, "window").get("caption", "epidraw")),
        capture_drag=settings.CAPTURE_DRAG,
    )
    mgl_ctx = moderngl.create_context()
    mgl_ctx.enable(moderngl.BLEND)
    mgl_ctx.blend_func = (moderngl.SRC_ALPHA, moderngl.ONE_MINUS_SRC_ALPHA)

    renderer = EpicycleRenderer(
        mgl_ctx,
        session,
        size=window.get_framebuffer_size(),
        background=bg_rgba,
        palette=palette,
        circle_samples=settings.CIRCLE_SAMPLES,
    )
    window.add_draw_callback(renderer.draw)

    frame_clock = FrameClock([session, renderer], max_dt=MAX_FRAME_DT)
    pyglet.clock.schedule_interval(frame_clock.tick, 1 / fps_value)

    @window.event
    def on_close() -> None:
        pyglet.clock.unschedule(frame_clock.tick)
        if renderer is not None:
            verts, lines = renderer.get_last_counts()
            logger.info(
                "window closed: frames=%d last_vertices=%d last_lines=%d",
                frame_clock.frames,
                verts,
                lines,
            )
            renderer.release()

    pyglet.app.run()
    return None


__all__ = ["run_epicycles"]
