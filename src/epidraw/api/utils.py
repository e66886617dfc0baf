"""
どこで: `epidraw.api.utils`（純粋関数/小ヘルパ）。
何を: FPS/ウィンドウサイズ/配色の解決（引数 > 設定ファイル > 既定値）。
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from epidraw.common.types import RGBA
from epidraw.engine.render.types import ScenePalette
from epidraw.util.color import normalize_color
from epidraw.util.constants import DEFAULT_FPS, DEFAULT_WINDOW_SIZE
from epidraw.util.utils import config_section

logger = logging.getLogger(__name__)


def resolve_fps(requested_fps: int | None, cfg: Mapping[str, Any], *, default: int = DEFAULT_FPS) -> int:
    """FPS を解決して 1 以上の int を返す。

    - 明示指定があればそれを優先（<=0 は 1 に丸める）。
    - それ以外は `canvas_controller.fps`、読めなければ既定値。
    """
    if requested_fps is not None:
        return max(1, int(requested_fps))
    raw = config_section(dict(cfg), "canvas_controller").get("fps", default)
    try:
        return max(1, int(raw))
    except (TypeError, ValueError):
        logger.warning("invalid fps in config: %r; using %d", raw, default)
        return max(1, int(default))


def resolve_window_size(
    window_size: tuple[int, int] | None, cfg: Mapping[str, Any]
) -> tuple[int, int]:
    """ウィンドウのピクセルサイズを解決する。正でない値は `ValueError`。"""
    if window_size is None:
        wcfg = config_section(dict(cfg), "window")
        w = wcfg.get("width", DEFAULT_WINDOW_SIZE[0])
        h = wcfg.get("height", DEFAULT_WINDOW_SIZE[1])
    else:
        w, h = window_size
    try:
        width, height = int(w), int(h)
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid window size: {(w, h)}") from e
    if width <= 0 or height <= 0:
        raise ValueError(f"window size must be positive, got {(width, height)}")
    return width, height


def _color_or(value: object, fallback: RGBA) -> RGBA:
    if value is None:
        return fallback
    try:
        return normalize_color(value)
    except ValueError as e:
        logger.warning("invalid color %r: %s", value, e)
        return fallback


def _float_or(value: object, fallback: float) -> float:
    if value is None:
        return fallback
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        logger.warning("invalid thickness %r; using %s", value, fallback)
        return fallback


def resolve_background(background: object, cfg: Mapping[str, Any]) -> RGBA:
    """背景色（引数 > `canvas.background_color` > 白）。"""
    if background is not None:
        return normalize_color(background)
    return _color_or(config_section(dict(cfg), "canvas").get("background_color"), (1.0, 1.0, 1.0, 1.0))


def resolve_palette(cfg: Mapping[str, Any], *, line_color: object = None) -> ScenePalette:
    """`canvas` セクションから `ScenePalette` を作る。`line_color` は連鎖の色を上書きする。"""
    ccfg = config_section(dict(cfg), "canvas")
    base = ScenePalette()
    chain = normalize_color(line_color) if line_color is not None else _color_or(ccfg.get("chain_color"), base.chain)
    return ScenePalette(
        sketch=_color_or(ccfg.get("sketch_color"), base.sketch),
        circles=_color_or(ccfg.get("circle_color"), base.circles),
        chain=chain,
        trace=_color_or(ccfg.get("trace_color"), base.trace),
        line_thickness=_float_or(ccfg.get("line_thickness"), base.line_thickness),
        trace_thickness=_float_or(ccfg.get("trace_thickness"), base.trace_thickness),
    )


__all__ = ["resolve_fps", "resolve_window_size", "resolve_background", "resolve_palette"]
