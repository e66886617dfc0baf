"""
どこで: `epidraw.engine.render.scene`
何を: `SessionFrame` を描画レイヤー（スケッチ点・エピサイクル円・連鎖・軌跡）へ変換する純関数群。
なぜ: GPU を使わずにフレーム内容を検証できるよう、頂点生成を描画 API から切り離すため。
"""

from __future__ import annotations

import numpy as np

from epidraw.engine.core.geometry import Geometry
from epidraw.engine.core.session import SessionFrame

from .types import Layer, ScenePalette


def unit_circle(samples: int) -> np.ndarray:
    """閉じた単位円の折れ線 `(samples, 2)`（先頭と末尾は同じ点）。"""
    n = int(samples)
    if n < 3:
        raise ValueError(f"samples must be >= 3, got {samples}")
    angles = np.linspace(0.0, 2.0 * np.pi, n)
    return np.column_stack([np.cos(angles), np.sin(angles)])


def circle_outlines(circles: np.ndarray, samples: int) -> Geometry:
    """円記述子 `(K, 3)`（cx, cy, r）から K 本の閉折れ線を作る。"""
    arr = np.asarray(circles, dtype=np.float64).reshape(-1, 3)
    if arr.shape[0] == 0:
        return Geometry.empty()
    unit = unit_circle(samples)
    rings = arr[:, None, :2] + arr[:, 2, None, None] * unit[None, :, :]
    return Geometry.from_lines(list(rings))


def build_layers(
    frame: SessionFrame,
    *,
    circle_samples: int = 64,
    palette: ScenePalette | None = None,
) -> list[Layer]:
    """1 フレーム分の前景レイヤーを描画順に返す。

    - "circles": 各エピサイクルの円周
    - "chain": 原点と各先端を結ぶ折れ線
    - "sketch": スケッチ点のマーカー円と、点を結ぶ折れ線

    軌跡セグメントは永続テクスチャ側で扱うため `trace_layer` を別に用意する。
    空のレイヤーは返さない。
    """
    pal = palette or ScenePalette()
    layers: list[Layer] = []

    chain = frame.chain
    if chain is not None and len(chain) > 0:
        layers.append(
            Layer(
                circle_outlines(chain.circles(), circle_samples),
                pal.circles,
                pal.line_thickness,
                name="circles",
            )
        )
        layers.append(
            Layer(
                Geometry.from_lines([chain.points()]),
                pal.chain,
                pal.line_thickness,
                name="chain",
            )
        )

    sketch = np.asarray(frame.sketch)
    if sketch.shape[0] > 0:
        markers = circle_outlines(sketch, max(8, circle_samples // 4))
        outline = Geometry.from_lines([sketch[:, :2]]) if sketch.shape[0] > 1 else Geometry.empty()
        layers.append(Layer(markers.concat(outline), pal.sketch, pal.line_thickness, name="sketch"))

    return layers


def trace_layer(frame: SessionFrame, palette: ScenePalette | None = None) -> Layer | None:
    """軌跡セグメントのレイヤー（セグメントが無いフレームでは None）。"""
    if frame.trace_segment is None:
        return None
    pal = palette or ScenePalette()
    return Layer(
        Geometry.from_lines([frame.trace_segment]),
        pal.trace,
        pal.trace_thickness,
        name="trace",
    )


__all__ = ["build_layers", "circle_outlines", "trace_layer", "unit_circle"]
