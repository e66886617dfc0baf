"""
どこで: `epidraw.engine.render` 型定義。
何を: レイヤー描画用の軽量データクラス `Layer` と配色 `ScenePalette`。
"""

from __future__ import annotations

from dataclasses import dataclass

from epidraw.common.types import RGBA
from epidraw.engine.core.geometry import Geometry


@dataclass(frozen=True)
class Layer:
    """色/太さ付きの描画レイヤー。"""

    geometry: Geometry
    color: RGBA
    thickness: float
    name: str | None = None


@dataclass(frozen=True)
class ScenePalette:
    """シーン各要素の色と線幅（クリップ空間基準）。"""

    sketch: RGBA = (0.84, 0.16, 0.16, 1.0)
    circles: RGBA = (0.55, 0.55, 0.55, 1.0)
    chain: RGBA = (0.2, 0.2, 0.2, 1.0)
    trace: RGBA = (0.11, 0.21, 0.34, 1.0)
    line_thickness: float = 0.002
    trace_thickness: float = 0.004


__all__ = ["Layer", "ScenePalette"]
