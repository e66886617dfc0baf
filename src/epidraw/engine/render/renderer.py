"""
どこで: `epidraw.engine.render` の高レベル描画。
何を: セッションの最新フレームをレイヤーへ変換して ModernGL で描画し、軌跡セグメントを
永続テクスチャ（オフスクリーン FBO）へ蓄積して毎フレーム背景として合成する。
なぜ: コア側が軌跡の履歴を持たずに済むよう、蓄積を GPU 側のテクスチャに任せるため。
"""

from __future__ import annotations

import logging
from typing import Any

import moderngl as mgl
import numpy as np

from epidraw.common.types import RGBA
from epidraw.engine.core.geometry import Geometry
from epidraw.engine.core.session import Session, SessionFrame, SessionState
from epidraw.engine.core.tickable import Tickable
from epidraw.util.constants import PRIMITIVE_RESTART_INDEX

from .line_mesh import LineMesh
from .scene import build_layers, trace_layer
from .shader import Shader
from .types import Layer, ScenePalette

logger = logging.getLogger(__name__)


def _geometry_to_vertices_indices(
    g: Geometry, primitive_restart_index: int
) -> tuple[np.ndarray, np.ndarray]:
    """`Geometry` を VBO 用頂点と、各線末尾に区切りを挟んだ IBO 用インデックスへ変換する。"""
    vertices = np.ascontiguousarray(g.coords, dtype=np.float32)
    base = np.arange(vertices.shape[0], dtype=np.uint32)
    indices = np.insert(base, g.offsets[1:], np.uint32(primitive_restart_index))
    return vertices, indices.astype(np.uint32, copy=False)


class EpicycleRenderer(Tickable):
    """
    `Session` の最新フレームを毎フレーム取り込み、前景（円・連鎖・スケッチ）を描画する。
    軌跡は FBO に追記し、画面には FBO のテクスチャを背景として貼る。
    """

    def __init__(
        self,
        mgl_context: Any,
        session: Session,
        *,
        size: tuple[int, int],
        background: RGBA = (1.0, 1.0, 1.0, 1.0),
        palette: ScenePalette | None = None,
        circle_samples: int = 64,
    ):
        self.ctx = mgl_context
        self.session = session
        self.size = (int(size[0]), int(size[1]))
        self.background = background
        self.palette = palette or ScenePalette()
        self.circle_samples = int(circle_samples)

        self.ctx.primitive_restart = True  # type: ignore[attr-defined]
        self.ctx.primitive_restart_index = PRIMITIVE_RESTART_INDEX  # type: ignore[attr-defined]

        self.line_program = Shader.create_line_program(mgl_context)
        w, h = self.size
        self.line_program["aspect"].value = (w / max(1, h), 1.0)
        self.mesh = LineMesh(
            ctx=mgl_context,
            program=self.line_program,
            primitive_restart_index=PRIMITIVE_RESTART_INDEX,
        )

        # 軌跡の永続テクスチャ
        self.trace_texture = mgl_context.texture(self.size, 4)
        self.trace_fbo = mgl_context.framebuffer(color_attachments=[self.trace_texture])
        self.blit_program = Shader.create_blit_program(mgl_context)
        quad = np.array([-1, -1, 1, -1, -1, 1, 1, 1], dtype=np.float32)
        self._quad_vbo = mgl_context.buffer(quad.tobytes())
        self._blit_vao = mgl_context.vertex_array(
            self.blit_program, [(self._quad_vbo, "2f", "in_vert")]
        )

        self._layers: list[Layer] = []
        self._last_frame: SessionFrame | None = None
        self._last_state: SessionState = session.state
        self.clear_trace()

    # --------------------------------------------------------------------- #
    # Tickable                                                               #
    # --------------------------------------------------------------------- #
    def tick(self, dt: float) -> None:
        """セッションの新しいフレームがあればレイヤーを更新し、軌跡を FBO へ追記する。"""
        frame = self.session.frame()
        if frame is self._last_frame:
            return
        self._last_frame = frame

        if frame.state is not self._last_state:
            # 確定/リセットで新しい軌跡を始める
            self.clear_trace()
            self._last_state = frame.state

        self._layers = build_layers(
            frame, circle_samples=self.circle_samples, palette=self.palette
        )
        segment = trace_layer(frame, self.palette)
        if segment is not None:
            self.trace_fbo.use()
            self._draw_layer(segment)
            self.ctx.screen.use()

    # --------------------------------------------------------------------- #
    # Public drawing API                                                    #
    # --------------------------------------------------------------------- #
    def draw(self) -> None:
        """軌跡テクスチャを背景に貼り、前景レイヤーを順に描画する。"""
        self.ctx.screen.use()
        self.trace_texture.use(location=0)
        self.blit_program["trace_texture"].value = 0
        self._blit_vao.render(mgl.TRIANGLE_STRIP)
        for layer in self._layers:
            self._draw_layer(layer)

    def clear_trace(self) -> None:
        """軌跡テクスチャを背景色で塗りつぶす。"""
        self.trace_fbo.use()
        self.trace_fbo.clear(*self.background)
        self.ctx.screen.use()

    def get_last_counts(self) -> tuple[int, int]:
        """直近の前景レイヤーの（頂点数, 線本数）。"""
        verts = sum(layer.geometry.n_vertices for layer in self._layers)
        lines = sum(len(layer.geometry) for layer in self._layers)
        return verts, lines

    def release(self) -> None:
        """GPU リソースを解放する（終了時）。"""
        self.mesh.release()
        self._blit_vao.release()
        self._quad_vbo.release()
        self.trace_fbo.release()
        self.trace_texture.release()
        self.line_program.release()
        self.blit_program.release()

    # --------------------------------------------------------------------- #
    # Internals                                                             #
    # --------------------------------------------------------------------- #
    def _draw_layer(self, layer: Layer) -> None:
        if layer.geometry.is_empty:
            return
        vertices, indices = _geometry_to_vertices_indices(layer.geometry, PRIMITIVE_RESTART_INDEX)
        self.mesh.upload(vertices, indices)
        self.line_program["color"].value = tuple(float(c) for c in layer.color)
        self.line_program["line_thickness"].value = float(layer.thickness)
        self.mesh.render(mgl.LINE_STRIP)


__all__ = ["EpicycleRenderer"]
