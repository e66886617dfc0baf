"""
どこで: `epidraw.engine.render` の低レベルメッシュ層。
何を: VBO/IBO/VAO の確保・更新・解放を担当し、描画可能な LineMesh を管理。
"""

from __future__ import annotations

from typing import Any

import numpy as np


class LineMesh:
    """
    GPUに頂点やインデックスなどの描画データを送り込む作業を管理
    """

    def __init__(
        self,
        ctx: Any,
        program: Any,
        # 初期GPUメモリ確保量（既定: 256KB）。必要に応じて自動拡張。
        initial_reserve: int = 256 * 1024,
        primitive_restart_index: int = 0xFFFFFFFF,
    ):
        """
        ctx: moderngl コンテキスト
        program: 線描画用のシェーダープログラム
        primitive_restart_index: 描画時に「ここで一旦区切る」という目印
        """
        self.ctx = ctx
        self.program = program
        self.initial_reserve = initial_reserve
        self.primitive_restart_index = primitive_restart_index

        self.vbo = ctx.buffer(reserve=initial_reserve, dynamic=True)
        self.ibo = ctx.buffer(reserve=initial_reserve, dynamic=True)
        self.vao = self._build_vao()

        self.index_count: int = 0

    def _build_vao(self) -> Any:
        return self.ctx.vertex_array(
            self.program,
            [(self.vbo, "2f", "in_vert")],
            index_buffer=self.ibo,
            index_element_size=4,
        )

    # ---------- バッファ操作 ----------
    def _ensure_capacity(self, vbo_size: int, ibo_size: int) -> None:
        """データが大きくなったらGPUのバッファを再確保"""
        grown = False
        if vbo_size > self.vbo.size:
            self.vbo.release()
            self.vbo = self.ctx.buffer(reserve=max(vbo_size, self.initial_reserve), dynamic=True)
            grown = True

        if ibo_size > self.ibo.size:
            self.ibo.release()
            self.ibo = self.ctx.buffer(reserve=max(ibo_size, self.initial_reserve), dynamic=True)
            grown = True

        # VAO は VBO/IBO が差し替わったときだけ張り直す
        if grown:
            self.vao.release()
            self.vao = self._build_vao()

    def upload(self, vertices: np.ndarray, indices: np.ndarray) -> None:
        """頂点 `(N, 2) float32` とインデックス `uint32` を GPU へ送る。"""
        self._ensure_capacity(vertices.nbytes, indices.nbytes)
        self.vbo.orphan()
        self.vbo.write(vertices.tobytes())
        self.ibo.orphan()
        self.ibo.write(indices.tobytes())
        self.index_count = len(indices)

    def render(self, mode: int) -> None:
        if self.index_count > 0:
            self.vao.render(mode, vertices=self.index_count)

    def release(self) -> None:
        """GPUのメモリを解放する（終了時に使う）"""
        self.vbo.release()
        self.ibo.release()
        self.vao.release()
