"""
どこで: `epidraw.engine.render.shader`
何を: 太線描画用（ジオメトリシェーダで線分を四角形に展開）と、軌跡テクスチャ合成用の GLSL。
"""

from __future__ import annotations

from typing import Any

LINE_VERTEX = """
#version 330
in vec2 in_vert;
void main() {
    gl_Position = vec4(in_vert, 0.0, 1.0);
}
"""

LINE_GEOMETRY = """
#version 330
layout(lines) in;
layout(triangle_strip, max_vertices = 4) out;
uniform float line_thickness;
uniform vec2 aspect;
void main() {
    vec2 p0 = gl_in[0].gl_Position.xy;
    vec2 p1 = gl_in[1].gl_Position.xy;
    vec2 dir = (p1 - p0) * aspect;
    float len = length(dir);
    if (len < 1e-9) {
        return;
    }
    vec2 normal = vec2(-dir.y, dir.x) / len / aspect * line_thickness;
    gl_Position = vec4(p0 + normal, 0.0, 1.0); EmitVertex();
    gl_Position = vec4(p0 - normal, 0.0, 1.0); EmitVertex();
    gl_Position = vec4(p1 + normal, 0.0, 1.0); EmitVertex();
    gl_Position = vec4(p1 - normal, 0.0, 1.0); EmitVertex();
    EndPrimitive();
}
"""

LINE_FRAGMENT = """
#version 330
uniform vec4 color;
out vec4 frag_color;
void main() {
    frag_color = color;
}
"""

BLIT_VERTEX = """
#version 330
in vec2 in_vert;
out vec2 uv;
void main() {
    uv = in_vert * 0.5 + 0.5;
    gl_Position = vec4(in_vert, 0.0, 1.0);
}
"""

BLIT_FRAGMENT = """
#version 330
uniform sampler2D trace_texture;
in vec2 uv;
out vec4 frag_color;
void main() {
    frag_color = texture(trace_texture, uv);
}
"""


class Shader:
    """プログラム生成の入口。"""

    @staticmethod
    def create_line_program(ctx: Any) -> Any:
        return ctx.program(
            vertex_shader=LINE_VERTEX,
            geometry_shader=LINE_GEOMETRY,
            fragment_shader=LINE_FRAGMENT,
        )

    @staticmethod
    def create_blit_program(ctx: Any) -> Any:
        return ctx.program(vertex_shader=BLIT_VERTEX, fragment_shader=BLIT_FRAGMENT)


__all__ = ["Shader"]
