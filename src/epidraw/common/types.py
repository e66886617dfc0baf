"""
どこで: `epidraw.common` の型定義。
何を: Vec2/RGBA などの軽量エイリアス（組込みジェネリックで記述）。
"""

Vec2 = tuple[float, float]
RGBA = tuple[float, float, float, float]


__all__ = ["Vec2", "RGBA"]
