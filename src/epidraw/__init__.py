"""
epidraw — 手描きの閉曲線をフーリエ級数（エピサイクル）で再描画するスケッチツール。

構成:
- `epidraw.engine.core`: 曲線バッファ・閉曲線化・フーリエ解析・エピサイクル合成・軌跡記録・セッション。
- `epidraw.engine.render`: ModernGL による線描画と軌跡テクスチャの蓄積。
- `epidraw.api`: ランナー `run_epicycles()`。
"""

__version__ = "0.1.0"
