"""
どこで: `epidraw.common.settings`
何を: 起動時定数（最大点数・フーリエ次数・重複除去距離など）を環境変数から型付きで読み込む。
なぜ: 実行中に交渉しない定数を 1 箇所に集め、テストから差し替えられるようにするため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_float, env_int


@dataclass
class _Settings:
    # スケッチ
    MAX_POINTS: int = 128
    MIN_POINT_DISTANCE: float = 0.0
    POINT_RADIUS: float = 0.01

    # 解析
    FOURIER_DEGREE: int = 16

    # アニメーション/描画
    TIME_SCALE: float = 1.0
    CIRCLE_SAMPLES: int = 64
    CAPTURE_DRAG: bool = True


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - 点数/次数は下限丸め（最大点数は 3 以上、次数は 0 以上）。
    - 距離/半径/時間倍率は負値を 0 に丸める。
    """
    _settings.MAX_POINTS = env_int("EPI_MAX_POINTS", 128, min_value=3) or 128
    _settings.MIN_POINT_DISTANCE = env_float("EPI_MIN_POINT_DISTANCE", 0.0, min_value=0.0)
    _settings.POINT_RADIUS = env_float("EPI_POINT_RADIUS", 0.01, min_value=0.0)

    degree = env_int("EPI_FOURIER_DEGREE", 16, min_value=0)
    _settings.FOURIER_DEGREE = 16 if degree is None else degree

    _settings.TIME_SCALE = env_float("EPI_TIME_SCALE", 1.0, min_value=0.0)
    _settings.CIRCLE_SAMPLES = env_int("EPI_CIRCLE_SAMPLES", 64, min_value=8) or 64
    _settings.CAPTURE_DRAG = env_bool("EPI_CAPTURE_DRAG", True)


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
