PRIMITIVE_RESTART_INDEX = 0xFFFFFFFF

# ウィンドウ既定値（configs/default.yaml が無い場合のフォールバック）
DEFAULT_WINDOW_SIZE = (800, 600)
DEFAULT_FPS = 60

# 1 フレームで進める時間の上限 [sec]（停止復帰時の飛びを抑える）
MAX_FRAME_DT = 0.25
