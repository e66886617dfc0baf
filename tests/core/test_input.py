"""
engine.core.input モジュールのテスト（ウィンドウ非依存）
"""

from __future__ import annotations

import pytest

from epidraw.engine.core.events import AddPoint
from epidraw.engine.core.input import PointerCapture, pointer_to_normalized


def test_pointer_to_normalized_corners() -> None:
    assert pointer_to_normalized(0, 0, 800, 600) == (-1.0, -1.0)
    assert pointer_to_normalized(800, 600, 800, 600) == (1.0, 1.0)
    assert pointer_to_normalized(400, 300, 800, 600) == (0.0, 0.0)


def test_pointer_to_normalized_y_down() -> None:
    assert pointer_to_normalized(0, 0, 100, 100, y_down=True) == (-1.0, 1.0)


def test_pointer_to_normalized_rejects_empty_viewport() -> None:
    with pytest.raises(ValueError):
        pointer_to_normalized(0, 0, 0, 100)


def test_capture_emits_on_press_and_drag() -> None:
    events: list = []
    cap = PointerCapture(events.append, (200, 100))
    cap.drag(10, 10)  # 押下前のドラッグは無視
    cap.press(100, 50)
    cap.drag(200, 100)
    cap.release()
    cap.drag(0, 0)
    assert events == [AddPoint(0.0, 0.0), AddPoint(1.0, 1.0)]
    assert not cap.pressed


def test_capture_click_only_mode() -> None:
    events: list = []
    cap = PointerCapture(events.append, (100, 100), capture_drag=False)
    cap.press(50, 50)
    cap.drag(60, 60)
    assert events == [AddPoint(0.0, 0.0)]


def test_capture_resize_updates_mapping() -> None:
    events: list = []
    cap = PointerCapture(events.append, (100, 100))
    cap.resize(200, 200)
    cap.press(200, 0)
    assert events == [AddPoint(1.0, -1.0)]
