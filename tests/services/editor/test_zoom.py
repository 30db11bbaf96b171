"""
Zoom State Tests
================

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

from services.editor.zoom import ZoomState


def test_zoom_in_and_out_by_step():
    zoom = ZoomState()

    assert zoom.zoom_in() == 1.1
    assert zoom.zoom_out() == 1.0
    assert zoom.zoom_out() == 0.9
    assert zoom.label == "90%"


def test_zoom_stops_at_bounds():
    zoom = ZoomState()

    for _ in range(40):
        zoom.zoom_in()
    assert zoom.level == 3.0
    assert not zoom.can_zoom_in

    for _ in range(40):
        zoom.zoom_out()
    assert zoom.level == 0.3
    assert not zoom.can_zoom_out
    assert zoom.percentage == 30


def test_reset():
    zoom = ZoomState(level=2.4)

    assert zoom.reset() == 1.0
    assert zoom.label == "100%"
