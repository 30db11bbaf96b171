"""
Pane Layout
===========

Visibility and width of the editor/preview split.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from enum import Enum

MIN_LEFT_WIDTH = 20.0
MAX_LEFT_WIDTH = 80.0
DEFAULT_LEFT_WIDTH = 50.0


class PaneVisibility(str, Enum):
    """Which panes of the split are shown"""
    BOTH = "both"
    LEFT_ONLY = "left"
    RIGHT_ONLY = "right"


def toggle_left(visibility: PaneVisibility) -> PaneVisibility:
    """Left pane button: hide the left pane, or restore both."""
    if visibility == PaneVisibility.BOTH:
        return PaneVisibility.RIGHT_ONLY
    return PaneVisibility.BOTH


def toggle_right(visibility: PaneVisibility) -> PaneVisibility:
    """Right pane button: hide the right pane, or restore both."""
    if visibility == PaneVisibility.BOTH:
        return PaneVisibility.LEFT_ONLY
    return PaneVisibility.BOTH


def clamp_width(width: float) -> float:
    return max(MIN_LEFT_WIDTH, min(MAX_LEFT_WIDTH, width))


class SplitLayout:
    """Resizable two-pane split. Widths are percentages of the container."""

    def __init__(self, initial_left_width: float = DEFAULT_LEFT_WIDTH):
        self.left_width = clamp_width(initial_left_width)
        self.visibility = PaneVisibility.BOTH
        self.dragging = False

    @property
    def right_width(self) -> float:
        return 100.0 - self.left_width

    @property
    def left_visible(self) -> bool:
        return self.visibility != PaneVisibility.RIGHT_ONLY

    @property
    def right_visible(self) -> bool:
        return self.visibility != PaneVisibility.LEFT_ONLY

    def toggle_left(self) -> PaneVisibility:
        self.visibility = toggle_left(self.visibility)
        return self.visibility

    def toggle_right(self) -> PaneVisibility:
        self.visibility = toggle_right(self.visibility)
        return self.visibility

    def start_drag(self) -> bool:
        """The divider only exists while both panes are shown."""
        self.dragging = self.visibility == PaneVisibility.BOTH
        return self.dragging

    def drag_to(self, pointer_x: float, container_left: float, container_width: float) -> float:
        """Move the divider to the pointer; ignored unless dragging in BOTH."""
        if not self.dragging or self.visibility != PaneVisibility.BOTH or container_width <= 0:
            return self.left_width
        self.left_width = clamp_width((pointer_x - container_left) / container_width * 100)
        return self.left_width

    def end_drag(self) -> None:
        self.dragging = False
