"""
Preview zoom state: 30% to 300% in 10% steps.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from dataclasses import dataclass

MIN_ZOOM = 0.3
MAX_ZOOM = 3.0
ZOOM_STEP = 0.1
DEFAULT_ZOOM = 1.0


@dataclass
class ZoomState:
    level: float = DEFAULT_ZOOM
    min_zoom: float = MIN_ZOOM
    max_zoom: float = MAX_ZOOM
    step: float = ZOOM_STEP

    @property
    def can_zoom_in(self) -> bool:
        return self.level < self.max_zoom

    @property
    def can_zoom_out(self) -> bool:
        return self.level > self.min_zoom

    @property
    def percentage(self) -> int:
        return round(self.level * 100)

    @property
    def label(self) -> str:
        return f"{self.percentage}%"

    def zoom_in(self) -> float:
        # Rounded so repeated steps land exactly on 0.1 multiples
        self.level = round(min(self.level + self.step, self.max_zoom), 2)
        return self.level

    def zoom_out(self) -> float:
        self.level = round(max(self.level - self.step, self.min_zoom), 2)
        return self.level

    def reset(self) -> float:
        self.level = DEFAULT_ZOOM
        return self.level
