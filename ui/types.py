"""
ui/types.py
===========
Lightweight data containers used across every UI module.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

ColorRGB = Tuple[int, int, int]
ColorRGBA = Tuple[int, int, int, int]


@dataclass
class Camera:
    """Side-scrolling viewport mapping simulation units to screen pixels.

    One simulation unit is one pixel; only the horizontal origin moves.
    """
    screen_w: int
    strip_h: int
    world_x: float = 0.0
    padding: float = 200.0

    def follow(self, anchor_x: float) -> None:
        """Keep *anchor_x* at :attr:`padding` pixels from the left edge."""
        self.world_x = anchor_x - self.padding

    def world_to_screen(self, wx: float, wy: float) -> Tuple[float, float]:
        return wx - self.world_x, wy

    def visible(self, x0: float, x1: float) -> bool:
        return x1 >= self.world_x and x0 <= self.world_x + self.screen_w


@dataclass
class ButtonRect:
    """Stores a button's screen rect, its group and value for click detection."""
    label: str
    group: str
    value: object
    x: int
    y: int
    w: int
    h: int
    enabled: bool = True
    active: bool = False

    def contains(self, mx: int, my: int) -> bool:
        return self.x <= mx <= self.x + self.w and self.y <= my <= self.y + self.h
