#!/usr/bin/env python3

from .types import ButtonRect, Camera, ColorRGB, ColorRGBA
from .constants import ViewConstants
from .draw_scene import SceneRenderer
from .draw_vehicles import VehicleRenderer
from .hud import HudRenderer
from .pygame_view import PygameBrakingView, run_pygame_view

__all__ = [
    "ColorRGB",
    "ColorRGBA",
    "Camera",
    "ButtonRect",
    "ViewConstants",
    "SceneRenderer",
    "VehicleRenderer",
    "HudRenderer",
    "PygameBrakingView",
    "run_pygame_view",
]
