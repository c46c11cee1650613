#!/usr/bin/env python3
"""Car sprite and motion cues (mixin)."""

from __future__ import annotations

import math
from typing import Any, Mapping

import pygame

from .types import Camera


class VehicleRenderer:
    """Mixin that draws the test vehicle."""

    def draw_car(
        self, surface: pygame.Surface, snapshot: Mapping[str, Any], camera: Camera
    ) -> None:
        """Draw the car centred on its body position.

        Sprite offsets are relative to the body centre for an 80 x 40 body:
        lower chassis, cabin with two windows, headlights and two wheels.
        """
        car = snapshot.get("car")
        if not car:
            return
        cx, cy = camera.world_to_screen(car["x"], car["y"])
        w, h = car["w"], car["h"]
        sprite = pygame.Surface((int(w) + 4, int(h) + 40), pygame.SRCALPHA)
        ox, oy = sprite.get_width() / 2, sprite.get_height() / 2

        def rect(x: float, y: float, rw: float, rh: float) -> pygame.Rect:
            return pygame.Rect(int(ox + x), int(oy + y), int(rw), int(rh))

        chassis = rect(-w / 2, -h / 2, w, h * 0.625)
        pygame.draw.rect(sprite, self.CAR_BODY_COLOR, chassis)
        pygame.draw.rect(sprite, self.CAR_EDGE_COLOR, chassis, width=2)

        cabin = rect(-25, -35, 50, 15)
        pygame.draw.rect(sprite, self.CAR_ROOF_COLOR, cabin)
        pygame.draw.rect(sprite, self.CAR_EDGE_COLOR, cabin, width=2)
        pygame.draw.rect(sprite, self.CAR_WINDOW_COLOR, rect(-22, -33, 20, 11))
        pygame.draw.rect(sprite, self.CAR_WINDOW_COLOR, rect(2, -33, 20, 11))

        pygame.draw.rect(sprite, self.HEADLIGHT_COLOR, rect(w / 2 - 5, -15, 5, 8))
        pygame.draw.rect(sprite, self.HEADLIGHT_COLOR, rect(w / 2 - 5, -5, 5, 8))

        for wx in (25, -25):
            centre = (int(ox + wx), int(oy + 5))
            pygame.draw.circle(sprite, self.WHEEL_COLOR, centre, 8)
            pygame.draw.circle(sprite, (0, 0, 0), centre, 8, 1)
            pygame.draw.circle(sprite, self.HUBCAP_COLOR, centre, 3)

        angle = car.get("angle", 0.0)
        if abs(angle) > 1e-6:
            sprite = pygame.transform.rotate(sprite, -math.degrees(angle))
        surface.blit(sprite, sprite.get_rect(center=(int(cx), int(cy))))

        if snapshot.get("braking") and snapshot.get("running"):
            self._draw_brake_lights(surface, cx - w / 2, cy)

    def _draw_brake_lights(self, surface: pygame.Surface, rear_x: float, cy: float) -> None:
        pygame.draw.rect(surface, self.CRASH_COLOR, (int(rear_x) - 2, int(cy) - 14, 4, 8))
