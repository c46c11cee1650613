#!/usr/bin/env python3
"""Sky, ground, brake line, distance marks and crash-test dummy (mixin)."""

from __future__ import annotations

import math
from typing import Any, Mapping

import pygame

from .helpers import draw_alpha_rect, render_text
from .types import Camera


class SceneRenderer:
    """Mixin that draws the static parts of the braking strip."""

    # ------------------------------------------------------------------ #
    #  Background / ground                                                 #
    # ------------------------------------------------------------------ #

    def draw_sky(self, surface: pygame.Surface, snapshot: Mapping[str, Any]) -> None:
        sky = self.SKY_COLORS.get(snapshot.get("surface", "dry"), self.SKY_COLORS["dry"])
        pygame.draw.rect(surface, sky, (0, 0, self.width, self.STRIP_HEIGHT))

    def draw_ground(
        self, surface: pygame.Surface, snapshot: Mapping[str, Any], camera: Camera
    ) -> None:
        ground = snapshot.get("ground")
        if not ground:
            return
        color = self.GROUND_COLORS.get(snapshot.get("surface", "dry"), self.GROUND_COLORS["dry"])
        top = ground["y"] - ground["h"] / 2
        x0, _ = camera.world_to_screen(ground["x0"], top)
        x1, _ = camera.world_to_screen(ground["x1"], top)
        left = max(0, int(x0))
        right = min(self.width, int(x1))
        if right > left:
            pygame.draw.rect(surface, color, (left, int(top), right - left, int(ground["h"])))

        if snapshot.get("surface") == "icy":
            # ice sheen
            draw_alpha_rect(surface, (255, 255, 255, 70),
                            pygame.Rect(left, int(top), max(0, right - left), 4))

    def draw_distance_marks(
        self, surface: pygame.Surface, snapshot: Mapping[str, Any], camera: Camera
    ) -> None:
        """Metre marks measured from the brake line."""
        ground = snapshot.get("ground")
        if not ground or self.font_tiny is None:
            return
        upm = snapshot["units_per_metre"]
        origin = snapshot["brake_line_x"]
        step = self.METRE_TICK_EVERY * upm
        top = ground["y"] - ground["h"] / 2
        first = math.floor((camera.world_x - origin) / step)
        last = math.ceil((camera.world_x + self.width - origin) / step)
        for i in range(max(0, first), last + 1):
            wx = origin + i * step
            sx, _ = camera.world_to_screen(wx, top)
            pygame.draw.line(surface, self.MUTED_TEXT_COLOR, (sx, top), (sx, top + 8), 1)
            render_text(surface, self.font_tiny, f"{i * self.METRE_TICK_EVERY}m",
                        (int(sx), int(top + 10)), self.MUTED_TEXT_COLOR, anchor="midtop")

    # ------------------------------------------------------------------ #
    #  Brake line                                                          #
    # ------------------------------------------------------------------ #

    def draw_brake_line(
        self, surface: pygame.Surface, snapshot: Mapping[str, Any], camera: Camera
    ) -> None:
        line = snapshot.get("brake_line")
        if not line:
            return
        x0 = line["x"] - line["w"] / 2
        if not camera.visible(x0, x0 + line["w"]):
            return
        sx, _ = camera.world_to_screen(x0, 0)
        top = line["y"] - line["h"] / 2
        height = min(line["h"], self.STRIP_HEIGHT - top)
        rect = pygame.Rect(int(sx), int(top), int(line["w"]), int(height))
        draw_alpha_rect(surface, (*self.BRAKE_LINE_COLOR, self.BRAKE_LINE_ALPHA), rect)
        if self.font_tiny is not None:
            render_text(surface, self.font_tiny, "BRAKE",
                        (rect.centerx, 12), self.BRAKE_LINE_COLOR, anchor="midtop")

    # ------------------------------------------------------------------ #
    #  Dummy                                                               #
    # ------------------------------------------------------------------ #

    def draw_dummy(
        self, surface: pygame.Surface, snapshot: Mapping[str, Any], camera: Camera
    ) -> None:
        dummy = snapshot.get("obstacle")
        if not dummy:
            return
        x0 = dummy["x"] - dummy["w"] / 2
        if not camera.visible(x0, x0 + dummy["w"]):
            return
        sx, _ = camera.world_to_screen(x0, 0)
        top = dummy["y"] - dummy["h"] / 2
        body = pygame.Rect(int(sx), int(top), int(dummy["w"]), int(dummy["h"]))
        pygame.draw.rect(surface, self.DUMMY_COLOR, body)
        pygame.draw.rect(surface, (0, 0, 0), body, width=1)
        # head sits on the torso
        head_r = int(dummy["w"] / 2)
        pygame.draw.circle(surface, self.DUMMY_COLOR, (body.centerx, body.top - head_r), head_r)
        pygame.draw.circle(surface, (0, 0, 0), (body.centerx, body.top - head_r), head_r, 1)
