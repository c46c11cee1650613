#!/usr/bin/env python3
"""
Main view class: combines all UI mixins into one runnable Pygame window.

Module layout
─────────────
    ui/
    ├── types.py           – ColorRGB, ColorRGBA, Camera, ButtonRect
    ├── constants.py       – ViewConstants mixin (all class-level constants)
    ├── helpers.py         – text / alpha drawing / font utilities
    ├── draw_scene.py      – SceneRenderer mixin (sky, ground, brake line, dummy)
    ├── draw_vehicles.py   – VehicleRenderer mixin (car sprite)
    ├── hud.py             – HudRenderer mixin  (buttons, result, history, debug, splash)
    └── pygame_view.py     – PygameBrakingView (this file – main loop)
"""

from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

import pygame

from .constants import ViewConstants
from .draw_scene import SceneRenderer
from .draw_vehicles import VehicleRenderer
from .helpers import load_font
from .hud import HudRenderer
from .types import ButtonRect, Camera

log = logging.getLogger("ui")


class PygameBrakingView(
    ViewConstants,
    SceneRenderer,
    VehicleRenderer,
    HudRenderer,
):
    """Braking-distance visualiser powered by Pygame.

    Inherits drawing logic from focused mixin modules so each file
    stays small and single-purpose.  All simulation state is read from
    the bridge through ``get_snapshot`` / ``get_result_card`` /
    ``get_history_rows``; user input is forwarded as bridge commands.
    """

    _SPEED_KEYS = {pygame.K_1: "low", pygame.K_2: "medium", pygame.K_3: "high"}
    _SURFACE_KEYS = {pygame.K_q: "dry", pygame.K_w: "wet", pygame.K_e: "icy"}

    def __init__(
        self,
        bus: Any,
        width: int = 1100,
        height: int = 640,
        fps: int = 60,
        obstacle_choices: Sequence[float] = (200.0, 400.0, 600.0, 800.0),
    ):
        self.bus = bus
        self.width = width
        self.height = height
        self.fps = fps
        self.obstacle_choices = tuple(obstacle_choices)

        self.screen: Optional[pygame.Surface] = None
        self.clock: Optional[pygame.time.Clock] = None
        self.font_small: Optional[pygame.font.Font] = None
        self.font_tiny: Optional[pygame.font.Font] = None
        self.font_title: Optional[pygame.font.Font] = None

        self.camera = Camera(screen_w=width, strip_h=self.STRIP_HEIGHT)
        self.time_seconds = 0.0
        self.buttons: List[ButtonRect] = []

        # UI state
        self.paused = False
        self.show_debug = False
        self.show_splash = True
        self._screenshot_flash_until = 0.0

    # ------------------------------------------------------------------ #
    #  Resize                                                              #
    # ------------------------------------------------------------------ #
    def _handle_resize(self, new_w: int, new_h: int) -> None:
        self.width = max(800, new_w)
        self.height = max(self.STRIP_HEIGHT + 200, new_h)
        self.camera.screen_w = self.width
        self.screen = pygame.display.set_mode(
            (self.width, self.height), pygame.RESIZABLE
        )

    # ------------------------------------------------------------------ #
    #  Screenshot                                                          #
    # ------------------------------------------------------------------ #
    def _take_screenshot(self) -> None:
        if self.screen is None:
            return
        os.makedirs(self.SCREENSHOT_DIR, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = os.path.join(self.SCREENSHOT_DIR, f"brake_{stamp}.png")
        pygame.image.save(self.screen, path)
        log.info("screenshot saved to %s", path)
        self._screenshot_flash_until = self.time_seconds + 0.35

    # ------------------------------------------------------------------ #
    #  Commands                                                            #
    # ------------------------------------------------------------------ #
    def _start(self) -> None:
        if self.bus.start_run():
            self._set_paused(False)

    def _reset(self) -> None:
        self.bus.reset()
        self._set_paused(False)

    def _set_paused(self, paused: bool) -> None:
        self.paused = paused
        self.bus.set_paused(paused)

    def _on_click(self, mx: int, my: int) -> None:
        for button in self.buttons:
            if not button.enabled or not button.contains(mx, my):
                continue
            if button.group == "speed":
                self.bus.select(speed_class=button.value)
            elif button.group == "surface":
                self.bus.select(surface=button.value)
            elif button.group == "distance":
                self.bus.select(obstacle_distance=button.value)
            elif button.group == "start":
                self._start()
            elif button.group == "reset":
                self._reset()
            return

    def _on_key(self, key: int) -> None:
        if key == pygame.K_SPACE:
            self._start()
        elif key == pygame.K_r:
            self._reset()
        elif key in self._SPEED_KEYS:
            self.bus.select(speed_class=self._SPEED_KEYS[key])
        elif key in self._SURFACE_KEYS:
            self.bus.select(surface=self._SURFACE_KEYS[key])
        elif key == pygame.K_p:
            self._set_paused(not self.paused)
        elif key == pygame.K_F3:
            self.show_debug = not self.show_debug
        elif key == pygame.K_F12:
            self._take_screenshot()

    # ------------------------------------------------------------------ #
    #  Main loop                                                           #
    # ------------------------------------------------------------------ #
    def run(self) -> None:
        pygame.init()
        pygame.display.set_caption("BRAKING DISTANCE SIM")
        self.screen = pygame.display.set_mode(
            (self.width, self.height), pygame.RESIZABLE
        )
        self.clock = pygame.time.Clock()
        self.font_small = load_font(14)
        self.font_tiny = load_font(11)
        self.font_title = load_font(28, bold=True)

        running = True
        while running:
            delta_time = self.clock.tick(self.fps) / 1000.0
            self.time_seconds += delta_time

            snapshot: Dict[str, Any] = self.bus.get_snapshot()
            self.buttons = self.layout_buttons(snapshot)

            # ---- events ------------------------------------------------- #
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.VIDEORESIZE:
                    self._handle_resize(event.w, event.h)
                elif event.type == pygame.KEYDOWN:
                    if self.show_splash:
                        self.show_splash = False
                        continue
                    self._on_key(event.key)
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    if self.show_splash:
                        self.show_splash = False
                        continue
                    self._on_click(*event.pos)

            # ---- splash ------------------------------------------------- #
            if self.show_splash:
                self.screen.fill(self.BG_COLOR)
                self._draw_splash(self.screen, self.time_seconds)
                pygame.display.flip()
                continue

            # ---- render ------------------------------------------------- #
            snapshot = self.bus.get_snapshot()
            self.buttons = self.layout_buttons(snapshot)
            self.camera.follow(snapshot.get("camera_x", 0.0))

            self.screen.fill(self.BG_COLOR)
            self.draw_sky(self.screen, snapshot)
            self.draw_ground(self.screen, snapshot, self.camera)
            self.draw_distance_marks(self.screen, snapshot, self.camera)
            self.draw_brake_line(self.screen, snapshot, self.camera)
            self.draw_dummy(self.screen, snapshot, self.camera)
            self.draw_car(self.screen, snapshot, self.camera)
            self.draw_status(self.screen, snapshot)

            # HUD layers (drawn on top)
            self.draw_result_card(self.screen, self.bus.get_result_card())
            self.draw_buttons(self.screen, self.buttons)
            self.draw_history(self.screen, self.bus.get_history_rows())
            if self.show_debug:
                self._draw_debug_overlay(self.screen, snapshot, delta_time)
            if self.paused:
                self._draw_pause_banner(self.screen)
            if self.time_seconds < self._screenshot_flash_until:
                flash = pygame.Surface(
                    (self.width, self.height), pygame.SRCALPHA
                )
                flash.fill((255, 255, 255, 40))
                self.screen.blit(flash, (0, 0))

            pygame.display.flip()

        pygame.quit()


# ---------------------------------------------------------------------- #
#  Convenience entry point                                                 #
# ---------------------------------------------------------------------- #
def run_pygame_view(
    bus: Any,
    width: int = 1100,
    height: int = 640,
    fps: int = 60,
    obstacle_choices: Sequence[float] = (200.0, 400.0, 600.0, 800.0),
) -> None:
    view = PygameBrakingView(
        bus=bus, width=width, height=height, fps=fps, obstacle_choices=obstacle_choices
    )
    view.run()


if __name__ == "__main__":
    raise SystemExit(
        "pygame_view.py needs a SimBridge. Run `python main.py` "
        "or call run_pygame_view(your_bridge)."
    )
