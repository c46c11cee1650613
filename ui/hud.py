#!/usr/bin/env python3
"""Control panel, result card, history table, debug overlay, splash screen,
and pause banner (mixin)."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence

import pygame

from sim.history import CardStyle, HistoryRow, ResultCard

from .helpers import draw_alpha_rect, render_text
from .types import ButtonRect


class HudRenderer:
    """Mixin that draws every overlay / HUD element."""

    # ------------------------------------------------------------------ #
    #  Control buttons                                                     #
    # ------------------------------------------------------------------ #

    def layout_buttons(self, snapshot: Mapping[str, Any]) -> List[ButtonRect]:
        """Rebuild the clickable button rects for the current snapshot.

        Selection buttons and Start are disabled while a run is active;
        Reset is always enabled.
        """
        running = bool(snapshot.get("running"))
        x0 = self.PANEL_PADDING
        y = self.STRIP_HEIGHT + self.PANEL_PADDING
        step_x = self.BUTTON_W + self.BUTTON_GAP
        step_y = self.BUTTON_H + self.BUTTON_GAP
        buttons: List[ButtonRect] = []

        for col, (label, value) in enumerate(self.SPEED_BUTTONS):
            buttons.append(ButtonRect(
                label, "speed", value, x0 + col * step_x, y, self.BUTTON_W, self.BUTTON_H,
                enabled=not running, active=snapshot.get("speed_class") == value,
            ))
        y += step_y
        for col, (label, value) in enumerate(self.SURFACE_BUTTONS):
            buttons.append(ButtonRect(
                label, "surface", value, x0 + col * step_x, y, self.BUTTON_W, self.BUTTON_H,
                enabled=not running, active=snapshot.get("surface") == value,
            ))
        y += step_y
        upm = snapshot.get("units_per_metre", 10.0)
        for col, gap in enumerate(self.obstacle_choices):
            buttons.append(ButtonRect(
                f"{gap / upm:.0f} m", "distance", gap,
                x0 + col * step_x, y, self.BUTTON_W, self.BUTTON_H,
                enabled=not running,
                active=abs(snapshot.get("obstacle_distance", -1.0) - gap) < 1e-9,
            ))
        y += step_y
        buttons.append(ButtonRect(
            "Start", "start", None, x0, y, self.BUTTON_W, self.BUTTON_H, enabled=not running,
        ))
        buttons.append(ButtonRect(
            "Reset", "reset", None, x0 + step_x, y, self.BUTTON_W, self.BUTTON_H,
        ))
        return buttons

    def draw_buttons(self, surface: pygame.Surface, buttons: Sequence[ButtonRect]) -> None:
        if self.font_small is None:
            return
        for button in buttons:
            if not button.enabled:
                color = self.BUTTON_DISABLED_COLOR
            elif button.active:
                color = self.BUTTON_ACTIVE_COLOR
            else:
                color = self.BUTTON_COLOR
            rect = pygame.Rect(button.x, button.y, button.w, button.h)
            pygame.draw.rect(surface, color, rect, border_radius=5)
            pygame.draw.rect(surface, self.HUD_BORDER_COLOR, rect, width=1, border_radius=5)
            text_color = self.TEXT_COLOR if button.enabled else self.MUTED_TEXT_COLOR
            render_text(surface, self.font_small, button.label, rect.center,
                        text_color, anchor="center")

    # ------------------------------------------------------------------ #
    #  Result card                                                         #
    # ------------------------------------------------------------------ #

    def draw_result_card(self, surface: pygame.Surface, card: Optional[ResultCard]) -> None:
        if card is None or self.font_title is None or self.font_small is None:
            return
        accent = self.CRASH_COLOR if card.style is CardStyle.CRASH else self.SAFE_COLOR
        rect = pygame.Rect(0, 0, 360, 150)
        rect.center = (self.width // 2, self.STRIP_HEIGHT // 2)
        draw_alpha_rect(surface, (*self.HUD_BG_COLOR, self.RESULT_OVERLAY_ALPHA), rect, 10)
        pygame.draw.rect(surface, accent, rect, width=2, border_radius=10)
        render_text(surface, self.font_title, card.title,
                    (rect.centerx, rect.y + 18), accent, anchor="midtop")
        render_text(surface, self.font_small, card.message,
                    (rect.centerx, rect.y + 64), self.TEXT_COLOR, anchor="midtop")
        render_text(surface, self.font_small, card.value_text,
                    (rect.centerx, rect.y + 92), self.TEXT_COLOR, anchor="midtop")

    # ------------------------------------------------------------------ #
    #  History table                                                       #
    # ------------------------------------------------------------------ #

    def draw_history(self, surface: pygame.Surface, rows: Sequence[HistoryRow]) -> None:
        """Newest-first run log to the right of the buttons."""
        if self.font_small is None or self.font_tiny is None:
            return
        x = self.PANEL_PADDING + 4 * (self.BUTTON_W + self.BUTTON_GAP) + 24
        y = self.STRIP_HEIGHT + self.PANEL_PADDING
        panel = pygame.Rect(x, y, self.width - x - self.PANEL_PADDING,
                            self.height - y - self.PANEL_PADDING)
        if panel.w <= 0 or panel.h <= 0:
            return
        pygame.draw.rect(surface, self.HUD_BG_COLOR, panel, border_radius=6)
        pygame.draw.rect(surface, self.HUD_BORDER_COLOR, panel, width=1, border_radius=6)

        cols = (10, 110, 200, 300)
        header = ("SPEED", "SURFACE", "DISTANCE", "OUTCOME")
        for cx, text in zip(cols, header):
            render_text(surface, self.font_tiny, text,
                        (panel.x + cx, panel.y + 8), self.MUTED_TEXT_COLOR)

        ry = panel.y + 28
        if not rows:
            render_text(surface, self.font_small, "No runs yet",
                        (panel.x + 10, ry), self.MUTED_TEXT_COLOR)
            return
        for row in rows[: self.HISTORY_MAX_ROWS]:
            outcome_color = self.CRASH_COLOR if row.crashed else self.SAFE_COLOR
            cells = (row.speed_label, row.surface_label, row.distance_label, row.outcome_label)
            for i, (cx, text) in enumerate(zip(cols, cells)):
                color = outcome_color if i == 3 else self.TEXT_COLOR
                render_text(surface, self.font_small, text, (panel.x + cx, ry), color)
            ry += 20
            if ry > panel.bottom - 18:
                break

    # ------------------------------------------------------------------ #
    #  Speed readout                                                       #
    # ------------------------------------------------------------------ #

    def draw_status(self, surface: pygame.Surface, snapshot: Mapping[str, Any]) -> None:
        if self.font_small is None or self.font_tiny is None:
            return
        car = snapshot.get("car") or {}
        upm = snapshot.get("units_per_metre", 10.0)
        gained = max(0.0, car.get("x", 0.0) - snapshot.get("brake_line_x", 0.0)) / upm
        lines = [
            f"PHASE  {snapshot.get('phase', '?')}",
            f"SPEED  {car.get('vx', 0.0):.2f} u/tick",
            f"PAST LINE  {gained:.1f} m",
        ]
        y = 12
        for line in lines:
            render_text(surface, self.font_small, line,
                        (self.width - 12, y), (20, 20, 20), anchor="topright")
            y += 18

    # ------------------------------------------------------------------ #
    #  Splash screen                                                       #
    # ------------------------------------------------------------------ #

    def _draw_splash(self, surface: pygame.Surface, tick: float) -> None:
        if self.font_title is None or self.font_small is None:
            return
        render_text(surface, self.font_title, "BRAKING DISTANCE SIM",
                    (self.width // 2, self.height // 2 - 30), (240, 240, 240), anchor="center")
        if int(tick * 2) % 2 == 0:
            render_text(surface, self.font_small, "Press any key to start",
                        (self.width // 2, self.height // 2 + 20), (160, 160, 160),
                        anchor="center")
        lines = [
            "SPACE  Start run",
            "R      Reset",
            "1 2 3  Speed 30 / 60 / 100 km/h",
            "Q W E  Dry / Wet / Icy",
            "P      Pause/Resume",
            "F3     Debug overlay",
            "F12    Screenshot",
        ]
        y = self.height // 2 + 60
        for line in lines:
            if self.font_tiny:
                render_text(surface, self.font_tiny, line,
                            (self.width // 2, y), (100, 100, 100), anchor="center")
                y += 16

    # ------------------------------------------------------------------ #
    #  Debug / FPS overlay                                                 #
    # ------------------------------------------------------------------ #

    def _draw_debug_overlay(
        self, surface: pygame.Surface, snapshot: Mapping[str, Any], dt: float
    ) -> None:
        if self.font_tiny is None:
            return
        fps = self.clock.get_fps() if self.clock else 0.0
        car = snapshot.get("car") or {}
        lines = [
            f"FPS  {fps:.1f}",
            f"DT   {dt * 1000:.1f} ms",
            f"TICK {snapshot.get('ticks', 0)}",
            f"X    {car.get('x', 0.0):.2f}",
            f"VX   {car.get('vx', 0.0):.4f}",
            f"CAM  {snapshot.get('camera_x', 0.0):.1f}",
            f"RES  {self.width}x{self.height}",
        ]
        x, y = 16, 16
        for line in lines:
            render_text(surface, self.font_tiny, line, (x, y), (0, 255, 127))
            y += 14

    # ------------------------------------------------------------------ #
    #  Pause banner                                                        #
    # ------------------------------------------------------------------ #

    def _draw_pause_banner(self, surface: pygame.Surface) -> None:
        draw_alpha_rect(surface, (0, 0, 0, 100), pygame.Rect(0, 0, self.width, self.STRIP_HEIGHT))
        if self.font_title:
            render_text(surface, self.font_title, "PAUSED",
                        (self.width // 2, self.STRIP_HEIGHT // 2), (220, 220, 220),
                        anchor="center")
