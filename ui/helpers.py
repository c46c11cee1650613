"""
ui/helpers.py
=============
Pure utility functions shared across UI modules:
alpha-surface drawing, text rendering and font loading.
"""

from __future__ import annotations

from typing import Tuple

import pygame


# ── Alpha drawing helpers ────────────────────────────────────────────────────

def draw_alpha_rect(
    target: pygame.Surface,
    color: Tuple[int, ...],
    rect: pygame.Rect,
    border_radius: int = 0,
) -> None:
    """Draw a semi-transparent rectangle (colour tuple with 4 channels)."""
    tmp = pygame.Surface((rect.w, rect.h), pygame.SRCALPHA)
    pygame.draw.rect(tmp, color, (0, 0, rect.w, rect.h), border_radius=border_radius)
    target.blit(tmp, rect.topleft)


# ── Text helper ──────────────────────────────────────────────────────────────

def render_text(
    surface: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    pos: Tuple[int, int],
    color: Tuple[int, ...] = (230, 230, 235),
    anchor: str = "topleft",
) -> pygame.Rect:
    """Render text with flexible *anchor* ('topleft', 'center', 'midright' …)."""
    img = font.render(text, True, color)
    rect = img.get_rect(**{anchor: pos})
    surface.blit(img, rect)
    return rect


def load_font(size: int, bold: bool = False) -> pygame.font.Font:
    """System sans font, falling back to pygame's default font."""
    font = pygame.font.SysFont("dejavusans,arial,helvetica", size, bold=bold)
    return font or pygame.font.Font(None, size)
