#!/usr/bin/env python3
"""Visual constants shared across all renderers."""

from __future__ import annotations

from typing import Dict, Sequence, Tuple

from .types import ColorRGB


class ViewConstants:
    """Mixin providing every visual / layout constant."""

    BG_COLOR: ColorRGB = (15, 23, 42)
    SKY_COLORS: Dict[str, ColorRGB] = {
        "dry": (125, 190, 240),
        "wet": (100, 116, 139),
        "icy": (203, 230, 245),
    }
    GROUND_COLORS: Dict[str, ColorRGB] = {
        "dry": (100, 116, 139),
        "wet": (71, 85, 105),
        "icy": (186, 230, 253),
    }
    BRAKE_LINE_COLOR: ColorRGB = (239, 68, 68)
    DUMMY_COLOR: ColorRGB = (251, 191, 36)
    CAR_BODY_COLOR: ColorRGB = (59, 130, 246)
    CAR_EDGE_COLOR: ColorRGB = (30, 64, 175)
    CAR_ROOF_COLOR: ColorRGB = (37, 99, 235)
    CAR_WINDOW_COLOR: ColorRGB = (191, 219, 254)
    HEADLIGHT_COLOR: ColorRGB = (254, 240, 138)
    WHEEL_COLOR: ColorRGB = (31, 41, 55)
    HUBCAP_COLOR: ColorRGB = (107, 114, 128)

    HUD_BG_COLOR: ColorRGB = (22, 22, 22)
    HUD_BORDER_COLOR: ColorRGB = (42, 42, 42)
    TEXT_COLOR: ColorRGB = (230, 230, 235)
    MUTED_TEXT_COLOR: ColorRGB = (140, 140, 150)
    BUTTON_COLOR: ColorRGB = (51, 65, 85)
    BUTTON_ACTIVE_COLOR: ColorRGB = (37, 99, 235)
    BUTTON_DISABLED_COLOR: ColorRGB = (38, 38, 44)
    SAFE_COLOR: ColorRGB = (34, 197, 94)
    CRASH_COLOR: ColorRGB = (239, 68, 68)

    RESULT_OVERLAY_ALPHA = 225
    BRAKE_LINE_ALPHA = 180

    STRIP_HEIGHT = 400
    PANEL_PADDING = 16
    BUTTON_W = 92
    BUTTON_H = 32
    BUTTON_GAP = 8
    HISTORY_MAX_ROWS = 8
    METRE_TICK_EVERY = 10  # metres between distance marks

    SPEED_BUTTONS: Sequence[Tuple[str, str]] = (
        ("30 km/h", "low"),
        ("60 km/h", "medium"),
        ("100 km/h", "high"),
    )
    SURFACE_BUTTONS: Sequence[Tuple[str, str]] = (
        ("Dry", "dry"),
        ("Wet", "wet"),
        ("Icy", "icy"),
    )

    SCREENSHOT_DIR = "screenshots"
