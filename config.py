#!/usr/bin/env python3
"""
config.py
=========
Application-wide configuration constants.

Values can be overridden via environment variables and command-line flags
(see :mod:`main`). This module is a thin, import-safe leaf and never
imports from other project packages.
"""

# ── Simulation defaults ──────────────────────────────────────────────────────
DEFAULT_TICK_RATE_HZ: float = 60.0
DEFAULT_SPEED_CLASS: str = "low"
DEFAULT_SURFACE: str = "dry"
DEFAULT_OBSTACLE_DISTANCE: float = 400.0   # simulation units (10 units = 1 m)
OBSTACLE_DISTANCE_CHOICES: tuple = (200.0, 400.0, 600.0, 800.0)
HEADLESS_MAX_TICKS: int = 20_000

# ── Environment variable names ───────────────────────────────────────────────
ENV_TICK_RATE_HZ: str = "BRAKESIM_TICK_HZ"
ENV_LOG_LEVEL: str = "BRAKESIM_LOG_LEVEL"

# ── Logging ──────────────────────────────────────────────────────────────────
LOG_FILE: str = "brakesim.log"
RUN_DEBUG_LOG_FILE: str = "run_debug.log"

# ── UI defaults ──────────────────────────────────────────────────────────────
WINDOW_WIDTH: int = 1100
WINDOW_HEIGHT: int = 640
TARGET_FPS: int = 60
