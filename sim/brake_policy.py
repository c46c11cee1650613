#!/usr/bin/env python3
"""
sim/brake_policy.py
===================
Tunable geometry, braking and stop-detection parameters for the braking
demo.  Every constant lives in the frozen :class:`BrakePolicy` dataclass so
that experiments can swap policies without touching code.

Also provides stateless helpers:

* :func:`braking_force`: two-regime decelerating force law.
* :func:`distance_m`: brake-line-relative distance in metres.
* :func:`kmh_label`: display label for a cruise speed.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BrakePolicy:
    """Immutable bag of every tunable simulation parameter.

    Groups: scale, geometry, vehicle, braking regimes, stop detection.
    """

    # ── Scale ─────────────────────────────────────────────────────────────
    units_per_metre: float = 10.0
    """Simulation length units per real-world metre."""

    # ── Geometry ──────────────────────────────────────────────────────────
    brake_line_x: float = 150.0
    """Reference position where engine power is cut and braking begins."""

    vehicle_start_x: float = -100.0
    """Vehicle spawn position, off the visible area before the brake line."""

    ground_y: float = 380.0
    """Centre line of the ground slab."""

    ground_height: float = 40.0
    ground_min_width: float = 3000.0
    ground_left_margin: float = 200.0
    """Ground extends this far left of x = 0 to cover the spawn position."""

    brake_line_width: float = 5.0
    brake_line_height: float = 200.0

    obstacle_width: float = 30.0
    obstacle_height: float = 80.0
    obstacle_head_size: float = 30.0

    # ── Vehicle ───────────────────────────────────────────────────────────
    vehicle_mass: float = 1000.0
    vehicle_width: float = 80.0
    vehicle_height: float = 40.0
    vehicle_friction_air: float = 0.01
    """Air drag before the run starts; zeroed when the engine is engaged."""

    # ── Braking regimes ───────────────────────────────────────────────────
    fast_regime_gain: float = 0.001
    """k1: force gain while |v| is above :attr:`fast_regime_speed`."""

    slow_regime_gain: float = 0.01
    """k2: stronger gain below :attr:`fast_regime_speed` so the body truly stops."""

    fast_regime_speed: float = 0.5
    rest_speed: float = 0.01
    """At or below this speed no braking force is applied."""

    # ── Stop detection ────────────────────────────────────────────────────
    settle_speed: float = 0.3
    """Speeds below this count towards the low-speed persistence counter."""

    settle_ticks: int = 30
    """Counter value that must be exceeded to confirm a stop."""

    halt_speed: float = 0.05
    """Speeds below this confirm a stop immediately."""

    def obstacle_x(self, obstacle_distance: float) -> float:
        return self.brake_line_x + obstacle_distance


DEFAULT_POLICY = BrakePolicy()


def braking_force(velocity: float, coefficient: float, mass: float,
                  policy: BrakePolicy = DEFAULT_POLICY) -> float:
    """Decelerating force along the travel axis for the current *velocity*.

    Two regimes, both opposing the sign of *velocity*:

    * ``|v| > fast_regime_speed`` → ``-v * coefficient * mass * k1``
    * ``rest_speed < |v| <= fast_regime_speed`` → ``-v * coefficient * mass * k2``
    * otherwise → ``0.0``
    """
    speed = abs(velocity)
    if speed > policy.fast_regime_speed:
        return -velocity * coefficient * mass * policy.fast_regime_gain
    if speed > policy.rest_speed:
        return -velocity * coefficient * mass * policy.slow_regime_gain
    return 0.0


def distance_m(position_x: float, policy: BrakePolicy = DEFAULT_POLICY) -> float:
    """Distance travelled past the brake line, in metres rounded to 0.1."""
    units = max(0.0, position_x - policy.brake_line_x)
    return round(units / policy.units_per_metre, 1)


def kmh_label(speed_kmh: int) -> str:
    return f"{speed_kmh}km/h"
