#!/usr/bin/env python3
"""
sim/physics.py
==============
Minimal deterministic rigid-body backend used by :mod:`sim.scenario`,
:mod:`sim.controller` and :mod:`sim.sim_bridge`.

Bodies are axis-aligned boxes.  Dynamic bodies integrate with a fixed step
using the position-Verlet style velocity update popularised by Matter.js::

    v = v * (1 - friction_air) + (F / m) * dt²

where ``dt`` is the step length in milliseconds and velocities are in
simulation units per tick.  Static solid bodies stop dynamic ones on
contact; sensors only report overlaps.  New overlaps are published as
collision-start pairs on the :class:`bus.event_bus.EventBus`.

Keeping this in a separate module avoids circular imports and makes unit
testing straightforward.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Set, Tuple

from bus import TOPIC_COLLISION, TOPIC_TICK, EventBus

log = logging.getLogger("physics")

BASE_DELTA_MS: float = 1000.0 / 60.0


@dataclass
class Body:
    """An axis-aligned rigid body.

    Attributes
    ----------
    label : str
        Name used in collision notifications (e.g. ``car``, ``dummy``).
    x, y : float
        Centre position in simulation units (y grows downwards).
    width, height : float
        Box extents.
    mass : float
        Mass used for force integration; ignored for static bodies.
    is_static : bool
        Static bodies never move.
    is_sensor : bool
        Sensors report overlaps but never block other bodies.
    friction, friction_air : float
        Surface and air friction coefficients.
    vx, vy : float
        Velocity in units per tick.
    """

    label: str
    x: float
    y: float
    width: float
    height: float
    mass: float = 1.0
    is_static: bool = False
    is_sensor: bool = False
    friction: float = 0.1
    friction_air: float = 0.01
    vx: float = 0.0
    vy: float = 0.0
    angle: float = 0.0
    force_x: float = field(default=0.0, repr=False)
    force_y: float = field(default=0.0, repr=False)
    id: int = field(default=0, repr=False)

    @property
    def speed(self) -> float:
        return (self.vx * self.vx + self.vy * self.vy) ** 0.5

    def bounds(self) -> Tuple[float, float, float, float]:
        """``(min_x, min_y, max_x, max_y)``."""
        hw = self.width / 2.0
        hh = self.height / 2.0
        return self.x - hw, self.y - hh, self.x + hw, self.y + hh

    def overlaps(self, other: "Body") -> bool:
        """True if the boxes interpenetrate (touching edges do not count)."""
        ax0, ay0, ax1, ay1 = self.bounds()
        bx0, by0, bx1, by1 = other.bounds()
        return ax0 < bx1 and bx0 < ax1 and ay0 < by1 and by0 < ay1

    def touches(self, other: "Body") -> bool:
        """True if the boxes overlap or share an edge."""
        ax0, ay0, ax1, ay1 = self.bounds()
        bx0, by0, bx1, by1 = other.bounds()
        return ax0 <= bx1 and bx0 <= ax1 and ay0 <= by1 and by0 <= ay1


class PhysicsEngine:
    """Fixed-step world of :class:`Body` instances.

    Parameters
    ----------
    bus : EventBus or None
        Receives ``physics.tick`` and ``physics.collision`` events.  When
        *None* the engine only returns collision pairs from :meth:`step`.
    delta_ms : float
        Step length in milliseconds.
    """

    def __init__(self, bus: Optional[EventBus] = None,
                 delta_ms: float = BASE_DELTA_MS) -> None:
        self.bus = bus
        self.delta_ms = delta_ms
        self.bodies: List[Body] = []
        self.tick_count: int = 0
        self.view_anchor_x: float = 0.0
        self._ids = itertools.count(1)
        self._active_pairs: Set[FrozenSet[int]] = set()

    # ── world management ──────────────────────────────────────────────────

    def add(self, *bodies: Body) -> None:
        for body in bodies:
            body.id = next(self._ids)
            self.bodies.append(body)

    def clear(self) -> None:
        """Remove every body and forget contact state."""
        self.bodies = []
        self._active_pairs.clear()
        self.tick_count = 0

    def body(self, label: str) -> Optional[Body]:
        """First body carrying *label*, or *None*."""
        for body in self.bodies:
            if body.label == label:
                return body
        return None

    def look_at(self, x: float) -> None:
        """Frame the viewport so that *x* is the camera anchor."""
        self.view_anchor_x = x

    # ── commands ──────────────────────────────────────────────────────────

    @staticmethod
    def set_velocity(body: Body, vx: float, vy: float) -> None:
        body.vx = vx
        body.vy = vy

    @staticmethod
    def apply_force(body: Body, fx: float, fy: float = 0.0) -> None:
        """Accumulate a force that is consumed by the next :meth:`step`."""
        body.force_x += fx
        body.force_y += fy

    # ── integration ───────────────────────────────────────────────────────

    def step(self) -> List[Tuple[str, str]]:
        """Advance one tick and return the collision-start label pairs."""
        self.tick_count += 1
        dt_sq = self.delta_ms * self.delta_ms
        time_scale = self.delta_ms / BASE_DELTA_MS

        for body in self.bodies:
            if body.is_static:
                continue
            damping = 1.0 - body.friction_air * time_scale
            body.vx = body.vx * damping + (body.force_x / body.mass) * dt_sq
            body.vy = body.vy * damping + (body.force_y / body.mass) * dt_sq
            body.x += body.vx
            body.y += body.vy
            body.force_x = 0.0
            body.force_y = 0.0

        started = self._detect_collisions()
        self._resolve_static_contacts()

        if self.bus is not None:
            car = self.body("car")
            self.bus.publish(
                TOPIC_TICK,
                sender="physics",
                payload={
                    "x": car.x if car else 0.0,
                    "vx": car.vx if car else 0.0,
                },
                tick=self.tick_count,
            )
            if started:
                self.bus.publish(
                    TOPIC_COLLISION,
                    sender="physics",
                    payload={"pairs": list(started)},
                    tick=self.tick_count,
                )
        return started

    def _detect_collisions(self) -> List[Tuple[str, str]]:
        started: List[Tuple[str, str]] = []
        still_active: Set[FrozenSet[int]] = set()
        for a, b in itertools.combinations(self.bodies, 2):
            if a.is_static and b.is_static:
                continue
            key = frozenset((a.id, b.id))
            if key in self._active_pairs:
                if a.touches(b):
                    still_active.add(key)
                continue
            if a.overlaps(b):
                still_active.add(key)
                started.append((a.label, b.label))
                log.debug("collision_start tick=%d pair=(%s, %s)",
                          self.tick_count, a.label, b.label)
        self._active_pairs = still_active
        return started

    def _resolve_static_contacts(self) -> None:
        """Push dynamic bodies out of solid static bodies, killing the normal velocity."""
        for body in self.bodies:
            if body.is_static or body.is_sensor:
                continue
            for other in self.bodies:
                if other is body or not other.is_static or other.is_sensor:
                    continue
                if not body.overlaps(other):
                    continue
                ax0, ay0, ax1, ay1 = body.bounds()
                bx0, by0, bx1, by1 = other.bounds()
                pen_x = min(ax1 - bx0, bx1 - ax0)
                pen_y = min(ay1 - by0, by1 - ay0)
                if pen_x <= pen_y:
                    if body.x < other.x:
                        body.x -= ax1 - bx0
                    else:
                        body.x += bx1 - ax0
                    body.vx = 0.0
                else:
                    if body.y < other.y:
                        body.y -= ay1 - by0
                    else:
                        body.y += by1 - ay0
                    body.vy = 0.0
