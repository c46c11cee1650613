#!/usr/bin/env python3
"""
sim/controller.py
=================
Per-tick braking logic.

Before the brake line the engine holds cruise speed (a floor, not a cap).
Once the vehicle reaches the line, braking latches for the rest of the run
and a surface-dependent force opposes the motion every tick.
"""

from __future__ import annotations

import logging
from typing import Optional

from sim.brake_policy import braking_force
from sim.scenario import WorldHandle
from sim.session import RunPhase, RunSession

log = logging.getLogger("controller")


class BrakingController:
    """Mutates the vehicle's velocity and force; reads nothing but the world."""

    def start(self, session: RunSession, world: Optional[WorldHandle]) -> bool:
        """Engage the engine at cruise speed.

        Returns
        -------
        bool
            False when the request is ignored (no world, or not idle).
        """
        if world is None or session.phase != RunPhase.IDLE:
            log.debug("start ignored phase=%s world=%s",
                      session.phase.name, world is not None)
            return False

        car = world.car
        world.engine.set_velocity(car, world.config.cruise_speed, 0.0)
        # Engine power overcomes native friction from here on.
        car.friction = 0.0
        car.friction_air = 0.0
        session.low_speed_counter = 0
        session.crashed = False
        session.finished = False
        session.advance(RunPhase.CRUISING)
        log.info("run started at %.1f units/tick (%d km/h)",
                 world.config.cruise_speed, world.config.kmh)
        return True

    def update(self, session: RunSession, world: Optional[WorldHandle]) -> None:
        """Apply one tick of cruise or braking control."""
        if world is None or not session.is_running:
            return

        car = world.car
        policy = world.policy

        if not session.braking_started and car.x >= policy.brake_line_x:
            session.braking_started = True
            session.brake_tick = session.ticks
            session.advance(RunPhase.BRAKING)
            log.info("brake line crossed at x=%.1f v=%.2f", car.x, car.vx)

        if not session.braking_started:
            target = world.config.cruise_speed
            if car.vx < target:
                world.engine.set_velocity(car, target, car.vy)
            return

        force = braking_force(car.vx, world.config.braking_coefficient, car.mass, policy)
        if force:
            world.engine.apply_force(car, force, 0.0)
