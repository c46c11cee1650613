#!/usr/bin/env python3
"""
sim/evaluator.py
================
Decides how a run ends and records it exactly once.

A run ends *stopped* when the vehicle settles after the brake line, or
*crashed* when the physics backend reports the vehicle touching the
obstacle.  :meth:`OutcomeEvaluator.finalize` is idempotent, with one
exception: a run already finalised as stopped is upgraded in place to a
crash if a vehicle/obstacle collision arrives afterwards.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Tuple

from bus import TOPIC_FINALIZED, TOPIC_UPGRADED, EventBus, has_pair
from sim.brake_policy import distance_m
from sim.scenario import LABEL_CAR, LABEL_OBSTACLE, WorldHandle
from sim.session import Outcome, RunPhase, RunSession

log = logging.getLogger("evaluator")


class OutcomeEvaluator:
    """Stop / crash detection and single finalisation per run.

    Parameters
    ----------
    bus : EventBus or None
        Receives ``outcome.finalized`` and ``outcome.upgraded`` events.
    """

    def __init__(self, bus: Optional[EventBus] = None) -> None:
        self.bus = bus

    # ── collision notifications ───────────────────────────────────────────

    def on_collision(
        self,
        session: RunSession,
        world: Optional[WorldHandle],
        pairs: Iterable[Tuple[str, str]],
    ) -> bool:
        """Handle one batch of collision-start pairs.

        Returns True if the batch contained the vehicle/obstacle pair and
        was acted upon.
        """
        if world is None or session.crashed:
            return False
        if not has_pair(pairs, LABEL_CAR, LABEL_OBSTACLE):
            return False
        log.info("vehicle hit obstacle at x=%.1f", world.car.x)
        self.finalize(session, world, crashed=True)
        return True

    # ── stop detection ────────────────────────────────────────────────────

    def update(self, session: RunSession, world: Optional[WorldHandle]) -> None:
        """Confirm a stop once the vehicle has settled after the brake line."""
        if world is None:
            return
        if not session.braking_started or session.crashed or session.finished:
            return

        policy = world.policy
        car = world.car
        speed = abs(car.vx)

        if speed < policy.settle_speed:
            session.low_speed_counter += 1
            if session.low_speed_counter > policy.settle_ticks or speed < policy.halt_speed:
                world.engine.set_velocity(car, 0.0, 0.0)
                self.finalize(session, world, crashed=False)
        else:
            session.low_speed_counter = 0

    # ── finalisation ──────────────────────────────────────────────────────

    @staticmethod
    def distance(world: WorldHandle) -> float:
        """Brake-line-relative distance of the vehicle, metres."""
        return distance_m(world.car.x, world.policy)

    def finalize(
        self,
        session: RunSession,
        world: WorldHandle,
        crashed: bool,
    ) -> Optional[Outcome]:
        """Record the run outcome.

        Returns the new or upgraded :class:`Outcome`, or *None* when the
        call was ignored as a duplicate.
        """
        if session.finished and crashed and not session.crashed:
            return self._upgrade(session, world)

        if session.finished:
            log.debug("duplicate finalize(crashed=%s) ignored", crashed)
            return None

        session.crashed = crashed
        session.finished = True
        session.advance(RunPhase.CRASHED if crashed else RunPhase.STOPPED)

        outcome = Outcome(
            braking_distance_m=self.distance(world),
            crashed=crashed,
            config=world.config,
        )
        session.outcome = outcome
        log.info(
            "run finalized %s distance=%.1f m after %d ticks",
            "CRASH" if crashed else "STOP",
            outcome.braking_distance_m,
            session.ticks,
        )
        if self.bus is not None:
            self.bus.publish(
                TOPIC_FINALIZED,
                sender="evaluator",
                payload={"outcome": outcome},
                tick=session.ticks,
            )
        return outcome

    def _upgrade(self, session: RunSession, world: WorldHandle) -> Optional[Outcome]:
        outcome = session.outcome
        session.crashed = True
        session.advance(RunPhase.CRASHED)
        if outcome is None:
            return None

        previous = outcome.braking_distance_m
        outcome.crashed = True
        outcome.braking_distance_m = max(previous, self.distance(world))
        outcome.upgraded = True
        log.warning(
            "stopped run upgraded to CRASH distance %.1f -> %.1f m",
            previous,
            outcome.braking_distance_m,
        )
        if self.bus is not None:
            self.bus.publish(
                TOPIC_UPGRADED,
                sender="evaluator",
                payload={"outcome": outcome},
                tick=session.ticks,
            )
        return outcome
