"""
sim/sim_bridge.py
=================
Orchestrator tying :mod:`sim.physics`, the braking controller, the outcome
evaluator and the :class:`bus.event_bus.EventBus` together.  The UI polls
the bridge for the latest snapshot without blocking; headless callers step
it synchronously.

Per-tick order (fixed, independent of subscription order):

1. :class:`~sim.controller.BrakingController` commands velocity / force.
2. :class:`~sim.physics.PhysicsEngine` integrates one step and publishes
   collision-start pairs.
3. :class:`~sim.evaluator.OutcomeEvaluator` consumes this tick's
   collisions, then runs stop detection on the post-step state.

Public API consumed by :mod:`ui.pygame_view`
--------------------------------------------
* ``get_snapshot()``     → ``dict``
* ``get_history_rows()`` → ``List[HistoryRow]``
* ``get_result_card()``  → ``Optional[ResultCard]``
* ``start_run()``        → ``bool``
* ``select(...)``        → ``bool``
* ``is_running()`` / ``is_finished()`` → ``bool``
* ``reset()`` / ``set_paused(bool)``   → ``None``
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Dict, List, Optional

from bus import TOPIC_COLLISION, TOPIC_TICK, EventBus
from sim.brake_policy import DEFAULT_POLICY, BrakePolicy
from sim.controller import BrakingController
from sim.errors import RunTimeoutError
from sim.evaluator import OutcomeEvaluator
from sim.history import HistoryRow, ResultCard, RunHistory
from sim.physics import PhysicsEngine
from sim.scenario import (
    RunConfiguration,
    WorldHandle,
    build_world,
    parse_speed_class,
    parse_surface,
)
from sim.session import Outcome, RunSession

log = logging.getLogger("sim_bridge")
run_log = logging.getLogger("run")

# Extra ticks stepped after a headless run ends so a collision landing one
# tick after the stop can still upgrade the outcome.
_SETTLE_TICKS = 5


class SimBridge:
    """Simulation orchestrator for a single active run.

    The optional background thread calls :meth:`step` at ``tick_rate_hz``.
    Commands coming from the UI thread take the same lock as the tick, so
    a command never lands in the middle of a tick.

    Parameters
    ----------
    config : RunConfiguration or None
        Initial configuration; defaults to low speed, dry road, 400 units.
    tick_rate_hz : float
        Simulation ticks per second for the background thread.
    policy : BrakePolicy or None
        Tunable constants.
    bus : EventBus or None
        Event transport; a private bus is created when *None*.
    """

    def __init__(
        self,
        config: Optional[RunConfiguration] = None,
        tick_rate_hz: float = 60.0,
        policy: Optional[BrakePolicy] = None,
        bus: Optional[EventBus] = None,
    ) -> None:
        self._tick_rate_hz = tick_rate_hz
        self.policy = policy or DEFAULT_POLICY
        self._bus = bus or EventBus()
        self._engine = PhysicsEngine(bus=self._bus)
        self._controller = BrakingController()
        self._evaluator = OutcomeEvaluator(bus=self._bus)
        self._history = RunHistory(bus=self._bus)
        self._session = RunSession()
        self._config = config or RunConfiguration()
        self._world: Optional[WorldHandle] = None

        self._lock = threading.RLock()
        self._thread: Optional[threading.Thread] = None
        self._running = False
        self._paused = False

        self.rebuild()

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    def start(self) -> None:
        """Spawn the background simulation thread."""
        if self._running:
            return
        self._running = True
        self._thread = threading.Thread(
            target=self._loop, daemon=True, name="SimBridge"
        )
        self._thread.start()
        log.info("SimBridge started at %.1f Hz", self._tick_rate_hz)

    def stop(self) -> None:
        """Signal the thread to stop and wait for it to join."""
        self._running = False
        if self._thread:
            self._thread.join(timeout=2.0)
        log.info("SimBridge stopped")

    # ── Accessors ─────────────────────────────────────────────────────────────

    @property
    def bus(self) -> EventBus:
        return self._bus

    @property
    def session(self) -> RunSession:
        return self._session

    @property
    def world(self) -> Optional[WorldHandle]:
        return self._world

    @property
    def history(self) -> RunHistory:
        return self._history

    @property
    def evaluator(self) -> OutcomeEvaluator:
        return self._evaluator

    @property
    def config(self) -> RunConfiguration:
        return self._config

    # ── Commands ──────────────────────────────────────────────────────────────

    def rebuild(self) -> None:
        """Tear down and rebuild the world for the current configuration."""
        with self._lock:
            self._bus.clear()
            self._world = build_world(self._engine, self._config, self._session, self.policy)
            self._history.clear_card()

    def reset(self) -> None:
        """Re-initialise the world so the scenario replays."""
        self.rebuild()
        log.info("SimBridge reset")

    def start_run(self) -> bool:
        """Engage the vehicle.  Ignored while a run is in progress.

        Starting after a finished run replays the same configuration from a
        freshly built world.
        """
        with self._lock:
            if self._session.is_running:
                log.debug("start ignored: run in progress")
                return False
            if self._session.is_terminal:
                self.rebuild()
            return self._controller.start(self._session, self._world)

    def select(
        self,
        speed_class: Any = None,
        surface: Any = None,
        obstacle_distance: Optional[float] = None,
    ) -> bool:
        """Change part of the configuration and rebuild the world.

        Returns False (and changes nothing) while a run is in progress.
        """
        with self._lock:
            if self._session.is_running:
                log.debug("selection ignored: run in progress")
                return False
            changes: Dict[str, Any] = {}
            if speed_class is not None:
                changes["speed_class"] = parse_speed_class(speed_class)
            if surface is not None:
                changes["surface"] = parse_surface(surface)
            if obstacle_distance is not None:
                changes["obstacle_distance"] = float(obstacle_distance)
            self._config = self._config.with_changes(**changes)
            self.rebuild()
            return True

    def set_paused(self, paused: bool) -> None:
        """Pause / unpause the background tick."""
        self._paused = paused

    # ── Queries ───────────────────────────────────────────────────────────────

    def is_running(self) -> bool:
        return self._session.is_running

    def is_finished(self) -> bool:
        """True once the current run reached STOPPED or CRASHED."""
        return self._session.is_terminal

    def get_history_rows(self) -> List[HistoryRow]:
        with self._lock:
            return self._history.rows()

    def get_result_card(self) -> Optional[ResultCard]:
        with self._lock:
            return self._history.latest_card

    def get_snapshot(self) -> Dict[str, Any]:
        """Plain-value view of the world for renderers."""
        with self._lock:
            world = self._world
            session = self._session
            snapshot: Dict[str, Any] = {
                "phase": session.phase.name,
                "running": session.is_running,
                "braking": session.braking_started,
                "ticks": session.ticks,
                "speed_class": self._config.speed_class.value,
                "surface": self._config.surface.value,
                "obstacle_distance": self._config.obstacle_distance,
                "camera_x": self._engine.view_anchor_x,
                "brake_line_x": self.policy.brake_line_x,
                "units_per_metre": self.policy.units_per_metre,
            }
            if world is not None:
                snapshot.update(
                    {
                        "car": {
                            "x": world.car.x,
                            "y": world.car.y,
                            "vx": world.car.vx,
                            "angle": world.car.angle,
                            "w": world.car.width,
                            "h": world.car.height,
                        },
                        "obstacle": {
                            "x": world.obstacle.x,
                            "y": world.obstacle.y,
                            "w": world.obstacle.width,
                            "h": world.obstacle.height,
                        },
                        "ground": {
                            "y": world.ground.y,
                            "h": world.ground.height,
                            "x0": world.ground.bounds()[0],
                            "x1": world.ground.bounds()[2],
                        },
                        "brake_line": {
                            "x": world.brake_line.x,
                            "y": world.brake_line.y,
                            "w": world.brake_line.width,
                            "h": world.brake_line.height,
                        },
                    }
                )
            return snapshot

    # ── Stepping ──────────────────────────────────────────────────────────────

    def step(self) -> None:
        """Advance exactly one tick."""
        with self._lock:
            self._tick()

    def run_to_completion(
        self,
        max_ticks: int = 20_000,
        settle_ticks: int = _SETTLE_TICKS,
    ) -> Outcome:
        """Start a run and step it synchronously until it is finalised.

        Raises
        ------
        RunTimeoutError
            If the run is still active after *max_ticks* ticks.
        """
        with self._lock:
            if not self._session.is_running:
                self.start_run()
            for _ in range(max_ticks):
                if self._session.is_terminal:
                    break
                self._tick()
            else:
                if not self._session.is_terminal:
                    raise RunTimeoutError(max_ticks, self._session.phase.name)
            for _ in range(settle_ticks):
                self._tick()
            return self._session.outcome

    # ── Background loop ───────────────────────────────────────────────────────

    def _loop(self) -> None:
        dt = 1.0 / self._tick_rate_hz
        while self._running:
            t0 = time.perf_counter()
            if not self._paused:
                try:
                    self.step()
                except Exception:
                    log.exception("SimBridge tick error")
            time.sleep(max(0.0, dt - (time.perf_counter() - t0)))

    # ── tick ──────────────────────────────────────────────────────────────────

    def _tick(self) -> None:
        world = self._world
        if world is None:
            return
        session = self._session
        if session.is_running:
            session.ticks += 1

        # 1. Cruise / brake control on the pre-step state.
        self._controller.update(session, world)

        # 2. Integrate; collisions are published on the bus.
        self._engine.step()

        # 3. Collisions of this tick are evaluated before stop detection.
        for msg in self._bus.poll(TOPIC_COLLISION):
            self._evaluator.on_collision(session, world, msg.payload.get("pairs", []))
        self._evaluator.update(session, world)

        # 4. Camera follows the vehicle while the run is active.
        if session.is_running:
            self._engine.look_at(world.car.x)

        for msg in self._bus.poll(TOPIC_TICK):
            if session.is_running and msg.tick % 10 == 1:
                run_log.debug(
                    "tick=%d phase=%s x=%.2f vx=%.4f low_speed=%d",
                    msg.tick,
                    session.phase.name,
                    msg.payload["x"],
                    msg.payload["vx"],
                    session.low_speed_counter,
                )
