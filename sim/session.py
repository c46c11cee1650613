#!/usr/bin/env python3
"""
sim/session.py
==============
Explicit run-state context passed to the braking controller and the
outcome evaluator every tick.

One :class:`RunSession` describes one run: its phase, the brake-line latch,
the stop-detection counter and, once finalised, its :class:`Outcome`.
Nothing here is module-global, so several sessions can coexist (tests,
sweeps) without sharing state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from sim.scenario import RunConfiguration

log = logging.getLogger("session")


class RunPhase(Enum):
    """Lifecycle of a single run."""
    IDLE = 0
    CRUISING = 1
    BRAKING = 2
    STOPPED = 3
    CRASHED = 4


_TERMINAL = (RunPhase.STOPPED, RunPhase.CRASHED)


@dataclass
class Outcome:
    """Finalised result of a run.

    Attributes
    ----------
    braking_distance_m : float
        Distance past the brake line, metres, one decimal.
    crashed : bool
        True when the vehicle hit the obstacle.
    config : RunConfiguration
        Configuration the run was started with.
    upgraded : bool
        True once a late collision turned a stop into a crash.
    """

    braking_distance_m: float
    crashed: bool
    config: "RunConfiguration"
    upgraded: bool = False


@dataclass
class RunSession:
    """Mutable state of the active run.

    Attributes
    ----------
    phase : RunPhase
        Current phase; progresses monotonically.
    braking_started : bool
        Latched once the vehicle reaches the brake line.
    crashed, finished : bool
        Evaluator flags; *finished* is set by the first finalisation.
    low_speed_counter : int
        Consecutive ticks spent below the settle speed.
    ticks : int
        Ticks processed since the run started.
    brake_tick : int or None
        Value of :attr:`ticks` when braking started.
    outcome : Outcome or None
        Set by the first finalisation.
    """

    phase: RunPhase = RunPhase.IDLE
    braking_started: bool = False
    crashed: bool = False
    finished: bool = False
    low_speed_counter: int = 0
    ticks: int = 0
    brake_tick: Optional[int] = None
    outcome: Optional[Outcome] = field(default=None, repr=False)

    @property
    def is_running(self) -> bool:
        """True between start and the first finalisation."""
        return self.phase in (RunPhase.CRUISING, RunPhase.BRAKING) and not self.finished

    @property
    def is_terminal(self) -> bool:
        return self.phase in _TERMINAL

    def reset(self) -> None:
        """Return every flag to its initial value."""
        self.phase = RunPhase.IDLE
        self.braking_started = False
        self.crashed = False
        self.finished = False
        self.low_speed_counter = 0
        self.ticks = 0
        self.brake_tick = None
        self.outcome = None

    def advance(self, phase: RunPhase) -> None:
        """Move to *phase*.

        Phases only move forward; the single allowed exception is the
        STOPPED → CRASHED upgrade.  Requests to go backwards are ignored.
        """
        if phase == self.phase:
            return
        upgrade = self.phase == RunPhase.STOPPED and phase == RunPhase.CRASHED
        if self.is_terminal and not upgrade:
            log.debug("ignored transition %s -> %s", self.phase.name, phase.name)
            return
        if phase.value < self.phase.value:
            log.debug("ignored transition %s -> %s", self.phase.name, phase.name)
            return
        log.info("phase %s -> %s (tick %d)", self.phase.name, phase.name, self.ticks)
        self.phase = phase
