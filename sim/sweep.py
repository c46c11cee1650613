#!/usr/bin/env python3
"""
sim/sweep.py
============
Headless batch runner over every speed / surface / obstacle-distance
combination.

Each configuration is run on its own :class:`~sim.sim_bridge.SimBridge`,
so runs never share state.  Results are gathered into a ``numpy`` grid
indexed ``[speed, surface, distance]`` for ordering checks and printed as
a plain-text table.

Usage::

    python main.py --sweep
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from sim.brake_policy import DEFAULT_POLICY
from sim.scenario import RunConfiguration, SpeedClass, Surface
from sim.session import Outcome
from sim.sim_bridge import SimBridge

log = logging.getLogger("sweep")

SPEEDS: Sequence[SpeedClass] = (SpeedClass.LOW, SpeedClass.MEDIUM, SpeedClass.HIGH)
SURFACES: Sequence[Surface] = (Surface.DRY, Surface.WET, Surface.ICY)


@dataclass
class SweepResult:
    """Distances (metres) and crash flags for every configuration."""
    distances: np.ndarray
    crashed: np.ndarray
    speeds: Sequence[SpeedClass]
    surfaces: Sequence[Surface]
    obstacle_distances: Sequence[float]

    def surface_ordered(self) -> bool:
        """Distance is non-decreasing dry → wet → icy everywhere."""
        return bool(np.all(np.diff(self.distances, axis=1) >= 0.0))

    def speed_ordered(self) -> bool:
        """Distance is non-decreasing low → medium → high everywhere."""
        return bool(np.all(np.diff(self.distances, axis=0) >= 0.0))

    def table(self) -> str:
        """Human-readable table, one line per configuration."""
        lines: List[str] = [
            f"{'speed':>8} {'surface':>8} {'obstacle':>9} {'distance':>9}  outcome",
        ]
        for i, speed in enumerate(self.speeds):
            for j, surface in enumerate(self.surfaces):
                for k, gap in enumerate(self.obstacle_distances):
                    lines.append(
                        f"{speed.value:>8} {surface.value:>8} {gap / DEFAULT_POLICY.units_per_metre:>8.0f}m "
                        f"{self.distances[i, j, k]:>8.1f}m  "
                        f"{'CRASH' if self.crashed[i, j, k] else 'stop'}"
                    )
        return "\n".join(lines)


def run_one(config: RunConfiguration, max_ticks: int = 20_000) -> Outcome:
    """Run *config* to completion on a fresh bridge."""
    return SimBridge(config=config).run_to_completion(max_ticks=max_ticks)


def sweep(
    obstacle_distances: Sequence[float] = (200.0, 400.0, 600.0, 800.0),
    speeds: Sequence[SpeedClass] = SPEEDS,
    surfaces: Sequence[Surface] = SURFACES,
    max_ticks: int = 20_000,
) -> SweepResult:
    shape = (len(speeds), len(surfaces), len(obstacle_distances))
    distances = np.zeros(shape, dtype=float)
    crashed = np.zeros(shape, dtype=bool)

    for i, speed in enumerate(speeds):
        for j, surface in enumerate(surfaces):
            for k, gap in enumerate(obstacle_distances):
                config = RunConfiguration(speed_class=speed, surface=surface,
                                          obstacle_distance=float(gap))
                outcome = run_one(config, max_ticks=max_ticks)
                distances[i, j, k] = outcome.braking_distance_m
                crashed[i, j, k] = outcome.crashed

    log.info("sweep finished: %d runs, %d crashes", distances.size, int(crashed.sum()))
    return SweepResult(
        distances=distances,
        crashed=crashed,
        speeds=tuple(speeds),
        surfaces=tuple(surfaces),
        obstacle_distances=tuple(obstacle_distances),
    )
