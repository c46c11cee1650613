#!/usr/bin/env python3
"""
Entry point.

    python main.py                      # interactive pygame view
    python main.py --headless --speed medium --surface wet --distance 400
    python main.py --sweep              # full distance table
"""

import argparse
import logging
import os
import sys

# Make project modules discoverable
project_root = os.path.abspath(os.path.dirname(__file__))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import config
from logging_setup import parse_level, setup_logging
from sim.errors import SimulationError
from sim.scenario import RunConfiguration, parse_distance, parse_speed_class, parse_surface
from sim.sim_bridge import SimBridge

log = logging.getLogger("main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Braking-distance simulator")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--headless", action="store_true",
                      help="Run one configuration without a window and print the outcome")
    mode.add_argument("--sweep", action="store_true",
                      help="Run every speed/surface/distance combination and print a table")
    parser.add_argument("--speed", default=config.DEFAULT_SPEED_CLASS,
                        help="Speed class: low, medium or high")
    parser.add_argument("--surface", default=config.DEFAULT_SURFACE,
                        help="Road surface: dry, wet or icy")
    parser.add_argument("--distance", default=config.DEFAULT_OBSTACLE_DISTANCE,
                        help="Obstacle distance past the brake line, in simulation units")
    parser.add_argument("--log-level", default=None,
                        help=f"Log level (overrides ${config.ENV_LOG_LEVEL})")
    return parser


def _tick_rate_from_env() -> float:
    raw = os.environ.get(config.ENV_TICK_RATE_HZ)
    if not raw:
        return config.DEFAULT_TICK_RATE_HZ
    try:
        rate = float(raw)
    except ValueError:
        log.warning("ignoring %s=%r: not a number", config.ENV_TICK_RATE_HZ, raw)
        return config.DEFAULT_TICK_RATE_HZ
    if rate <= 0:
        log.warning("ignoring %s=%r: must be positive", config.ENV_TICK_RATE_HZ, raw)
        return config.DEFAULT_TICK_RATE_HZ
    return rate


def run_headless(run_config: RunConfiguration) -> int:
    outcome = SimBridge(config=run_config).run_to_completion(
        max_ticks=config.HEADLESS_MAX_TICKS
    )
    verdict = "CRASH" if outcome.crashed else "SAFE STOP"
    print(
        f"{run_config.kmh} km/h on {run_config.surface_profile.label.lower()} road, "
        f"obstacle at {run_config.obstacle_distance:.0f} units: "
        f"{verdict}, braking distance {outcome.braking_distance_m:.1f} m"
    )
    return 0


def run_sweep() -> int:
    from sim.sweep import sweep

    result = sweep(config.OBSTACLE_DISTANCE_CHOICES, max_ticks=config.HEADLESS_MAX_TICKS)
    print(result.table())
    print(f"surface ordered: {result.surface_ordered()}  speed ordered: {result.speed_ordered()}")
    return 0


def run_view(run_config: RunConfiguration, tick_rate_hz: float) -> int:
    from ui.pygame_view import run_pygame_view

    bridge = SimBridge(config=run_config, tick_rate_hz=tick_rate_hz)
    bridge.start()
    try:
        run_pygame_view(
            bridge,
            width=config.WINDOW_WIDTH,
            height=config.WINDOW_HEIGHT,
            fps=config.TARGET_FPS,
            obstacle_choices=config.OBSTACLE_DISTANCE_CHOICES,
        )
    finally:
        bridge.stop()
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    level_name = args.log_level or os.environ.get(config.ENV_LOG_LEVEL, "INFO")
    setup_logging(parse_level(level_name))
    log.info("Starting braking simulator...")

    try:
        run_config = RunConfiguration(
            speed_class=parse_speed_class(args.speed),
            surface=parse_surface(args.surface),
            obstacle_distance=parse_distance(args.distance),
        )
        if args.sweep:
            return run_sweep()
        if args.headless:
            return run_headless(run_config)
        return run_view(run_config, _tick_rate_from_env())
    except SimulationError as exc:
        log.error("%s", exc)
        return 2
    except KeyboardInterrupt:
        log.info("Shutting down...")
        return 0


if __name__ == "__main__":
    sys.exit(main())
