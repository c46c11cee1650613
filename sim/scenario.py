#!/usr/bin/env python3
"""
sim/scenario.py
===============
Run configuration and world construction.

:func:`build_world` clears the physics engine and lays out the static
scene for one :class:`RunConfiguration`: a ground slab whose friction
follows the road surface, the brake-line sensor, the obstacle dummy and
the vehicle parked off-screen before the brake line.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Tuple

from sim.brake_policy import DEFAULT_POLICY, BrakePolicy
from sim.errors import UnknownOptionError
from sim.physics import Body, PhysicsEngine
from sim.session import RunSession

log = logging.getLogger("scenario")

LABEL_CAR = "car"
LABEL_OBSTACLE = "dummy"
LABEL_BRAKE_LINE = "brakeLine"
LABEL_GROUND = "ground"


class SpeedClass(Enum):
    """Target speed selected by the user."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Surface(Enum):
    """Road surface condition selected by the user."""
    DRY = "dry"
    WET = "wet"
    ICY = "icy"


@dataclass(frozen=True)
class SpeedProfile:
    kmh: int
    cruise_speed: float
    """Velocity along the travel axis, units per tick."""


@dataclass(frozen=True)
class SurfaceProfile:
    friction: float
    braking_coefficient: float
    label: str


SPEED_PROFILES: Dict[SpeedClass, SpeedProfile] = {
    SpeedClass.LOW:    SpeedProfile(kmh=30,  cruise_speed=8.0),
    SpeedClass.MEDIUM: SpeedProfile(kmh=60,  cruise_speed=15.0),
    SpeedClass.HIGH:   SpeedProfile(kmh=100, cruise_speed=22.0),
}

# Braking coefficients must keep dry > wet > icy so stopping distances
# order dry <= wet <= icy.
SURFACE_PROFILES: Dict[Surface, SurfaceProfile] = {
    Surface.DRY: SurfaceProfile(friction=0.8,  braking_coefficient=0.15, label="Dry"),
    Surface.WET: SurfaceProfile(friction=0.4,  braking_coefficient=0.08, label="Wet"),
    Surface.ICY: SurfaceProfile(friction=0.05, braking_coefficient=0.02, label="Icy"),
}


def _parse(enum_cls, kind: str, value) -> Enum:
    if isinstance(value, enum_cls):
        return value
    text = str(value).strip().lower()
    for member in enum_cls:
        if member.value == text:
            return member
    raise UnknownOptionError(kind, value, (m.value for m in enum_cls))


def parse_speed_class(value) -> SpeedClass:
    """Map ``"low"`` / ``"medium"`` / ``"high"`` to :class:`SpeedClass`."""
    return _parse(SpeedClass, "speed class", value)


def parse_surface(value) -> Surface:
    """Map ``"dry"`` / ``"wet"`` / ``"icy"`` to :class:`Surface`."""
    return _parse(Surface, "surface", value)


def parse_distance(value, choices: Iterable[float] = ()) -> float:
    """Parse a positive obstacle distance; restrict to *choices* when given."""
    choices = tuple(choices)
    try:
        distance = float(value)
    except (TypeError, ValueError) as exc:
        raise UnknownOptionError(
            "obstacle distance", value, choices or ("a positive number",)
        ) from exc
    if distance <= 0 or (choices and distance not in choices):
        raise UnknownOptionError("obstacle distance", value, choices or ("a positive number",))
    return distance


@dataclass(frozen=True)
class RunConfiguration:
    """Immutable parameters of one run.

    Attributes
    ----------
    speed_class : SpeedClass
    surface : Surface
    obstacle_distance : float
        Gap between the brake line and the obstacle, simulation units.
    """

    speed_class: SpeedClass = SpeedClass.LOW
    surface: Surface = Surface.DRY
    obstacle_distance: float = 400.0

    @property
    def cruise_speed(self) -> float:
        return SPEED_PROFILES[self.speed_class].cruise_speed

    @property
    def kmh(self) -> int:
        return SPEED_PROFILES[self.speed_class].kmh

    @property
    def surface_profile(self) -> SurfaceProfile:
        return SURFACE_PROFILES[self.surface]

    @property
    def braking_coefficient(self) -> float:
        return SURFACE_PROFILES[self.surface].braking_coefficient

    def with_changes(self, **changes) -> "RunConfiguration":
        """Copy with some fields replaced."""
        values = {
            "speed_class": self.speed_class,
            "surface": self.surface,
            "obstacle_distance": self.obstacle_distance,
        }
        values.update(changes)
        return RunConfiguration(**values)


@dataclass
class WorldHandle:
    """Bodies created by :func:`build_world` for the current configuration."""
    engine: PhysicsEngine
    config: RunConfiguration
    car: Body
    obstacle: Body
    brake_line: Body
    ground: Body
    policy: BrakePolicy = DEFAULT_POLICY

    def obstacle_face_x(self) -> float:
        """X of the obstacle face the vehicle approaches."""
        return self.obstacle.x - self.obstacle.width / 2.0


def _scene_bodies(config: RunConfiguration, policy: BrakePolicy) -> Tuple[Body, ...]:
    ground_top = policy.ground_y - policy.ground_height / 2.0

    ground_width = policy.ground_min_width + config.obstacle_distance
    ground = Body(
        label=LABEL_GROUND,
        x=ground_width / 2.0 - policy.ground_left_margin,
        y=policy.ground_y,
        width=ground_width,
        height=policy.ground_height,
        is_static=True,
        friction=config.surface_profile.friction,
    )

    brake_line = Body(
        label=LABEL_BRAKE_LINE,
        x=policy.brake_line_x,
        y=ground_top - policy.brake_line_height / 2.0,
        width=policy.brake_line_width,
        height=policy.brake_line_height,
        is_static=True,
        is_sensor=True,
    )

    obstacle_x = policy.obstacle_x(config.obstacle_distance)
    dummy = Body(
        label=LABEL_OBSTACLE,
        x=obstacle_x,
        y=ground_top - policy.obstacle_height / 2.0,
        width=policy.obstacle_width,
        height=policy.obstacle_height,
        is_static=True,
    )
    dummy_head = Body(
        label=LABEL_OBSTACLE,
        x=obstacle_x,
        y=ground_top - policy.obstacle_height - policy.obstacle_head_size / 2.0,
        width=policy.obstacle_head_size,
        height=policy.obstacle_head_size,
        is_static=True,
    )

    # Native friction is suppressed; the controller models deceleration.
    car = Body(
        label=LABEL_CAR,
        x=policy.vehicle_start_x,
        y=ground_top - policy.vehicle_height / 2.0,
        width=policy.vehicle_width,
        height=policy.vehicle_height,
        mass=policy.vehicle_mass,
        friction=0.0,
        friction_air=policy.vehicle_friction_air,
    )
    return ground, brake_line, dummy, dummy_head, car


def build_world(
    engine: PhysicsEngine,
    config: RunConfiguration,
    session: RunSession,
    policy: BrakePolicy = DEFAULT_POLICY,
) -> WorldHandle:
    """Clear *engine*, lay out the scene for *config* and reset *session*."""
    engine.clear()
    ground, brake_line, dummy, dummy_head, car = _scene_bodies(config, policy)
    engine.add(ground, brake_line, dummy, dummy_head, car)
    session.reset()
    engine.look_at(car.x)

    log.info(
        "world built speed=%s surface=%s obstacle=%.0f (%.1f m)",
        config.speed_class.value,
        config.surface.value,
        config.obstacle_distance,
        config.obstacle_distance / policy.units_per_metre,
    )
    return WorldHandle(
        engine=engine,
        config=config,
        car=car,
        obstacle=dummy,
        brake_line=brake_line,
        ground=ground,
        policy=policy,
    )
