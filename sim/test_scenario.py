#!/usr/bin/env python3
"""
Tests for configuration parsing and scene construction.
"""

from __future__ import annotations

import unittest

from sim.brake_policy import DEFAULT_POLICY
from sim.errors import UnknownOptionError
from sim.physics import PhysicsEngine
from sim.scenario import (
    LABEL_BRAKE_LINE,
    LABEL_CAR,
    LABEL_GROUND,
    LABEL_OBSTACLE,
    SURFACE_PROFILES,
    RunConfiguration,
    SpeedClass,
    Surface,
    build_world,
    parse_distance,
    parse_speed_class,
    parse_surface,
)
from sim.session import RunPhase, RunSession


class ParsingTests(unittest.TestCase):
    def test_names_are_case_insensitive(self) -> None:
        self.assertIs(parse_speed_class(" Medium "), SpeedClass.MEDIUM)
        self.assertIs(parse_surface("ICY"), Surface.ICY)

    def test_enum_members_pass_through(self) -> None:
        self.assertIs(parse_speed_class(SpeedClass.HIGH), SpeedClass.HIGH)
        self.assertIs(parse_surface(Surface.WET), Surface.WET)

    def test_unknown_names_raise(self) -> None:
        with self.assertRaises(UnknownOptionError) as ctx:
            parse_speed_class("ludicrous")
        self.assertEqual(ctx.exception.choices, ("low", "medium", "high"))
        with self.assertRaises(ValueError):
            parse_surface("gravel")

    def test_distance_parsing(self) -> None:
        self.assertEqual(parse_distance("400"), 400.0)
        self.assertEqual(parse_distance(600, choices=(200.0, 400.0, 600.0)), 600.0)
        for bad in ("far", -10, 0):
            with self.assertRaises(UnknownOptionError):
                parse_distance(bad)
        with self.assertRaises(UnknownOptionError):
            parse_distance(300, choices=(200.0, 400.0))


class RunConfigurationTests(unittest.TestCase):
    def test_defaults(self) -> None:
        config = RunConfiguration()
        self.assertIs(config.speed_class, SpeedClass.LOW)
        self.assertIs(config.surface, Surface.DRY)
        self.assertEqual(config.obstacle_distance, 400.0)
        self.assertEqual(config.cruise_speed, 8.0)
        self.assertEqual(config.kmh, 30)

    def test_with_changes_returns_new_instance(self) -> None:
        config = RunConfiguration()
        changed = config.with_changes(speed_class=SpeedClass.HIGH)
        self.assertIs(config.speed_class, SpeedClass.LOW)
        self.assertEqual(changed.cruise_speed, 22.0)
        self.assertEqual(changed.kmh, 100)
        self.assertIs(changed.surface, Surface.DRY)

    def test_surfaces_order_braking_coefficients(self) -> None:
        dry, wet, icy = (SURFACE_PROFILES[s].braking_coefficient
                         for s in (Surface.DRY, Surface.WET, Surface.ICY))
        self.assertGreater(dry, wet)
        self.assertGreater(wet, icy)


class BuildWorldTests(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = PhysicsEngine()
        self.session = RunSession()

    def test_scene_layout(self) -> None:
        world = build_world(self.engine, RunConfiguration(), self.session)
        labels = [b.label for b in self.engine.bodies]
        self.assertEqual(labels.count(LABEL_OBSTACLE), 2)
        for label in (LABEL_GROUND, LABEL_BRAKE_LINE, LABEL_CAR):
            self.assertEqual(labels.count(label), 1)

        self.assertTrue(world.brake_line.is_sensor)
        self.assertTrue(world.obstacle.is_static)
        self.assertFalse(world.car.is_static)
        self.assertEqual(world.car.x, DEFAULT_POLICY.vehicle_start_x)
        self.assertEqual(world.obstacle_face_x(), 535.0)

        ground_top = world.ground.bounds()[1]
        self.assertEqual(world.car.bounds()[3], ground_top)
        self.assertEqual(world.obstacle.bounds()[3], ground_top)
        self.assertLess(world.ground.bounds()[0], world.car.bounds()[0])
        self.assertGreater(world.ground.bounds()[2], world.obstacle.x)

    def test_surface_friction_applied_to_ground(self) -> None:
        world = build_world(self.engine, RunConfiguration(surface=Surface.ICY), self.session)
        self.assertEqual(world.ground.friction, SURFACE_PROFILES[Surface.ICY].friction)

    def test_rebuild_replaces_bodies_and_resets_session(self) -> None:
        build_world(self.engine, RunConfiguration(), self.session)
        self.session.advance(RunPhase.BRAKING)
        self.session.ticks = 50

        world = build_world(self.engine, RunConfiguration(obstacle_distance=800.0), self.session)
        self.assertEqual(len(self.engine.bodies), 5)
        self.assertEqual(world.obstacle.x, 950.0)
        self.assertIs(self.session.phase, RunPhase.IDLE)
        self.assertEqual(self.session.ticks, 0)
        self.assertEqual(self.engine.view_anchor_x, world.car.x)

    def test_car_does_not_touch_obstacle_at_rest(self) -> None:
        world = build_world(self.engine, RunConfiguration(), self.session)
        starts = []
        for _ in range(20):
            starts.extend(self.engine.step())
        self.assertNotIn((LABEL_CAR, LABEL_OBSTACLE), starts)
        self.assertEqual(world.car.x, DEFAULT_POLICY.vehicle_start_x)


if __name__ == "__main__":
    unittest.main()
