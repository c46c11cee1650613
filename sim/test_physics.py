#!/usr/bin/env python3
"""
Tests for the fixed-step physics backend: integration, collision-start
reporting and static contact resolution.
"""

from __future__ import annotations

import unittest

from bus import TOPIC_COLLISION, TOPIC_TICK, EventBus
from sim.physics import BASE_DELTA_MS, Body, PhysicsEngine


def _box(label: str, x: float, vx: float = 0.0) -> Body:
    return Body(label=label, x=x, y=0.0, width=10.0, height=10.0,
                mass=1.0, friction_air=0.0, vx=vx)


def _wall(label: str, x: float, sensor: bool = False) -> Body:
    return Body(label=label, x=x, y=0.0, width=10.0, height=10.0,
                is_static=True, is_sensor=sensor)


class IntegrationTests(unittest.TestCase):
    def test_constant_velocity_without_drag(self) -> None:
        engine = PhysicsEngine()
        box = _box("box", 0.0, vx=2.5)
        engine.add(box)
        for _ in range(4):
            engine.step()
        self.assertAlmostEqual(box.x, 10.0)
        self.assertAlmostEqual(box.vx, 2.5)

    def test_air_friction_damps_velocity(self) -> None:
        engine = PhysicsEngine()
        box = _box("box", 0.0, vx=10.0)
        box.friction_air = 0.1
        engine.add(box)
        engine.step()
        self.assertAlmostEqual(box.vx, 9.0)

    def test_force_uses_squared_step_and_is_consumed(self) -> None:
        engine = PhysicsEngine()
        box = _box("box", 0.0)
        box.mass = 1000.0
        engine.add(box)

        engine.apply_force(box, 1.0)
        engine.step()
        expected = BASE_DELTA_MS * BASE_DELTA_MS / 1000.0
        self.assertAlmostEqual(box.vx, expected)

        engine.step()
        self.assertAlmostEqual(box.vx, expected)
        self.assertEqual(box.force_x, 0.0)

    def test_static_bodies_never_move(self) -> None:
        engine = PhysicsEngine()
        wall = _wall("wall", 5.0)
        wall.vx = 3.0
        engine.add(wall)
        engine.step()
        self.assertEqual(wall.x, 5.0)


class CollisionTests(unittest.TestCase):
    def test_collision_start_reported_once_and_body_stopped(self) -> None:
        engine = PhysicsEngine()
        box = _box("box", 0.0, vx=5.0)
        wall = _wall("wall", 20.0)
        engine.add(box, wall)

        self.assertEqual(engine.step(), [])   # right edge at 10
        self.assertEqual(engine.step(), [])   # touching at 15, no overlap yet
        self.assertEqual(engine.step(), [("box", "wall")])
        self.assertAlmostEqual(box.x, 10.0)
        self.assertEqual(box.vx, 0.0)

        # Resting contact keeps the pair active: no repeated start.
        self.assertEqual(engine.step(), [])
        self.assertEqual(engine.step(), [])

    def test_sensor_reports_but_does_not_block(self) -> None:
        engine = PhysicsEngine()
        box = _box("box", 0.0, vx=4.0)
        gate = _wall("gate", 12.0, sensor=True)
        engine.add(box, gate)

        starts = []
        for _ in range(10):
            starts.extend(engine.step())
        self.assertEqual(starts, [("box", "gate")])
        self.assertAlmostEqual(box.x, 40.0)
        self.assertAlmostEqual(box.vx, 4.0)

    def test_pair_restarts_after_separation(self) -> None:
        engine = PhysicsEngine()
        box = _box("box", 0.0, vx=4.0)
        gate = _wall("gate", 12.0, sensor=True)
        engine.add(box, gate)
        for _ in range(10):
            engine.step()

        box.vx = -4.0
        starts = []
        for _ in range(10):
            starts.extend(engine.step())
        self.assertEqual(starts, [("box", "gate")])

    def test_clear_forgets_bodies_and_contacts(self) -> None:
        engine = PhysicsEngine()
        engine.add(_box("box", 0.0), _wall("wall", 5.0))
        engine.step()
        engine.clear()
        self.assertEqual(engine.bodies, [])
        self.assertIsNone(engine.body("box"))
        self.assertEqual(engine.tick_count, 0)


class BusPublishingTests(unittest.TestCase):
    def test_tick_and_collision_events(self) -> None:
        bus = EventBus()
        engine = PhysicsEngine(bus=bus)
        car = _box("car", 0.0, vx=5.0)
        engine.add(car, _wall("dummy", 20.0))

        for _ in range(3):
            engine.step()

        ticks = bus.poll(TOPIC_TICK)
        self.assertEqual([m.tick for m in ticks], [1, 2, 3])
        self.assertAlmostEqual(ticks[0].payload["x"], 5.0)

        collisions = bus.poll(TOPIC_COLLISION)
        self.assertEqual(len(collisions), 1)
        self.assertEqual(collisions[0].tick, 3)
        self.assertEqual(collisions[0].payload["pairs"], [("car", "dummy")])

    def test_look_at_sets_anchor(self) -> None:
        engine = PhysicsEngine()
        engine.look_at(123.0)
        self.assertEqual(engine.view_anchor_x, 123.0)


if __name__ == "__main__":
    unittest.main()
