#!/usr/bin/env python3
"""
Tests for the braking force law and distance helpers.
"""

from __future__ import annotations

import unittest

from sim.brake_policy import DEFAULT_POLICY, BrakePolicy, braking_force, distance_m, kmh_label


class BrakingForceTests(unittest.TestCase):
    def test_fast_regime_uses_k1(self) -> None:
        force = braking_force(15.0, 0.15, 1000.0)
        self.assertAlmostEqual(force, -15.0 * 0.15 * 1000.0 * 0.001)

    def test_slow_regime_uses_k2(self) -> None:
        force = braking_force(0.4, 0.15, 1000.0)
        self.assertAlmostEqual(force, -0.4 * 0.15 * 1000.0 * 0.01)

    def test_regime_boundary_belongs_to_slow(self) -> None:
        at_boundary = braking_force(0.5, 0.1, 1000.0)
        self.assertAlmostEqual(at_boundary, -0.5 * 0.1 * 1000.0 * 0.01)

    def test_no_force_at_rest(self) -> None:
        self.assertEqual(braking_force(0.01, 0.15, 1000.0), 0.0)
        self.assertEqual(braking_force(0.0, 0.15, 1000.0), 0.0)

    def test_force_opposes_motion(self) -> None:
        self.assertGreater(braking_force(-3.0, 0.15, 1000.0), 0.0)
        self.assertLess(braking_force(3.0, 0.15, 1000.0), 0.0)

    def test_custom_policy_gains(self) -> None:
        policy = BrakePolicy(fast_regime_gain=0.002)
        self.assertAlmostEqual(braking_force(10.0, 0.1, 1000.0, policy), -2.0)


class DistanceTests(unittest.TestCase):
    def test_relative_to_brake_line(self) -> None:
        self.assertEqual(distance_m(489.2), 33.9)
        self.assertEqual(distance_m(495.0), 34.5)

    def test_clamped_at_zero_before_line(self) -> None:
        self.assertEqual(distance_m(100.0), 0.0)
        self.assertEqual(distance_m(DEFAULT_POLICY.brake_line_x), 0.0)

    def test_obstacle_position(self) -> None:
        self.assertEqual(DEFAULT_POLICY.obstacle_x(400.0), 550.0)

    def test_kmh_label(self) -> None:
        self.assertEqual(kmh_label(60), "60km/h")


if __name__ == "__main__":
    unittest.main()
