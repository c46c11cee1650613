#!/usr/bin/env python3
"""
Ordering properties across the full configuration grid.
"""

from __future__ import annotations

import unittest

from sim.scenario import SpeedClass, Surface
from sim.sweep import sweep


class SweepOrderingTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.result = sweep(obstacle_distances=(200.0, 400.0, 800.0), max_ticks=5000)

    def test_grid_shape(self) -> None:
        self.assertEqual(self.result.distances.shape, (3, 3, 3))
        self.assertEqual(self.result.crashed.shape, (3, 3, 3))

    def test_slippier_surfaces_never_stop_shorter(self) -> None:
        self.assertTrue(self.result.surface_ordered())

    def test_faster_speeds_never_stop_shorter(self) -> None:
        self.assertTrue(self.result.speed_ordered())

    def test_far_obstacle_is_safe_on_dry_road(self) -> None:
        i = list(self.result.speeds).index(SpeedClass.LOW)
        j = list(self.result.surfaces).index(Surface.DRY)
        self.assertFalse(self.result.crashed[i, j, 2])

    def test_table_lists_every_run(self) -> None:
        lines = self.result.table().splitlines()
        self.assertEqual(len(lines), 1 + 27)
        self.assertIn("CRASH", self.result.table())


if __name__ == "__main__":
    unittest.main()
