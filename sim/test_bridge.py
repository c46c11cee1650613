#!/usr/bin/env python3
"""
End-to-end tests of the tick loop: outcomes, guards, determinism and
liveness for whole runs stepped synchronously.
"""

from __future__ import annotations

import unittest

from sim.errors import RunTimeoutError
from sim.scenario import RunConfiguration, SpeedClass, Surface
from sim.session import RunPhase
from sim.sim_bridge import SimBridge


def _config(speed: str = "medium", surface: str = "dry", distance: float = 400.0) -> RunConfiguration:
    return RunConfiguration(
        speed_class=SpeedClass(speed), surface=Surface(surface), obstacle_distance=distance
    )


class RunOutcomeTests(unittest.TestCase):
    def test_medium_dry_stops_before_obstacle(self) -> None:
        bridge = SimBridge(config=_config())
        outcome = bridge.run_to_completion()

        self.assertFalse(outcome.crashed)
        self.assertGreater(outcome.braking_distance_m, 0.0)
        self.assertLess(outcome.braking_distance_m, 40.0)
        self.assertIs(bridge.session.phase, RunPhase.STOPPED)
        self.assertLess(bridge.world.car.bounds()[2], bridge.world.obstacle_face_x())
        self.assertEqual(bridge.get_result_card().title, "Safe stop")

    def test_runs_are_deterministic(self) -> None:
        first = SimBridge(config=_config()).run_to_completion()
        second = SimBridge(config=_config()).run_to_completion()
        self.assertEqual(first.braking_distance_m, second.braking_distance_m)
        self.assertEqual(first.crashed, second.crashed)

    def test_icy_crashes_into_near_obstacle(self) -> None:
        bridge = SimBridge(config=_config(surface="icy"))
        outcome = bridge.run_to_completion()
        self.assertTrue(outcome.crashed)
        self.assertEqual(outcome.braking_distance_m, 34.5)
        self.assertEqual(bridge.get_result_card().title, "CRASH!")

    def test_very_close_obstacle_caps_distance(self) -> None:
        outcome = SimBridge(config=_config(surface="icy", distance=50.0)).run_to_completion()
        self.assertTrue(outcome.crashed)
        self.assertLessEqual(outcome.braking_distance_m, 5.0)

    def test_no_crash_without_collision(self) -> None:
        bridge = SimBridge(config=_config(speed="low", distance=800.0))
        outcome = bridge.run_to_completion()
        self.assertFalse(outcome.crashed)
        self.assertIs(bridge.session.phase, RunPhase.STOPPED)

    def test_run_terminates_within_bound(self) -> None:
        for surface in ("dry", "wet", "icy"):
            bridge = SimBridge(config=_config(speed="high", surface=surface, distance=800.0))
            bridge.run_to_completion(max_ticks=2000)
            self.assertTrue(bridge.is_finished())
            self.assertLess(bridge.session.ticks, 2000)

    def test_timeout_raises(self) -> None:
        bridge = SimBridge(config=_config())
        with self.assertRaises(RunTimeoutError):
            bridge.run_to_completion(max_ticks=10)


class CommandGuardTests(unittest.TestCase):
    def test_start_ignored_while_running(self) -> None:
        bridge = SimBridge(config=_config())
        self.assertTrue(bridge.start_run())
        bridge.step()
        self.assertFalse(bridge.start_run())
        self.assertTrue(bridge.is_running())

    def test_selection_ignored_while_running(self) -> None:
        bridge = SimBridge(config=_config())
        bridge.start_run()
        bridge.step()
        x_before = bridge.world.car.x

        self.assertFalse(bridge.select(surface="icy", obstacle_distance=800.0))
        self.assertIs(bridge.config.surface, Surface.DRY)
        self.assertEqual(bridge.config.obstacle_distance, 400.0)
        self.assertEqual(bridge.world.car.x, x_before)

    def test_selection_rebuilds_world_when_idle(self) -> None:
        bridge = SimBridge(config=_config())
        self.assertTrue(bridge.select(speed_class="high", obstacle_distance=600.0))
        self.assertIs(bridge.config.speed_class, SpeedClass.HIGH)
        self.assertEqual(bridge.world.obstacle.x, 750.0)
        self.assertIs(bridge.session.phase, RunPhase.IDLE)

    def test_idle_ticks_do_not_move_the_car(self) -> None:
        bridge = SimBridge(config=_config())
        for _ in range(30):
            bridge.step()
        self.assertEqual(bridge.world.car.x, -100.0)
        self.assertIs(bridge.session.phase, RunPhase.IDLE)

    def test_reset_mid_run_replays_from_start(self) -> None:
        bridge = SimBridge(config=_config())
        bridge.start_run()
        for _ in range(20):
            bridge.step()
        bridge.reset()
        self.assertIs(bridge.session.phase, RunPhase.IDLE)
        self.assertEqual(bridge.world.car.x, -100.0)
        self.assertEqual(len(bridge.history), 0)


class HistoryFlowTests(unittest.TestCase):
    def test_history_accumulates_newest_first(self) -> None:
        bridge = SimBridge(config=_config())
        bridge.run_to_completion()
        bridge.select(surface="icy")
        bridge.run_to_completion()

        rows = bridge.get_history_rows()
        self.assertEqual(len(rows), 2)
        self.assertEqual(rows[0].surface_label, "Icy")
        self.assertEqual(rows[0].outcome_label, "Crash")
        self.assertEqual(rows[1].surface_label, "Dry")
        self.assertEqual(rows[1].outcome_label, "Safe")

    def test_restart_after_finish_replays_same_configuration(self) -> None:
        bridge = SimBridge(config=_config())
        first = bridge.run_to_completion()
        self.assertTrue(bridge.start_run())
        self.assertIsNone(bridge.get_result_card())
        second = bridge.run_to_completion()
        self.assertEqual(first.braking_distance_m, second.braking_distance_m)
        self.assertEqual(len(bridge.history), 2)

    def test_late_crash_upgrades_single_entry(self) -> None:
        bridge = SimBridge(config=_config())
        stopped = bridge.run_to_completion()
        original = stopped.braking_distance_m

        bridge.evaluator.on_collision(bridge.session, bridge.world, [("car", "dummy")])

        self.assertEqual(len(bridge.history), 1)
        outcome = bridge.history.outcomes[0]
        self.assertTrue(outcome.crashed)
        self.assertGreaterEqual(outcome.braking_distance_m, original)
        self.assertEqual(bridge.get_history_rows()[0].outcome_label, "Crash")

    def test_snapshot_shape(self) -> None:
        bridge = SimBridge(config=_config())
        snap = bridge.get_snapshot()
        self.assertEqual(snap["phase"], "IDLE")
        self.assertEqual(snap["surface"], "dry")
        self.assertEqual(snap["car"]["x"], -100.0)
        self.assertEqual(snap["brake_line_x"], 150.0)
        self.assertEqual(snap["camera_x"], -100.0)
        for key in ("obstacle", "ground", "brake_line"):
            self.assertIn(key, snap)


if __name__ == "__main__":
    unittest.main()
