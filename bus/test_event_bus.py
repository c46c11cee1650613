#!/usr/bin/env python3
"""
Tests for the in-memory event bus: queueing, subscriber delivery, metrics.
"""

from __future__ import annotations

import unittest

from bus import EventBus, has_pair


class EventBusTests(unittest.TestCase):
    def test_poll_returns_events_oldest_first_and_clears(self) -> None:
        bus = EventBus()
        bus.publish("t", sender="a", payload={"n": 1}, tick=1)
        bus.publish("t", sender="a", payload={"n": 2}, tick=2)

        msgs = bus.poll("t")
        self.assertEqual([m.payload["n"] for m in msgs], [1, 2])
        self.assertEqual([m.tick for m in msgs], [1, 2])
        self.assertEqual(bus.poll("t"), [])

    def test_poll_unknown_topic_is_empty(self) -> None:
        self.assertEqual(EventBus().poll("nothing"), [])

    def test_subscribers_run_synchronously_in_order(self) -> None:
        bus = EventBus()
        seen = []
        bus.subscribe("t", lambda m: seen.append(("first", m.payload["n"])))
        bus.subscribe("t", lambda m: seen.append(("second", m.payload["n"])))

        bus.publish("t", sender="a", payload={"n": 7})

        self.assertEqual(seen, [("first", 7), ("second", 7)])

    def test_unsubscribe_stops_delivery(self) -> None:
        bus = EventBus()
        seen = []

        def cb(msg) -> None:
            seen.append(msg.id)

        bus.subscribe("t", cb)
        bus.unsubscribe("t", cb)
        bus.unsubscribe("t", cb)  # unknown callback is ignored
        bus.publish("t", sender="a", payload={})
        self.assertEqual(seen, [])

    def test_clear_keeps_subscriptions(self) -> None:
        bus = EventBus()
        seen = []
        bus.subscribe("t", lambda m: seen.append(m))
        bus.publish("t", sender="a", payload={})
        bus.clear()

        self.assertEqual(bus.poll("t"), [])
        bus.publish("t", sender="a", payload={})
        self.assertEqual(len(seen), 2)

    def test_metrics_count_flow(self) -> None:
        bus = EventBus()
        bus.subscribe("t", lambda m: None)
        ids = {bus.publish("t", sender="a", payload={}) for _ in range(3)}
        bus.poll("t")

        self.assertEqual(len(ids), 3)
        self.assertEqual(bus.metrics.report(), {"published": 3, "polled": 3, "delivered": 3})


class HasPairTests(unittest.TestCase):
    def test_matches_either_order(self) -> None:
        self.assertTrue(has_pair([("car", "dummy")], "car", "dummy"))
        self.assertTrue(has_pair([("ground", "car"), ("dummy", "car")], "car", "dummy"))

    def test_no_match(self) -> None:
        self.assertFalse(has_pair([("car", "brakeLine"), ("car", "ground")], "car", "dummy"))
        self.assertFalse(has_pair([], "car", "dummy"))


if __name__ == "__main__":
    unittest.main()
