"""
EventBus: In-memory pub/sub system for simulation events.

Supports:
    - Topic-based messaging with poll-and-clear semantics
    - Synchronous subscriber callbacks for sinks (history, UI adapters)
    - Logging of events

Intended usage:
    - The physics engine publishes 'physics.tick' and 'physics.collision'
    - The simulation loop polls those topics once per tick, in a fixed order
    - The outcome evaluator publishes 'outcome.finalized' / 'outcome.upgraded'
      and the history adapter subscribes to them
"""

import logging
from typing import Callable, Dict, List

from .message import SimEvent
from .metrics import BusMetrics
from .utils import new_msg_id

log = logging.getLogger("bus")

Subscriber = Callable[[SimEvent], None]


class EventBus:
    """
    Transport layer between the physics backend, the controllers and the sinks.

    Attributes:
        metrics (BusMetrics): Running counters for published / polled / delivered events.
    """

    def __init__(self):
        """Initialize an empty EventBus."""
        self._topics: Dict[str, List[SimEvent]] = {}
        self._subscribers: Dict[str, List[Subscriber]] = {}
        self.metrics = BusMetrics()

    def publish(self, topic: str, sender: str, payload: dict, tick: int = 0) -> str:
        """
        Publish an event to a specific topic.

        Subscribers of the topic are invoked synchronously, in subscription
        order, before this method returns. The event is also queued for
        :meth:`poll`.

        Args:
            topic (str): The topic name (e.g., 'physics.collision').
            sender (str): Component that produced the event.
            payload (dict): Arbitrary data dictionary representing the event contents.
            tick (int): Simulation tick the event belongs to.

        Returns:
            str: The unique event ID.
        """
        msg = SimEvent(
            id=new_msg_id(),
            topic=topic,
            sender=sender,
            payload=payload,
            tick=tick,
        )
        self._topics.setdefault(topic, []).append(msg)
        self.metrics.published += 1

        log.debug("publish topic=%s sender=%s tick=%d id=%s", topic, sender, tick, msg.id)

        for callback in list(self._subscribers.get(topic, [])):
            callback(msg)
            self.metrics.delivered += 1
        return msg.id

    def poll(self, topic: str) -> List[SimEvent]:
        """
        Retrieve and clear all events from a given topic.

        Args:
            topic (str): The topic name to poll events from.

        Returns:
            List[SimEvent]: Events published to the topic since the last poll, oldest first.
        """
        msgs = self._topics.get(topic, [])
        self._topics[topic] = []
        self.metrics.polled += len(msgs)
        return msgs

    def subscribe(self, topic: str, callback: Subscriber) -> None:
        """
        Register a callback invoked for every event published on *topic*.

        Args:
            topic (str): The topic name.
            callback (Callable[[SimEvent], None]): Receiver of each event.
        """
        self._subscribers.setdefault(topic, []).append(callback)

    def unsubscribe(self, topic: str, callback: Subscriber) -> None:
        """
        Remove a previously registered callback. Unknown callbacks are ignored.

        Args:
            topic (str): The topic name.
            callback (Callable[[SimEvent], None]): The callback to remove.
        """
        callbacks = self._subscribers.get(topic, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def clear(self) -> None:
        """
        Drop every queued event on every topic. Subscriptions are kept.
        """
        dropped = sum(len(msgs) for msgs in self._topics.values())
        self._topics.clear()
        if dropped:
            log.debug("cleared %d queued events", dropped)
