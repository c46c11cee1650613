"""
SimEvent: Data structure representing a message carried by the EventBus.
"""

from dataclasses import dataclass, field


@dataclass
class SimEvent:
    """
    Represents a single event published on the EventBus.

    Attributes:
        id (str): Unique identifier for the event.
        topic (str): The topic of the event (e.g., 'physics.tick', 'physics.collision',
            'outcome.finalized').
        sender (str): Component that produced the event (e.g., 'physics', 'evaluator').
        payload (dict): Arbitrary dictionary containing event contents.
        tick (int): Simulation tick at which the event was produced.
    """
    id: str
    topic: str
    sender: str
    payload: dict = field(default_factory=dict)
    tick: int = 0
