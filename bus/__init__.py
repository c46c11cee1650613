"""
bus: in-memory simulation event infrastructure
==============================================

Provides a lightweight pub/sub transport layer that turns the physics
backend's tick and collision callbacks into an explicit event stream,
consumed in a fixed order by a single-threaded simulation loop.

Modules
-------
message
    :class:`SimEvent` dataclass.
event_bus
    :class:`EventBus` publish / poll / subscribe transport.
metrics
    :class:`BusMetrics` counter snapshot.
utils
    ID generation, collision pair matching.
"""

from .message import SimEvent
from .event_bus import EventBus
from .metrics import BusMetrics
from .utils import new_msg_id, has_pair

# Topic names shared by producers and consumers
TOPIC_TICK = "physics.tick"
TOPIC_COLLISION = "physics.collision"
TOPIC_FINALIZED = "outcome.finalized"
TOPIC_UPGRADED = "outcome.upgraded"

__all__ = [
    "SimEvent",
    "EventBus",
    "BusMetrics",
    "new_msg_id",
    "has_pair",
    "TOPIC_TICK",
    "TOPIC_COLLISION",
    "TOPIC_FINALIZED",
    "TOPIC_UPGRADED",
]
