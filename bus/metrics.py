"""
BusMetrics: Tracks simple statistics for EventBus message flow.
"""


class BusMetrics:
    """
    Tracks metrics for published, polled and delivered events.

    Attributes:
        published (int): Total number of events published.
        polled (int): Number of events handed out by poll().
        delivered (int): Number of subscriber callback invocations.
    """

    def __init__(self):
        """Initialize all counters to zero."""
        self.published = 0
        self.polled = 0
        self.delivered = 0

    def report(self) -> dict:
        """
        Return a snapshot of current metrics.

        Returns:
            dict: Dictionary containing 'published', 'polled' and 'delivered' counters.
        """
        return {
            "published": self.published,
            "polled": self.polled,
            "delivered": self.delivered,
        }
