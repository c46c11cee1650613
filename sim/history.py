#!/usr/bin/env python3
"""
sim/history.py
==============
Sink for finalised outcomes: the append-only run log and the result card
shown after each run.

:class:`RunHistory` subscribes to the ``outcome.finalized`` and
``outcome.upgraded`` bus topics.  Rows are derived from the recorded
:class:`~sim.session.Outcome` objects, so the in-place crash upgrade is
reflected without adding a second entry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from bus import TOPIC_FINALIZED, TOPIC_UPGRADED, EventBus, SimEvent
from sim.brake_policy import kmh_label
from sim.session import Outcome

log = logging.getLogger("history")


class CardStyle(Enum):
    SAFE = "safe"
    CRASH = "crash"


@dataclass(frozen=True)
class ResultCard:
    """Text shown on the result overlay."""
    title: str
    message: str
    value_text: str
    distance_m: float
    style: CardStyle


@dataclass(frozen=True)
class HistoryRow:
    """One line of the history table."""
    speed_label: str
    surface_label: str
    distance_label: str
    outcome_label: str
    crashed: bool


def result_card(outcome: Outcome) -> ResultCard:
    """Build the overlay text for *outcome*."""
    distance = f"{outcome.braking_distance_m:.1f}"
    if outcome.crashed:
        return ResultCard(
            title="CRASH!",
            message="The car hit the dummy.",
            value_text=f"Braking distance: {distance}m (collision)",
            distance_m=outcome.braking_distance_m,
            style=CardStyle.CRASH,
        )
    return ResultCard(
        title="Safe stop",
        message="Braking distance",
        value_text=f"{distance}m",
        distance_m=outcome.braking_distance_m,
        style=CardStyle.SAFE,
    )


def history_row(outcome: Outcome) -> HistoryRow:
    config = outcome.config
    return HistoryRow(
        speed_label=kmh_label(config.kmh),
        surface_label=config.surface_profile.label,
        distance_label=f"{outcome.braking_distance_m:.1f}m",
        outcome_label="Crash" if outcome.crashed else "Safe",
        crashed=outcome.crashed,
    )


class RunHistory:
    """Append-only log of finalised outcomes.

    Parameters
    ----------
    bus : EventBus or None
        When given, the history subscribes itself to the outcome topics.
    """

    def __init__(self, bus: Optional[EventBus] = None) -> None:
        self._outcomes: List[Outcome] = []
        self._card: Optional[ResultCard] = None
        if bus is not None:
            bus.subscribe(TOPIC_FINALIZED, self._on_finalized)
            bus.subscribe(TOPIC_UPGRADED, self._on_upgraded)

    def __len__(self) -> int:
        return len(self._outcomes)

    # ── bus callbacks ─────────────────────────────────────────────────────

    def _on_finalized(self, event: SimEvent) -> None:
        self.record(event.payload["outcome"])

    def _on_upgraded(self, event: SimEvent) -> None:
        self.refresh(event.payload["outcome"])

    # ── public API ────────────────────────────────────────────────────────

    def record(self, outcome: Outcome) -> None:
        """Append *outcome*; recording the same object twice is a no-op."""
        if any(existing is outcome for existing in self._outcomes):
            log.debug("outcome already recorded")
            return
        self._outcomes.append(outcome)
        self._card = result_card(outcome)
        row = history_row(outcome)
        log.info("history += %s | %s | %s | %s",
                 row.speed_label, row.surface_label, row.distance_label, row.outcome_label)

    def refresh(self, outcome: Outcome) -> None:
        """Re-render after the most recent outcome was upgraded in place."""
        if not self._outcomes or self._outcomes[-1] is not outcome:
            log.warning("upgrade for an outcome that is not the latest; ignored")
            return
        self._card = result_card(outcome)

    def clear_card(self) -> None:
        """Hide the result overlay (the log itself is never cleared)."""
        self._card = None

    @property
    def latest_card(self) -> Optional[ResultCard]:
        return self._card

    @property
    def outcomes(self) -> List[Outcome]:
        """Outcomes in recording order, oldest first."""
        return list(self._outcomes)

    def rows(self) -> List[HistoryRow]:
        """History table rows, newest first."""
        return [history_row(outcome) for outcome in reversed(self._outcomes)]
