#!/usr/bin/env python3
"""
sim/errors.py
=============
Exception hierarchy for programmer-facing failures.

UI-driven input never raises: every selection comes from a fixed set of
choices.  These exceptions surface only from text parsing (CLI) and from
headless runs that exceed their tick budget.
"""

from __future__ import annotations


class SimulationError(Exception):
    """Base class for every error raised by the :mod:`sim` package."""


class UnknownOptionError(SimulationError, ValueError):
    """A speed class, surface or distance name could not be parsed."""

    def __init__(self, kind: str, value: object, choices) -> None:
        self.kind = kind
        self.value = value
        self.choices = tuple(choices)
        super().__init__(
            f"unknown {kind} {value!r}; expected one of {', '.join(map(str, self.choices))}"
        )


class RunTimeoutError(SimulationError):
    """A headless run did not reach a terminal phase within ``max_ticks``."""

    def __init__(self, max_ticks: int, phase: str) -> None:
        self.max_ticks = max_ticks
        self.phase = phase
        super().__init__(f"run still {phase} after {max_ticks} ticks")
