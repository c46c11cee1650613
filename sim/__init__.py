"""
sim: simulation core
====================

Modules
-------
physics
    :class:`PhysicsEngine` fixed-step rigid-body backend.
scenario
    :class:`RunConfiguration` and :func:`build_world`.
session
    :class:`RunSession` run-state context, :class:`RunPhase`, :class:`Outcome`.
controller
    :class:`BrakingController` cruise / braking logic.
evaluator
    :class:`OutcomeEvaluator` stop / crash detection and finalisation.
history
    :class:`RunHistory` run log and result card.
brake_policy
    :class:`BrakePolicy` tunable constants and force / distance helpers.
sim_bridge
    :class:`SimBridge` tick-loop orchestrator.
errors
    :class:`SimulationError` hierarchy.
sweep
    Headless batch runner over every configuration.
"""
