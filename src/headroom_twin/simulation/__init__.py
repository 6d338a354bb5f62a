"""Setpoint what-if simulation.

Provides the per-rack thermal response model, the full simulation of a
setpoint change against a snapshot and a quick preview estimate.
"""

from headroom_twin.simulation.setpoint import (
    AffectedRack,
    ChangePreview,
    FailureFlags,
    SimulationResult,
    clamp_delta,
    preview_change,
    project_rack,
    rank_top_affected,
    response_coefficient,
    simulate,
)

__all__ = [
    "AffectedRack",
    "ChangePreview",
    "FailureFlags",
    "SimulationResult",
    "clamp_delta",
    "preview_change",
    "project_rack",
    "rank_top_affected",
    "response_coefficient",
    "simulate",
]
