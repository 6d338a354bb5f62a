"""Headroom Twin.

Thermal risk model for a data hall: classifies racks into headroom
categories from inlet telemetry and simulates the effect of a cooling
setpoint change before it is applied.
"""

__version__ = "0.1.0"

from headroom_twin.hall_config import DeltaRange, HallConfig
from headroom_twin.thermal import HeadroomCategory, classify
from headroom_twin.telemetry import (
    LoadBand,
    ProjectedRack,
    Rack,
    RackTelemetryGenerator,
    Snapshot,
    generate_snapshot,
)
from headroom_twin.simulation import SimulationResult, preview_change, simulate
from headroom_twin.control import HallStateStore

__all__ = [
    "DeltaRange",
    "HallConfig",
    "HeadroomCategory",
    "classify",
    "LoadBand",
    "ProjectedRack",
    "Rack",
    "RackTelemetryGenerator",
    "Snapshot",
    "generate_snapshot",
    "SimulationResult",
    "preview_change",
    "simulate",
    "HallStateStore",
]
