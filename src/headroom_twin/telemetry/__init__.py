"""Rack telemetry records, hall snapshots and the synthetic feed."""

from .rack import LoadBand, ProjectedRack, Rack, load_band_for
from .snapshot import Snapshot, racks_to_dataframe
from .generator import RackTelemetryGenerator, generate_snapshot

__all__ = [
    "LoadBand",
    "ProjectedRack",
    "Rack",
    "load_band_for",
    "Snapshot",
    "racks_to_dataframe",
    "RackTelemetryGenerator",
    "generate_snapshot",
]
