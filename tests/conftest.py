"""
Pytest configuration and shared fixtures for headroom twin tests.
"""

import sys
import os
import pytest

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from headroom_twin.hall_config import HallConfig
from headroom_twin.telemetry.generator import RackTelemetryGenerator
from headroom_twin.telemetry.rack import LoadBand, Rack
from headroom_twin.telemetry.snapshot import Snapshot


def make_rack(row="A", col=1, threshold=33.0, inlet_temp=29.0, load_band=LoadBand.NOMINAL):
    """Build a rack at a grid position with explicit readings"""
    return Rack.at_position(row, col, threshold, inlet_temp, load_band)


def make_snapshot(racks, current_setpoint=21.5):
    """Wrap hand-built racks in a snapshot"""
    return Snapshot(
        timestamp="2026-01-01T00:00:00.000Z",
        site="Test Hall",
        source="unit test",
        current_setpoint=current_setpoint,
        racks=tuple(racks),
    )


@pytest.fixture
def hall_config():
    """Reference 4x6 hall"""
    return HallConfig()


@pytest.fixture
def seeded_generator(hall_config):
    """Generator with a fixed seed"""
    return RackTelemetryGenerator(hall_config, seed=42)


@pytest.fixture
def base_snapshot(seeded_generator):
    """Reproducible generated snapshot"""
    return seeded_generator.generate_snapshot()


@pytest.fixture
def mixed_snapshot():
    """Hand-built snapshot covering every zone weight and load band"""
    return make_snapshot([
        make_rack("A", 1, 33.0, 29.0, LoadBand.NOMINAL),    # Tight, margin 4.0
        make_rack("B", 2, 34.0, 28.0, LoadBand.NOMINAL),    # Stable, margin 6.0
        make_rack("C", 3, 33.5, 30.8, LoadBand.ELEVATED),   # Fragile, margin 2.7
        make_rack("D", 4, 32.8, 31.6, LoadBand.PEAK),       # Critical, margin 1.2
        make_rack("D", 5, 34.2, 29.6, LoadBand.ELEVATED),   # Stable, margin 4.6
    ], current_setpoint=21.4)
