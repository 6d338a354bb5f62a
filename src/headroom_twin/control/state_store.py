"""Hall state store.

Holds the single live snapshot for a process. The store is created once
at startup and handed to the transport layer; ``refresh`` replaces the
snapshot wholesale with one reference assignment, so a reader sees
either the old snapshot or the new one and never a mix.
"""

import logging
from typing import Optional

from headroom_twin.simulation.setpoint import SimulationResult, simulate
from headroom_twin.telemetry.generator import RackTelemetryGenerator
from headroom_twin.telemetry.snapshot import Snapshot

logger = logging.getLogger(__name__)


class HallStateStore:
    """Single-slot holder of the current hall snapshot.

    Simulation results are computed on demand and never stored.
    """

    def __init__(self, generator: Optional[RackTelemetryGenerator] = None):
        """Initialize the store with a freshly generated snapshot.

        Args:
            generator: Snapshot source (defaults to the reference hall)
        """
        self.generator = generator or RackTelemetryGenerator()
        self._snapshot = self.generator.generate_snapshot()
        self.refresh_count = 0

    @property
    def current(self) -> Snapshot:
        """The live snapshot."""
        return self._snapshot

    def refresh(self) -> Snapshot:
        """Replace the live snapshot with a newly generated one.

        Returns:
            The new snapshot
        """
        snapshot = self.generator.generate_snapshot()
        self._snapshot = snapshot
        self.refresh_count += 1
        logger.info(f"State refreshed ({self.refresh_count}): {snapshot.timestamp}")
        return snapshot

    def simulate(self, delta: float) -> SimulationResult:
        """Simulate a setpoint change against the live snapshot.

        Args:
            delta: Proposed setpoint increase (°C)

        Returns:
            SimulationResult; the store is left unchanged
        """
        return simulate(self._snapshot, delta)
