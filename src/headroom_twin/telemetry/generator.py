"""
Rack Telemetry Generator for the Headroom Twin

This module produces synthetic but structurally valid hall snapshots,
standing in for a DCIM/SCADA feed so the risk engine can be exercised
without live sensors. Every snapshot is guaranteed to contain a handful
of racks at elevated risk.
"""

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import List, Optional, Sequence

import numpy as np

from headroom_twin.hall_config import HallConfig
from headroom_twin.telemetry.rack import Rack, load_band_for
from headroom_twin.telemetry.snapshot import Snapshot
from headroom_twin.thermal.aggregation import sort_by_margin
from headroom_twin.thermal.categories import round_tenth

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class RackTelemetryGenerator:
    """
    Generate hall snapshots from a randomized rack population

    Generation is a two-phase pipeline: ``build_base_racks`` draws the
    population, ``enforce_risk_moment`` returns a new population with the
    lowest-margin racks pushed toward their thresholds. Neither phase
    mutates racks that have already been handed out.
    """

    def __init__(self, config: Optional[HallConfig] = None, seed: Optional[int] = None):
        """
        Initialize the generator

        Args:
            config: Hall configuration (defaults to the reference hall)
            seed: Optional seed for reproducible snapshots
        """
        self.config = config or HallConfig()
        self.seed = seed
        self.rng = np.random.default_rng(seed)

        logger.info(
            f"Telemetry generator initialized for {self.config.site}: "
            f"{len(self.config.rows)}x{self.config.columns} racks"
        )

    def _uniform(self, bounds) -> float:
        low, high = bounds
        return float(self.rng.uniform(low, high))

    def build_base_racks(self) -> List[Rack]:
        """
        Draw one rack per grid position

        Later rows and columns run slightly hotter (hot-aisle drift). The
        load band is taken from the unrounded baseline inlet.

        Returns:
            Racks in row-major grid order
        """
        cfg = self.config
        racks = []
        for row_idx, row in enumerate(cfg.rows):
            for col_idx in range(cfg.columns):
                threshold = self._uniform(cfg.threshold_range_c)
                baseline_inlet = (
                    self._uniform(cfg.inlet_range_c)
                    + row_idx * cfg.row_drift_c
                    + col_idx * cfg.col_drift_c
                )
                racks.append(Rack.at_position(
                    row=row,
                    col=col_idx + 1,
                    threshold=round_tenth(threshold),
                    inlet_temp=round_tenth(baseline_inlet),
                    load_band=load_band_for(baseline_inlet),
                ))
        return racks

    def enforce_risk_moment(self, racks: Sequence[Rack]) -> List[Rack]:
        """
        Push the lowest-margin racks close to their thresholds

        The ``risk_rack_count`` racks with the smallest thermal margin get a
        new inlet temperature of ``threshold - U(risk_margin_range_c)``.

        Args:
            racks: Base population

        Returns:
            New population in the original order
        """
        count = min(self.config.risk_rack_count, len(racks))
        targets = {rack.id for rack in sort_by_margin(racks)[:count]}

        adjusted = []
        for rack in racks:
            if rack.id in targets:
                new_inlet = round_tenth(rack.threshold - self._uniform(self.config.risk_margin_range_c))
                rack = replace(rack, inlet_temp=new_inlet)
            adjusted.append(rack)
        return adjusted

    def generate_snapshot(self) -> Snapshot:
        """
        Generate a complete hall snapshot

        Returns:
            Snapshot with derived hall-level indicators
        """
        current_setpoint = round_tenth(self._uniform(self.config.setpoint_range_c))
        racks = self.enforce_risk_moment(self.build_base_racks())

        snapshot = Snapshot(
            timestamp=_utc_timestamp(),
            site=self.config.site,
            source=self.config.source,
            current_setpoint=current_setpoint,
            racks=tuple(racks),
            allowed_delta_range=self.config.delta_range,
        )
        logger.info(
            f"Generated snapshot: setpoint {snapshot.current_setpoint:.1f}C, "
            f"headroom {snapshot.overall_headroom.value}, "
            f"{snapshot.fragile_or_critical_count} fragile/critical racks"
        )
        return snapshot


def generate_snapshot(config: Optional[HallConfig] = None, seed: Optional[int] = None) -> Snapshot:
    """Generate a single snapshot with a throwaway generator."""
    return RackTelemetryGenerator(config, seed=seed).generate_snapshot()


if __name__ == "__main__":
    # Example usage
    from headroom_twin.telemetry.snapshot import racks_to_dataframe

    snapshot = generate_snapshot(seed=7)
    df = racks_to_dataframe(snapshot.racks)

    print(f"\n{snapshot.site} | {snapshot.source}")
    print(f"Setpoint: {snapshot.current_setpoint:.1f}C  Headroom: {snapshot.overall_headroom.value}")
    print(df.to_string(index=False))
