"""Setpoint what-if simulation.

Projects rack inlet temperatures after a proposed cooling-setpoint
increase using a first-order response per rack:

    k = 0.65 + zone_weight + load_weight
    inlet' = inlet + k * delta

Zone weights model distance from the computer-room air handler (zones
C and D sit furthest away); load weights model workload intensity.
Categories are recomputed for every projected rack and the hall-level
indicators, most-affected ranking and safety flags are derived from the
projection. The base snapshot is never modified.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from headroom_twin.telemetry.rack import LoadBand, ProjectedRack, Rack
from headroom_twin.telemetry.snapshot import Snapshot
from headroom_twin.thermal.aggregation import (
    count_critical,
    count_fragile_or_critical,
    overall_category,
)
from headroom_twin.thermal.categories import (
    CATEGORY_ORDER,
    CRITICAL_MARGIN_C,
    HeadroomCategory,
    round_tenth,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Thermal Response Model
# =============================================================================

# Hard safety clamp on the setpoint change (°C), independent of the
# range advertised in the snapshot.
DELTA_HARD_MIN_C = 0.0
DELTA_HARD_MAX_C = 2.0

BASE_RESPONSE = 0.65

ZONE_WEIGHTS = {"D": 0.14, "C": 0.10}
DEFAULT_ZONE_WEIGHT = 0.06

LOAD_WEIGHTS = {
    LoadBand.PEAK: 0.20,
    LoadBand.ELEVATED: 0.12,
    LoadBand.NOMINAL: 0.04,
}

# Changes above this size that add fragile/critical racks fall outside
# the cooling safe range.
COOLING_SAFE_DELTA_C = 1.6

TOP_AFFECTED_LIMIT = 3


def clamp_delta(delta: float) -> float:
    """Clamp a setpoint change into the hard [0, 2] °C window."""
    return max(DELTA_HARD_MIN_C, min(DELTA_HARD_MAX_C, float(delta)))


def zone_weight(zone: str) -> float:
    for suffix, weight in ZONE_WEIGHTS.items():
        if zone.endswith(suffix):
            return weight
    return DEFAULT_ZONE_WEIGHT


def load_weight(load_band: LoadBand) -> float:
    return LOAD_WEIGHTS[load_band]


def response_coefficient(rack: Rack) -> float:
    """Inlet temperature rise per °C of setpoint increase for ``rack``."""
    return BASE_RESPONSE + zone_weight(rack.zone) + load_weight(rack.load_band)


def project_rack(rack: Rack, delta: float) -> ProjectedRack:
    """Project a single rack under an already-clamped setpoint change."""
    new_inlet = round_tenth(rack.inlet_temp + response_coefficient(rack) * delta)
    return ProjectedRack.project(rack, new_inlet)


# =============================================================================
# Results
# =============================================================================

@dataclass(frozen=True)
class AffectedRack:
    """Entry of the most-affected ranking."""
    id: str
    category: HeadroomCategory
    prev_category: HeadroomCategory

    def to_dict(self) -> Dict[str, str]:
        return {
            "id": self.id,
            "category": self.category.value,
            "prevCategory": self.prev_category.value,
        }


@dataclass(frozen=True)
class FailureFlags:
    """Informational safety flags for a projected change."""
    inlet_safe_threshold_breached: bool
    headroom_margin_breached: bool
    cooling_safe_range_breached: bool

    @property
    def any(self) -> bool:
        return (self.inlet_safe_threshold_breached
                or self.headroom_margin_breached
                or self.cooling_safe_range_breached)

    def to_dict(self) -> Dict[str, bool]:
        return {
            "inletSafeThresholdBreached": self.inlet_safe_threshold_breached,
            "headroomMarginBreached": self.headroom_margin_breached,
            "coolingSafeRangeBreached": self.cooling_safe_range_breached,
        }


@dataclass(frozen=True)
class SimulationResult:
    """Projection of a setpoint change against one snapshot.

    Attributes:
        setpoint_delta: Clamped change, one decimal (°C)
        proposed_setpoint: Current setpoint plus the change (°C)
        post_headroom: Worst category after the change
        post_critical_count: Critical racks after the change
        post_fragile_or_critical_count: Fragile or Critical racks after the change
        top_affected: Up to three racks closest to breach after the change
        post_racks: Every projected rack, in snapshot order
        failure_flags: Safety flags
    """
    setpoint_delta: float
    proposed_setpoint: float
    post_headroom: HeadroomCategory
    post_critical_count: int
    post_fragile_or_critical_count: int
    top_affected: Tuple[AffectedRack, ...]
    post_racks: Tuple[ProjectedRack, ...]
    failure_flags: FailureFlags

    @property
    def changed_racks(self) -> List[ProjectedRack]:
        return [rack for rack in self.post_racks if rack.changed]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "setpointDelta": self.setpoint_delta,
            "proposedSetpoint": self.proposed_setpoint,
            "postHeadroom": self.post_headroom.value,
            "postCriticalCount": self.post_critical_count,
            "postFragileOrCriticalCount": self.post_fragile_or_critical_count,
            "topAffected": [rack.to_dict() for rack in self.top_affected],
            "postRacks": [rack.to_dict() for rack in self.post_racks],
            "failureFlags": self.failure_flags.to_dict(),
        }


def rank_top_affected(racks, limit: int = TOP_AFFECTED_LIMIT) -> List[AffectedRack]:
    """Most at-risk racks: category descending, then thermal margin ascending."""
    ordered = sorted(racks, key=lambda rack: (-rack.category.rank, rack.thermal_margin))
    return [
        AffectedRack(id=rack.id, category=rack.category, prev_category=rack.prev_category)
        for rack in ordered[:limit]
    ]


def simulate(base: Snapshot, delta: float) -> SimulationResult:
    """Simulate a cooling-setpoint increase against a snapshot.

    Args:
        base: Snapshot to project from (left untouched)
        delta: Proposed setpoint increase (°C); clamped to [0, 2]

    Returns:
        SimulationResult with projected racks, hall indicators and flags
    """
    delta = clamp_delta(delta)
    post_racks = tuple(project_rack(rack, delta) for rack in base.racks)

    post_fragile_or_critical = count_fragile_or_critical(post_racks)
    flags = FailureFlags(
        inlet_safe_threshold_breached=any(r.inlet_temp > r.threshold for r in post_racks),
        headroom_margin_breached=any(r.thermal_margin < CRITICAL_MARGIN_C for r in post_racks),
        cooling_safe_range_breached=(
            delta > COOLING_SAFE_DELTA_C
            and post_fragile_or_critical > base.fragile_or_critical_count
        ),
    )

    result = SimulationResult(
        setpoint_delta=round_tenth(delta),
        proposed_setpoint=round_tenth(base.current_setpoint + delta),
        post_headroom=overall_category(post_racks),
        post_critical_count=count_critical(post_racks),
        post_fragile_or_critical_count=post_fragile_or_critical,
        top_affected=tuple(rank_top_affected(post_racks)),
        post_racks=post_racks,
        failure_flags=flags,
    )
    logger.debug(
        f"Simulated +{result.setpoint_delta:.1f}C: {base.overall_headroom.value} -> "
        f"{result.post_headroom.value}, critical {base.critical_count} -> "
        f"{result.post_critical_count}"
    )
    return result


# =============================================================================
# Quick Preview
# =============================================================================

PREVIEW_DELTA_PER_CATEGORY_C = 0.7
PREVIEW_DELTA_PER_CRITICAL_C = 0.5


@dataclass(frozen=True)
class ChangePreview:
    """Rough estimate shown while an operator is still choosing a change."""
    setpoint_delta: float
    current_setpoint: float
    proposed_setpoint: float
    current_headroom: HeadroomCategory
    predicted_headroom: HeadroomCategory
    current_critical_count: int
    estimated_critical_count: int

    @property
    def critical_increase(self) -> bool:
        return self.estimated_critical_count > self.current_critical_count

    def to_dict(self) -> Dict[str, Any]:
        return {
            "setpointDelta": self.setpoint_delta,
            "currentSetpoint": self.current_setpoint,
            "proposedSetpoint": self.proposed_setpoint,
            "currentHeadroom": self.current_headroom.value,
            "predictedHeadroom": self.predicted_headroom.value,
            "currentCriticalCount": self.current_critical_count,
            "estimatedCriticalCount": self.estimated_critical_count,
        }


def preview_change(base: Snapshot, delta: float) -> ChangePreview:
    """Estimate the effect of a change without projecting every rack.

    Assumes one category step per 0.7 °C and one extra critical rack per
    0.5 °C. Use ``simulate`` for the actual projection.
    """
    delta = clamp_delta(delta)
    steps = math.floor(delta / PREVIEW_DELTA_PER_CATEGORY_C + 0.5)
    predicted_rank = min(base.overall_headroom.rank + steps, len(CATEGORY_ORDER) - 1)
    return ChangePreview(
        setpoint_delta=round_tenth(delta),
        current_setpoint=base.current_setpoint,
        proposed_setpoint=round_tenth(base.current_setpoint + delta),
        current_headroom=base.overall_headroom,
        predicted_headroom=HeadroomCategory.from_rank(predicted_rank),
        current_critical_count=base.critical_count,
        estimated_critical_count=base.critical_count + math.floor(delta / PREVIEW_DELTA_PER_CRITICAL_C),
    )
