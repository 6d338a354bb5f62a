"""Operator-facing wording and the printable decision brief.

Turns a snapshot and a simulation result into the short sentences and
summary bullets an operator reviews before deciding on a setpoint
change.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from headroom_twin.simulation.setpoint import SimulationResult
from headroom_twin.telemetry.snapshot import Snapshot
from headroom_twin.thermal.categories import HeadroomCategory

UNKNOWN_OPERATOR = "Unknown Operator"


def risk_sentence(snapshot: Snapshot) -> str:
    return (
        f"Current load leaves {snapshot.overall_headroom.value.lower()} thermal margin. "
        "Increasing setpoint may push zones critical."
    )


def stress_rack_summary(snapshot: Snapshot) -> Optional[str]:
    rack = snapshot.stress_rack
    if rack is None:
        return None
    return (
        f"{rack.id} ({rack.zone}) is {rack.category.value}; "
        f"inlet {rack.inlet_temp}C near threshold {rack.threshold}C."
    )


def change_review_enabled(snapshot: Snapshot) -> bool:
    """A change is only worth reviewing when the hall is not fully Stable."""
    return snapshot.overall_headroom is not HeadroomCategory.STABLE


def tradeoff_sentence(snapshot: Snapshot, result: SimulationResult) -> str:
    return (
        f"Applying increases critical racks from {snapshot.critical_count} "
        f"to {result.post_critical_count}."
    )


@dataclass
class DecisionBrief:
    """Summary of an evaluated setpoint change."""
    generated_at: datetime
    bullets: List[str] = field(default_factory=list)

    def to_text(self) -> str:
        lines = [f"Generated: {self.generated_at:%Y-%m-%d %H:%M:%S}"]
        lines.extend(f"- {bullet}" for bullet in self.bullets)
        return "\n".join(lines)


def build_decision_brief(
    snapshot: Snapshot,
    result: SimulationResult,
    decision: Optional[str] = None,
    operator: Optional[str] = None,
    notes: Optional[str] = None,
    generated_at: Optional[datetime] = None,
) -> DecisionBrief:
    """Assemble the decision brief for a simulated change.

    Args:
        snapshot: Snapshot the change was simulated against
        result: Simulation result
        decision: Operator's decision, if one has been recorded
        operator: Operator name (blank names become "Unknown Operator")
        notes: Free-text operator notes
        generated_at: Brief timestamp (defaults to now)

    Returns:
        DecisionBrief with one bullet per line of the summary
    """
    bullets = [
        f"Change evaluated: Setpoint +{result.setpoint_delta:.1f}C "
        f"(to {result.proposed_setpoint:.1f}C).",
        f"Headroom shift: {snapshot.overall_headroom.value} -> {result.post_headroom.value}.",
        f"Critical racks shift: {snapshot.critical_count} -> {result.post_critical_count}.",
    ]
    if decision is not None:
        name = (operator or "").strip() or UNKNOWN_OPERATOR
        bullets.append(f"Decision selected: {decision}. Operator: {name}.")
        notes = (notes or "").strip()
        if notes:
            bullets.append(f"Operator notes: {notes}")

    return DecisionBrief(generated_at=generated_at or datetime.now(), bullets=bullets)
