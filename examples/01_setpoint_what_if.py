#!/usr/bin/env python3
"""Example: Setpoint What-If Analysis for a Data Hall.

This example demonstrates how to use the headroom twin to evaluate a
cooling-setpoint increase before it is applied.

Key outputs:
- Current hall headroom and the rack under most stress
- Projected headroom for a range of setpoint changes
- Most affected racks and safety flags for the chosen change
- Before/after rack heatmaps
"""

import sys
sys.path.insert(0, 'src')

import matplotlib.pyplot as plt

from headroom_twin.control import HallStateStore
from headroom_twin.reporting import (
    build_decision_brief,
    plot_rack_heatmap,
    risk_sentence,
    stress_rack_summary,
)
from headroom_twin.simulation import preview_change
from headroom_twin.telemetry import RackTelemetryGenerator, racks_to_dataframe


def sweep_deltas(store: HallStateStore):
    """Simulate every advertised setpoint step against the live snapshot.

    Args:
        store: State store holding the snapshot
    """
    snapshot = store.current
    delta_range = snapshot.allowed_delta_range
    steps = int(round((delta_range.max - delta_range.min) / delta_range.step))

    print(f"{'Delta':>6} {'Setpoint':>9} {'Headroom':>9} {'Critical':>9} {'Frag/Crit':>10} Flags")
    for i in range(steps + 1):
        delta = delta_range.min + i * delta_range.step
        result = store.simulate(delta)
        flags = [name for name, hit in result.failure_flags.to_dict().items() if hit]
        print(f"{result.setpoint_delta:>6.1f} {result.proposed_setpoint:>8.1f}C "
              f"{result.post_headroom.value:>9} {result.post_critical_count:>9} "
              f"{result.post_fragile_or_critical_count:>10} {', '.join(flags) or '-'}")


def main(delta: float = 1.0):
    store = HallStateStore(RackTelemetryGenerator(seed=2026))
    snapshot = store.current

    print(f"\n{'='*60}")
    print(f"Setpoint What-If Analysis")
    print(f"{'='*60}")
    print(f"Site: {snapshot.site} | {snapshot.source}")
    print(f"Current setpoint: {snapshot.current_setpoint:.1f}C")
    print(f"Overall headroom: {snapshot.overall_headroom.value}")
    print(f"Fragile/Critical racks: {snapshot.fragile_or_critical_count}")
    print(risk_sentence(snapshot))
    print(stress_rack_summary(snapshot))
    print(f"{'='*60}\n")

    df = racks_to_dataframe(snapshot.racks)
    print("Racks by category:")
    print(df.groupby("category")["id"].count().to_string())
    print()

    preview = preview_change(snapshot, delta)
    print(f"Preview +{preview.setpoint_delta:.1f}C: "
          f"{preview.current_headroom.value} -> {preview.predicted_headroom.value}, "
          f"critical {preview.current_critical_count} -> {preview.estimated_critical_count}\n")

    sweep_deltas(store)

    result = store.simulate(delta)
    print(f"\nMost affected racks at +{result.setpoint_delta:.1f}C:")
    for rack in result.top_affected:
        print(f"  {rack.id}: {rack.prev_category.value} -> {rack.category.value}")

    brief = build_decision_brief(snapshot, result, decision="Hold for review")
    print(f"\n{brief.to_text()}")

    fig, axes = plt.subplots(1, 2, figsize=(16, 5))
    plot_rack_heatmap(snapshot.racks, ax=axes[0], title="Current")
    plot_rack_heatmap(result.post_racks, ax=axes[1], highlight_changed=True,
                      title=f"After +{result.setpoint_delta:.1f}C")
    fig.tight_layout()
    fig.savefig("setpoint_what_if.png", dpi=150)
    print("\nHeatmaps saved to setpoint_what_if.png")


if __name__ == "__main__":
    main()
