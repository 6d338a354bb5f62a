"""Operator-facing views: decision brief wording and rack heatmaps."""

from headroom_twin.reporting.brief import (
    DecisionBrief,
    build_decision_brief,
    change_review_enabled,
    risk_sentence,
    stress_rack_summary,
    tradeoff_sentence,
)
from headroom_twin.reporting.heatmap import plot_rack_heatmap

__all__ = [
    "DecisionBrief",
    "build_decision_brief",
    "change_review_enabled",
    "risk_sentence",
    "stress_rack_summary",
    "tradeoff_sentence",
    "plot_rack_heatmap",
]
