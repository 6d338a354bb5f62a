"""Headroom classification and hall-level aggregation.

Provides:
- The ordered headroom categories and the rack classifier
- Worst-case and count reductions over rack populations
- Stress rack selection
"""

from headroom_twin.thermal.categories import (
    CATEGORY_COLORS,
    CATEGORY_ORDER,
    HeadroomCategory,
    classify,
    round_tenth,
)
from headroom_twin.thermal.aggregation import (
    count_by_category,
    count_critical,
    count_fragile_or_critical,
    is_critical,
    is_fragile_or_critical,
    overall_category,
    sort_by_margin,
    stress_rack,
)

__all__ = [
    "CATEGORY_COLORS",
    "CATEGORY_ORDER",
    "HeadroomCategory",
    "classify",
    "round_tenth",
    "count_by_category",
    "count_critical",
    "count_fragile_or_critical",
    "is_critical",
    "is_fragile_or_critical",
    "overall_category",
    "sort_by_margin",
    "stress_rack",
]
