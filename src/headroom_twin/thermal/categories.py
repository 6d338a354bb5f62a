"""Headroom categories and the rack risk classifier.

A rack's headroom category is derived from its thermal margin
(threshold minus inlet temperature) and whether the inlet has already
crossed the rack's safe-operation threshold:

    inlet > threshold or margin < 1.8 °C  →  Critical
    margin < 3.0 °C                      →  Fragile
    margin < 4.5 °C                      →  Tight
    otherwise                            →  Stable

Categories are totally ordered Stable < Tight < Fragile < Critical.
"""

from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Dict, List


class HeadroomCategory(Enum):
    """Rack headroom category, ordered from safest to most at-risk."""
    STABLE = "Stable"
    TIGHT = "Tight"
    FRAGILE = "Fragile"
    CRITICAL = "Critical"

    @property
    def rank(self) -> int:
        """Position in CATEGORY_ORDER (0 = Stable, 3 = Critical)."""
        return CATEGORY_ORDER.index(self)

    @classmethod
    def from_rank(cls, rank: int) -> "HeadroomCategory":
        return CATEGORY_ORDER[rank]


CATEGORY_ORDER: List[HeadroomCategory] = [
    HeadroomCategory.STABLE,
    HeadroomCategory.TIGHT,
    HeadroomCategory.FRAGILE,
    HeadroomCategory.CRITICAL,
]

CATEGORY_COLORS: Dict[HeadroomCategory, str] = {
    HeadroomCategory.STABLE: "#2a9d6f",
    HeadroomCategory.TIGHT: "#d9a11a",
    HeadroomCategory.FRAGILE: "#d76b1e",
    HeadroomCategory.CRITICAL: "#bd3b3b",
}


# =============================================================================
# Classification Thresholds (°C of thermal margin)
# =============================================================================

CRITICAL_MARGIN_C = 1.8
FRAGILE_MARGIN_C = 3.0
TIGHT_MARGIN_C = 4.5


def round_tenth(value: float) -> float:
    """Round to one decimal place, halves away from zero.

    Operates on the exact binary value of ``value`` so that e.g.
    29.75 becomes 29.8 rather than following banker's rounding.
    """
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def classify(thermal_margin: float, inlet_temp: float, threshold: float) -> HeadroomCategory:
    """Classify a rack into a headroom category.

    Args:
        thermal_margin: Threshold minus inlet temperature (°C); racks pass it
            rounded to one decimal
        inlet_temp: Rack inlet temperature (°C)
        threshold: Rack safe-operation ceiling (°C)

    Returns:
        HeadroomCategory, first matching rule wins
    """
    if inlet_temp > threshold or thermal_margin < CRITICAL_MARGIN_C:
        return HeadroomCategory.CRITICAL
    if thermal_margin < FRAGILE_MARGIN_C:
        return HeadroomCategory.FRAGILE
    if thermal_margin < TIGHT_MARGIN_C:
        return HeadroomCategory.TIGHT
    return HeadroomCategory.STABLE
