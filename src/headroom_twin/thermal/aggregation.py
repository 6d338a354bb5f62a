"""Hall-level reductions over a rack population.

Used both when a snapshot is generated and after a setpoint change is
simulated, so the same rules produce the "before" and "after" figures.
"""

from typing import Callable, Iterable, Sequence

from headroom_twin.thermal.categories import (
    CATEGORY_ORDER,
    HeadroomCategory,
)

CategoryPredicate = Callable[[HeadroomCategory], bool]


def overall_category(racks: Iterable) -> HeadroomCategory:
    """Worst headroom category across racks.

    Compares by position in CATEGORY_ORDER, so one Critical rack makes the
    whole hall Critical. An empty population is Stable.
    """
    worst = 0
    for rack in racks:
        worst = max(worst, CATEGORY_ORDER.index(rack.category))
    return CATEGORY_ORDER[worst]


def count_by_category(racks: Iterable, predicate: CategoryPredicate) -> int:
    """Count racks whose category satisfies ``predicate``."""
    return sum(1 for rack in racks if predicate(rack.category))


def is_critical(category: HeadroomCategory) -> bool:
    return category is HeadroomCategory.CRITICAL


def is_fragile_or_critical(category: HeadroomCategory) -> bool:
    return category in (HeadroomCategory.FRAGILE, HeadroomCategory.CRITICAL)


def count_critical(racks: Iterable) -> int:
    return count_by_category(racks, is_critical)


def count_fragile_or_critical(racks: Iterable) -> int:
    return count_by_category(racks, is_fragile_or_critical)


def sort_by_margin(racks: Sequence) -> list:
    """Racks ascending by thermal margin; ties keep population order."""
    return sorted(racks, key=lambda rack: rack.thermal_margin)


def stress_rack(racks: Sequence):
    """Rack closest to breach, or None for an empty population."""
    ordered = sort_by_margin(racks)
    return ordered[0] if ordered else None
