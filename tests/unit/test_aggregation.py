"""Unit tests for hall-level aggregation."""

import unittest

from conftest import make_rack
from headroom_twin.telemetry.rack import LoadBand
from headroom_twin.thermal.aggregation import (
    count_by_category,
    count_critical,
    count_fragile_or_critical,
    overall_category,
    sort_by_margin,
    stress_rack,
)
from headroom_twin.thermal.categories import HeadroomCategory


class TestOverallCategory(unittest.TestCase):
    """Worst-case reduction follows risk order"""

    def test_single_critical_dominates(self):
        racks = [make_rack("A", i, 34.0, 27.0) for i in range(1, 20)]
        racks.append(make_rack("B", 1, 33.0, 31.5))  # margin 1.5
        self.assertEqual(overall_category(racks), HeadroomCategory.CRITICAL)

    def test_not_alphabetic(self):
        # "Tight" sorts after "Stable" and "Fragile" alphabetically
        racks = [make_rack("A", 1, 33.0, 29.0), make_rack("A", 2, 33.0, 30.5)]
        self.assertEqual(overall_category(racks), HeadroomCategory.FRAGILE)

    def test_all_stable(self):
        racks = [make_rack("A", i, 34.0, 28.0) for i in range(1, 4)]
        self.assertEqual(overall_category(racks), HeadroomCategory.STABLE)

    def test_empty_population_is_stable(self):
        self.assertEqual(overall_category([]), HeadroomCategory.STABLE)


class TestCounts(unittest.TestCase):

    def setUp(self):
        self.racks = [
            make_rack("A", 1, 33.0, 28.0),   # Stable
            make_rack("A", 2, 33.0, 29.0),   # Tight
            make_rack("A", 3, 33.0, 30.5),   # Fragile
            make_rack("A", 4, 33.0, 31.5),   # Critical
            make_rack("A", 5, 33.0, 33.4),   # Critical (over threshold)
        ]

    def test_count_critical(self):
        self.assertEqual(count_critical(self.racks), 2)

    def test_count_fragile_or_critical(self):
        self.assertEqual(count_fragile_or_critical(self.racks), 3)

    def test_custom_predicate(self):
        self.assertEqual(
            count_by_category(self.racks, lambda c: c is HeadroomCategory.TIGHT), 1
        )


class TestStressRack(unittest.TestCase):

    def test_smallest_margin(self):
        racks = [
            make_rack("A", 1, 33.0, 28.0),
            make_rack("A", 2, 33.0, 31.0),
            make_rack("A", 3, 33.0, 30.0),
        ]
        self.assertEqual(stress_rack(racks).id, "RA02")

    def test_ties_keep_population_order(self):
        racks = [
            make_rack("B", 1, 33.0, 30.0, LoadBand.PEAK),
            make_rack("A", 1, 34.0, 31.0),
            make_rack("A", 2, 33.0, 30.0),
        ]
        self.assertEqual(stress_rack(racks).id, "RB01")
        self.assertEqual([r.id for r in sort_by_margin(racks)], ["RB01", "RA01", "RA02"])

    def test_empty(self):
        self.assertIsNone(stress_rack([]))


if __name__ == "__main__":
    unittest.main()
