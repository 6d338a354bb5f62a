"""
Unit tests for the rack telemetry generator
"""

import unittest

import pandas as pd

from headroom_twin.hall_config import HallConfig
from headroom_twin.telemetry.generator import RackTelemetryGenerator, generate_snapshot
from headroom_twin.telemetry.rack import LoadBand
from headroom_twin.telemetry.snapshot import Snapshot, racks_to_dataframe
from headroom_twin.thermal.aggregation import count_fragile_or_critical
from headroom_twin.thermal.categories import HeadroomCategory, classify, round_tenth


class TestBaseRacks(unittest.TestCase):
    """Test population drawing"""

    def setUp(self):
        self.generator = RackTelemetryGenerator(HallConfig(), seed=1)
        self.racks = self.generator.build_base_racks()

    def test_grid_shape(self):
        self.assertEqual(len(self.racks), 24)
        ids = [r.id for r in self.racks]
        self.assertEqual(len(set(ids)), 24)
        self.assertEqual(ids[0], "RA01")
        self.assertEqual(ids[-1], "RD06")

    def test_value_ranges(self):
        for rack in self.racks:
            self.assertGreaterEqual(rack.threshold, 32.5)
            self.assertLessEqual(rack.threshold, 34.5)
            self.assertGreaterEqual(rack.inlet_temp, 27.0)
            # Max drift: 3 rows * 0.2 + 5 columns * 0.08
            self.assertLessEqual(rack.inlet_temp, 33.8 + 0.6 + 0.4 + 0.05)

    def test_one_decimal(self):
        for rack in self.racks:
            self.assertEqual(rack.threshold, round(rack.threshold, 1))
            self.assertEqual(rack.inlet_temp, round(rack.inlet_temp, 1))
            self.assertEqual(rack.thermal_margin, round(rack.thermal_margin, 1))

    def test_zone_follows_row(self):
        for rack in self.racks:
            self.assertEqual(rack.zone, f"Zone-{rack.row}")


class TestRiskInjection(unittest.TestCase):
    """Test the guaranteed elevated-risk racks"""

    def setUp(self):
        self.generator = RackTelemetryGenerator(HallConfig(), seed=3)

    def test_lowest_margin_racks_pushed(self):
        base = self.generator.build_base_racks()
        lowest = {r.id for r in sorted(base, key=lambda r: r.thermal_margin)[:4]}
        adjusted = self.generator.enforce_risk_moment(base)

        for rack in adjusted:
            if rack.id in lowest:
                self.assertGreaterEqual(rack.thermal_margin, 1.6)
                self.assertLessEqual(rack.thermal_margin, 2.7)

    def test_does_not_mutate_input(self):
        base = self.generator.build_base_racks()
        before = [r.to_dict() for r in base]
        adjusted = self.generator.enforce_risk_moment(base)
        self.assertEqual([r.to_dict() for r in base], before)
        self.assertEqual([r.id for r in adjusted], [r.id for r in base])

    def test_load_band_kept(self):
        base = self.generator.build_base_racks()
        adjusted = self.generator.enforce_risk_moment(base)
        for old, new in zip(base, adjusted):
            self.assertIs(old.load_band, new.load_band)

    def test_small_hall(self):
        generator = RackTelemetryGenerator(HallConfig(rows=("A",), columns=2), seed=5)
        snapshot = generator.generate_snapshot()
        self.assertEqual(len(snapshot.racks), 2)
        self.assertEqual(snapshot.fragile_or_critical_count, 2)


class TestSnapshotGeneration(unittest.TestCase):
    """Test complete snapshots"""

    def test_every_snapshot_has_elevated_risk(self):
        generator = RackTelemetryGenerator(seed=11)
        for _ in range(50):
            snapshot = generator.generate_snapshot()
            self.assertGreaterEqual(snapshot.fragile_or_critical_count, 4)
            self.assertGreaterEqual(
                sum(1 for r in snapshot.racks if r.thermal_margin <= 2.7), 4
            )
            self.assertIn(snapshot.overall_headroom,
                          (HeadroomCategory.FRAGILE, HeadroomCategory.CRITICAL))

    def test_categories_match_classifier(self):
        snapshot = generate_snapshot(seed=21)
        for rack in snapshot.racks:
            self.assertEqual(
                rack.category,
                classify(round_tenth(rack.threshold - rack.inlet_temp), rack.inlet_temp, rack.threshold),
            )

    def test_derived_fields(self):
        snapshot = generate_snapshot(seed=8)
        self.assertIsInstance(snapshot, Snapshot)
        self.assertEqual(snapshot.fragile_or_critical_count,
                         count_fragile_or_critical(snapshot.racks))
        self.assertEqual(snapshot.stress_rack.thermal_margin,
                         min(r.thermal_margin for r in snapshot.racks))
        self.assertGreaterEqual(snapshot.current_setpoint, 21.0)
        self.assertLessEqual(snapshot.current_setpoint, 22.7)
        self.assertEqual(snapshot.site, "HPC Hall 2")

    def test_seed_reproducible(self):
        a = generate_snapshot(seed=99)
        b = generate_snapshot(seed=99)
        self.assertEqual([r.to_dict() for r in a.racks], [r.to_dict() for r in b.racks])
        self.assertEqual(a.current_setpoint, b.current_setpoint)

    def test_successive_snapshots_differ(self):
        generator = RackTelemetryGenerator(seed=4)
        first = generator.generate_snapshot()
        second = generator.generate_snapshot()
        self.assertEqual([r.id for r in first.racks], [r.id for r in second.racks])
        self.assertNotEqual([r.inlet_temp for r in first.racks],
                            [r.inlet_temp for r in second.racks])

    def test_load_bands_present(self):
        snapshot = generate_snapshot(seed=2)
        for rack in snapshot.racks:
            self.assertIsInstance(rack.load_band, LoadBand)


class TestSnapshotSerialization(unittest.TestCase):

    def test_to_dict_contract(self):
        data = generate_snapshot(seed=6).to_dict()
        self.assertEqual(set(data), {
            "timestamp", "site", "source", "currentSetpoint", "overallHeadroom",
            "fragileOrCriticalCount", "criticalCount", "racks", "stressRack",
            "allowedDeltaRange",
        })
        self.assertEqual(data["allowedDeltaRange"], {"min": 0.0, "max": 2.0, "step": 0.2})
        self.assertIn(data["overallHeadroom"], ("Stable", "Tight", "Fragile", "Critical"))
        self.assertEqual(len(data["racks"]), 24)

    def test_racks_to_dataframe(self):
        snapshot = generate_snapshot(seed=6)
        df = racks_to_dataframe(snapshot.racks)
        self.assertIsInstance(df, pd.DataFrame)
        self.assertEqual(len(df), 24)
        self.assertIn("thermalMargin", df.columns)
        self.assertIn("category", df.columns)


if __name__ == "__main__":
    unittest.main()
