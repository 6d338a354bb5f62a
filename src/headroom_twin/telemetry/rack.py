"""Rack telemetry records.

Racks are immutable. ``thermal_margin`` and ``category`` are computed
from ``threshold`` and ``inlet_temp`` when the record is built and are
not constructor arguments, so a rack can never carry a category that
disagrees with the classifier. Use ``dataclasses.replace`` to derive a
rack with a new inlet temperature.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict

from headroom_twin.thermal.categories import HeadroomCategory, classify, round_tenth


class LoadBand(Enum):
    """Workload intensity band, fixed at generation time."""
    NOMINAL = "Nominal"
    ELEVATED = "Elevated"
    PEAK = "Peak"


PEAK_INLET_C = 31.5
ELEVATED_INLET_C = 29.0


def load_band_for(inlet_temp: float) -> LoadBand:
    """Map a baseline inlet temperature to its load band."""
    if inlet_temp > PEAK_INLET_C:
        return LoadBand.PEAK
    if inlet_temp > ELEVATED_INLET_C:
        return LoadBand.ELEVATED
    return LoadBand.NOMINAL


def rack_id(row: str, col: int) -> str:
    return f"R{row}{col:02d}"


def zone_for_row(row: str) -> str:
    return f"Zone-{row}"


@dataclass(frozen=True)
class Rack:
    """A single equipment rack reading.

    Attributes:
        id: Unique rack identifier within a snapshot (e.g. "RA01")
        zone: Hall zone derived from the row (e.g. "Zone-A")
        row: Row letter
        col: Column number (1-based)
        threshold: Safe-operation ceiling (°C)
        inlet_temp: Measured inlet temperature (°C)
        load_band: Workload band, held fixed after generation
        thermal_margin: threshold - inlet_temp, one decimal (derived)
        category: Headroom category (derived)
    """
    id: str
    zone: str
    row: str
    col: int
    threshold: float
    inlet_temp: float
    load_band: LoadBand
    thermal_margin: float = field(init=False)
    category: HeadroomCategory = field(init=False)

    def __post_init__(self):
        margin = round_tenth(self.threshold - self.inlet_temp)
        object.__setattr__(self, "thermal_margin", margin)
        object.__setattr__(
            self, "category", classify(margin, self.inlet_temp, self.threshold)
        )

    @classmethod
    def at_position(cls, row: str, col: int, threshold: float,
                    inlet_temp: float, load_band: LoadBand) -> "Rack":
        """Build a rack whose identity fields derive from its grid position."""
        return cls(
            id=rack_id(row, col),
            zone=zone_for_row(row),
            row=row,
            col=col,
            threshold=threshold,
            inlet_temp=inlet_temp,
            load_band=load_band,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "zone": self.zone,
            "row": self.row,
            "col": self.col,
            "threshold": self.threshold,
            "inletTemp": self.inlet_temp,
            "thermalMargin": self.thermal_margin,
            "category": self.category.value,
            "loadBand": self.load_band.value,
        }


@dataclass(frozen=True)
class ProjectedRack(Rack):
    """A rack after a simulated setpoint change.

    Carries the category the rack had before the change and whether the
    change moved it to a different category.
    """
    prev_category: HeadroomCategory = HeadroomCategory.STABLE
    changed: bool = field(init=False)

    def __post_init__(self):
        super().__post_init__()
        object.__setattr__(self, "changed", self.category != self.prev_category)

    @classmethod
    def project(cls, base: Rack, inlet_temp: float) -> "ProjectedRack":
        """Derive a projected rack from a base rack and a new inlet reading."""
        return cls(
            id=base.id,
            zone=base.zone,
            row=base.row,
            col=base.col,
            threshold=base.threshold,
            inlet_temp=inlet_temp,
            load_band=base.load_band,
            prev_category=base.category,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["prevCategory"] = self.prev_category.value
        data["changed"] = self.changed
        return data
