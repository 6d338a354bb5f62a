"""Hall configuration for the headroom twin.

Defines the rack grid, the telemetry ranges the synthetic feed draws
from, and the setpoint-change policy advertised to operators:

    4 rows (A-D) x 6 columns  →  24 racks
    Thresholds    32.5 - 34.5 °C
    Baseline inlet 27.0 - 33.8 °C, drifting hotter toward later rows/columns
    Setpoint      21.0 - 22.7 °C
    Allowed delta 0.0 - 2.0 °C in 0.2 °C steps
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple


@dataclass(frozen=True)
class DeltaRange:
    """Legal range for a proposed setpoint change (°C)."""
    min: float = 0.0
    max: float = 2.0
    step: float = 0.2

    def to_dict(self) -> Dict[str, float]:
        return {"min": self.min, "max": self.max, "step": self.step}


# =============================================================================
# Reference Hall
# =============================================================================

DEFAULT_SITE = "HPC Hall 2"
DEFAULT_SOURCE = "DCIM/SCADA live telemetry (simulated feed)"
DEFAULT_ROWS = ("A", "B", "C", "D")
DEFAULT_COLUMNS = 6


@dataclass
class HallConfig:
    """Complete data hall configuration.

    Attributes:
        site: Hall name shown to operators
        source: Telemetry source description
        rows: Row letters, front to back
        columns: Racks per row
        threshold_range_c: Uniform range for rack safe-operation ceilings (°C)
        inlet_range_c: Uniform range for baseline inlet temperatures (°C)
        row_drift_c: Extra inlet temperature per row index (°C)
        col_drift_c: Extra inlet temperature per column index (°C)
        risk_rack_count: Lowest-margin racks forced into elevated risk
        risk_margin_range_c: Margin range the forced racks are pushed to (°C)
        setpoint_range_c: Uniform range for the current cooling setpoint (°C)
        delta_range: Setpoint change range advertised to operators
    """
    site: str = DEFAULT_SITE
    source: str = DEFAULT_SOURCE
    rows: Tuple[str, ...] = DEFAULT_ROWS
    columns: int = DEFAULT_COLUMNS
    threshold_range_c: Tuple[float, float] = (32.5, 34.5)
    inlet_range_c: Tuple[float, float] = (27.0, 33.8)
    row_drift_c: float = 0.2
    col_drift_c: float = 0.08
    risk_rack_count: int = 4
    risk_margin_range_c: Tuple[float, float] = (1.6, 2.7)
    setpoint_range_c: Tuple[float, float] = (21.0, 22.7)
    delta_range: DeltaRange = field(default_factory=DeltaRange)

    def __post_init__(self):
        if not self.rows:
            raise ValueError("Hall needs at least one row")
        if len(set(self.rows)) != len(self.rows):
            raise ValueError(f"Row labels must be unique, got {self.rows}")
        if self.columns < 1:
            raise ValueError(f"Hall needs at least one column, got {self.columns}")
        if self.risk_rack_count < 0:
            raise ValueError(f"risk_rack_count must be >= 0, got {self.risk_rack_count}")
        for name in ("threshold_range_c", "inlet_range_c",
                     "risk_margin_range_c", "setpoint_range_c"):
            low, high = getattr(self, name)
            if low > high:
                raise ValueError(f"{name} is inverted: ({low}, {high})")
        if self.delta_range.min > self.delta_range.max or self.delta_range.step <= 0:
            raise ValueError(f"Invalid delta range: {self.delta_range}")

    @property
    def rack_count(self) -> int:
        return len(self.rows) * self.columns
