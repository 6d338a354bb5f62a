"""Hall snapshot: one complete, internally consistent reading of all racks."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence, Tuple

import pandas as pd

from headroom_twin.hall_config import DeltaRange
from headroom_twin.telemetry.rack import Rack
from headroom_twin.thermal.aggregation import (
    count_critical,
    count_fragile_or_critical,
    overall_category,
    stress_rack as find_stress_rack,
)
from headroom_twin.thermal.categories import HeadroomCategory


@dataclass(frozen=True)
class Snapshot:
    """Current reading of the hall.

    Hall-level indicators are derived from ``racks`` on construction.

    Attributes:
        timestamp: ISO-8601 generation time (UTC)
        site: Hall name
        source: Telemetry source description
        current_setpoint: Cooling setpoint (°C, one decimal)
        racks: Rack readings in grid order
        allowed_delta_range: Setpoint change range advertised to operators
        overall_headroom: Worst category across racks (derived)
        fragile_or_critical_count: Racks in Fragile or Critical (derived)
        critical_count: Racks in Critical (derived)
        stress_rack: Rack with the smallest thermal margin (derived)
    """
    timestamp: str
    site: str
    source: str
    current_setpoint: float
    racks: Tuple[Rack, ...]
    allowed_delta_range: DeltaRange = field(default_factory=DeltaRange)
    overall_headroom: HeadroomCategory = field(init=False)
    fragile_or_critical_count: int = field(init=False)
    critical_count: int = field(init=False)
    stress_rack: Optional[Rack] = field(init=False)

    def __post_init__(self):
        racks = tuple(self.racks)
        object.__setattr__(self, "racks", racks)
        object.__setattr__(self, "overall_headroom", overall_category(racks))
        object.__setattr__(self, "fragile_or_critical_count", count_fragile_or_critical(racks))
        object.__setattr__(self, "critical_count", count_critical(racks))
        object.__setattr__(self, "stress_rack", find_stress_rack(racks))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "site": self.site,
            "source": self.source,
            "currentSetpoint": self.current_setpoint,
            "overallHeadroom": self.overall_headroom.value,
            "fragileOrCriticalCount": self.fragile_or_critical_count,
            "criticalCount": self.critical_count,
            "racks": [rack.to_dict() for rack in self.racks],
            "stressRack": self.stress_rack.to_dict() if self.stress_rack else None,
            "allowedDeltaRange": self.allowed_delta_range.to_dict(),
        }


def racks_to_dataframe(racks: Sequence[Rack]) -> pd.DataFrame:
    """
    Convert rack readings to a DataFrame

    Args:
        racks: Rack or ProjectedRack records

    Returns:
        DataFrame with one row per rack, wire-format column names
    """
    return pd.DataFrame([rack.to_dict() for rack in racks])
