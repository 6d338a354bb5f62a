"""Request models for the headroom twin HTTP API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SimulateRequest(BaseModel):
    """Body of ``POST /api/simulate``.

    ``delta`` defaults to 0 when omitted. Numeric strings are coerced;
    NaN and infinities are rejected before the simulator is called.
    """

    model_config = ConfigDict(allow_inf_nan=False, extra="ignore")

    delta: float = Field(default=0.0, description="Proposed setpoint increase in °C")
