"""Composite per-state risk profile used to rank states on the dashboard."""

from pydantic import Field

from .enums import RiskLevel
from .records import EngineModel


class StateRiskProfile(EngineModel):
    """
    Blend of inflation bucket, volatility, forecast and stress outputs.

    ``risk_score`` is the ranking key; the remaining fields are carried so a
    caller can display why a state ranks where it does.
    """

    state: str
    risk_level: RiskLevel
    volatility: float = Field(description="Volatility of the last 12 valid index points")
    forecast_growth: float = 0.0
    acceleration: float = 0.0
    stress_index: float = 0.0
    stability_score: int = 100
    cagr: float = 0.0
    inflation: float = 0.0
    risk_score: float = Field(description="Level weight + 0.5*vol + 0.3*accel + 0.2*stress")
