"""Dashboard snapshot: everything the risk view renders for one labour type."""

from typing import Optional

from pydantic import Field

from .alerts import Alert
from .correlation import CorrelationResult
from .enums import LaborType
from .forecast import ForecastResult
from .records import EngineModel, LatestPeriod
from .risk import StateRiskProfile


class DashboardSnapshot(EngineModel):
    """
    Output of one analytics run.

    ``correlations`` are ordered by descending stress index, ``alerts`` by
    severity then magnitude, and ``risk_ranking`` by descending risk score.
    ``forecasts`` follow the order of ``states``.
    """

    labor_type: LaborType
    latest_period: Optional[LatestPeriod] = None
    states: list[str] = Field(default_factory=list)
    forecasts: list[ForecastResult] = Field(default_factory=list)
    correlations: list[CorrelationResult] = Field(default_factory=list)
    alerts: list[Alert] = Field(default_factory=list)
    risk_ranking: list[StateRiskProfile] = Field(default_factory=list)
