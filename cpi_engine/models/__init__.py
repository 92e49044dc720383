"""
Pydantic v2 data models for the CPI analytics engine.

Model Organization:
    - enums: Labour type, alert severity/type and risk level enums
    - records: PriceRecord input model and period lookups
    - forecast: ForecastResult and its projected points
    - correlation: CorrelationResult and lag search output
    - alerts: Alert
    - risk: StateRiskProfile
    - quality: Ingestion data quality report
    - snapshot: DashboardSnapshot bundling one full analytics run

Result models are frozen and serialize with camelCase keys:
    >>> result.model_dump(by_alias=True)["forecastValues"]
"""

from .enums import AlertSeverity, AlertType, LaborType, RiskLevel
from .records import MONTH_ORDER, EngineModel, LatestPeriod, PeriodReading, PriceRecord
from .forecast import ForecastPoint, ForecastResult
from .correlation import CorrelationResult, LagCorrelation
from .alerts import Alert
from .risk import StateRiskProfile
from .quality import DataQualityReport, QualityIssue
from .snapshot import DashboardSnapshot

__all__ = [
    # Enumerations
    "AlertSeverity",
    "AlertType",
    "LaborType",
    "RiskLevel",
    # Records
    "MONTH_ORDER",
    "EngineModel",
    "LatestPeriod",
    "PeriodReading",
    "PriceRecord",
    # Results
    "Alert",
    "CorrelationResult",
    "DashboardSnapshot",
    "ForecastPoint",
    "ForecastResult",
    "LagCorrelation",
    "StateRiskProfile",
    # Ingestion
    "DataQualityReport",
    "QualityIssue",
]
