"""
Analytics Service: orchestrates forecast, correlation, alert and risk engines.

Computes a dashboard snapshot on demand from an in-memory record set.
No persistence, no caching between calls.
"""

from collections.abc import Sequence
from typing import Optional

import structlog

from cpi_engine.config import Settings, get_settings
from cpi_engine.engine.alert_engine import AlertEngine
from cpi_engine.engine.correlation_engine import CorrelationEngine
from cpi_engine.engine.forecast_engine import ForecastEngine
from cpi_engine.engine.risk_ranker import RiskRanker
from cpi_engine.engine.timeseries import latest_period, unique_states
from cpi_engine.models.enums import AlertSeverity, LaborType
from cpi_engine.models.records import PriceRecord
from cpi_engine.models.snapshot import DashboardSnapshot
from cpi_engine.utils.logging import log_event

logger = structlog.get_logger()


class CpiAnalyticsService:
    """
    Builds a DashboardSnapshot for one labour type.

    Forecasts are computed first because the alert engine consumes them
    (Forecast Spike rule) and the risk ranker reads their acceleration.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        workers = self.settings.batch_max_workers
        self.forecast_engine = ForecastEngine(
            regression_window=self.settings.regression_window,
            min_points=self.settings.min_forecast_points,
            max_workers=workers,
        )
        self.correlation_engine = CorrelationEngine(
            national_aggregate=self.settings.national_aggregate,
            max_workers=workers,
        )
        self.alert_engine = AlertEngine(
            national_aggregate=self.settings.national_aggregate,
            max_workers=workers,
        )
        self.risk_ranker = RiskRanker(preferred_base_year=self.settings.preferred_base_year)
        self.logger = structlog.get_logger()

    def build_snapshot(
        self,
        records: Sequence[PriceRecord],
        labor_type: LaborType = LaborType.AL,
        states: Optional[Sequence[str]] = None,
        horizon_months: Optional[int] = None,
    ) -> DashboardSnapshot:
        """
        Run every engine over ``records``.

        Args:
            records: Full record set, any order
            labor_type: AL or RL
            states: States to analyse; defaults to every state except the
                national aggregate
            horizon_months: Forecast horizon; defaults to the configured one

        Returns:
            DashboardSnapshot with ordered forecasts, correlations, alerts
            and risk ranking
        """
        records = list(records)
        if states is None:
            states = unique_states(records, exclude=self.settings.national_aggregate)
        states = list(states)
        horizon = horizon_months
        if horizon is None:
            horizon = self.settings.forecast_horizon_months

        forecasts = self.forecast_engine.forecast_all_states(records, states, labor_type, horizon)
        correlations = self.correlation_engine.compute_all_correlations(records, states)
        alerts = self.alert_engine.generate_alerts(records, states, labor_type, forecasts)
        period = latest_period(records, self.settings.preferred_base_year)
        ranking = self.risk_ranker.rank_states(
            records, states, labor_type, forecasts, correlations, period
        )

        log_event(
            self.logger,
            "info",
            "snapshot_built",
            labor_type=labor_type.value,
            records=len(records),
            states=len(states),
            red_alerts=sum(1 for a in alerts if a.severity == AlertSeverity.RED),
            latest_period=f"{period.month} {period.year}" if period else None,
        )

        return DashboardSnapshot(
            labor_type=labor_type,
            latest_period=period,
            states=states,
            forecasts=forecasts,
            correlations=correlations,
            alerts=alerts,
            risk_ranking=ranking,
        )
