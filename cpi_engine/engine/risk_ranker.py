"""
Risk Ranker: orders states by a composite of the engine outputs.

    risk_score = level_weight(risk_level)
               + 0.5 * volatility (last 12 valid points)
               + 0.3 * forecast acceleration
               + 0.2 * stress index

The risk level comes from the state's YoY inflation in the latest period.
A state missing a forecast or correlation contributes neutral values
(0 growth/acceleration/stress, stability 100).
"""

from collections.abc import Sequence
from typing import Optional

import structlog

from cpi_engine.engine.timeseries import (
    latest_period,
    risk_level_from_inflation,
    state_data_for_period,
    time_series,
    valid_index_values,
    volatility,
)
from cpi_engine.models.correlation import CorrelationResult
from cpi_engine.models.enums import LaborType, RiskLevel
from cpi_engine.models.forecast import ForecastResult
from cpi_engine.models.records import LatestPeriod, PriceRecord
from cpi_engine.models.risk import StateRiskProfile

logger = structlog.get_logger()

LEVEL_WEIGHTS = {
    RiskLevel.CRITICAL: 4,
    RiskLevel.HIGH: 3,
    RiskLevel.MODERATE: 2,
    RiskLevel.LOW: 1,
}


class RiskRanker:
    """Builds and ranks StateRiskProfile entries."""

    W_VOLATILITY = 0.5
    W_ACCELERATION = 0.3
    W_STRESS = 0.2

    def __init__(self, volatility_window: int = 12, preferred_base_year: Optional[str] = "2019"):
        self.volatility_window = volatility_window
        self.preferred_base_year = preferred_base_year

    def rank_states(
        self,
        records: Sequence[PriceRecord],
        states: Sequence[str],
        labor_type: LaborType,
        forecasts: Sequence[ForecastResult] = (),
        correlations: Sequence[CorrelationResult] = (),
        period: Optional[LatestPeriod] = None,
    ) -> list[StateRiskProfile]:
        """
        Risk profiles for ``states``, highest risk score first.

        Args:
            records: Full record set
            states: States to profile
            labor_type: Series used for inflation and volatility
            forecasts: Forecast results, matched by state
            correlations: Correlation results, matched by state
            period: Period whose inflation sets the risk level; defaults to
                the latest period in ``records``
        """
        period = period or latest_period(records, self.preferred_base_year)
        readings = (
            state_data_for_period(records, period.year, period.month, labor_type) if period else {}
        )
        forecast_by_state = {}
        for fc in forecasts:
            forecast_by_state.setdefault(fc.state, fc)
        correlation_by_state = {}
        for corr in correlations:
            correlation_by_state.setdefault(corr.state, corr)

        profiles = []
        for state in states:
            reading = readings.get(state)
            inflation = reading.inflation if reading else None
            level = risk_level_from_inflation(inflation)
            values = valid_index_values(time_series(records, state), labor_type)
            vol = volatility(values[-self.volatility_window :])

            fc = forecast_by_state.get(state)
            corr = correlation_by_state.get(state)
            acceleration = fc.acceleration_score if fc else 0.0
            stress = corr.stress_index if corr else 0.0

            score = (
                LEVEL_WEIGHTS[level]
                + vol * self.W_VOLATILITY
                + acceleration * self.W_ACCELERATION
                + stress * self.W_STRESS
            )
            profiles.append(
                StateRiskProfile(
                    state=state,
                    risk_level=level,
                    volatility=vol,
                    forecast_growth=fc.projected_growth_rate if fc else 0.0,
                    acceleration=acceleration,
                    stress_index=stress,
                    stability_score=corr.stability_score if corr else 100,
                    cagr=corr.cagr if corr else 0.0,
                    inflation=inflation if inflation is not None else 0.0,
                    risk_score=round(score, 2),
                )
            )

        profiles.sort(key=lambda p: p.risk_score, reverse=True)
        logger.debug("risk_ranking_complete", states=len(profiles))
        return profiles
