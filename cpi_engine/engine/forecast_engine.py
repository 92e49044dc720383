"""
Forecast Engine: OLS trend with multiplicative seasonal adjustment.

Projects a state's AL or RL index forward month by month:

1. Fit ``index = intercept + slope * i`` over the trailing window (24 points).
2. Derive one seasonal ratio per calendar month as the mean of actual/trend
   over every valid observation of that month in the full history.
3. Project ``trend(n + k) * ratio[month]`` for k = 1..horizon and wrap each
   value in a symmetric band scaled by recent volatility.

The seasonal pass evaluates the window-fitted line at each record's position
shifted by ``valid_count - record_count``; for histories longer than the
window this reuses the window line as a proxy for the whole history.

Fewer than ``min_points`` valid observations is not an error: the engine
returns ``ForecastResult.insufficient(state)``.
"""

from collections.abc import Sequence
from typing import Optional

import numpy as np
import structlog
from scipy import stats

from cpi_engine.engine.batch import map_states
from cpi_engine.engine.timeseries import (
    month_index,
    round_half_up,
    time_series,
    valid_index_values,
    volatility,
)
from cpi_engine.models.enums import LaborType
from cpi_engine.models.forecast import ForecastPoint, ForecastResult
from cpi_engine.models.records import PriceRecord

logger = structlog.get_logger()


def fit_trend(values: Sequence[float]) -> tuple[float, float]:
    """
    Ordinary least squares fit of values against positions 0..n-1.

    Returns:
        (slope, intercept); a single point gives a flat line through it and
        an empty sequence gives (0, 0)
    """
    if len(values) < 2:
        return 0.0, float(values[0]) if values else 0.0
    fit = stats.linregress(np.arange(len(values), dtype=np.float64), np.asarray(values, dtype=np.float64))
    return float(fit.slope), float(fit.intercept)


def seasonal_ratios(
    series: Sequence[PriceRecord],
    labor_type: LaborType,
    slope: float,
    intercept: float,
    valid_count: int,
) -> list[float]:
    """
    Mean actual/trend ratio for each calendar month (index 0 = January).

    Months with no usable observation get a neutral ratio of 1.0.
    """
    totals = [0.0] * 12
    counts = [0] * 12
    offset = valid_count - len(series)

    for i, record in enumerate(series):
        value = record.index_for(labor_type)
        if value <= 0:
            continue
        m_idx = month_index(record.month)
        if m_idx < 0:
            continue
        trend_value = intercept + slope * (offset + i)
        if trend_value > 0:
            totals[m_idx] += value / trend_value
            counts[m_idx] += 1

    return [totals[m] / counts[m] if counts[m] > 0 else 1.0 for m in range(12)]


def compute_momentum(values: Sequence[float], window: int = 6) -> float:
    """% change of the mean of the last ``window`` points over the preceding ``window``."""
    if len(values) < window * 2:
        return 0.0
    recent = values[-window:]
    older = values[-(window * 2) : -window]
    older_avg = sum(older) / len(older)
    if older_avg == 0:
        return 0.0
    recent_avg = sum(recent) / len(recent)
    return round((recent_avg - older_avg) / older_avg * 100, 2)


def _span_growth(values: Sequence[float]) -> float:
    if len(values) < 2 or values[0] == 0:
        return 0.0
    return (values[-1] - values[0]) / values[0] * 100


def compute_acceleration(values: Sequence[float]) -> float:
    """Growth across the last 3 points minus growth across the 3 before them."""
    if len(values) < 6:
        return 0.0
    return round(_span_growth(values[-3:]) - _span_growth(values[-6:-3]), 2)


class ForecastEngine:
    """
    Per-state 12-month index projection.

    Attributes:
        regression_window: Trailing points used for the trend fit
        min_points: Valid points required before a forecast is attempted
        max_workers: Thread pool size for ``forecast_all_states``

    Example:
        >>> engine = ForecastEngine()
        >>> result = engine.forecast_state(time_series(records, "Odisha"), LaborType.AL)
        >>> result.insufficient_data
        False
    """

    # Band width (%) per point of volatility, and its floor
    BAND_VOLATILITY_FACTOR = 0.3
    MIN_BAND_PCT = 0.5

    # confidence = BASE - PENALTY * volatility, clamped to [FLOOR, CEILING]
    CONFIDENCE_BASE = 90.0
    CONFIDENCE_VOLATILITY_PENALTY = 5.0
    CONFIDENCE_FLOOR = 30.0
    CONFIDENCE_CEILING = 95.0

    def __init__(
        self,
        regression_window: int = 24,
        min_points: int = 6,
        max_workers: int = 1,
    ):
        self.regression_window = regression_window
        self.min_points = min_points
        self.max_workers = max_workers
        self.logger = structlog.get_logger()

    def forecast_state(
        self,
        series: Sequence[PriceRecord],
        labor_type: LaborType,
        horizon_months: int = 12,
        state: Optional[str] = None,
    ) -> ForecastResult:
        """
        Forecast one state's index.

        Args:
            series: The state's records in chronological order
            labor_type: AL or RL
            horizon_months: Months to project
            state: State label; defaults to the first record's state

        Returns:
            ForecastResult, or the insufficient-data result when fewer than
            ``min_points`` positive index values exist
        """
        state = state or (series[0].state if series else "Unknown")
        values = valid_index_values(series, labor_type)

        if len(values) < self.min_points:
            self.logger.debug(
                "forecast_insufficient_data",
                state=state,
                labor_type=labor_type.value,
                valid_points=len(values),
                min_required=self.min_points,
            )
            return ForecastResult.insufficient(state)

        window_values = values[-self.regression_window :]
        n = len(window_values)
        slope, intercept = fit_trend(window_values)
        ratios = seasonal_ratios(series, labor_type, slope, intercept, len(values))

        vol = volatility(window_values)
        confidence = max(
            self.CONFIDENCE_FLOOR,
            min(self.CONFIDENCE_CEILING, self.CONFIDENCE_BASE - vol * self.CONFIDENCE_VOLATILITY_PENALTY),
        )
        band_pct = max(self.MIN_BAND_PCT, vol * self.BAND_VOLATILITY_FACTOR)

        last_month_idx = month_index(series[-1].month)
        points = []
        for k in range(1, horizon_months + 1):
            trend_value = intercept + slope * (n + k)
            predicted = round(trend_value * ratios[(last_month_idx + k) % 12], 2)
            points.append(
                ForecastPoint(
                    month=k,
                    value=predicted,
                    lower=round(predicted * (1 - band_pct / 100), 2),
                    upper=round(predicted * (1 + band_pct / 100), 2),
                )
            )

        last_value = values[-1]
        projected_growth = 0.0
        if points and last_value > 0:
            projected_growth = round((points[-1].value - last_value) / last_value * 100, 2)

        return ForecastResult(
            state=state,
            forecast_values=points,
            projected_growth_rate=projected_growth,
            trend_slope=round(slope, 4),
            momentum=compute_momentum(values),
            acceleration_score=compute_acceleration(values),
            confidence_level=round_half_up(confidence),
        )

    def forecast_all_states(
        self,
        records: Sequence[PriceRecord],
        states: Sequence[str],
        labor_type: LaborType,
        horizon_months: int = 12,
    ) -> list[ForecastResult]:
        """One forecast per requested state, in request order."""

        def _forecast(state: str) -> ForecastResult:
            return self.forecast_state(
                time_series(records, state), labor_type, horizon_months, state=state
            )

        results = map_states(_forecast, states, self.max_workers)

        self.logger.info(
            "forecast_batch_complete",
            labor_type=labor_type.value,
            states=len(results),
            insufficient=sum(1 for r in results if r.insufficient_data),
        )
        return results
