"""
Correlation / Stress Engine for AL versus RL index behaviour.

For each state this engine measures how tightly the Agricultural Labourer
series tracks the Rural Labourer series (with up to a 6-month lag) and how
fast and erratically AL prices have been moving.
Those measures are folded into two composite scores:

    stress_index    = 0.4 * |inflation_acceleration|
                    + 0.3 * volatility
                    + 0.3 * rolling_variance
    stability_score = clamp(100 - 10 * volatility, 0, 100)

The stress index is unnormalized, so large absolute swings dominate
regardless of the state's base index level.
"""

from collections.abc import Sequence

import numpy as np
import structlog

from cpi_engine.engine.batch import map_states
from cpi_engine.engine.timeseries import (
    NATIONAL_AGGREGATE,
    percent_changes,
    round_half_up,
    time_series,
    valid_index_values,
    volatility,
)
from cpi_engine.models.correlation import CorrelationResult, LagCorrelation
from cpi_engine.models.enums import LaborType
from cpi_engine.models.records import PriceRecord

logger = structlog.get_logger()


def pearson_correlation(x: Sequence[float], y: Sequence[float]) -> float:
    """
    Pearson r over the leading ``min(len(x), len(y))`` pairs.

    Returns 0 for fewer than 3 pairs or when either side has zero variance.
    """
    n = min(len(x), len(y))
    if n < 3:
        return 0.0
    xs = np.asarray(x[:n], dtype=np.float64)
    ys = np.asarray(y[:n], dtype=np.float64)
    dx = xs - xs.mean()
    dy = ys - ys.mean()
    den = np.sqrt(np.sum(dx * dx) * np.sum(dy * dy))
    if den == 0:
        return 0.0
    return round(float(np.sum(dx * dy) / den), 4)


def find_optimal_lag(
    x: Sequence[float], y: Sequence[float], max_lag: int = 6
) -> LagCorrelation:
    """
    Lag in [0, max_lag] maximizing |r| between ``x[lag:]`` and ``y[:-lag]``.

    Ties keep the smaller lag. The reported correlation is the absolute value.
    """
    best_lag = 0
    best_corr = abs(pearson_correlation(x, y))
    for lag in range(1, max_lag + 1):
        corr = abs(pearson_correlation(x[lag:], y[:-lag]))
        if corr > best_corr:
            best_corr = corr
            best_lag = lag
    return LagCorrelation(lag=best_lag, correlation=round(min(best_corr, 1.0), 4))


def compute_cagr(values: Sequence[float], periods_per_year: int = 12) -> float:
    """Compound annual growth rate (%) between the first and last values."""
    if len(values) < periods_per_year:
        return 0.0
    first, last = values[0], values[-1]
    if first <= 0 or last <= 0:
        return 0.0
    years = len(values) / periods_per_year
    return round(((last / first) ** (1 / years) - 1) * 100, 2)


def compute_rolling_variance(values: Sequence[float], window: int = 12) -> float:
    """Population variance of % changes across the trailing window."""
    if len(values) < window:
        return 0.0
    changes = percent_changes(values[-window:])
    if not changes:
        return 0.0
    return round(float(np.var(changes)), 2)


def compute_inflation_acceleration(values: Sequence[float], span: int = 6) -> float:
    """Growth over the latest ``span`` points minus growth over the ``span`` before."""
    if len(values) < span * 2:
        return 0.0
    recent = values[-span:]
    prior = values[-(span * 2) : -span]
    recent_growth = (recent[-1] - recent[0]) / recent[0] * 100
    prior_growth = (prior[-1] - prior[0]) / prior[0] * 100
    return round(recent_growth - prior_growth, 2)


class CorrelationEngine:
    """
    Computes per-state AL/RL correlation, growth and stress metrics.

    Attributes:
        max_lag_months: Largest AL-versus-RL shift tested
        volatility_window: Trailing AL points used for volatility
        national_aggregate: State label excluded from batch runs
        max_workers: Thread pool size for ``compute_all_correlations``
    """

    W_ACCELERATION = 0.4
    W_VOLATILITY = 0.3
    W_ROLLING_VARIANCE = 0.3

    STABILITY_VOLATILITY_PENALTY = 10.0

    def __init__(
        self,
        max_lag_months: int = 6,
        volatility_window: int = 24,
        national_aggregate: str = NATIONAL_AGGREGATE,
        max_workers: int = 1,
    ):
        self.max_lag_months = max_lag_months
        self.volatility_window = volatility_window
        self.national_aggregate = national_aggregate
        self.max_workers = max_workers
        self.logger = structlog.get_logger()

    def compute_stress_index(
        self, inflation_acceleration: float, volatility_value: float, rolling_variance: float
    ) -> float:
        return round(
            abs(inflation_acceleration) * self.W_ACCELERATION
            + volatility_value * self.W_VOLATILITY
            + rolling_variance * self.W_ROLLING_VARIANCE,
            2,
        )

    def compute_stability_score(self, volatility_value: float) -> int:
        score = 100 - volatility_value * self.STABILITY_VOLATILITY_PENALTY
        return round_half_up(max(0.0, min(100.0, score)))

    def compute_state_correlation(
        self, records: Sequence[PriceRecord], state: str
    ) -> CorrelationResult:
        """
        Correlation and stress assessment for one state.

        Short histories degrade gracefully: each metric falls back to 0 (and
        stability to 100) when there are too few points to compute it.
        """
        series = time_series(records, state)
        al_values = valid_index_values(series, LaborType.AL)
        rl_values = valid_index_values(series, LaborType.RL)

        best = find_optimal_lag(al_values, rl_values, self.max_lag_months)
        volatility_al = volatility(al_values[-self.volatility_window :])
        rolling_var = compute_rolling_variance(al_values)
        acceleration = compute_inflation_acceleration(al_values)

        return CorrelationResult(
            state=state,
            al_rl_correlation=best.correlation,
            al_rl_lag_months=best.lag,
            stress_index=self.compute_stress_index(acceleration, volatility_al, rolling_var),
            inflation_acceleration=acceleration,
            rolling_variance=rolling_var,
            stability_score=self.compute_stability_score(volatility_al),
            cagr=compute_cagr(al_values),
        )

    def compute_all_correlations(
        self, records: Sequence[PriceRecord], states: Sequence[str]
    ) -> list[CorrelationResult]:
        """
        Assess every state except the national aggregate.

        Returns:
            Results sorted by descending stress index; equal scores keep the
            order of ``states``
        """
        targets = [s for s in states if s != self.national_aggregate]
        results = map_states(
            lambda s: self.compute_state_correlation(records, s), targets, self.max_workers
        )
        results.sort(key=lambda r: r.stress_index, reverse=True)

        self.logger.info(
            "correlation_batch_complete",
            states=len(results),
            top_stress_state=results[0].state if results else None,
        )
        return results
