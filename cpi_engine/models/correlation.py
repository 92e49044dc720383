"""Correlation and stress assessment models."""

from pydantic import Field

from .records import EngineModel


class LagCorrelation(EngineModel):
    """Best AL/RL alignment found by the lag search."""

    lag: int = Field(ge=0, description="Months AL is shifted against RL")
    correlation: float = Field(ge=0.0, le=1.0, description="Absolute Pearson r at that lag")


class CorrelationResult(EngineModel):
    """
    Cross-index stress and stability assessment for one state.

    Attributes:
        state: State name
        al_rl_correlation: Absolute Pearson r between AL and RL at the best lag
        al_rl_lag_months: Lag (0-6 months) that maximizes the correlation
        stress_index: 0.4*|acceleration| + 0.3*volatility + 0.3*rolling variance
        inflation_acceleration: Growth of the last 6 AL points minus the prior 6
        rolling_variance: Variance of monthly % changes over the last 12 points
        stability_score: 100 - 10*volatility, clamped to 0-100
        cagr: Compound annual growth rate of the AL series (%)
    """

    state: str
    al_rl_correlation: float = 0.0
    al_rl_lag_months: int = 0
    stress_index: float = 0.0
    inflation_acceleration: float = 0.0
    rolling_variance: float = 0.0
    stability_score: int = Field(default=100, ge=0, le=100)
    cagr: float = 0.0
