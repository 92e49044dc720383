"""
Forecast result models.

Insufficient history is not an error: it is represented by a result with an
empty ``forecast_values`` list and ``confidence_level == 0``. Use
``ForecastResult.insufficient()`` to build one and the ``insufficient_data``
property to test for it.
"""

from pydantic import Field

from .records import EngineModel


class ForecastPoint(EngineModel):
    """
    One projected month.

    Attributes:
        month: Step ahead of the last observation (1 = next month)
        value: Seasonally adjusted trend projection
        lower: Lower edge of the confidence band
        upper: Upper edge of the confidence band
    """

    month: int = Field(ge=1, description="Months ahead of the last observation")
    value: float = Field(description="Projected index value")
    lower: float = Field(description="Lower confidence bound")
    upper: float = Field(description="Upper confidence bound")


class ForecastResult(EngineModel):
    """
    Per-state forward projection of one labour index.

    Attributes:
        state: State the forecast belongs to
        forecast_values: Projected points, one per horizon month
        projected_growth_rate: % change from last actual to last projected value
        trend_slope: OLS slope in index points per month
        momentum: % change of the last 6-month mean over the preceding 6
        acceleration_score: Recent 3-point growth minus the prior 3-point growth
        confidence_level: 30-95 for real forecasts, 0 for insufficient data
    """

    state: str
    forecast_values: list[ForecastPoint] = Field(default_factory=list)
    projected_growth_rate: float = 0.0
    trend_slope: float = 0.0
    momentum: float = 0.0
    acceleration_score: float = 0.0
    confidence_level: int = Field(default=0, ge=0, le=100)

    @classmethod
    def insufficient(cls, state: str) -> "ForecastResult":
        """Result returned when a state has too little history to forecast."""
        return cls(state=state)

    @property
    def insufficient_data(self) -> bool:
        return not self.forecast_values and self.confidence_level == 0
