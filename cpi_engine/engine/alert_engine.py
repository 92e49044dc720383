"""
Alert Engine: stateless threshold rules over inflation, trajectory and forecast.

Rules, evaluated independently per state:

    inflation > 8                         Red     High CPI Growth
    5 < inflation <= 8                    Yellow  Elevated CPI Growth
    inflation < -5                        Red     Sharp CPI Decline
    v0 < v1 < v2 with rise > 3%           Yellow (<= 5%) / Red (> 5%)  Sustained Increase
    forecast projected growth > 10%       Red     Forecast Spike

All comparisons are strict. A state can collect several alerts; the combined
list is ordered Red before Yellow and then by descending |value|, which is
the order a caller truncates from when it shows only the top few.
"""

from collections.abc import Iterable, Sequence
from typing import Optional

import structlog

from cpi_engine.engine.batch import map_states
from cpi_engine.engine.timeseries import NATIONAL_AGGREGATE, time_series
from cpi_engine.models.alerts import Alert
from cpi_engine.models.enums import AlertSeverity, AlertType, LaborType
from cpi_engine.models.forecast import ForecastResult
from cpi_engine.models.records import PriceRecord

logger = structlog.get_logger()

# Rule thresholds, in percent
HIGH_GROWTH_THRESHOLD = 8.0
ELEVATED_GROWTH_THRESHOLD = 5.0
DECLINE_THRESHOLD = -5.0
SUSTAINED_RISE_THRESHOLD = 3.0
SUSTAINED_RISE_RED_THRESHOLD = 5.0
FORECAST_SPIKE_THRESHOLD = 10.0

MIN_ALERT_HISTORY = 3

_SEVERITY_RANK = {AlertSeverity.RED: 0, AlertSeverity.YELLOW: 1}


def sort_alerts(alerts: Iterable[Alert]) -> list[Alert]:
    """Red before Yellow, then descending |value|; stable within ties."""
    return sorted(alerts, key=lambda a: (_SEVERITY_RANK[a.severity], -abs(a.value)))


class AlertEngine:
    """
    Turns current inflation, recent index shape and forecasts into alerts.

    The engine holds configuration only; every evaluation is a pure function
    of its arguments.
    """

    def __init__(self, national_aggregate: str = NATIONAL_AGGREGATE, max_workers: int = 1):
        self.national_aggregate = national_aggregate
        self.max_workers = max_workers
        self.logger = structlog.get_logger()

    def evaluate_state(
        self,
        state: str,
        inflation: Optional[float],
        recent_values: Sequence[float],
        forecast: Optional[ForecastResult] = None,
        labor_type: LaborType = LaborType.AL,
    ) -> list[Alert]:
        """
        Apply every rule to one state.

        Args:
            state: State name
            inflation: Latest YoY inflation (%), None if unpublished
            recent_values: Index values of the latest records, oldest first;
                only the last three are inspected
            forecast: The state's forecast, if one was computed
            labor_type: Series the inputs belong to (used in messages)

        Returns:
            Alerts in rule order (unsorted)
        """
        alerts = []
        label = labor_type.value

        if inflation is not None:
            if inflation > HIGH_GROWTH_THRESHOLD:
                alerts.append(
                    Alert(
                        state=state,
                        alert_type=AlertType.HIGH_CPI_GROWTH,
                        severity=AlertSeverity.RED,
                        message=f"CPI {label} inflation at {inflation:.1f}% YoY, exceeds 8% threshold",
                        value=inflation,
                    )
                )
            elif inflation > ELEVATED_GROWTH_THRESHOLD:
                alerts.append(
                    Alert(
                        state=state,
                        alert_type=AlertType.ELEVATED_CPI_GROWTH,
                        severity=AlertSeverity.YELLOW,
                        message=f"CPI {label} inflation at {inflation:.1f}% YoY, elevated",
                        value=inflation,
                    )
                )

            if inflation < DECLINE_THRESHOLD:
                alerts.append(
                    Alert(
                        state=state,
                        alert_type=AlertType.SHARP_CPI_DECLINE,
                        severity=AlertSeverity.RED,
                        message=f"CPI {label} deflation at {inflation:.1f}%, sharp decline detected",
                        value=inflation,
                    )
                )

        sustained = self._sustained_increase(state, recent_values)
        if sustained is not None:
            alerts.append(sustained)

        if forecast is not None and forecast.projected_growth_rate > FORECAST_SPIKE_THRESHOLD:
            growth = forecast.projected_growth_rate
            alerts.append(
                Alert(
                    state=state,
                    alert_type=AlertType.FORECAST_SPIKE,
                    severity=AlertSeverity.RED,
                    message=f"Forecast projects {growth:.1f}% growth over next 12 months",
                    value=growth,
                )
            )

        return alerts

    def _sustained_increase(self, state: str, recent_values: Sequence[float]) -> Optional[Alert]:
        if len(recent_values) < 3:
            return None
        v0, v1, v2 = recent_values[-3:]
        if not (v0 > 0 and v0 < v1 < v2):
            return None
        rise = (v2 - v0) / v0 * 100
        if rise <= SUSTAINED_RISE_THRESHOLD:
            return None
        return Alert(
            state=state,
            alert_type=AlertType.SUSTAINED_INCREASE,
            severity=AlertSeverity.RED if rise > SUSTAINED_RISE_RED_THRESHOLD else AlertSeverity.YELLOW,
            message=f"3 consecutive monthly increases, total {rise:.1f}% rise",
            value=rise,
        )

    def generate_alerts(
        self,
        records: Sequence[PriceRecord],
        states: Sequence[str],
        labor_type: LaborType,
        forecasts: Optional[Sequence[ForecastResult]] = None,
    ) -> list[Alert]:
        """
        Evaluate every state and return the combined, sorted alert list.

        The national aggregate and states with fewer than 3 records are
        skipped. When several forecasts share a state the first one is used.
        """
        forecast_by_state: dict[str, ForecastResult] = {}
        for fc in forecasts or []:
            forecast_by_state.setdefault(fc.state, fc)

        def _evaluate(state: str) -> list[Alert]:
            series = time_series(records, state)
            if len(series) < MIN_ALERT_HISTORY:
                return []
            latest = series[-1]
            return self.evaluate_state(
                state,
                latest.inflation_for(labor_type),
                [r.index_for(labor_type) for r in series[-3:]],
                forecast_by_state.get(state) if forecasts is not None else None,
                labor_type,
            )

        targets = [s for s in states if s != self.national_aggregate]
        per_state = map_states(_evaluate, targets, self.max_workers)
        alerts = sort_alerts(alert for state_alerts in per_state for alert in state_alerts)

        self.logger.info(
            "alerts_generated",
            labor_type=labor_type.value,
            states=len(targets),
            total=len(alerts),
            red=sum(1 for a in alerts if a.severity == AlertSeverity.RED),
        )
        return alerts
