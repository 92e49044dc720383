"""
CPI analytics engine components.

- timeseries: per-state ordering, period lookups, volatility, moving averages
- forecast_engine: OLS trend + seasonal ratio projection per state
- correlation_engine: AL/RL lag correlation, CAGR, stress and stability scores
- alert_engine: threshold rules producing severity-ordered alerts
- risk_ranker: composite per-state risk ranking
- analytics_service: runs all of the above into one dashboard snapshot

Every engine is a pure function of its inputs. Per-state batches are
independent and may run on a thread pool (see ``batch.map_states``).
"""

__all__ = [
    "AlertEngine",
    "CorrelationEngine",
    "CpiAnalyticsService",
    "ForecastEngine",
    "RiskRanker",
]

from cpi_engine.engine.alert_engine import AlertEngine
from cpi_engine.engine.analytics_service import CpiAnalyticsService
from cpi_engine.engine.correlation_engine import CorrelationEngine
from cpi_engine.engine.forecast_engine import ForecastEngine
from cpi_engine.engine.risk_ranker import RiskRanker
