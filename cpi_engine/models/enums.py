"""
Enumeration types for the CPI analytics engine.

All enums inherit from str so they serialize to their plain values in JSON
and compare equal to the strings the dashboard already uses.
"""

from enum import Enum


class LaborType(str, Enum):
    """
    The two parallel consumer price index series published per state.

    AL covers agricultural labourer households, RL covers all rural labourer
    households.
    """

    AL = "AL"
    RL = "RL"


class AlertSeverity(str, Enum):
    """Severity of a threshold-triggered alert. Red always outranks Yellow."""

    RED = "Red"
    YELLOW = "Yellow"


class AlertType(str, Enum):
    """
    Alert rules evaluated per state.

    Values are the display labels shown in the dashboard alert feed.
    """

    HIGH_CPI_GROWTH = "High CPI Growth"
    ELEVATED_CPI_GROWTH = "Elevated CPI Growth"
    SHARP_CPI_DECLINE = "Sharp CPI Decline"
    SUSTAINED_INCREASE = "Sustained Increase"
    FORECAST_SPIKE = "Forecast Spike"


class RiskLevel(str, Enum):
    """
    Inflation-derived risk bucket for a state in the latest period.

    Buckets are cut on absolute year-over-year inflation, so sharp deflation
    ranks as high as sharp inflation.
    """

    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"
    CRITICAL = "Critical"
