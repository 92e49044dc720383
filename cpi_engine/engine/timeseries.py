"""
Time-Series Accessor: per-state ordering, period lookups and basic statistics.

Every function here is pure. Short or empty inputs are an expected state
(new states, incomplete reporting) and yield 0 / None / [] sentinels rather
than exceptions.
"""

import math
from collections.abc import Iterable, Sequence
from typing import Optional

import numpy as np

from cpi_engine.models.enums import LaborType, RiskLevel
from cpi_engine.models.records import MONTH_ORDER, LatestPeriod, PeriodReading, PriceRecord

NATIONAL_AGGREGATE = "All India"


def month_index(month: str) -> int:
    """Zero-based calendar position of a month name, -1 if unknown."""
    try:
        return MONTH_ORDER.index(month)
    except ValueError:
        return -1


def _chronological_key(record: PriceRecord) -> tuple[int, int]:
    return record.year, month_index(record.month)


def time_series(records: Iterable[PriceRecord], state: str) -> list[PriceRecord]:
    """
    Records of one state in chronological order.

    Sorting is stable, so records sharing a (year, month) keep their input order.
    """
    return sorted((r for r in records if r.state == state), key=_chronological_key)


def index_values(series: Iterable[PriceRecord], labor_type: LaborType) -> list[float]:
    """Raw index values for the labour type, zeros included."""
    return [r.index_for(labor_type) for r in series]


def valid_index_values(series: Iterable[PriceRecord], labor_type: LaborType) -> list[float]:
    """Index values with unreported (zero) entries removed."""
    return [v for v in index_values(series, labor_type) if v > 0]


def percent_changes(values: Sequence[float]) -> list[float]:
    """Period-over-period % changes, skipping transitions from a zero value."""
    return [
        (cur - prev) / prev * 100
        for prev, cur in zip(values, values[1:])
        if prev != 0
    ]


def round_half_up(value: float) -> int:
    """Nearest integer with .5 rounded up (``round()`` rounds half to even)."""
    return math.floor(value + 0.5)


def volatility(values: Sequence[float]) -> float:
    """
    Population standard deviation of period-over-period % changes.

    Args:
        values: Index values in chronological order

    Returns:
        Standard deviation rounded to 2 decimals; 0 when fewer than two values
        or no usable transitions exist
    """
    if len(values) < 2:
        return 0.0
    changes = percent_changes(values)
    if not changes:
        return 0.0
    return round(float(np.std(changes)), 2)


def moving_average(values: Sequence[float], window: int) -> list[float]:
    """
    Trailing simple moving average.

    Positions before a full window is available pass the raw value through
    unchanged; there is no look-ahead.
    """
    result = []
    for i, value in enumerate(values):
        if i < window - 1:
            result.append(value)
        else:
            chunk = values[i - window + 1 : i + 1]
            result.append(round(sum(chunk) / window, 2))
    return result


def yoy(series: Sequence[PriceRecord], labor_type: LaborType) -> Optional[float]:
    """
    Year-over-year % change of the latest record.

    Compares the latest record against the record for the same month one
    calendar year earlier. Returns None when the series is shorter than 13
    records, the prior record is missing, or its value is 0.
    """
    if len(series) < 13:
        return None
    latest = series[-1]
    prev = next(
        (r for r in series if r.year == latest.year - 1 and r.month == latest.month),
        None,
    )
    if prev is None:
        return None

    current_val = latest.index_for(labor_type)
    prev_val = prev.index_for(labor_type)
    if prev_val == 0:
        return None
    return round((current_val - prev_val) / prev_val * 100, 2)


def unique_states(
    records: Iterable[PriceRecord], exclude: str = NATIONAL_AGGREGATE
) -> list[str]:
    """Sorted distinct states, without the national aggregate."""
    return sorted({r.state for r in records if r.state != exclude})


def unique_years(records: Iterable[PriceRecord]) -> list[int]:
    """Distinct years, most recent first."""
    return sorted({r.year for r in records}, reverse=True)


def unique_months(records: Iterable[PriceRecord], year: int) -> list[str]:
    """Distinct months present for a year, in calendar order."""
    return sorted({r.month for r in records if r.year == year}, key=month_index)


def filter_by_base_year(records: Iterable[PriceRecord], base_year: str) -> list[PriceRecord]:
    return [r for r in records if r.base_year == base_year]


def latest_period(
    records: Sequence[PriceRecord], preferred_base_year: Optional[str] = "2019"
) -> Optional[LatestPeriod]:
    """
    Most recent (year, month) in the record set.

    When records for the preferred base year exist only those are considered,
    so an older series that runs later does not hide the current base.
    """
    if not records:
        return None
    preferred = filter_by_base_year(records, preferred_base_year) if preferred_base_year else []
    source = preferred or records
    latest = max(source, key=_chronological_key)
    return LatestPeriod(year=latest.year, month=latest.month)


def state_data_for_period(
    records: Iterable[PriceRecord],
    year: int,
    month: str,
    labor_type: LaborType = LaborType.AL,
) -> dict[str, PeriodReading]:
    """
    Index and inflation per state for one period.

    If a state has several records for the period the last one wins.
    """
    readings = {}
    for r in records:
        if r.year == year and r.month == month:
            readings[r.state] = PeriodReading(
                index=r.index_for(labor_type),
                inflation=r.inflation_for(labor_type),
            )
    return readings


def risk_level_from_inflation(inflation: Optional[float]) -> RiskLevel:
    """Bucket absolute YoY inflation into a risk level; unknown is Moderate."""
    if inflation is None:
        return RiskLevel.MODERATE
    magnitude = abs(inflation)
    if magnitude >= 8:
        return RiskLevel.CRITICAL
    if magnitude >= 5:
        return RiskLevel.HIGH
    if magnitude >= 3:
        return RiskLevel.MODERATE
    return RiskLevel.LOW
