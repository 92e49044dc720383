"""
Golden Path (End-to-End) Tests for the CPI analytics engine.

Each scenario starts from CSV text, ingests it through the CSV adapter and
runs the analytics service, then checks the dashboard snapshot against
values worked out by hand.
"""

import pytest

from cpi_engine.adapters import CpiCsvAdapter
from cpi_engine.engine import CpiAnalyticsService
from cpi_engine.models import AlertSeverity, AlertType, LaborType, MONTH_ORDER

HEADER = "indicator,baseYear,year,month,state,indexAL,indexRL,inflationAL,inflationRL"

RL_NONLINEAR = [100.0, 103.0, 101.0, 108.0, 104.0, 112.0, 107.0, 115.0, 110.0, 120.0, 113.0, 125.0]


def _state_rows(state, al_values, rl_values=None, latest_inflation="", start_year=2022):
    """CSV lines for consecutive months of one state, inflation on the last row only."""
    rl_values = rl_values if rl_values is not None else al_values
    lines = []
    for i, (al, rl) in enumerate(zip(al_values, rl_values)):
        inflation = latest_inflation if i == len(al_values) - 1 else ""
        lines.append(
            f"CPI-AL/RL,2019,{start_year + i // 12},{MONTH_ORDER[i % 12]},{state},"
            f"{al},{rl},{inflation},{inflation}"
        )
    return lines


def _run(lines, settings, labor_type=LaborType.AL):
    records, report = CpiCsvAdapter().ingest("\n".join([HEADER, *lines]) + "\n")
    snapshot = CpiAnalyticsService(settings).build_snapshot(records, labor_type)
    return snapshot, report


# ============================================================================
# Scenario 1: Flat state -> no trend, tight band, no alerts
# ============================================================================


@pytest.mark.golden
def test_golden_flat_state(settings):
    snapshot, report = _run(_state_rows("Odisha", [100.0] * 24, latest_inflation="0.0"), settings)

    assert report.rejected_records == 0
    [forecast] = snapshot.forecasts
    assert forecast.trend_slope == pytest.approx(0.0)
    assert forecast.projected_growth_rate == pytest.approx(0.0)
    assert forecast.confidence_level == 90
    assert all(p.value == pytest.approx(100.0) for p in forecast.forecast_values)
    assert all(p.lower == pytest.approx(99.5) and p.upper == pytest.approx(100.5) for p in forecast.forecast_values)

    [correlation] = snapshot.correlations
    assert correlation.stability_score == 100
    assert correlation.stress_index == 0
    assert snapshot.alerts == []


# ============================================================================
# Scenario 2: Inflation exactly on the Red threshold stays Yellow
# ============================================================================


@pytest.mark.golden
def test_golden_inflation_on_threshold(settings):
    snapshot, _ = _run(_state_rows("Punjab", [100.0] * 3, latest_inflation="8.0"), settings)

    [alert] = snapshot.alerts
    assert alert.alert_type == AlertType.ELEVATED_CPI_GROWTH
    assert alert.severity == AlertSeverity.YELLOW
    assert alert.value == pytest.approx(8.0)


# ============================================================================
# Scenario 3: Three rising months -> Red sustained increase
# ============================================================================


@pytest.mark.golden
def test_golden_sustained_increase(settings):
    snapshot, _ = _run(_state_rows("Assam", [100.0, 103.0, 107.0]), settings)

    [alert] = snapshot.alerts
    assert alert.alert_type == AlertType.SUSTAINED_INCREASE
    assert alert.severity == AlertSeverity.RED
    assert alert.value == pytest.approx(7.0)
    assert alert.message == "3 consecutive monthly increases, total 7.0% rise"
    assert snapshot.forecasts[0].insufficient_data


# ============================================================================
# Scenario 4: Equal volatility and acceleration, different rolling variance
# ============================================================================


@pytest.mark.golden
def test_golden_stress_weighting(settings):
    # Same set of monthly changes in both states; swings early vs late
    swings = [100.0 if i % 2 == 0 else 110.0 for i in range(12)]
    early = swings + [110.0] * 12
    late = [100.0] * 12 + swings

    snapshot, _ = _run(_state_rows("Bihar", early) + _state_rows("Kerala", late), settings)
    by_state = {c.state: c for c in snapshot.correlations}

    assert by_state["Bihar"].inflation_acceleration == by_state["Kerala"].inflation_acceleration == 0
    assert by_state["Bihar"].stability_score == by_state["Kerala"].stability_score
    assert by_state["Bihar"].rolling_variance == 0
    assert by_state["Kerala"].rolling_variance > 0
    assert [c.state for c in snapshot.correlations] == ["Kerala", "Bihar"]
    assert by_state["Kerala"].stress_index - by_state["Bihar"].stress_index == pytest.approx(
        0.3 * by_state["Kerala"].rolling_variance, abs=0.011
    )


# ============================================================================
# Scenario 5: AL trailing RL by two months
# ============================================================================


@pytest.mark.golden
def test_golden_lagged_series(settings):
    al = [99.0, 99.0] + RL_NONLINEAR[:-2]
    snapshot, _ = _run(_state_rows("Goa", al, RL_NONLINEAR), settings)

    [correlation] = snapshot.correlations
    assert correlation.al_rl_lag_months == 2
    assert correlation.al_rl_correlation == pytest.approx(1.0)


# ============================================================================
# Scenario 6: Malformed rows are dropped, analysis still completes
# ============================================================================


@pytest.mark.golden
def test_golden_dirty_csv(settings):
    lines = _state_rows("Punjab", [120.0 + 1.5 * i for i in range(24)], latest_inflation="9.2")
    lines += [
        "CPI-AL/RL,2019,2023,Smarch,Punjab,150.0,150.0,,",
        "CPI-AL/RL,2019,year,May,Punjab,150.0,150.0,,",
        "CPI-AL/RL,2019,2023,May,,150.0,150.0,,",
        "CPI-AL/RL,2019,2023,December,All India,140.0,139.0,12.0,12.0",
    ]
    snapshot, report = _run(lines, settings)

    assert report.valid_records == 25
    assert report.rejected_records == 3
    assert snapshot.states == ["Punjab"]
    assert [a.alert_type for a in snapshot.alerts] == [AlertType.FORECAST_SPIKE, AlertType.HIGH_CPI_GROWTH]
    assert snapshot.risk_ranking[0].state == "Punjab"
