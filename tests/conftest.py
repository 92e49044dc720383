"""
Pytest configuration and shared fixtures for the CPI analytics test suite.

Provides record factories, synthetic multi-state datasets and settings
isolation, reused across unit, integration, golden and property tests.
"""

import os
from typing import Optional, Sequence

import pytest

# Isolate settings from any developer .env before the package is imported
os.environ["CPI_LOG_FORMAT"] = "console"
os.environ["CPI_BATCH_MAX_WORKERS"] = "1"

from cpi_engine.config import Settings, get_settings
from cpi_engine.models.records import MONTH_ORDER, PriceRecord


# ---------------------------------------------------------------------------
# Record factories
# ---------------------------------------------------------------------------


def make_record(
    state: str = "Odisha",
    year: int = 2020,
    month: str = "January",
    index_al: float = 100.0,
    index_rl: float = 100.0,
    inflation_al: Optional[float] = None,
    inflation_rl: Optional[float] = None,
    **overrides,
) -> PriceRecord:
    """Factory function for creating test PriceRecord objects."""
    defaults = dict(
        indicator="CPI-AL/RL",
        base_year="2019",
        year=year,
        month=month,
        state=state,
        index_al=index_al,
        index_rl=index_rl,
        inflation_al=inflation_al,
        inflation_rl=inflation_rl,
    )
    defaults.update(overrides)
    return PriceRecord(**defaults)


def make_series(
    al_values: Sequence[float],
    rl_values: Optional[Sequence[float]] = None,
    state: str = "Odisha",
    start_year: int = 2020,
    start_month: int = 0,
    latest_inflation_al: Optional[float] = None,
    latest_inflation_rl: Optional[float] = None,
    base_year: str = "2019",
) -> list[PriceRecord]:
    """
    Consecutive monthly records for one state.

    ``start_month`` is zero-based (0 = January). Inflation is only set on the
    final record, which is what the alert engine reads.
    """
    rl_values = list(rl_values) if rl_values is not None else list(al_values)
    records = []
    last = len(al_values) - 1
    for i, (al, rl) in enumerate(zip(al_values, rl_values)):
        offset = start_month + i
        records.append(
            make_record(
                state=state,
                year=start_year + offset // 12,
                month=MONTH_ORDER[offset % 12],
                index_al=al,
                index_rl=rl,
                inflation_al=latest_inflation_al if i == last else None,
                inflation_rl=latest_inflation_rl if i == last else None,
                base_year=base_year,
            )
        )
    return records


def linear_values(n: int, start: float = 100.0, step: float = 1.0) -> list[float]:
    """Noise-free linear series ``start + step * i``."""
    return [start + step * i for i in range(n)]


def make_dataset() -> list[PriceRecord]:
    """
    Synthetic multi-state dataset covering 24 months (Jan 2022 - Dec 2023).

    - Odisha: flat at 100, no inflation pressure
    - Punjab: steady climb with 9.2% latest AL inflation
    - Kerala: volatile, alternating swings
    - Bihar: only two observations (insufficient history)
    - All India: national aggregate row set
    """
    odisha = make_series([100.0] * 24, state="Odisha", start_year=2022, latest_inflation_al=0.0)
    punjab = make_series(
        linear_values(24, 120.0, 1.5),
        linear_values(24, 118.0, 1.4),
        state="Punjab",
        start_year=2022,
        latest_inflation_al=9.2,
        latest_inflation_rl=8.9,
    )
    kerala_al = [130.0 + (6.0 if i % 2 else -6.0) + i * 0.5 for i in range(24)]
    kerala = make_series(
        kerala_al,
        [v - 2.0 for v in kerala_al],
        state="Kerala",
        start_year=2022,
        latest_inflation_al=-1.5,
    )
    bihar = make_series([140.0, 141.0], state="Bihar", start_year=2023, start_month=10)
    all_india = make_series(
        linear_values(24, 125.0, 0.8), state="All India", start_year=2022, latest_inflation_al=5.5
    )
    return odisha + punjab + kerala + bihar + all_india


# ---------------------------------------------------------------------------
# Pytest fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Ensure every test sees settings built from the current environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(log_format="console", batch_max_workers=1)


@pytest.fixture
def dataset() -> list[PriceRecord]:
    return make_dataset()


@pytest.fixture
def odisha_flat() -> list[PriceRecord]:
    return make_series([100.0] * 24, state="Odisha")


@pytest.fixture
def sample_csv_text() -> str:
    return (
        "indicator,baseYear,year,month,state,indexAL,indexRL,inflationAL,inflationRL\n"
        "CPI-AL/RL,2019,2023,January,Odisha,120.5,121.0,4.2,4.0\n"
        "CPI-AL/RL,2019,2023,February,Odisha,121.1,121.6,,\n"
        "CPI-AL/RL,2019,2023,March,Odisha,n/a,122.0,4.5,4.4\n"
        "CPI-AL/RL,2019,2023,Marchh,Odisha,122.0,122.4,4.6,4.5\n"
        "CPI-AL/RL,2019,20x3,April,Odisha,122.5,122.9,4.7,4.6\n"
        "CPI-AL/RL,2019,2023,April,,123.0,123.3,4.8,4.7\n"
        "CPI-AL/RL,2019,2023,January,All India,125.0,125.5,5.1,5.0\n"
    )
