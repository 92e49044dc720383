"""
Price record models.

A PriceRecord is one state-month observation of the AL/RL consumer price
indices. Records are validated once at the ingestion boundary; engine code
downstream assumes well-typed input.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .enums import LaborType

MONTH_ORDER = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


class EngineModel(BaseModel):
    """Immutable base model serialized with camelCase keys for the dashboard."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class PriceRecord(EngineModel):
    """
    One monthly observation for a single state.

    Attributes:
        indicator: Source indicator label (e.g. "CPI-AL/RL")
        base_year: Index normalization year as published (e.g. "2019")
        year: Calendar year of the observation
        month: Full English month name
        state: State or union territory name
        index_al: Agricultural Labourer index; 0 means not reported
        index_rl: Rural Labourer index; 0 means not reported
        inflation_al: Year-over-year AL inflation in percent, if published
        inflation_rl: Year-over-year RL inflation in percent, if published
    """

    indicator: str = Field(default="", description="Source indicator label")
    base_year: str = Field(default="", description="Index base year")
    year: int = Field(description="Calendar year")
    month: str = Field(description="Full English month name")
    state: str = Field(min_length=1, description="State name")
    index_al: float = Field(default=0.0, ge=0.0, alias="indexAL", description="AL index")
    index_rl: float = Field(default=0.0, ge=0.0, alias="indexRL", description="RL index")
    inflation_al: Optional[float] = Field(
        default=None, alias="inflationAL", description="AL YoY inflation (%)"
    )
    inflation_rl: Optional[float] = Field(
        default=None, alias="inflationRL", description="RL YoY inflation (%)"
    )

    @field_validator("month")
    @classmethod
    def validate_month(cls, v: str) -> str:
        """Ensure month is one of the canonical English month names."""
        v = v.strip()
        if v not in MONTH_ORDER:
            raise ValueError(f"Unknown month name: {v!r}")
        return v

    @field_validator("state", "indicator", "base_year")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

    @property
    def month_number(self) -> int:
        """Zero-based month position (January = 0)."""
        return MONTH_ORDER.index(self.month)

    def index_for(self, labor_type: LaborType) -> float:
        """Index value for the requested labour series."""
        return self.index_al if labor_type == LaborType.AL else self.index_rl

    def inflation_for(self, labor_type: LaborType) -> Optional[float]:
        """Year-over-year inflation for the requested labour series."""
        return self.inflation_al if labor_type == LaborType.AL else self.inflation_rl


class PeriodReading(EngineModel):
    """A single state's index and inflation for one (year, month)."""

    index: float = Field(description="Index value for the selected labour type")
    inflation: Optional[float] = Field(default=None, description="YoY inflation (%)")


class LatestPeriod(EngineModel):
    """The most recent (year, month) present in a record set."""

    year: int
    month: str
