"""
CPI-AL/RL CSV Adapter.

Reads the state-wise Consumer Price Index for Agricultural and Rural
Labourers as published in CSV form:

    indicator,baseYear,year,month,state,indexAL,indexRL,inflationAL,inflationRL

Conversion rules:
- indexAL / indexRL that are blank, non-numeric or negative become 0,
  which the engine treats as "not reported"
- inflationAL / inflationRL that are blank or non-numeric become None
- rows with a non-integer year, an unknown month name or a blank state
  are rejected and counted in the quality report
"""

import io
from pathlib import Path
from typing import Union

import pandas as pd
import structlog

from cpi_engine.models.quality import DataQualityReport, QualityIssue
from cpi_engine.models.records import MONTH_ORDER, PriceRecord

from .base_adapter import BaseAdapter

logger = structlog.get_logger()

REQUIRED_COLUMNS = ("year", "month", "state", "indexAL", "indexRL")
OPTIONAL_COLUMNS = ("indicator", "baseYear", "inflationAL", "inflationRL")

CsvSource = Union[str, Path, pd.DataFrame]


class CpiCsvAdapter(BaseAdapter):
    """
    Adapts CPI-AL/RL CSV exports into PriceRecords.

    Accepts raw CSV text, a path to a CSV file, or an already loaded
    DataFrame with the same column names.
    """

    def __init__(self):
        """Initialize CPI CSV adapter."""
        super().__init__(source_name="cpi_csv")

    def load_frame(self, source: CsvSource) -> pd.DataFrame:
        """
        Load the source into a string-typed DataFrame.

        Strings containing a newline are treated as CSV text, other strings
        as file paths.
        """
        if isinstance(source, pd.DataFrame):
            frame = source.copy()
        elif isinstance(source, Path) or "\n" not in source:
            frame = pd.read_csv(source, dtype=str, keep_default_na=False, skipinitialspace=True)
        else:
            frame = pd.read_csv(
                io.StringIO(source.strip()), dtype=str, keep_default_na=False, skipinitialspace=True
            )
        frame.columns = [str(c).strip() for c in frame.columns]
        return frame

    def ingest(self, source: CsvSource, **kwargs) -> tuple[list[PriceRecord], DataQualityReport]:
        """
        Transform a CPI CSV into PriceRecords.

        Args:
            source: CSV text, CSV path, or DataFrame

        Returns:
            Tuple of (price records in file order, data quality report)

        Raises:
            ValueError: If a required column is missing
        """
        frame = self.load_frame(source)
        missing = [c for c in REQUIRED_COLUMNS if c not in frame.columns]
        if missing:
            raise ValueError(f"CPI CSV is missing required columns: {', '.join(missing)}")

        self.logger.info("cpi_csv_ingestion_started", rows=len(frame))

        records = []
        invalid_years = 0
        invalid_months = 0
        missing_states = 0
        unreported_index = 0

        for _, row in frame.iterrows():
            year = self._safe_int(row.get("year"))
            month = self._safe_str(row.get("month"))
            state = self._safe_str(row.get("state"))

            if year is None:
                invalid_years += 1
                continue
            if month not in MONTH_ORDER:
                invalid_months += 1
                continue
            if not state:
                missing_states += 1
                continue

            index_al = self._safe_float(row.get("indexAL"), 0.0)
            index_rl = self._safe_float(row.get("indexRL"), 0.0)
            if index_al <= 0:
                unreported_index += 1
                index_al = 0.0
            if index_rl <= 0:
                unreported_index += 1
                index_rl = 0.0

            records.append(
                PriceRecord(
                    indicator=self._safe_str(row.get("indicator")),
                    base_year=self._safe_str(row.get("baseYear")),
                    year=year,
                    month=month,
                    state=state,
                    index_al=index_al,
                    index_rl=index_rl,
                    inflation_al=self._safe_float(row.get("inflationAL")),
                    inflation_rl=self._safe_float(row.get("inflationRL")),
                )
            )

        quality_issues = []
        if invalid_years:
            quality_issues.append(
                QualityIssue(
                    field="year",
                    issue_type="invalid_format",
                    count=invalid_years,
                    description=f"{invalid_years} rows with a non-integer year were rejected",
                )
            )
        if invalid_months:
            quality_issues.append(
                QualityIssue(
                    field="month",
                    issue_type="invalid_value",
                    count=invalid_months,
                    description=f"{invalid_months} rows with an unrecognized month name were rejected",
                )
            )
        if missing_states:
            quality_issues.append(
                QualityIssue(
                    field="state",
                    issue_type="missing",
                    count=missing_states,
                    description=f"{missing_states} rows without a state were rejected",
                )
            )
        if unreported_index:
            quality_issues.append(
                QualityIssue(
                    field="indexAL/indexRL",
                    issue_type="not_reported",
                    count=unreported_index,
                    description=f"{unreported_index} index values were blank or invalid and set to 0",
                )
            )

        rejected = invalid_years + invalid_months + missing_states
        report = self._compute_quality_report(
            records=records,
            total_records=len(frame),
            rejected_records=rejected,
            unreported_index_values=unreported_index,
            quality_issues=quality_issues,
        )

        self.logger.info(
            "cpi_csv_ingestion_complete",
            records=len(records),
            rejected=rejected,
            states=len({r.state for r in records}),
        )
        return records, report
