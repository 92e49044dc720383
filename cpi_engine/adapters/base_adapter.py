"""
Base adapter class for source dataset ingestion.

Adapters are the validation boundary of the engine: they turn raw source rows
into typed PriceRecords, drop rows that cannot be interpreted, and report
what they dropped. Engine code downstream never re-validates.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional

import pandas as pd
import structlog

from cpi_engine.models.quality import DataQualityReport, QualityIssue
from cpi_engine.models.records import PriceRecord

logger = structlog.get_logger()


class BaseAdapter(ABC):
    """
    Abstract base class for price dataset adapters.

    Attributes:
        source_name: Identifier for the data source (e.g., "cpi_csv")
    """

    def __init__(self, source_name: str):
        """
        Initialize the adapter with a source name.

        Args:
            source_name: Identifier for this data source
        """
        self.source_name = source_name
        self.logger = logger.bind(adapter=source_name)

    @abstractmethod
    def ingest(self, *args, **kwargs) -> tuple[list[PriceRecord], DataQualityReport]:
        """
        Transform source data into PriceRecords with a quality report.

        Returns:
            Tuple of (price records, data quality report)

        Raises:
            ValueError: If input data is structurally invalid
        """

    def _safe_str(self, value, default: str = "") -> str:
        """Convert value to a stripped string, handling None and NaN."""
        if self._is_missing(value):
            return default
        return str(value).strip()

    def _safe_float(self, value, default: Optional[float] = None) -> Optional[float]:
        """Convert value to float, handling None, NaN and non-numeric text."""
        if self._is_missing(value):
            return default
        try:
            result = float(str(value).strip())
        except (ValueError, TypeError):
            return default
        if pd.isna(result):
            return default
        return result

    def _safe_int(self, value, default: Optional[int] = None) -> Optional[int]:
        """Convert value to int; accepts integral floats such as "2021.0"."""
        number = self._safe_float(value)
        if number is None or not number.is_integer():
            return default
        return int(number)

    def _is_missing(self, value) -> bool:
        """True for None, NaN and blank strings."""
        if value is None:
            return True
        if isinstance(value, str):
            return not value.strip()
        try:
            return bool(pd.isna(value))
        except (TypeError, ValueError):
            return False

    def _compute_quality_report(
        self,
        records: list[PriceRecord],
        total_records: int,
        rejected_records: int,
        unreported_index_values: int,
        quality_issues: list[QualityIssue],
    ) -> DataQualityReport:
        """
        Generate the data quality report for an ingested batch.

        Args:
            records: Successfully created records
            total_records: Total number of input rows processed
            rejected_records: Rows that failed validation
            unreported_index_values: Index cells treated as "not reported"
            quality_issues: Issues detected during processing

        Returns:
            DataQualityReport for the batch
        """
        valid_records = len(records)
        completeness_score = (valid_records / total_records) if total_records > 0 else 1.0

        if completeness_score >= 0.95:
            impact_advisory = "High quality batch. Dropped rows do not affect state coverage."
        elif completeness_score >= 0.80:
            impact_advisory = "Some rows dropped. Short state histories may fall below forecast minimums."
        else:
            impact_advisory = "Many rows dropped. Review the source file before relying on forecasts."

        batch_id = f"batch_{self.source_name}_{datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S')}"

        report = DataQualityReport(
            batch_id=batch_id,
            source=self.source_name,
            total_records=total_records,
            valid_records=valid_records,
            rejected_records=rejected_records,
            unreported_index_values=unreported_index_values,
            completeness_score=completeness_score,
            quality_issues=quality_issues,
            impact_advisory=impact_advisory,
        )

        self.logger.info(
            "quality_report_generated",
            batch_id=batch_id,
            total_records=total_records,
            valid_records=valid_records,
            rejected_records=rejected_records,
            completeness_score=report.completeness_score,
        )
        return report
