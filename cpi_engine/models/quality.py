"""
Data quality models for the ingestion boundary.

The engine itself never validates input; the CSV adapter drops malformed rows
before they reach it and summarizes what it dropped in a DataQualityReport.
"""

from pydantic import BaseModel, Field, field_validator


class QualityIssue(BaseModel):
    """
    Individual data quality issue identified during ingestion.

    Attributes:
        field: Column where the issue was detected
        issue_type: Type of quality issue (e.g., "missing", "invalid_format")
        count: Number of rows affected by this issue
        description: Human-readable description of the issue
    """

    field: str = Field(description="Column where issue was detected")
    issue_type: str = Field(
        description="Type of quality issue (e.g., 'missing', 'invalid_format')"
    )
    count: int = Field(description="Number of rows affected by this issue", ge=0)
    description: str = Field(description="Human-readable description of the issue")


class DataQualityReport(BaseModel):
    """
    Quality assessment for one ingestion batch.

    Attributes:
        batch_id: Identifier for this ingestion batch
        source: Source label for the batch (e.g. "cpi_csv")
        total_records: Rows read from the source
        valid_records: Rows converted into PriceRecords
        rejected_records: Rows dropped as malformed
        unreported_index_values: Index cells coerced to 0 ("not reported")
        completeness_score: Share of rows accepted (0.0-1.0)
        quality_issues: Specific issues detected, one entry per kind
        impact_advisory: Human-readable guidance on quality impact
    """

    batch_id: str = Field(description="Identifier for this ingestion batch")
    source: str = Field(description="Source label for this batch")
    total_records: int = Field(ge=0)
    valid_records: int = Field(ge=0)
    rejected_records: int = Field(ge=0)
    unreported_index_values: int = Field(default=0, ge=0)
    completeness_score: float = Field(ge=0.0, le=1.0)
    quality_issues: list[QualityIssue] = Field(default_factory=list)
    impact_advisory: str = Field(default="", description="Guidance on quality impact")

    @field_validator("completeness_score")
    @classmethod
    def round_score(cls, v: float) -> float:
        return round(v, 4)
