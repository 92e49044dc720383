"""
Unit tests for the CPI CSV adapter.

The adapter is the only place input is validated, so these tests pin down
which rows are rejected and which cells are coerced.
"""

import pandas as pd
import pytest

from cpi_engine.adapters import CpiCsvAdapter

HEADER = "indicator,baseYear,year,month,state,indexAL,indexRL,inflationAL,inflationRL\n"


@pytest.mark.unit
class TestCpiCsvAdapter:
    def setup_method(self):
        self.adapter = CpiCsvAdapter()

    def test_ingest_sample(self, sample_csv_text):
        records, report = self.adapter.ingest(sample_csv_text)

        assert [(r.state, r.month) for r in records] == [
            ("Odisha", "January"),
            ("Odisha", "February"),
            ("Odisha", "March"),
            ("All India", "January"),
        ]
        assert report.total_records == 7
        assert report.valid_records == 4
        assert report.rejected_records == 3
        assert report.unreported_index_values == 1
        assert report.completeness_score == pytest.approx(0.5714)

    def test_typed_fields(self, sample_csv_text):
        records, _ = self.adapter.ingest(sample_csv_text)
        first = records[0]
        assert first.indicator == "CPI-AL/RL"
        assert first.base_year == "2019"
        assert first.year == 2023
        assert first.index_al == pytest.approx(120.5)
        assert first.inflation_rl == pytest.approx(4.0)

    def test_blank_inflation_becomes_none(self, sample_csv_text):
        records, _ = self.adapter.ingest(sample_csv_text)
        assert records[1].inflation_al is None
        assert records[1].inflation_rl is None

    def test_invalid_index_is_unreported(self, sample_csv_text):
        records, _ = self.adapter.ingest(sample_csv_text)
        assert records[2].index_al == 0
        assert records[2].index_rl == pytest.approx(122.0)

    def test_quality_issues_per_kind(self, sample_csv_text):
        _, report = self.adapter.ingest(sample_csv_text)
        issues = {issue.field: issue for issue in report.quality_issues}
        assert issues["year"].issue_type == "invalid_format"
        assert issues["month"].issue_type == "invalid_value"
        assert issues["state"].issue_type == "missing"
        assert issues["indexAL/indexRL"].count == 1

    def test_low_completeness_advisory(self, sample_csv_text):
        _, report = self.adapter.ingest(sample_csv_text)
        assert report.impact_advisory.startswith("Many rows dropped")

    def test_clean_file_has_no_issues(self):
        text = HEADER + "CPI-AL/RL,2019,2024,May,Assam,130.2,131.0,3.1,3.0\n"
        records, report = self.adapter.ingest(text)
        assert len(records) == 1
        assert report.quality_issues == []
        assert report.completeness_score == 1.0
        assert report.batch_id.startswith("batch_cpi_csv_")

    def test_negative_index_is_unreported(self):
        text = HEADER + "CPI-AL/RL,2019,2024,May,Assam,-4,131.0,,\n"
        [record], report = self.adapter.ingest(text)
        assert record.index_al == 0
        assert report.unreported_index_values == 1

    def test_integral_float_year_is_accepted(self):
        text = HEADER + "CPI-AL/RL,2019,2024.0,May,Assam,130.2,131.0,,\n"
        [record], _ = self.adapter.ingest(text)
        assert record.year == 2024

    def test_optional_columns_may_be_absent(self):
        text = "year,month,state,indexAL,indexRL\n2024,May,Assam,130.2,131.0\n"
        [record], _ = self.adapter.ingest(text)
        assert record.indicator == ""
        assert record.inflation_al is None

    def test_missing_required_column_raises(self):
        text = "year,month,state,indexAL\n2024,May,Assam,130.2\n"
        with pytest.raises(ValueError, match="indexRL"):
            self.adapter.ingest(text)

    def test_reads_from_path(self, tmp_path, sample_csv_text):
        path = tmp_path / "cpi.csv"
        path.write_text(sample_csv_text)

        from_path, _ = self.adapter.ingest(path)
        from_str, _ = self.adapter.ingest(str(path))
        assert len(from_path) == len(from_str) == 4

    def test_reads_from_dataframe(self):
        frame = pd.DataFrame(
            {
                "year": ["2024", "2024"],
                "month": ["May", "June"],
                "state": ["Assam", "Assam"],
                "indexAL": ["130.2", "131.0"],
                "indexRL": ["131.0", ""],
            }
        )
        records, report = self.adapter.ingest(frame)
        assert [r.month for r in records] == ["May", "June"]
        assert records[1].index_rl == 0
        assert report.unreported_index_values == 1
