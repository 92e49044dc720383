#!/usr/bin/env python3
"""
Run the CPI analytics engine over a CPI-AL/RL CSV export.

Ingests the CSV, builds a dashboard snapshot (forecasts, AL/RL stress,
alerts, risk ranking) and prints it as JSON with camelCase keys.

Usage:
    python scripts/run_analysis.py --csv data/cpialrl.csv
    python scripts/run_analysis.py --csv data/cpialrl.csv --labor-type RL --top 10
    python scripts/run_analysis.py --csv data/cpialrl.csv --base-year 2019 --workers 4
"""

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from cpi_engine.adapters import CpiCsvAdapter
from cpi_engine.config import get_settings
from cpi_engine.engine import CpiAnalyticsService
from cpi_engine.engine.timeseries import filter_by_base_year
from cpi_engine.models import LaborType
from cpi_engine.utils.logging import configure_logging, get_logger


def main():
    parser = argparse.ArgumentParser(description="Run CPI-AL/RL state analytics")
    parser.add_argument("--csv", required=True, type=Path, help="Path to the CPI CSV export")
    parser.add_argument(
        "--labor-type", default="AL", choices=[lt.value for lt in LaborType], help="Index series"
    )
    parser.add_argument("--base-year", default=None, help="Only analyse records of this base year")
    parser.add_argument("--horizon", type=int, default=None, help="Forecast horizon in months")
    parser.add_argument("--top", type=int, default=None, help="Keep only the top N alerts")
    parser.add_argument("--workers", type=int, default=None, help="Thread pool size per batch")
    args = parser.parse_args()

    settings = get_settings()
    if args.workers:
        settings = settings.model_copy(update={"batch_max_workers": args.workers})

    configure_logging(settings)
    logger = get_logger("run_analysis")

    if not args.csv.exists():
        print(f"CSV not found: {args.csv}", file=sys.stderr)
        sys.exit(1)

    records, report = CpiCsvAdapter().ingest(args.csv)
    if args.base_year:
        records = filter_by_base_year(records, args.base_year)
    if not records:
        print("No usable records after ingestion.", file=sys.stderr)
        sys.exit(1)

    snapshot = CpiAnalyticsService(settings).build_snapshot(
        records, LaborType(args.labor_type), horizon_months=args.horizon
    )
    if args.top is not None:
        snapshot = snapshot.model_copy(update={"alerts": snapshot.alerts[: args.top]})

    logger.info("analysis_complete", rejected_rows=report.rejected_records, alerts=len(snapshot.alerts))
    print(json.dumps(snapshot.model_dump(mode="json", by_alias=True), indent=2))


if __name__ == "__main__":
    main()
