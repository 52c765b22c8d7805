"""
Run CSSE report ingestion from CLI.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from datetime import date

from csse_ingest.config import get_csse_source_settings, get_external_http_settings
from csse_ingest.connectors import ConnectorRequestError, CSSEConnector
from csse_ingest.domain import ALL_METRICS, Metric
from csse_ingest.logging_utils import configure_logging
from csse_ingest.parsing import DelimitedTextError
from csse_ingest.services import SnapshotAggregator, TimeSeriesBuilder, generate_report_dates


def _parse_iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}', expected YYYY-MM-DD.") from exc


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Ingest CSSE COVID-19 daily reports or time series.")
    parser.add_argument(
        "--mode",
        choices=("daily", "series"),
        default="daily",
        help="Daily report aggregation by country, or per-location time series.",
    )
    parser.add_argument(
        "--start",
        type=_parse_iso_date,
        default=None,
        help="First daily report date (defaults to CSSE_START_DATE).",
    )
    parser.add_argument(
        "--end",
        type=_parse_iso_date,
        default=None,
        help="Last daily report date, inclusive (defaults to today, UTC).",
    )
    parser.add_argument(
        "--metric",
        dest="metrics",
        action="append",
        choices=[metric.value for metric in ALL_METRICS],
        default=None,
        help="Time series metric to build; repeat for several (defaults to all).",
    )
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Accept rows whose width differs from the header.",
    )
    return parser


def main() -> int:
    configure_logging()
    args = _build_parser().parse_args()

    settings = get_csse_source_settings()
    if args.lenient:
        settings = replace(settings, strict_row_width=False)
    connector = CSSEConnector(http_settings=get_external_http_settings())

    try:
        if args.mode == "daily":
            aggregator = SnapshotAggregator(
                fetch_text=connector,
                daily_report_base_url=settings.daily_report_base_url,
                start_date=settings.start_date,
                strict_row_width=settings.strict_row_width,
            )
            dates = generate_report_dates(args.start or settings.start_date, today=args.end)
            index = aggregator.aggregate(dates)
            payload = [
                {
                    "country": country,
                    "records": len(records),
                    "latest": records[-1].to_dict(),
                }
                for country, records in index.items()
            ]
        else:
            builder = TimeSeriesBuilder(
                fetch_text=connector,
                time_series_base_url=settings.time_series_base_url,
                start_date=settings.start_date,
                strict_row_width=settings.strict_row_width,
            )
            metrics = [Metric(value) for value in args.metrics] if args.metrics else list(ALL_METRICS)
            series = builder.build(metrics)
            payload = [
                {
                    "province": record.province,
                    "country": record.country,
                    "metric": record.metric.value,
                    "points": len(record.data),
                    "last_date": max(record.data).isoformat() if record.data else None,
                }
                for record in series
            ]
    except (ConnectorRequestError, DelimitedTextError) as exc:
        print(f"Ingestion failed: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
