"""
csse_ingest/services package marker.
"""

from csse_ingest.services.snapshot_aggregator import (
    SnapshotAggregator,
    generate_report_dates,
    get_snapshot_aggregator,
)
from csse_ingest.services.time_series_builder import (
    TimeSeriesBuilder,
    build_series_record,
    get_time_series_builder,
)

__all__ = [
    "SnapshotAggregator",
    "generate_report_dates",
    "get_snapshot_aggregator",
    "TimeSeriesBuilder",
    "build_series_record",
    "get_time_series_builder",
]
