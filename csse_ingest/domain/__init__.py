"""
csse_ingest/domain package marker.
"""

from csse_ingest.domain.records import (
    ALL_METRICS,
    EPOCH_SENTINEL,
    CountryIndex,
    Metric,
    PointRecord,
    SeriesRecord,
)

__all__ = [
    "ALL_METRICS",
    "CountryIndex",
    "EPOCH_SENTINEL",
    "Metric",
    "PointRecord",
    "SeriesRecord",
]
