"""
csse_ingest/domain/records.py

Domain models produced by the report normalization pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any

EPOCH_SENTINEL = datetime(1970, 1, 1, 0, 0, 0)


class Metric(str, Enum):
    """
    Cumulative count tracked by the time series files.

    The value is the resource name fragment used in the file URL.
    """

    CONFIRMED = "Confirmed"
    DEATHS = "Deaths"
    RECOVERED = "Recovered"


ALL_METRICS: tuple[Metric, ...] = (Metric.CONFIRMED, Metric.DEATHS, Metric.RECOVERED)


@dataclass(frozen=True)
class PointRecord:
    """
    One location's cumulative counts as reported in a daily snapshot.
    """

    province: str
    country: str
    updated: datetime
    confirmed: int
    deaths: int
    recovered: int
    lat: float | None = None
    long: float | None = None

    @property
    def has_valid_timestamp(self) -> bool:
        """
        False when `updated` carries the epoch sentinel for an unparseable value.
        """

        return self.updated != EPOCH_SENTINEL

    def to_dict(self) -> dict[str, Any]:
        return {
            "province": self.province,
            "country": self.country,
            "updated": self.updated.isoformat(),
            "confirmed": self.confirmed,
            "deaths": self.deaths,
            "recovered": self.recovered,
            "lat": self.lat,
            "long": self.long,
        }


@dataclass(frozen=True)
class SeriesRecord:
    """
    One location's date-indexed cumulative counts for a single metric.

    `data` keys increase one calendar day per source column; dates without a
    usable value are absent rather than zero.
    """

    province: str
    country: str
    lat: float | None
    long: float | None
    metric: Metric
    data: dict[date, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "province": self.province,
            "country": self.country,
            "lat": self.lat,
            "long": self.long,
            "metric": self.metric.value,
            "data": {day.isoformat(): value for day, value in self.data.items()},
        }


# Country name -> records in the order they were ingested.
CountryIndex = dict[str, list[PointRecord]]
