"""
csse_ingest/normalizers/row_normalizer.py

Positional mapping of daily report rows into PointRecord values.

Columns are addressed strictly by index. Upstream header text varies between
files while the column order does not, so headers are never consulted.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from csse_ingest.domain.records import PointRecord
from csse_ingest.parsing.coercion import (
    coerce_optional_float,
    coerce_string,
    coerce_unsigned_int,
)
from csse_ingest.parsing.timestamps import disambiguate_timestamp

PROVINCE_INDEX = 0
COUNTRY_INDEX = 1
UPDATED_INDEX = 2
CONFIRMED_INDEX = 3
DEATHS_INDEX = 4
RECOVERED_INDEX = 5
LAT_INDEX = 6
LONG_INDEX = 7


def cell_at(row: Sequence[str], index: int) -> str | None:
    """
    Return the raw cell at `index`, or None when the row is too short.
    """

    if 0 <= index < len(row):
        return row[index]
    return None


def normalize_row(row: Sequence[str]) -> PointRecord:
    """
    Build a PointRecord from one daily report row.

    Missing trailing cells take the same fallback as an empty cell.
    """

    province = coerce_string(cell_at(row, PROVINCE_INDEX))
    country = coerce_string(cell_at(row, COUNTRY_INDEX))
    updated_raw = coerce_string(cell_at(row, UPDATED_INDEX))
    confirmed = coerce_unsigned_int(cell_at(row, CONFIRMED_INDEX))
    deaths = coerce_unsigned_int(cell_at(row, DEATHS_INDEX))
    recovered = coerce_unsigned_int(cell_at(row, RECOVERED_INDEX))
    lat = coerce_optional_float(cell_at(row, LAT_INDEX))
    long = coerce_optional_float(cell_at(row, LONG_INDEX))

    return PointRecord(
        province=province,
        country=country,
        updated=disambiguate_timestamp(updated_raw),
        confirmed=confirmed,
        deaths=deaths,
        recovered=recovered,
        lat=lat,
        long=long,
    )


class DailyReportRowNormalizer:
    """
    Stateless normalizer injected into the snapshot aggregator.
    """

    def normalize(self, row: Sequence[str]) -> PointRecord:
        return normalize_row(row)

    def normalize_rows(self, rows: Iterable[Sequence[str]]) -> list[PointRecord]:
        return [normalize_row(row) for row in rows]
