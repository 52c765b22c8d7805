"""
csse_ingest/parsing/timestamps.py

Disambiguation of the "Last Update" formats seen across daily report files.

Patterns are tried in a fixed order and the first successful parse wins. The
order is significant: some inputs satisfy more than one pattern.
"""

from __future__ import annotations

import re
from datetime import datetime

from csse_ingest.domain.records import EPOCH_SENTINEL

TIMESTAMP_FORMATS: tuple[str, ...] = (
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
    "%m/%d/%y %H:%M",
    "%m/%d/%Y %H:%M",
)

CENTURY_CORRECTION_THRESHOLD = 2000
CENTURY_OFFSET = 2000

# `%Y` in strptime requires exactly four digits; upstream files also carry
# one to three digit years such as "20", "120" or "0".
_LEADING_YEAR = re.compile(r"^(?P<year>\d{1,4})-")
_TRAILING_YEAR = re.compile(r"^\d{1,2}/\d{1,2}/(?P<year>\d{1,4}) ")

_YEAR_FIELDS: dict[str, re.Pattern[str]] = {
    "%Y-%m-%dT%H:%M:%S": _LEADING_YEAR,
    "%Y-%m-%d %H:%M:%S": _LEADING_YEAR,
    "%m/%d/%Y %H:%M": _TRAILING_YEAR,
}


def _correct_year(year: int) -> int:
    if year < CENTURY_CORRECTION_THRESHOLD:
        return year + CENTURY_OFFSET
    return year


def _widen_year(value: str, fmt: str) -> str:
    """
    Rewrite the `%Y` field of `value` as a corrected four-digit year.

    Correcting before parsing also covers year 0, which `datetime` rejects.
    """

    pattern = _YEAR_FIELDS.get(fmt)
    if pattern is None:
        return value
    match = pattern.search(value)
    if match is None:
        return value
    year = _correct_year(int(match.group("year")))
    return f"{value[:match.start('year')]}{year:04d}{value[match.end('year'):]}"


def parse_timestamp(raw: str | None) -> datetime | None:
    """
    Parse a report timestamp, returning None when no known format matches.

    A year below 2000 is shifted forward by 2000 years. The check runs for
    every format, including the four-digit-year ones.
    """

    if raw is None:
        return None
    value = raw.strip()
    if not value:
        return None

    for fmt in TIMESTAMP_FORMATS:
        try:
            parsed = datetime.strptime(_widen_year(value, fmt), fmt)
        except ValueError:
            continue
        corrected_year = _correct_year(parsed.year)
        if corrected_year != parsed.year:
            return parsed.replace(year=corrected_year)
        return parsed

    return None


def disambiguate_timestamp(raw: str | None) -> datetime:
    """
    Parse a report timestamp, surfacing failures as the 1970-01-01 sentinel.
    """

    parsed = parse_timestamp(raw)
    if parsed is None:
        return EPOCH_SENTINEL
    return parsed
