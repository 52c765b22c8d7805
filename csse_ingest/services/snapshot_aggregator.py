"""
csse_ingest/services/snapshot_aggregator.py

Builds a per-country index of daily report records across a date range.

Dates are processed strictly in ascending order, one fetch-then-parse cycle
at a time. A failure on any date aborts the whole aggregation: the caller
receives the error and no partially filled index.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone
from functools import lru_cache
from typing import Callable, Iterable

from csse_ingest.config import (
    DEFAULT_DAILY_REPORT_BASE_URL,
    DEFAULT_START_DATE,
    get_csse_source_settings,
    get_external_http_settings,
)
from csse_ingest.connectors.base import ConnectorRequestError
from csse_ingest.connectors.csse_connector import CSSEConnector, build_daily_report_url
from csse_ingest.domain.records import CountryIndex, PointRecord
from csse_ingest.logging_utils import log_event
from csse_ingest.normalizers.row_normalizer import DailyReportRowNormalizer
from csse_ingest.parsing.delimited import DelimitedTextError, parse_delimited

logger = logging.getLogger(__name__)

FetchText = Callable[[str], str]


def generate_report_dates(
    start: date = DEFAULT_START_DATE,
    today: date | None = None,
) -> list[date]:
    """
    Return every calendar date from `start` through `today`, inclusive.

    `today` defaults to the current UTC date at call time. An empty list is
    returned when `today` precedes `start`.
    """

    end = today if today is not None else datetime.now(timezone.utc).date()
    stop = end + timedelta(days=1)

    dates: list[date] = []
    current = start
    while current < stop:
        dates.append(current)
        current += timedelta(days=1)
    return dates


class SnapshotAggregator:
    """
    Fetches daily reports and groups their normalized rows by country.
    """

    def __init__(
        self,
        *,
        fetch_text: FetchText,
        daily_report_base_url: str = DEFAULT_DAILY_REPORT_BASE_URL,
        start_date: date = DEFAULT_START_DATE,
        strict_row_width: bool = True,
        normalizer: DailyReportRowNormalizer | None = None,
    ) -> None:
        self._fetch_text = fetch_text
        self._daily_report_base_url = daily_report_base_url
        self._start_date = start_date
        self._strict_row_width = strict_row_width
        self._normalizer = normalizer or DailyReportRowNormalizer()

    def daily_report_url(self, day: date) -> str:
        return build_daily_report_url(self._daily_report_base_url, day)

    def fetch_snapshot(self, day: date) -> list[PointRecord]:
        """
        Fetch one daily report and normalize every data row.
        """

        url = self.daily_report_url(day)
        try:
            body = self._fetch_text(url)
            rows = parse_delimited(body, strict=self._strict_row_width)
        except (ConnectorRequestError, DelimitedTextError) as exc:
            logger.error("Daily report ingestion failed date=%s url=%s error=%s", day.isoformat(), url, exc)
            raise

        records = self._normalizer.normalize_rows(rows)
        logger.debug("Normalized daily report date=%s rows=%s", day.isoformat(), len(records))
        return records

    def aggregate(
        self,
        dates: Iterable[date] | None = None,
        *,
        today: date | None = None,
    ) -> CountryIndex:
        """
        Build a CountryIndex over `dates`, or over the configured start date
        through today when no dates are given.
        """

        selected_dates = (
            list(dates) if dates is not None else generate_report_dates(self._start_date, today=today)
        )

        index: CountryIndex = {}
        record_count = 0
        for day in selected_dates:
            for record in self.fetch_snapshot(day):
                index.setdefault(record.country, []).append(record)
                record_count += 1

        log_event(
            logger,
            logging.INFO,
            "snapshot_aggregation_completed",
            dates=len(selected_dates),
            countries=len(index),
            records=record_count,
        )
        return index


@lru_cache(maxsize=1)
def get_snapshot_aggregator() -> SnapshotAggregator:
    """
    Build and cache a snapshot aggregator backed by the CSSE connector.
    """

    settings = get_csse_source_settings()
    connector = CSSEConnector(http_settings=get_external_http_settings())
    return SnapshotAggregator(
        fetch_text=connector,
        daily_report_base_url=settings.daily_report_base_url,
        start_date=settings.start_date,
        strict_row_width=settings.strict_row_width,
    )
