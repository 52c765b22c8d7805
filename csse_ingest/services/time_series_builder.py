"""
csse_ingest/services/time_series_builder.py

Reshapes wide-format time series files into date-keyed SeriesRecord values.

Each row carries `[province, country, lat, long]` followed by one column per
calendar day. Column N always maps to `start_date + (N - 4)` days; headers are
never used to infer dates. Cells that do not hold a non-negative integer are
left out of the series, while later columns keep their alignment.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from functools import lru_cache
from typing import Callable, Iterable, Sequence

from csse_ingest.config import (
    DEFAULT_START_DATE,
    DEFAULT_TIME_SERIES_BASE_URL,
    get_csse_source_settings,
    get_external_http_settings,
)
from csse_ingest.connectors.base import ConnectorRequestError
from csse_ingest.connectors.csse_connector import CSSEConnector, build_time_series_url
from csse_ingest.domain.records import ALL_METRICS, Metric, SeriesRecord
from csse_ingest.logging_utils import log_event
from csse_ingest.normalizers.row_normalizer import cell_at
from csse_ingest.parsing.coercion import coerce_optional_float, coerce_optional_int, coerce_string
from csse_ingest.parsing.delimited import DelimitedTextError, parse_delimited

logger = logging.getLogger(__name__)

FetchText = Callable[[str], str]

FIRST_DATE_COLUMN = 4


def build_series_record(
    row: Sequence[str],
    metric: Metric,
    start_date: date = DEFAULT_START_DATE,
) -> SeriesRecord:
    """
    Convert one wide-format row into a SeriesRecord for `metric`.
    """

    data: dict[date, int] = {}
    column = FIRST_DATE_COLUMN
    day = start_date
    while True:
        raw = cell_at(row, column)
        if raw is None:
            break
        value = coerce_optional_int(raw)
        # Negative counts mark days that were not reported yet.
        if value is not None and value >= 0:
            data[day] = value
        column += 1
        day += timedelta(days=1)

    return SeriesRecord(
        province=coerce_string(cell_at(row, 0)),
        country=coerce_string(cell_at(row, 1)),
        lat=coerce_optional_float(cell_at(row, 2)),
        long=coerce_optional_float(cell_at(row, 3)),
        metric=metric,
        data=data,
    )


class TimeSeriesBuilder:
    """
    Fetches the per-metric time series files and flattens them into records.
    """

    def __init__(
        self,
        *,
        fetch_text: FetchText,
        time_series_base_url: str = DEFAULT_TIME_SERIES_BASE_URL,
        start_date: date = DEFAULT_START_DATE,
        strict_row_width: bool = True,
    ) -> None:
        self._fetch_text = fetch_text
        self._time_series_base_url = time_series_base_url
        self._start_date = start_date
        self._strict_row_width = strict_row_width

    def time_series_url(self, metric: Metric) -> str:
        return build_time_series_url(self._time_series_base_url, metric)

    def build_metric(self, metric: Metric) -> list[SeriesRecord]:
        url = self.time_series_url(metric)
        try:
            body = self._fetch_text(url)
            rows = parse_delimited(body, strict=self._strict_row_width)
        except (ConnectorRequestError, DelimitedTextError) as exc:
            logger.error("Time series ingestion failed metric=%s url=%s error=%s", metric.value, url, exc)
            raise

        records = [build_series_record(row, metric, self._start_date) for row in rows]
        logger.debug("Built time series metric=%s locations=%s", metric.value, len(records))
        return records

    def build(self, metrics: Iterable[Metric] = ALL_METRICS) -> list[SeriesRecord]:
        """
        Build series for each metric in order and return them as one flat list.

        Records for the same location are not merged across metrics.
        """

        selected_metrics = list(metrics)
        records: list[SeriesRecord] = []
        for metric in selected_metrics:
            records.extend(self.build_metric(metric))

        log_event(
            logger,
            logging.INFO,
            "time_series_build_completed",
            metrics=[metric.value for metric in selected_metrics],
            records=len(records),
        )
        return records


@lru_cache(maxsize=1)
def get_time_series_builder() -> TimeSeriesBuilder:
    """
    Build and cache a time series builder backed by the CSSE connector.
    """

    settings = get_csse_source_settings()
    connector = CSSEConnector(http_settings=get_external_http_settings())
    return TimeSeriesBuilder(
        fetch_text=connector,
        time_series_base_url=settings.time_series_base_url,
        start_date=settings.start_date,
        strict_row_width=settings.strict_row_width,
    )
