"""
csse_ingest/connectors/csse_connector.py

Connector for the CSSE daily report and time series CSV files.
"""

from __future__ import annotations

import logging
from datetime import date

import requests

from csse_ingest.config import ExternalHTTPSettings
from csse_ingest.connectors.base import BaseConnector
from csse_ingest.domain.records import Metric

logger = logging.getLogger(__name__)

DAILY_REPORT_DATE_FORMAT = "%m-%d-%Y"
CSV_SUFFIX = ".csv"


def build_daily_report_url(base_url: str, day: date) -> str:
    return f"{base_url}{day.strftime(DAILY_REPORT_DATE_FORMAT)}{CSV_SUFFIX}"


def build_time_series_url(base_url: str, metric: Metric) -> str:
    return f"{base_url}{metric.value}{CSV_SUFFIX}"


class CSSEConnector(BaseConnector):
    """
    Fetches raw CSV text for a fully formed daily report or time series URL.
    """

    def __init__(
        self,
        *,
        http_settings: ExternalHTTPSettings,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(source="csse", http_settings=http_settings, session=session)

    def fetch_text(self, url: str) -> str:
        logger.debug("Fetching CSSE resource source=%s url=%s", self.source, url)
        return self._get_text(url)
