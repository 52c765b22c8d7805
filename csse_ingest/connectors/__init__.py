"""
csse_ingest/connectors package marker.
"""

from csse_ingest.connectors.base import BaseConnector, ConnectorRequestError
from csse_ingest.connectors.csse_connector import (
    CSSEConnector,
    build_daily_report_url,
    build_time_series_url,
)

__all__ = [
    "BaseConnector",
    "CSSEConnector",
    "ConnectorRequestError",
    "build_daily_report_url",
    "build_time_series_url",
]
