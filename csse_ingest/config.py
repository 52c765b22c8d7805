"""
csse_ingest/config.py

Environment-driven configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import date
from functools import lru_cache
from pathlib import Path

DEFAULT_DAILY_REPORT_BASE_URL = (
    "https://raw.githubusercontent.com/CSSEGISandData/COVID-19/master/"
    "csse_covid_19_data/csse_covid_19_daily_reports/"
)
# Upstream has since moved the time_series_19-covid-*.csv files into the
# archived_data/archived_time_series/ folder; override with
# CSSE_TIME_SERIES_BASE_URL to read them from there.
DEFAULT_TIME_SERIES_BASE_URL = (
    "https://raw.githubusercontent.com/CSSEGISandData/COVID-19/master/"
    "csse_covid_19_data/csse_covid_19_time_series/time_series_19-covid-"
)
DEFAULT_START_DATE = date(2020, 1, 22)


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    project_root = Path(__file__).resolve().parents[1]
    for filename in (".env", ".env.local"):
        env_path = project_root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_date_env(name: str, default: date) -> date:
    """
    Read an ISO `YYYY-MM-DD` date from environment variables with safe fallback.
    """

    raw_value = _get_str_env(name, "")
    if not raw_value:
        return default
    try:
        return date.fromisoformat(raw_value)
    except ValueError:
        return default


@dataclass(frozen=True)
class ExternalHTTPSettings:
    """
    Shared HTTP behavior settings for the report connector.
    """

    timeout_seconds: float = 15.0
    max_retries: int = 3
    backoff_initial_seconds: float = 0.5
    backoff_multiplier: float = 2.0
    rate_limit_per_second: float = 5.0


@dataclass(frozen=True)
class CSSESourceSettings:
    """
    Locations and parsing behavior for the CSSE report files.
    """

    daily_report_base_url: str = DEFAULT_DAILY_REPORT_BASE_URL
    time_series_base_url: str = DEFAULT_TIME_SERIES_BASE_URL
    start_date: date = DEFAULT_START_DATE
    strict_row_width: bool = True


@lru_cache(maxsize=1)
def get_external_http_settings() -> ExternalHTTPSettings:
    """
    Return shared connector HTTP settings from environment variables.
    """

    return ExternalHTTPSettings(
        timeout_seconds=max(1.0, _get_float_env("CSSE_HTTP_TIMEOUT_SECONDS", 15.0)),
        max_retries=max(0, _get_int_env("CSSE_HTTP_MAX_RETRIES", 3)),
        backoff_initial_seconds=max(0.1, _get_float_env("CSSE_HTTP_BACKOFF_INITIAL_SECONDS", 0.5)),
        backoff_multiplier=max(1.0, _get_float_env("CSSE_HTTP_BACKOFF_MULTIPLIER", 2.0)),
        rate_limit_per_second=max(0.1, _get_float_env("CSSE_HTTP_RATE_LIMIT_PER_SECOND", 5.0)),
    )


@lru_cache(maxsize=1)
def get_csse_source_settings() -> CSSESourceSettings:
    """
    Return CSSE source settings from environment variables.
    """

    return CSSESourceSettings(
        daily_report_base_url=_get_str_env("CSSE_DAILY_REPORT_BASE_URL", DEFAULT_DAILY_REPORT_BASE_URL),
        time_series_base_url=_get_str_env("CSSE_TIME_SERIES_BASE_URL", DEFAULT_TIME_SERIES_BASE_URL),
        start_date=_get_date_env("CSSE_START_DATE", DEFAULT_START_DATE),
        strict_row_width=_get_bool_env("CSSE_STRICT_ROW_WIDTH", True),
    )
