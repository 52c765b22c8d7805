"""
tests/test_config.py

Pytest unit tests for environment-driven settings.
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date

import pytest

from csse_ingest import config


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Iterator[None]:
    config.get_external_http_settings.cache_clear()
    config.get_csse_source_settings.cache_clear()
    yield
    config.get_external_http_settings.cache_clear()
    config.get_csse_source_settings.cache_clear()


class TestExternalHTTPSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in (
            "CSSE_HTTP_TIMEOUT_SECONDS",
            "CSSE_HTTP_MAX_RETRIES",
            "CSSE_HTTP_BACKOFF_INITIAL_SECONDS",
            "CSSE_HTTP_BACKOFF_MULTIPLIER",
            "CSSE_HTTP_RATE_LIMIT_PER_SECOND",
        ):
            monkeypatch.delenv(name, raising=False)

        assert config.get_external_http_settings() == config.ExternalHTTPSettings()

    def test_invalid_number_falls_back_to_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CSSE_HTTP_MAX_RETRIES", "many")

        assert config.get_external_http_settings().max_retries == 3

    def test_values_are_bounded(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CSSE_HTTP_MAX_RETRIES", "-5")
        monkeypatch.setenv("CSSE_HTTP_TIMEOUT_SECONDS", "0")

        settings = config.get_external_http_settings()

        assert settings.max_retries == 0
        assert settings.timeout_seconds == 1.0


class TestCSSESourceSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in (
            "CSSE_DAILY_REPORT_BASE_URL",
            "CSSE_TIME_SERIES_BASE_URL",
            "CSSE_START_DATE",
            "CSSE_STRICT_ROW_WIDTH",
        ):
            monkeypatch.delenv(name, raising=False)

        settings = config.get_csse_source_settings()

        assert settings.start_date == date(2020, 1, 22)
        assert settings.daily_report_base_url.endswith("csse_covid_19_daily_reports/")
        assert settings.strict_row_width is True

    def test_start_date_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CSSE_START_DATE", "2020-03-01")

        assert config.get_csse_source_settings().start_date == date(2020, 3, 1)

    def test_invalid_start_date_falls_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CSSE_START_DATE", "03/01/2020")

        assert config.get_csse_source_settings().start_date == date(2020, 1, 22)

    def test_strict_row_width_can_be_disabled(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CSSE_STRICT_ROW_WIDTH", "false")

        assert config.get_csse_source_settings().strict_row_width is False

    def test_blank_url_keeps_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CSSE_TIME_SERIES_BASE_URL", "   ")

        assert config.get_csse_source_settings().time_series_base_url == config.DEFAULT_TIME_SERIES_BASE_URL

    def test_time_series_base_url_can_point_at_archive(self, monkeypatch: pytest.MonkeyPatch) -> None:
        archive = (
            "https://raw.githubusercontent.com/CSSEGISandData/COVID-19/master/"
            "archived_data/archived_time_series/time_series_19-covid-"
        )
        monkeypatch.setenv("CSSE_TIME_SERIES_BASE_URL", archive)

        assert config.get_csse_source_settings().time_series_base_url == archive
