"""
csse_ingest/connectors/base.py

Base connector abstraction and shared HTTP mechanics.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod

import requests

from csse_ingest.config import ExternalHTTPSettings

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


class ConnectorRequestError(RuntimeError):
    """
    Raised when a connector cannot fetch data after retries.
    """

    def __init__(self, message: str, *, url: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class BaseConnector(ABC):
    """
    Connector interface for fetching raw report text.

    Instances are callable so they can be passed wherever a `url -> text`
    fetch function is expected.
    """

    source: str

    def __init__(
        self,
        *,
        source: str,
        http_settings: ExternalHTTPSettings,
        session: requests.Session | None = None,
    ) -> None:
        self.source = source
        self._session = session or requests.Session()
        self._timeout_seconds = http_settings.timeout_seconds
        self._max_retries = http_settings.max_retries
        self._backoff_initial_seconds = http_settings.backoff_initial_seconds
        self._backoff_multiplier = http_settings.backoff_multiplier
        self._min_request_interval_seconds = (
            1.0 / http_settings.rate_limit_per_second if http_settings.rate_limit_per_second > 0 else 0.0
        )
        self._last_request_monotonic: float = 0.0

    @abstractmethod
    def fetch_text(self, url: str) -> str:
        """
        Fetch one resource and return its body as text.
        """

    def __call__(self, url: str) -> str:
        return self.fetch_text(url)

    def _get_text(self, url: str) -> str:
        """
        GET `url` with rate limiting and exponential backoff.

        429 and 5xx responses, timeouts and connection errors are retried;
        any other HTTP error fails immediately.
        """

        last_error: Exception | None = None
        for attempt in range(self._max_retries + 1):
            self._wait_for_slot()
            try:
                response = self._session.get(url, timeout=self._timeout_seconds)
                if response.status_code in RETRYABLE_STATUS_CODES:
                    last_error = requests.HTTPError(
                        f"Retryable HTTP status code: {response.status_code}",
                        response=response,
                    )
                else:
                    response.raise_for_status()
                    return response.text
            except requests.HTTPError as exc:
                status_code = exc.response.status_code if exc.response is not None else None
                logger.error(
                    "Connector request failed source=%s status=%s url=%s error=%s",
                    self.source,
                    status_code,
                    url,
                    exc,
                )
                raise ConnectorRequestError(
                    f"{self.source}: non-retryable request failure for {url}.",
                    url=url,
                    status_code=status_code,
                ) from exc
            except (requests.Timeout, requests.ConnectionError) as exc:
                last_error = exc

            if attempt >= self._max_retries:
                break

            backoff_seconds = self._backoff_initial_seconds * (self._backoff_multiplier**attempt)
            logger.warning(
                "Connector request retry source=%s attempt=%s/%s wait_seconds=%.2f url=%s",
                self.source,
                attempt + 1,
                self._max_retries,
                backoff_seconds,
                url,
            )
            time.sleep(backoff_seconds)

        logger.error(
            "Connector request exhausted retries source=%s url=%s error=%s",
            self.source,
            url,
            last_error,
        )
        raise ConnectorRequestError(
            f"{self.source}: request failed after retries for {url}.",
            url=url,
        ) from last_error

    def _wait_for_slot(self) -> None:
        if self._min_request_interval_seconds <= 0:
            return

        remaining = self._min_request_interval_seconds - (time.monotonic() - self._last_request_monotonic)
        if remaining > 0:
            time.sleep(remaining)
        self._last_request_monotonic = time.monotonic()
