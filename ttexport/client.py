"""Teamtailor API client: fetches one candidates page at a time."""

import time
from typing import Callable, Optional

import requests

from .config import ExportConfig, has_usable_api_key
from .errors import (
    AccessDenied,
    InvalidCredential,
    MissingCredential,
    RateLimitExceeded,
    TransportError,
    UpstreamError,
)
from .logger import get_logger
from .models import Page
from .retry import BackoffRetrier, RetryError, is_rate_limited

INCLUDE = "job-applications"
JSONAPI_CONTENT_TYPE = "application/vnd.api+json"


class _RateLimited(Exception):
    """Internal signal for a 429; the only response that is retried."""

    def __init__(self, url: str):
        super().__init__(f"Rate limited: {url}")


class TeamtailorClient:
    """
    Thin wrapper around a requests session for the candidates endpoint.

    Use as a context manager so the session is closed after the export.
    """

    def __init__(
        self,
        config: ExportConfig,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if not has_usable_api_key(config.api_key):
            raise MissingCredential()
        self.config = config
        self.session = session or requests.Session()
        self.sleep = sleep

    def __enter__(self) -> "TeamtailorClient":
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self) -> None:
        self.session.close()

    @property
    def headers(self) -> dict:
        return {
            "Authorization": f"Token token={self.config.api_key}",
            "X-Api-Version": self.config.api_version,
            "Content-Type": JSONAPI_CONTENT_TYPE,
        }

    def page_url(self, page_number: int) -> str:
        # Brackets stay literal; Teamtailor accepts them unencoded
        return (
            f"{self.config.candidates_url}"
            f"?include={INCLUDE}"
            f"&page[size]={self.config.page_size}"
            f"&page[number]={page_number}"
        )

    def fetch_page(self, page_number: int) -> Page:
        """Fetch one page of candidates, retrying on 429 with exponential backoff.

        Raises:
            RateLimitExceeded: 429 persisted through every retry
            InvalidCredential: 401
            AccessDenied: 403
            UpstreamError: any other non-2xx, or a body that is not JSON
            TransportError: no response at all
        """
        url = self.page_url(page_number)
        logger = get_logger()

        def on_retry(attempt, exception, delay):
            logger.warning(f"  Rate limited, waiting {delay:g}s...", page=page_number, attempt=attempt)

        retrier = BackoffRetrier(
            max_retries=self.config.max_retries,
            base_delay=1.0,
            exponential_base=2.0,
            retry_on=(_RateLimited,),
            sleep=self.sleep,
            on_retry=on_retry,
        )
        try:
            payload = retrier.call(self._get_json, url)
        except RetryError as e:
            logger.error("Rate limit retries exhausted", url=url, attempts=retrier.attempts)
            raise RateLimitExceeded() from e
        return Page.from_json(payload)

    def _get_json(self, url: str):
        logger = get_logger()
        logger.record_api_call()
        try:
            resp = self.session.get(url, headers=self.headers, timeout=self.config.timeout)
        except requests.exceptions.Timeout:
            logger.warning("Teamtailor request timed out", url=url)
            raise TransportError("Teamtailor request timed out. Try again later.")
        except requests.exceptions.RequestException as e:
            logger.error("Teamtailor request error", url=url, error=str(e))
            raise TransportError(f"Teamtailor request error: {e}")

        status = resp.status_code
        if is_rate_limited(status):
            logger.record_rate_limited()
            raise _RateLimited(url)
        if status == 401:
            raise InvalidCredential()
        if status == 403:
            raise AccessDenied()
        if not 200 <= status < 300:
            logger.error("Teamtailor request failed", url=url, status=status)
            raise UpstreamError(status)

        try:
            return resp.json()
        except ValueError:
            logger.error("Teamtailor returned a non-JSON body", url=url, status=status)
            raise UpstreamError(status, f"API error: {status} (response was not JSON)")
