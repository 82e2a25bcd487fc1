"""A quick, built-in way to grab HTML from the live site.

Plain HTTP GET through a ``requests.Session``; over.gg serves the main page
without a JavaScript challenge. Transport failures (connection errors,
timeouts) are retried by tenacity with exponential jittered backoff. A
response with a non-2xx status is reported as NonSuccessStatus right away.
"""

import logging
from typing import Any

import requests
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from overgg_scraper.config import ScraperConfig
from overgg_scraper.exceptions import FetchError, NonSuccessStatus
from overgg_scraper.main_page import MainPageScraper
from overgg_scraper.selector_registry import SelectorSet

logger = logging.getLogger(__name__)


def _is_transient(exc: BaseException) -> bool:
    """Transport failures are retried; a status answer from the server is not."""
    return isinstance(exc, FetchError) and not isinstance(exc, NonSuccessStatus)


class Downloader:
    """Fetches over.gg pages over HTTP.

    Each instance owns its retry policy, built from its own config.

    Usage:
        with Downloader() as dl:
            scraper = dl.main_page()
            matches = scraper.matches_brief(MatchBriefType.COMPLETED)
    """

    def __init__(
        self,
        config: ScraperConfig | None = None,
        session: requests.Session | None = None,
        selectors: SelectorSet | None = None,
    ):
        if config is None:
            config = ScraperConfig()

        self._config = config
        self._selectors = selectors
        if session is None:
            session = requests.Session()
            session.headers["User-Agent"] = config.user_agent
        self._session = session

        self._retrying = Retrying(
            retry=retry_if_exception(_is_transient),
            wait=wait_exponential_jitter(
                multiplier=config.retry_initial_wait,
                max=config.retry_max_wait,
                jitter=config.retry_initial_wait,
            ),
            stop=stop_after_attempt(config.max_retries),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )

    @classmethod
    def with_session(
        cls, session: requests.Session, config: ScraperConfig | None = None
    ) -> "Downloader":
        """Use a caller-configured session (proxies, headers, adapters)."""
        return cls(config, session=session)

    def main_page(self) -> MainPageScraper:
        """Obtain a scraper for the main page (https://www.over.gg/)."""
        return MainPageScraper(self.get_string(self._config.base_url), self._selectors)

    def get_string(self, url: str) -> str:
        """GET ``url`` and return the decoded body.

        Raises:
            NonSuccessStatus: If the response status is not 2xx.
            FetchError: If the request failed after all retries.
        """
        return self._retrying(self._get_once, url)

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()

    def __enter__(self) -> "Downloader":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def _get_once(self, url: str) -> str:
        try:
            response = self._session.get(url, timeout=self._config.timeout)
        except requests.RequestException as exc:
            raise FetchError(f"Failed to fetch {url}: {exc}", url=url) from exc

        if not 200 <= response.status_code < 300:
            raise NonSuccessStatus(response.status_code, url=url)

        html = response.text
        logger.debug("Fetched %s (%d chars)", url, len(html))
        return html
