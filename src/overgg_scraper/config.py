"""Scraper configuration with sensible defaults for over.gg."""

from dataclasses import dataclass

OVERGG_BASE_URL = "https://www.over.gg/"


@dataclass
class ScraperConfig:
    """Configuration for the over.gg downloader and CLI.

    All timing values are in seconds. Selector definitions are not part of
    this object; they live in the packaged ``selectors.json`` resource.
    """

    # over.gg main page (single-page scraper)
    base_url: str = OVERGG_BASE_URL

    # requests timeout per attempt
    timeout: float = 30.0

    # tenacity stop_after_attempt for transport failures
    max_retries: int = 3

    # tenacity wait_exponential_jitter bounds between attempts
    retry_initial_wait: float = 1.0
    retry_max_wait: float = 15.0

    user_agent: str = "overgg-scraper/0.3"

    # Logs, snapshots and archived pages
    data_dir: str = "data"
