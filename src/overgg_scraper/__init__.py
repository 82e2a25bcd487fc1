"""Scraper for the over.gg main page: match listings and livestreams.

Re-exports the main entry points::

    from overgg_scraper import MainPageScraper, MatchBriefType

    scraper = MainPageScraper(html)
    for match in scraper.matches_brief(MatchBriefType.COMPLETED):
        print(match.winner())
"""

from .exceptions import (
    ConfigurationError,
    ExtractionError,
    FetchError,
    NonSuccessStatus,
    OverggScraperError,
)
from .main_page import MainPageScraper, extract_livestreams, extract_matches
from .records import (
    EventInfo,
    LivestreamInfo,
    Livestreams,
    MatchBriefInfo,
    MatchBriefType,
    TeamBriefInfo,
)
from .selector_registry import SelectorSet, default_selectors, load_selectors

__all__ = [
    "ConfigurationError",
    "ExtractionError",
    "FetchError",
    "NonSuccessStatus",
    "OverggScraperError",
    "MainPageScraper",
    "extract_livestreams",
    "extract_matches",
    "EventInfo",
    "LivestreamInfo",
    "Livestreams",
    "MatchBriefInfo",
    "MatchBriefType",
    "TeamBriefInfo",
    "SelectorSet",
    "default_selectors",
    "load_selectors",
]
