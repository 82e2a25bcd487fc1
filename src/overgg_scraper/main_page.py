"""Extraction of match listings and livestreams from the over.gg main page.

Provides:
- extract_matches: pure function, Document + selectors + type -> matches
- extract_livestreams: pure function, Document + selectors -> Livestreams
- MainPageScraper: holds one parsed page and its selector set

Every field is filled by a "look it up, else leave the default" step. Only
a match list without a header (or no list with the requested label at all)
is an error; any other missing or malformed markup just leaves the field
empty or None.
"""

import logging
import re
from datetime import datetime, timezone

from bs4 import Tag
from soupsieve import SoupSieve

from overgg_scraper.document import (
    Document,
    attr_of,
    contains,
    select_all,
    select_first,
    text_of,
)
from overgg_scraper.exceptions import ExtractionError
from overgg_scraper.records import (
    MAX_MAPS_WON,
    MAX_VIEWER_COUNT,
    LivestreamInfo,
    Livestreams,
    MatchBriefInfo,
    MatchBriefType,
)
from overgg_scraper.selector_registry import SelectorSet, default_selectors

logger = logging.getLogger(__name__)

LIVE_STREAMS_LABEL = "Live Streams"

_UNSIGNED_RE = re.compile(r"\+?[0-9]+")
_SIGNED_RE = re.compile(r"[+-]?[0-9]+")


# ---------------------------------------------------------------------------
# Field helpers: each returns None when the value cannot be read
# ---------------------------------------------------------------------------


def _parse_unsigned(text: str, maximum: int) -> int | None:
    """Parse ``text`` as an unsigned integer no larger than ``maximum``."""
    text = text.strip()
    if not _UNSIGNED_RE.fullmatch(text):
        return None
    value = int(text)
    if value > maximum:
        return None
    return value


def _parse_timestamp(value: str) -> datetime | None:
    """Resolve a Unix epoch seconds string to a UTC datetime."""
    value = value.strip()
    if not _SIGNED_RE.fullmatch(value):
        return None
    try:
        return datetime.fromtimestamp(int(value), tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def _text_at(element: Tag, selector: SoupSieve) -> str | None:
    """Trimmed text of the first match of ``selector`` under ``element``."""
    found = select_first(element, selector)
    if found is None:
        return None
    return text_of(found)


def _attr_at(element: Tag, selector: SoupSieve, name: str) -> str | None:
    """Attribute ``name`` of the first match of ``selector`` under ``element``."""
    found = select_first(element, selector)
    if found is None:
        return None
    return attr_of(found, name)


# ---------------------------------------------------------------------------
# Matches
# ---------------------------------------------------------------------------


def _keep_entry(entry: Tag, selectors: SelectorSet, match_type: MatchBriefType) -> bool:
    """State filter: live indicator splits the shared "upcoming" list."""
    if match_type is MatchBriefType.LIVE:
        return contains(entry, selectors["live"])
    if match_type is MatchBriefType.IN_FUTURE:
        return not contains(entry, selectors["live"])
    return True


def _populate_match(entry: Tag, selectors: SelectorSet) -> MatchBriefInfo:
    """Build a MatchBriefInfo from one match entry."""
    info = MatchBriefInfo()

    name = _text_at(entry, selectors["event_name"])
    if name is not None:
        info.event.name = name

    series = _text_at(entry, selectors["event_series"])
    if series is not None:
        info.event.series = series

    for slot, team in zip(info.teams, select_all(entry, selectors["teams"])):
        team_name = _text_at(team, selectors["team_name"])
        if team_name is not None:
            slot.name = team_name

        score = _text_at(team, selectors["team_score"])
        if score is not None:
            slot.maps_won = _parse_unsigned(score, MAX_MAPS_WON)
            if slot.maps_won is None:
                logger.debug("Unparsable score %r for team %r", score, slot.name)

    timestamp = _attr_at(
        entry,
        selectors["match_scheduled_time"],
        selectors.attribute("timestamp"),
    )
    if timestamp is not None:
        info.scheduled_time = _parse_timestamp(timestamp)
        if info.scheduled_time is None:
            logger.debug("Unparsable match timestamp %r", timestamp)

    return info


def extract_matches(
    document: Document,
    selectors: SelectorSet,
    match_type: MatchBriefType,
) -> list[MatchBriefInfo]:
    """Extract the brief match listings of one lifecycle state.

    Pure function: the document is only read.

    Args:
        document: Parsed main page.
        selectors: Compiled selector set.
        match_type: Which listings to extract. IN_FUTURE and LIVE read the
            "upcoming matches" list and split it on the live indicator;
            COMPLETED reads the "completed matches" list.

    Returns:
        Matches in document order. May be empty if the list exists but has
        no entries of the requested state.

    Raises:
        ExtractionError: If an inspected match list has no header, or no
            list carries the label for ``match_type``.
    """
    label = match_type.label

    for container in document.select(selectors["matches"]):
        header = select_first(container, selectors["header"])
        if header is None:
            raise ExtractionError(
                f"Match list without a header while looking for {label!r}",
                match_type=match_type,
                html=str(container),
            )

        if text_of(header) != label:
            continue

        entries = [
            entry
            for entry in select_all(container, selectors["match"])
            if _keep_entry(entry, selectors, match_type)
        ]
        matches = [_populate_match(entry, selectors) for entry in entries]
        logger.debug(
            "Extracted %d %s matches from %r list",
            len(matches), match_type.value, label,
        )
        return matches

    raise ExtractionError(
        f"No match list labelled {label!r} found for {match_type.value} matches",
        match_type=match_type,
    )


# ---------------------------------------------------------------------------
# Livestreams
# ---------------------------------------------------------------------------


def _populate_stream(entry: Tag, selectors: SelectorSet) -> LivestreamInfo:
    """Build a LivestreamInfo from one stream entry."""
    info = LivestreamInfo()

    name = _text_at(entry, selectors["stream_name"])
    if name is not None:
        info.name = name

    title = attr_of(entry, selectors.attribute("title"))
    if title is not None:
        info.title = title.strip()

    viewers = _text_at(entry, selectors["stream_viewer_count"])
    if viewers is not None:
        info.viewer_count = _parse_unsigned(viewers, MAX_VIEWER_COUNT)
        if info.viewer_count is None:
            logger.debug("Unparsable viewer count %r for %r", viewers, info.name)

    url = attr_of(entry, selectors.attribute("href"))
    if url is not None:
        info.url = url.strip()

    return info


def extract_livestreams(document: Document, selectors: SelectorSet) -> Livestreams:
    """Extract the livestream promotion card.

    Streams with a flag marker go to ``curated``, the rest to
    ``other_top``. Never raises: a page without the card yields two empty
    buckets.
    """
    streams = Livestreams()

    for card in document.select(selectors["cards"]):
        header = select_first(card, selectors["header"])
        if header is None or text_of(header) != LIVE_STREAMS_LABEL:
            continue

        for entry in select_all(card, selectors["stream"]):
            info = _populate_stream(entry, selectors)
            if contains(entry, selectors["flag"]):
                streams.curated.append(info)
            else:
                streams.other_top.append(info)
        break
    else:
        logger.debug("No %r card found", LIVE_STREAMS_LABEL)

    logger.debug(
        "Extracted %d curated and %d other top streams",
        len(streams.curated), len(streams.other_top),
    )
    return streams


# ---------------------------------------------------------------------------
# Facade
# ---------------------------------------------------------------------------


class MainPageScraper:
    """Handles extraction of content from the main page (https://www.over.gg/).

    Either provide your own HTML string or use ``Downloader.main_page()``.
    The page is parsed once; every call reads the same tree.

    Usage::

        scraper = MainPageScraper(html)
        completed = scraper.matches_brief(MatchBriefType.COMPLETED)
        streams = scraper.live_streams()
    """

    def __init__(self, html: str | bytes, selectors: SelectorSet | None = None):
        self.document = Document(html)
        self.selectors = selectors if selectors is not None else default_selectors()

    @classmethod
    def from_document(
        cls, document: Document, selectors: SelectorSet | None = None
    ) -> "MainPageScraper":
        """Reuse an already parsed Document."""
        scraper = cls.__new__(cls)
        scraper.document = document
        scraper.selectors = selectors if selectors is not None else default_selectors()
        return scraper

    def matches_brief(self, match_type: MatchBriefType) -> list[MatchBriefInfo]:
        """Information shown on the main page for matches of ``match_type``."""
        return extract_matches(self.document, self.selectors, match_type)

    def live_streams(self) -> Livestreams:
        """Streams listed on the main page's livestream card."""
        return extract_livestreams(self.document, self.selectors)
