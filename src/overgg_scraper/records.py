"""Record types produced by the main page extraction engines.

Provides:
- MatchBriefType: the lifecycle tag passed as the extraction request
- EventInfo, TeamBriefInfo, MatchBriefInfo: brief match listing data
- LivestreamInfo, Livestreams: livestream promotion card data

All records are plain dataclasses: structural equality, default
constructible, built fresh per extraction call.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from overgg_scraper import outcome

# Upper bounds of the unsigned fields (u8 scores, u32 viewer counts)
MAX_MAPS_WON = 2**8 - 1
MAX_VIEWER_COUNT = 2**32 - 1


class MatchBriefType(Enum):
    """Which lifecycle state of the main page match listings to extract."""

    IN_FUTURE = "in_future"
    LIVE = "live"
    COMPLETED = "completed"

    @property
    def label(self) -> str:
        """Header text of the match list holding matches of this type.

        Future and live matches share the "upcoming matches" list and are
        told apart by the live indicator.
        """
        if self is MatchBriefType.COMPLETED:
            return "completed matches"
        return "upcoming matches"


@dataclass
class EventInfo:
    """Tournament/event and its sub-series. Empty string means unset."""

    name: str = ""
    series: str = ""


@dataclass
class TeamBriefInfo:
    """One team slot of a match listing."""

    name: str = ""
    maps_won: int | None = None  # None when no score shown, distinct from 0


def _empty_teams() -> list[TeamBriefInfo]:
    return [TeamBriefInfo(), TeamBriefInfo()]


@dataclass
class MatchBriefInfo:
    """Brief match data shared by future, live and completed listings.

    ``teams`` is a fixed pair. Slots 0 and 1 are the order the teams appear
    in the markup, not home/away.
    """

    event: EventInfo = field(default_factory=EventInfo)
    teams: list[TeamBriefInfo] = field(default_factory=_empty_teams)
    scheduled_time: datetime | None = None  # UTC

    def winner(self) -> TeamBriefInfo | None:
        """Determines which team won the match.

        Will be ``None`` on a draw or when either score is unknown.
        """
        return outcome.winner(self)

    def loser(self) -> TeamBriefInfo | None:
        """Determines which team lost the match.

        Will be ``None`` on a draw or when either score is unknown.
        """
        return outcome.loser(self)


@dataclass
class LivestreamInfo:
    """A single stream listed on the livestream promotion card."""

    name: str = ""
    title: str | None = None
    viewer_count: int | None = None
    url: str = ""


@dataclass
class Livestreams:
    """Streams from the livestream card, split by the flag marker.

    Order within each bucket follows document order.
    """

    curated: list[LivestreamInfo] = field(default_factory=list)
    other_top: list[LivestreamInfo] = field(default_factory=list)
