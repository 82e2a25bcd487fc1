"""Winner/loser derivation from the two team scores of a match.

A missing score is incomparable, not zero: a match with one or both
scores unknown has no winner and no loser. Ties have neither either.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from overgg_scraper.records import MatchBriefInfo, TeamBriefInfo


def _compare(match: "MatchBriefInfo") -> int | None:
    """Return 1 if slot 0 leads, -1 if slot 1 leads, 0 on tie, None if unknown."""
    first = match.teams[0].maps_won
    second = match.teams[1].maps_won
    if first is None or second is None:
        return None
    if first > second:
        return 1
    if first < second:
        return -1
    return 0


def winner(match: "MatchBriefInfo") -> "TeamBriefInfo | None":
    """Team with strictly more maps won, or None on a tie or unknown score."""
    order = _compare(match)
    if order == 1:
        return match.teams[0]
    if order == -1:
        return match.teams[1]
    return None


def loser(match: "MatchBriefInfo") -> "TeamBriefInfo | None":
    """Team with strictly fewer maps won, or None on a tie or unknown score."""
    order = _compare(match)
    if order == 1:
        return match.teams[1]
    if order == -1:
        return match.teams[0]
    return None
