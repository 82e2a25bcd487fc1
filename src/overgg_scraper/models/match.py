"""Pydantic v2 snapshot model for brief match listings.

The records themselves are plain dataclasses; pydantic validates them field
by field when a snapshot is loaded back from JSON.
"""

from pydantic import BaseModel, model_validator
from typing_extensions import Self

from overgg_scraper.records import MAX_MAPS_WON, MatchBriefInfo, MatchBriefType


class MatchSnapshot(BaseModel):
    """Matches of one type plus the winner derived for each of them."""

    match_type: MatchBriefType
    match_data: list[MatchBriefInfo]
    winners: list[str | None]

    @classmethod
    def from_matches(
        cls, match_type: MatchBriefType, matches: list[MatchBriefInfo]
    ) -> Self:
        """Build a snapshot, deriving ``winners`` from the scores."""
        winners = []
        for match in matches:
            team = match.winner()
            winners.append(team.name if team is not None else None)
        return cls(match_type=match_type, match_data=matches, winners=winners)

    @model_validator(mode="after")
    def check_team_pairs(self) -> Self:
        """Every match has exactly two team slots with in-range scores."""
        for i, match in enumerate(self.match_data):
            if len(match.teams) != 2:
                raise ValueError(
                    f"match_data[{i}] has {len(match.teams)} teams, expected 2"
                )
            for team in match.teams:
                if team.maps_won is not None and not 0 <= team.maps_won <= MAX_MAPS_WON:
                    raise ValueError(
                        f"match_data[{i}] maps_won {team.maps_won} out of range "
                        f"0..{MAX_MAPS_WON}"
                    )
        return self

    @model_validator(mode="after")
    def check_winners_aligned(self) -> Self:
        """One winner entry per match."""
        if len(self.winners) != len(self.match_data):
            raise ValueError(
                f"{len(self.winners)} winners for {len(self.match_data)} matches"
            )
        return self
