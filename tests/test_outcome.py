"""Unit tests for winner/loser derivation and record defaults."""

import pytest

from overgg_scraper import outcome
from overgg_scraper.records import (
    EventInfo,
    Livestreams,
    MatchBriefInfo,
    MatchBriefType,
    TeamBriefInfo,
)


def _match(first: int | None, second: int | None) -> MatchBriefInfo:
    return MatchBriefInfo(
        teams=[
            TeamBriefInfo(name="A", maps_won=first),
            TeamBriefInfo(name="B", maps_won=second),
        ]
    )


class TestWinnerLoser:
    def test_first_slot_wins(self):
        match = _match(3, 1)
        assert outcome.winner(match).name == "A"
        assert outcome.loser(match).name == "B"

    def test_second_slot_wins(self):
        match = _match(0, 2)
        assert outcome.winner(match).name == "B"
        assert outcome.loser(match).name == "A"

    def test_returns_the_team_record_itself(self):
        match = _match(2, 0)
        assert outcome.winner(match) is match.teams[0]
        assert outcome.loser(match) is match.teams[1]

    def test_tie_has_no_winner_or_loser(self):
        match = _match(2, 2)
        assert outcome.winner(match) is None
        assert outcome.loser(match) is None

    @pytest.mark.parametrize("scores", [(None, 1), (1, None), (None, None)])
    def test_missing_score_has_no_winner_or_loser(self, scores):
        match = _match(*scores)
        assert outcome.winner(match) is None
        assert outcome.loser(match) is None

    def test_zero_is_a_real_score(self):
        match = _match(1, 0)
        assert outcome.winner(match).name == "A"

    def test_methods_delegate(self):
        match = _match(1, 3)
        assert match.winner() == outcome.winner(match)
        assert match.loser() == outcome.loser(match)


class TestRecordDefaults:
    def test_match_default(self):
        match = MatchBriefInfo()
        assert match.event == EventInfo(name="", series="")
        assert match.teams == [TeamBriefInfo(), TeamBriefInfo()]
        assert match.scheduled_time is None

    def test_defaults_are_not_shared(self):
        first, second = MatchBriefInfo(), MatchBriefInfo()
        first.teams[0].name = "A"
        first.event.name = "Event"
        assert second.teams[0].name == ""
        assert second.event.name == ""

    def test_structural_equality(self):
        assert _match(1, 2) == _match(1, 2)
        assert _match(1, 2) != _match(2, 1)

    def test_livestreams_default_empty(self):
        streams = Livestreams()
        assert streams.curated == [] and streams.other_top == []


class TestMatchBriefTypeLabel:
    @pytest.mark.parametrize(
        "match_type, label",
        [
            (MatchBriefType.COMPLETED, "completed matches"),
            (MatchBriefType.IN_FUTURE, "upcoming matches"),
            (MatchBriefType.LIVE, "upcoming matches"),
        ],
    )
    def test_label(self, match_type, label):
        assert match_type.label == label
