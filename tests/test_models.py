"""Unit tests for the Pydantic snapshot models.

Tests field constraints and cross-field validators of the models defined
in overgg_scraper.models.
"""

import pytest
from pydantic import ValidationError

from overgg_scraper.models import LivestreamSnapshot, MatchSnapshot
from overgg_scraper.records import (
    EventInfo,
    LivestreamInfo,
    Livestreams,
    MatchBriefInfo,
    MatchBriefType,
    TeamBriefInfo,
)

# ---------------------------------------------------------------------------
# Fixtures: minimal valid dicts for each model
# ---------------------------------------------------------------------------


@pytest.fixture
def valid_match_snapshot() -> dict:
    return {
        "match_type": "completed",
        "match_data": [
            {
                "event": {"name": "Overwatch League", "series": "Finals"},
                "teams": [
                    {"name": "A", "maps_won": 3},
                    {"name": "B", "maps_won": 1},
                ],
                "scheduled_time": "2018-08-04T00:00:00Z",
            }
        ],
        "winners": ["A"],
    }


@pytest.fixture
def valid_livestream_snapshot() -> dict:
    return {
        "streams": {
            "curated": [
                {"name": "owl", "title": "Finals", "viewer_count": 100, "url": "/owl"}
            ],
            "other_top": [],
        }
    }


# ---------------------------------------------------------------------------
# MatchSnapshot
# ---------------------------------------------------------------------------


class TestMatchSnapshot:
    def test_valid(self, valid_match_snapshot):
        snapshot = MatchSnapshot.model_validate(valid_match_snapshot)
        match = snapshot.match_data[0]
        assert isinstance(match, MatchBriefInfo)
        assert match.event == EventInfo(name="Overwatch League", series="Finals")
        assert snapshot.match_type is MatchBriefType.COMPLETED

    def test_from_matches_derives_winners(self):
        matches = [
            MatchBriefInfo(teams=[TeamBriefInfo("A", 1), TeamBriefInfo("B", 2)]),
            MatchBriefInfo(teams=[TeamBriefInfo("C", 1), TeamBriefInfo("D", 1)]),
            MatchBriefInfo(),
        ]
        snapshot = MatchSnapshot.from_matches(MatchBriefType.COMPLETED, matches)
        assert snapshot.winners == ["B", None, None]

    def test_score_above_u8_rejected(self, valid_match_snapshot):
        valid_match_snapshot["match_data"][0]["teams"][0]["maps_won"] = 256
        with pytest.raises(ValidationError, match="out of range"):
            MatchSnapshot.model_validate(valid_match_snapshot)

    def test_negative_score_rejected(self, valid_match_snapshot):
        valid_match_snapshot["match_data"][0]["teams"][1]["maps_won"] = -1
        with pytest.raises(ValidationError):
            MatchSnapshot.model_validate(valid_match_snapshot)

    def test_three_teams_rejected(self, valid_match_snapshot):
        valid_match_snapshot["match_data"][0]["teams"].append({"name": "C"})
        with pytest.raises(ValidationError, match="expected 2"):
            MatchSnapshot.model_validate(valid_match_snapshot)

    def test_winners_must_align(self, valid_match_snapshot):
        valid_match_snapshot["winners"] = []
        with pytest.raises(ValidationError, match="winners"):
            MatchSnapshot.model_validate(valid_match_snapshot)

    def test_unknown_match_type_rejected(self, valid_match_snapshot):
        valid_match_snapshot["match_type"] = "postponed"
        with pytest.raises(ValidationError):
            MatchSnapshot.model_validate(valid_match_snapshot)


# ---------------------------------------------------------------------------
# LivestreamSnapshot
# ---------------------------------------------------------------------------


class TestLivestreamSnapshot:
    def test_valid(self, valid_livestream_snapshot):
        snapshot = LivestreamSnapshot.model_validate(valid_livestream_snapshot)
        assert snapshot.streams == Livestreams(
            curated=[LivestreamInfo(name="owl", title="Finals", viewer_count=100, url="/owl")]
        )

    def test_viewer_count_above_u32_rejected(self, valid_livestream_snapshot):
        valid_livestream_snapshot["streams"]["curated"][0]["viewer_count"] = 2**32
        with pytest.raises(ValidationError, match="out of range"):
            LivestreamSnapshot.model_validate(valid_livestream_snapshot)

    def test_optional_fields_default(self):
        snapshot = LivestreamSnapshot.model_validate(
            {"streams": {"curated": [], "other_top": [{"name": "x", "url": "/x"}]}}
        )
        assert snapshot.streams.other_top[0].title is None
        assert snapshot.streams.other_top[0].viewer_count is None
