"""Unit tests for the SnapshotStorage filesystem layer."""

import json
from pathlib import Path

import pytest

from overgg_scraper.main_page import MainPageScraper
from overgg_scraper.records import MatchBriefType, TeamBriefInfo
from overgg_scraper.storage import SnapshotStorage

SAMPLE = Path(__file__).resolve().parent / "data" / "www.over.gg.html"


@pytest.fixture(scope="module")
def scraper():
    return MainPageScraper(SAMPLE.read_text(encoding="utf-8"))


class TestMatchSnapshots:
    """Write-once snapshots of extracted matches, reloaded for comparison."""

    @pytest.mark.parametrize(
        "name, match_type",
        [
            ("completed_matches_brief", MatchBriefType.COMPLETED),
            ("future_matches_brief", MatchBriefType.IN_FUTURE),
            ("live_matches_brief", MatchBriefType.LIVE),
        ],
    )
    def test_write_then_load_equal(self, tmp_path, scraper, name, match_type):
        storage = SnapshotStorage(tmp_path)
        data = storage.write_matches(name, match_type, scraper.matches_brief(match_type))
        assert storage.load_matches(name) == data

    def test_winners_recorded(self, tmp_path, scraper):
        storage = SnapshotStorage(tmp_path)
        data = storage.write_matches(
            "completed", MatchBriefType.COMPLETED,
            scraper.matches_brief(MatchBriefType.COMPLETED),
        )
        assert data.winners == ["New York Excelsior", "Houston Outlaws"]

    def test_future_winners_are_null(self, tmp_path, scraper):
        storage = SnapshotStorage(tmp_path)
        storage.write_matches(
            "future", MatchBriefType.IN_FUTURE,
            scraper.matches_brief(MatchBriefType.IN_FUTURE),
        )
        raw = json.loads((tmp_path / "future.json").read_text(encoding="utf-8"))
        assert raw["winners"] == [None, None]
        assert raw["match_type"] == "in_future"

    def test_existing_snapshot_not_overwritten(self, tmp_path, scraper):
        storage = SnapshotStorage(tmp_path)
        matches = scraper.matches_brief(MatchBriefType.COMPLETED)
        original = storage.write_matches("completed", MatchBriefType.COMPLETED, matches)

        changed = scraper.matches_brief(MatchBriefType.COMPLETED)
        changed[0].teams[0] = TeamBriefInfo(name="Someone Else", maps_won=0)
        returned = storage.write_matches("completed", MatchBriefType.COMPLETED, changed)

        assert returned.match_data[0].teams[0].name == "Someone Else"
        assert storage.load_matches("completed") == original
        assert storage.load_matches("completed") != returned

    def test_scheduled_time_round_trips_as_utc(self, tmp_path, scraper):
        storage = SnapshotStorage(tmp_path)
        matches = scraper.matches_brief(MatchBriefType.IN_FUTURE)
        storage.write_matches("future", MatchBriefType.IN_FUTURE, matches)
        loaded = storage.load_matches("future").match_data
        assert loaded[0].scheduled_time == matches[0].scheduled_time
        assert loaded[1].scheduled_time is None

    def test_exists(self, tmp_path):
        storage = SnapshotStorage(tmp_path)
        assert storage.exists("completed") is False
        storage.write_matches("completed", MatchBriefType.COMPLETED, [])
        assert storage.exists("completed") is True


class TestLivestreamSnapshots:
    def test_write_then_load_equal(self, tmp_path, scraper):
        storage = SnapshotStorage(tmp_path)
        data = storage.write_livestreams("live_streams", scraper.live_streams())
        loaded = storage.load_livestreams("live_streams")
        assert loaded == data
        assert [s.name for s in loaded.streams.curated] == ["overwatchleague", "Seagull"]


class TestPages:
    def test_save_and_load_page(self, tmp_path):
        storage = SnapshotStorage(tmp_path)
        path = storage.save_page("<html>page</html>", "www.over.gg")
        assert path == tmp_path / "www.over.gg.html.gz"
        assert storage.load_page("www.over.gg") == "<html>page</html>"

    def test_load_missing_page_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="No saved HTML"):
            SnapshotStorage(tmp_path).load_page("nothing")


class TestErrorHandling:
    def test_load_nonexistent_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="No snapshot"):
            SnapshotStorage(tmp_path).load_matches("missing")

    @pytest.mark.parametrize("name", ["", "../escape", "a/b", ".hidden"])
    def test_invalid_name_raises(self, tmp_path, name):
        storage = SnapshotStorage(tmp_path)
        with pytest.raises(ValueError, match="Invalid snapshot name"):
            storage.write_matches(name, MatchBriefType.COMPLETED, [])

    def test_creates_base_dir(self, tmp_path):
        storage = SnapshotStorage(tmp_path / "nested" / "dir")
        storage.write_livestreams("streams", MainPageScraper("<html></html>").live_streams())
        assert (tmp_path / "nested" / "dir" / "streams.json").exists()
