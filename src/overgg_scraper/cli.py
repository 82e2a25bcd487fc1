"""CLI entry point for the over.gg scraper.

Provides ``main()`` as the entry point for the ``overgg-scraper`` console
script and ``run(args)`` which sets up logging, obtains the page (from a
file or the live site), runs the requested extractions and logs a summary.

Usage::

    overgg-scraper                              # everything from the live site
    overgg-scraper --type completed             # completed matches only
    overgg-scraper --html page.html.gz          # offline, from a saved page
    overgg-scraper --snapshot-dir tests/data    # write-once JSON snapshots
"""

import argparse
import gzip
import logging
from pathlib import Path

from overgg_scraper.config import ScraperConfig
from overgg_scraper.exceptions import OverggScraperError
from overgg_scraper.http_client import Downloader
from overgg_scraper.logging_config import setup_logging
from overgg_scraper.main_page import MainPageScraper
from overgg_scraper.records import Livestreams, MatchBriefInfo, MatchBriefType
from overgg_scraper.storage import SnapshotStorage

logger = logging.getLogger(__name__)

# --type choice -> (match type, snapshot name)
MATCH_CHOICES: dict[str, tuple[MatchBriefType, str]] = {
    "completed": (MatchBriefType.COMPLETED, "completed_matches_brief"),
    "upcoming": (MatchBriefType.IN_FUTURE, "future_matches_brief"),
    "live": (MatchBriefType.LIVE, "live_matches_brief"),
}
STREAMS_SNAPSHOT = "live_streams"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the overgg-scraper CLI."""
    parser = argparse.ArgumentParser(
        prog="overgg-scraper",
        description="Extract match listings and livestreams from the over.gg main page",
    )
    parser.add_argument(
        "--type",
        choices=[*MATCH_CHOICES, "streams", "all"],
        default="all",
        help="What to extract (default: all)",
    )
    parser.add_argument(
        "--html",
        type=str,
        default=None,
        help="Read a saved page (.html or .html.gz) instead of downloading",
    )
    parser.add_argument(
        "--snapshot-dir",
        type=str,
        default=None,
        help="Write JSON snapshots of the results here (existing files are kept)",
    )
    parser.add_argument(
        "--save-html",
        type=str,
        default=None,
        metavar="NAME",
        help="Archive the page as NAME.html.gz in the snapshot dir",
    )
    parser.add_argument(
        "--data-dir",
        type=str,
        default="data",
        help="Data directory for logs (default: data)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="HTTP timeout in seconds (default: 30)",
    )
    parser.add_argument(
        "--max-retries",
        type=int,
        default=None,
        help="Attempts on connection errors (default: 3)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show DEBUG output on the console",
    )
    return parser


def _read_html(path: str) -> str:
    """Read a saved page, gunzipping ``.gz`` files."""
    data = Path(path).read_bytes()
    if path.endswith(".gz"):
        data = gzip.decompress(data)
    return data.decode("utf-8")


def _score(value: int | None) -> str:
    return "?" if value is None else str(value)


def format_completed(matches: list[MatchBriefInfo]) -> list[str]:
    """One line per completed match, naming the winner when there is one."""
    lines = []
    for match in matches:
        winner, loser = match.winner(), match.loser()
        if winner is not None and loser is not None:
            lines.append(
                f"{winner.name} beat {loser.name} by a score of "
                f"{winner.maps_won} - {loser.maps_won}"
            )
        else:
            first, second = match.teams
            lines.append(
                f"{first.name} vs {second.name} ended "
                f"{_score(first.maps_won)} - {_score(second.maps_won)}"
            )
    return lines


def format_upcoming(matches: list[MatchBriefInfo]) -> list[str]:
    """One line per upcoming match with its scheduled time."""
    lines = []
    for match in matches:
        first, second = match.teams
        when = (
            match.scheduled_time.isoformat()
            if match.scheduled_time is not None
            else "an unknown time"
        )
        lines.append(f"{first.name} plays {second.name} at {when}")
    return lines


def format_live(matches: list[MatchBriefInfo]) -> list[str]:
    """One line per live match with the current map score."""
    lines = []
    for match in matches:
        first, second = match.teams
        lines.append(
            f"{first.name} is playing {second.name} and the score is currently "
            f"{_score(first.maps_won)} - {_score(second.maps_won)}"
        )
    return lines


def format_streams(streams: Livestreams) -> list[str]:
    """One line per stream, curated first, tagged with its bucket."""
    lines = []
    for bucket, entries in (("curated", streams.curated), ("other", streams.other_top)):
        for stream in entries:
            title = stream.title if stream.title is not None else ""
            viewers = _score(stream.viewer_count)
            lines.append(
                f"[{bucket}] {stream.name} is streaming \"{title}\" to {viewers} viewers"
            )
    return lines


_FORMATTERS = {
    "completed": format_completed,
    "upcoming": format_upcoming,
    "live": format_live,
}


def extract(scraper: MainPageScraper, choice: str, storage: SnapshotStorage | None) -> str:
    """Run the extractions selected by ``choice`` and return the summary text.

    When ``storage`` is given, each result is also written as a write-once
    snapshot.
    """
    lines = ["=" * 60]
    selected = list(MATCH_CHOICES) if choice == "all" else [c for c in MATCH_CHOICES if c == choice]

    for name in selected:
        match_type, snapshot_name = MATCH_CHOICES[name]
        matches = scraper.matches_brief(match_type)
        if storage is not None:
            storage.write_matches(snapshot_name, match_type, matches)
        lines.append(f"{name.capitalize()} matches: {len(matches)}")
        lines.extend(f"  {line}" for line in _FORMATTERS[name](matches))

    if choice in ("streams", "all"):
        streams = scraper.live_streams()
        if storage is not None:
            storage.write_livestreams(STREAMS_SNAPSHOT, streams)
        lines.append(
            f"Live streams: {len(streams.curated)} curated, "
            f"{len(streams.other_top)} other"
        )
        lines.extend(f"  {line}" for line in format_streams(streams))

    lines.append("=" * 60)
    return "\n".join(lines)


def run(args: argparse.Namespace) -> int:
    """Set up components, run the extraction, log the summary.

    Returns:
        Process exit status: 0 on success, 1 on a scraper error.
    """
    log_file = setup_logging(
        data_dir=args.data_dir,
        console_level=logging.DEBUG if args.verbose else logging.INFO,
    )

    config_overrides = {"data_dir": args.data_dir}
    if args.timeout is not None:
        config_overrides["timeout"] = args.timeout
    if args.max_retries is not None:
        config_overrides["max_retries"] = args.max_retries
    config = ScraperConfig(**config_overrides)

    storage = SnapshotStorage(args.snapshot_dir) if args.snapshot_dir else None
    logger.info(
        "Starting overgg-scraper: type=%s, source=%s, snapshots=%s, log=%s",
        args.type, args.html or config.base_url, args.snapshot_dir, log_file,
    )

    try:
        if args.html:
            html = _read_html(args.html)
        else:
            with Downloader(config) as downloader:
                html = downloader.get_string(config.base_url)

        if args.save_html:
            archive = storage if storage is not None else SnapshotStorage(config.data_dir)
            path = archive.save_page(html, args.save_html)
            logger.info("Archived page to %s", path)

        summary = extract(MainPageScraper(html), args.type, storage)
        logger.info("\n%s", summary)
    except OverggScraperError as exc:
        logger.error("Scrape failed: %s", exc)
        return 1
    finally:
        logging.shutdown()

    return 0


def main() -> None:
    """Entry point for the overgg-scraper console script."""
    parser = build_parser()
    args = parser.parse_args()
    raise SystemExit(run(args))


if __name__ == "__main__":
    main()
