"""Filesystem storage for extraction snapshots and archived pages.

Snapshots are JSON files used as regression fixtures: write a snapshot once
from a known page, then later runs compare fresh extraction results against
it. An existing snapshot is never overwritten. Raw pages are archived as
gzip so a snapshot can be regenerated offline::

    base_dir/
      completed_matches_brief.json
      live_streams.json
      www.over.gg.html.gz
"""

import gzip
import logging
import re
from pathlib import Path

from overgg_scraper.models import LivestreamSnapshot, MatchSnapshot
from overgg_scraper.records import Livestreams, MatchBriefInfo, MatchBriefType

logger = logging.getLogger(__name__)

_NAME_RE = re.compile(r"[A-Za-z0-9][A-Za-z0-9._-]*")


class SnapshotStorage:
    """Write-once JSON snapshot save/load/exists filesystem layer.

    Usage::

        storage = SnapshotStorage("data/snapshots")
        saved = storage.write_matches("completed_matches_brief", MatchBriefType.COMPLETED, matches)
        assert storage.load_matches("completed_matches_brief") == saved
    """

    def __init__(self, base_dir: str | Path) -> None:
        self.base_dir = Path(base_dir)

    def write_matches(
        self,
        name: str,
        match_type: MatchBriefType,
        matches: list[MatchBriefInfo],
    ) -> MatchSnapshot:
        """Snapshot ``matches`` under ``name`` unless it already exists.

        Returns:
            The snapshot built from ``matches`` (not the one on disk).
        """
        snapshot = MatchSnapshot.from_matches(match_type, matches)
        self._write_non_overwrite(self._json_path(name), snapshot.model_dump_json(indent=2))
        return snapshot

    def write_livestreams(self, name: str, streams: Livestreams) -> LivestreamSnapshot:
        """Snapshot ``streams`` under ``name`` unless it already exists."""
        snapshot = LivestreamSnapshot(streams=streams)
        self._write_non_overwrite(self._json_path(name), snapshot.model_dump_json(indent=2))
        return snapshot

    def load_matches(self, name: str) -> MatchSnapshot:
        """Load and validate a match snapshot.

        Raises:
            FileNotFoundError: If no snapshot named ``name`` exists.
            pydantic.ValidationError: If the file content is invalid.
        """
        return MatchSnapshot.model_validate_json(self._read(self._json_path(name)))

    def load_livestreams(self, name: str) -> LivestreamSnapshot:
        """Load and validate a livestream snapshot."""
        return LivestreamSnapshot.model_validate_json(self._read(self._json_path(name)))

    def exists(self, name: str) -> bool:
        """Check whether a snapshot named ``name`` exists on disk."""
        return self._json_path(name).exists()

    def save_page(self, html: str, name: str) -> Path:
        """Archive raw page HTML as ``{name}.html.gz``. Overwrites."""
        path = self._build_path(name, ".html.gz")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(gzip.compress(html.encode("utf-8")))
        return path

    def load_page(self, name: str) -> str:
        """Load archived page HTML saved by save_page()."""
        path = self._build_path(name, ".html.gz")
        if not path.exists():
            raise FileNotFoundError(f"No saved HTML named {name!r}: {path}")
        return gzip.decompress(path.read_bytes()).decode("utf-8")

    def _write_non_overwrite(self, path: Path, content: str) -> None:
        if path.exists():
            logger.debug("Snapshot %s already exists, not overwriting", path)
            return
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        logger.info("Wrote snapshot %s", path)

    def _read(self, path: Path) -> str:
        if not path.exists():
            raise FileNotFoundError(f"No snapshot at {path}")
        return path.read_text(encoding="utf-8")

    def _json_path(self, name: str) -> Path:
        return self._build_path(name, ".json")

    def _build_path(self, name: str, suffix: str) -> Path:
        """Build the path for ``name``.

        Raises:
            ValueError: If ``name`` is not a plain file stem.
        """
        if not _NAME_RE.fullmatch(name):
            raise ValueError(
                f"Invalid snapshot name {name!r}. Use letters, digits, '.', '_' or '-'."
            )
        return self.base_dir / f"{name}{suffix}"
