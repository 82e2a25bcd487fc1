"""Pydantic v2 snapshot model for the livestream card."""

from pydantic import BaseModel, model_validator
from typing_extensions import Self

from overgg_scraper.records import MAX_VIEWER_COUNT, Livestreams


class LivestreamSnapshot(BaseModel):
    """Curated and other top streams as extracted from one page."""

    streams: Livestreams

    @model_validator(mode="after")
    def check_viewer_counts(self) -> Self:
        """Viewer counts fit in an unsigned 32-bit integer."""
        for stream in self.streams.curated + self.streams.other_top:
            count = stream.viewer_count
            if count is not None and not 0 <= count <= MAX_VIEWER_COUNT:
                raise ValueError(
                    f"viewer_count {count} of {stream.name!r} out of range"
                )
        return self
