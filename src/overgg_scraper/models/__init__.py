"""Pydantic v2 models for the JSON snapshots of extraction results.

Re-exports all model classes for convenient import::

    from overgg_scraper.models import MatchSnapshot, LivestreamSnapshot
"""

from .livestream import LivestreamSnapshot
from .match import MatchSnapshot

__all__ = [
    "MatchSnapshot",
    "LivestreamSnapshot",
]
