"""Selector registry: the CSS selector table used by the extraction engines.

The table is a small JSON resource (``selectors.json``) shipped with the
package. Loading validates it with pydantic and compiles every pattern with
soupsieve up front, so a typo in a selector fails at startup instead of
silently matching nothing mid-extraction.

Usage::

    selectors = load_selectors()            # packaged table
    selectors = load_selectors("my.json")   # custom table
    selectors["matches"]                    # compiled soupsieve pattern
    selectors.attribute("timestamp")        # "data-utc-ts"
"""

import json
import logging
from functools import lru_cache
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Iterator, Mapping

import soupsieve
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from overgg_scraper.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_RESOURCE_NAME = "selectors.json"


class SelectorTable(BaseModel):
    """Role -> CSS pattern. Every role is required."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    # Match listings
    matches: str = Field(min_length=1)
    header: str = Field(min_length=1)  # shared with livestream cards
    match: str = Field(min_length=1)
    live: str = Field(min_length=1)
    event_name: str = Field(min_length=1)
    event_series: str = Field(min_length=1)
    teams: str = Field(min_length=1)
    team_name: str = Field(min_length=1)
    team_score: str = Field(min_length=1)
    match_scheduled_time: str = Field(min_length=1)

    # Livestream card
    cards: str = Field(min_length=1)
    stream: str = Field(min_length=1)
    stream_name: str = Field(min_length=1)
    stream_viewer_count: str = Field(min_length=1)
    flag: str = Field(min_length=1)


class AttributeTable(BaseModel):
    """Role -> attribute name read from matched elements."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    timestamp: str = Field(default="data-utc-ts", min_length=1)
    title: str = Field(default="title", min_length=1)
    href: str = Field(default="href", min_length=1)


class SelectorConfig(BaseModel):
    """Top-level shape of ``selectors.json``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    selectors: SelectorTable
    attributes: AttributeTable = Field(default_factory=AttributeTable)


class SelectorSet:
    """Compiled selectors keyed by logical role.

    Immutable once built. Indexing an unknown role raises ``KeyError``:
    the set of roles is fixed and paired with the extraction code that
    consumes it, so a miss is a programming error.
    """

    def __init__(
        self,
        compiled: Mapping[str, soupsieve.SoupSieve],
        attributes: Mapping[str, str],
    ):
        self._compiled = MappingProxyType(dict(compiled))
        self._attributes = MappingProxyType(dict(attributes))

    @classmethod
    def from_mapping(
        cls,
        selectors: Mapping[str, str],
        attributes: Mapping[str, str] | None = None,
    ) -> "SelectorSet":
        """Validate and compile a role -> pattern mapping.

        Args:
            selectors: Role -> CSS selector pattern. All roles of
                SelectorTable must be present.
            attributes: Optional role -> attribute name overrides.

        Raises:
            ConfigurationError: If a role is missing or unknown, or a
                pattern does not compile.
        """
        raw = {"selectors": dict(selectors)}
        if attributes is not None:
            raw["attributes"] = dict(attributes)
        return cls.from_config(_validate(raw))

    @classmethod
    def from_config(cls, config: SelectorConfig) -> "SelectorSet":
        """Compile an already validated SelectorConfig."""
        compiled: dict[str, soupsieve.SoupSieve] = {}
        for role, pattern in config.selectors.model_dump().items():
            try:
                compiled[role] = soupsieve.compile(pattern)
            except soupsieve.SelectorSyntaxError as exc:
                raise ConfigurationError(
                    f"Selector {role!r} does not compile ({pattern!r}): {exc}",
                    key=role,
                ) from exc
        logger.debug("Compiled %d selectors", len(compiled))
        return cls(compiled, config.attributes.model_dump())

    def __getitem__(self, role: str) -> soupsieve.SoupSieve:
        return self._compiled[role]

    def __contains__(self, role: object) -> bool:
        return role in self._compiled

    def __iter__(self) -> Iterator[str]:
        return iter(self._compiled)

    def __len__(self) -> int:
        return len(self._compiled)

    def attribute(self, role: str) -> str:
        """Attribute name for ``role`` (timestamp, title, href)."""
        return self._attributes[role]

    def pattern(self, role: str) -> str:
        """Source pattern of the compiled selector for ``role``."""
        return self._compiled[role].pattern


def _validate(raw: object) -> SelectorConfig:
    """Validate a decoded selector table, mapping failures to ConfigurationError."""
    try:
        return SelectorConfig.model_validate(raw)
    except ValidationError as exc:
        first = exc.errors()[0]
        key = ".".join(str(part) for part in first["loc"])
        raise ConfigurationError(
            f"Invalid selector configuration at {key!r}: {first['msg']}",
            key=key,
        ) from exc


def load_selectors(path: str | Path | None = None) -> SelectorSet:
    """Load and compile a selector table.

    Args:
        path: JSON file to read. Defaults to the packaged ``selectors.json``.

    Returns:
        A compiled SelectorSet.

    Raises:
        ConfigurationError: If the file is not valid JSON, a role is
            missing, or a pattern fails to compile.
    """
    if path is None:
        text = resources.files("overgg_scraper").joinpath(_RESOURCE_NAME).read_text(
            encoding="utf-8"
        )
        source = _RESOURCE_NAME
    else:
        text = Path(path).read_text(encoding="utf-8")
        source = str(path)

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(
            f"Selector configuration {source} is not valid JSON: {exc}"
        ) from exc

    selectors = SelectorSet.from_config(_validate(raw))
    logger.debug("Loaded selector configuration from %s", source)
    return selectors


@lru_cache(maxsize=1)
def default_selectors() -> SelectorSet:
    """Process-wide packaged selector set, loaded and compiled once."""
    return load_selectors()
