"""Data models for podgrid."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Genre:
    """An entry of the static genre lookup table."""

    id: int
    title: str


@dataclass(frozen=True)
class Episode:
    """A single episode inside a season."""

    title: str
    description: str | None = None
    number: int | None = None
    file_url: str | None = None


@dataclass(frozen=True)
class Season:
    """A season of a podcast and its episodes, in API order."""

    title: str
    episodes: tuple[Episode, ...] = ()
    number: int | None = None
    image_url: str | None = None


@dataclass(frozen=True)
class PodcastSummary:
    """Represents one entry of the podcast catalog."""

    id: str
    title: str
    image_url: str = ""
    genre_ids: tuple[int, ...] = ()
    last_updated: datetime | None = None
    season_count: int = 0


@dataclass(frozen=True)
class PodcastDetail:
    """Full detail for one podcast, as returned by the detail endpoint.

    ``genre_names`` holds genre titles when the API already supplied them
    as strings instead of numeric ids.
    """

    id: str
    title: str
    description: str = ""
    image_url: str = ""
    genre_ids: tuple[int, ...] = ()
    genre_names: tuple[str, ...] = ()
    last_updated: datetime | None = None
    seasons: tuple[Season, ...] = ()


@dataclass(frozen=True)
class CatalogEntry:
    """A catalog summary with its genre names attached."""

    podcast: PodcastSummary
    genre_names: tuple[str, ...] = field(default_factory=tuple)
