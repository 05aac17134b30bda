"""Static genre lookup table and genre enrichment.

The podcast API only returns numeric genre ids; their display names are
compiled in here and never fetched.
"""

from __future__ import annotations

from collections.abc import Iterable

from podgrid.core.models import Genre, PodcastDetail

UNKNOWN_GENRE = "Unknown"
UNCATEGORIZED = "Uncategorized"

GENRES: tuple[Genre, ...] = (
    Genre(1, "Personal Growth"),
    Genre(2, "Investigative Journalism"),
    Genre(3, "History"),
    Genre(4, "Comedy"),
    Genre(5, "Entertainment"),
    Genre(6, "Business"),
    Genre(7, "Fiction"),
    Genre(8, "News"),
    Genre(9, "Kids and Family"),
)

_GENRES_BY_ID: dict[int, Genre] = {genre.id: genre for genre in GENRES}


def all_genres() -> tuple[Genre, ...]:
    """Return every known genre, ordered by id."""
    return GENRES


def lookup_genre(genre_id: int) -> Genre | None:
    """Return the genre for ``genre_id``, or None when it is not known."""
    return _GENRES_BY_ID.get(genre_id)


def enrich(genre_ids: Iterable[int] | None) -> list[str]:
    """Map genre ids to display names.

    Args:
        genre_ids: Genre ids in API order. May be None.

    Returns:
        One name per id, in the same order, with "Unknown" for ids missing
        from the table. Empty or absent input gives ["Uncategorized"], so
        the result is never empty.
    """
    if genre_ids is None:
        return [UNCATEGORIZED]

    names = []
    for genre_id in genre_ids:
        genre = _GENRES_BY_ID.get(genre_id)
        names.append(genre.title if genre else UNKNOWN_GENRE)

    return names or [UNCATEGORIZED]


def detail_genre_names(detail: PodcastDetail) -> list[str]:
    """Return the genre names to display for a podcast detail."""
    if detail.genre_names:
        return list(detail.genre_names)
    return enrich(detail.genre_ids)
