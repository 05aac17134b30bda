"""Podcast API client.

Fetches the podcast catalog and per-podcast detail from the podcast API
and turns the JSON payloads into podgrid models.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

import httpx

from podgrid.core.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from podgrid.core.errors import HttpError, NetworkError, ParseError
from podgrid.core.models import Episode, PodcastDetail, PodcastSummary, Season

logger = logging.getLogger(__name__)


def _parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _parse_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = value.strip()
        if value.isascii() and value.isdigit():
            return int(value)
    return None


def _parse_genre_ids(values: Any) -> tuple[int, ...]:
    """Keep the integer genre ids of a list, dropping anything else."""
    if not isinstance(values, list):
        return ()
    ids = (_parse_int(value) for value in values)
    return tuple(genre_id for genre_id in ids if genre_id is not None)


def _require_id(item: Any) -> str:
    if not isinstance(item, dict):
        raise ParseError(f"Expected a JSON object, got {type(item).__name__}")
    podcast_id = item.get("id")
    if podcast_id is None or isinstance(podcast_id, (dict, list)) or str(podcast_id) == "":
        raise ParseError("Podcast entry has no id")
    return str(podcast_id)


def _parse_summary(item: Any) -> PodcastSummary:
    """Parse one catalog entry."""
    podcast_id = _require_id(item)

    raw_genres = item.get("genres")
    if raw_genres is None:
        raw_genres = item.get("genre_ids")

    return PodcastSummary(
        id=podcast_id,
        title=str(item.get("title") or "Untitled"),
        image_url=str(item.get("image") or ""),
        genre_ids=_parse_genre_ids(raw_genres),
        last_updated=_parse_timestamp(item.get("updated")),
        season_count=max(_parse_int(item.get("seasons")) or 0, 0),
    )


def _parse_catalog(data: Any) -> list[PodcastSummary]:
    """Parse the catalog endpoint's JSON array."""
    if not isinstance(data, list):
        raise ParseError(f"Expected a JSON array of podcasts, got {type(data).__name__}")
    return [_parse_summary(item) for item in data]


def _parse_episode(item: Any) -> Episode:
    if not isinstance(item, dict):
        raise ParseError(f"Expected an episode object, got {type(item).__name__}")
    return Episode(
        title=str(item.get("title") or "Untitled"),
        description=item.get("description") or None,
        number=_parse_int(item.get("episode")),
        file_url=item.get("file") or None,
    )


def _parse_season(item: Any) -> Season:
    if not isinstance(item, dict):
        raise ParseError(f"Expected a season object, got {type(item).__name__}")

    episodes = item.get("episodes") or []
    if not isinstance(episodes, list):
        raise ParseError("Season episodes must be a list")

    number = _parse_int(item.get("season"))
    default_title = f"Season {number}" if number is not None else "Untitled season"

    return Season(
        title=str(item.get("title") or default_title),
        episodes=tuple(_parse_episode(episode) for episode in episodes),
        number=number,
        image_url=item.get("image") or None,
    )


def _parse_detail(data: Any) -> PodcastDetail:
    """Parse the detail endpoint's JSON object.

    Absent or empty seasons yield an empty tuple. The ``genres`` list may
    hold either numeric ids or genre titles.
    """
    podcast_id = _require_id(data)

    seasons = data.get("seasons") or []
    if not isinstance(seasons, list):
        raise ParseError("Podcast seasons must be a list")

    raw_genres = data.get("genres")
    if raw_genres is None:
        raw_genres = data.get("genre_ids")
    genre_names: tuple[str, ...] = ()
    if isinstance(raw_genres, list):
        genre_names = tuple(g for g in raw_genres if isinstance(g, str) and not g.strip().isdigit())

    return PodcastDetail(
        id=podcast_id,
        title=str(data.get("title") or "Untitled"),
        description=str(data.get("description") or ""),
        image_url=str(data.get("image") or ""),
        genre_ids=_parse_genre_ids(raw_genres),
        genre_names=genre_names,
        last_updated=_parse_timestamp(data.get("updated")),
        seasons=tuple(_parse_season(season) for season in seasons),
    )


class CatalogClient:
    """Client for the podcast catalog and detail endpoints."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API root, e.g. https://podcast-api.netlify.app
            timeout: Request timeout in seconds
            client: Optional httpx client for testing
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    def catalog_url(self) -> str:
        return f"{self.base_url}/"

    def detail_url(self, podcast_id: str) -> str:
        return f"{self.base_url}/id/{podcast_id}"

    async def fetch_catalog(self) -> list[PodcastSummary]:
        """
        Fetch the full podcast catalog.

        Returns:
            List of PodcastSummary objects in API order

        Raises:
            NetworkError: If the API cannot be reached
            HttpError: If the API answers with a non-2xx status
            ParseError: If the payload is not a JSON array of podcasts
        """
        data = await self._get_json(self.catalog_url())
        podcasts = _parse_catalog(data)
        logger.info("Fetched %d podcasts", len(podcasts))
        return podcasts

    async def fetch_detail(self, podcast_id: str) -> PodcastDetail:
        """
        Fetch one podcast's detail, including seasons and episodes.

        Args:
            podcast_id: Podcast id as used by the API

        Returns:
            PodcastDetail for the requested podcast

        Raises:
            FetchError: Same taxonomy as fetch_catalog
        """
        data = await self._get_json(self.detail_url(podcast_id))
        detail = _parse_detail(data)
        logger.info("Fetched podcast %s with %d seasons", detail.id, len(detail.seasons))
        return detail

    async def _get_json(self, url: str) -> Any:
        should_close_client = self._client is None
        client = self._client or httpx.AsyncClient(timeout=self.timeout)

        try:
            response = await client.get(url)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise HttpError(
                f"Podcast API returned error status {e.response.status_code}",
                status_code=e.response.status_code,
                url=url,
            ) from e
        except httpx.TimeoutException as e:
            raise NetworkError(
                f"Podcast API request timed out after {self.timeout} seconds", url=url
            ) from e
        except httpx.RequestError as e:
            raise NetworkError(f"Failed to connect to podcast API: {e}", url=url) from e
        except ValueError as e:
            # JSON decode error
            raise ParseError(f"Podcast API returned invalid JSON: {e}", url=url) from e
        finally:
            if should_close_client:
                await client.aclose()
