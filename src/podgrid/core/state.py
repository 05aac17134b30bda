"""View and modal state machines.

``Browser`` owns the catalog view state and the detail modal state. Both
change only when one of its actions runs or when a fetch it issued
completes on the event loop. Every fetch is tagged with a generation
number; a response is applied only while its generation is still the
current one, so a superseded catalog load or a detail fetch for a modal
that has since been closed or reopened is dropped.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Protocol

from podgrid.core.errors import FetchError
from podgrid.core.genres import detail_genre_names, enrich
from podgrid.core.models import CatalogEntry, PodcastDetail, PodcastSummary

logger = logging.getLogger(__name__)

CATALOG_ERROR_MESSAGE = "Failed to load podcasts. Please try again."
DETAIL_ERROR_MESSAGE = "Failed to load podcast details. Please try again."


class PodcastSource(Protocol):
    """Anything that can fetch the catalog and podcast details."""

    async def fetch_catalog(self) -> list[PodcastSummary]: ...

    async def fetch_detail(self, podcast_id: str) -> PodcastDetail: ...


# View states


@dataclass(frozen=True)
class Idle:
    """Nothing has been requested yet."""


@dataclass(frozen=True)
class Loading:
    """A catalog fetch is in flight."""


@dataclass(frozen=True)
class Loaded:
    """The catalog arrived. ``entries`` may be empty."""

    entries: tuple[CatalogEntry, ...]

    @property
    def is_empty(self) -> bool:
        return not self.entries


@dataclass(frozen=True)
class Failed:
    """The catalog fetch failed; the view offers a retry."""

    message: str


ViewState = Idle | Loading | Loaded | Failed


# Modal states


@dataclass(frozen=True)
class ModalClosed:
    """No detail modal is open."""


@dataclass(frozen=True)
class ModalLoading:
    """The modal is open and waiting for ``podcast_id``'s detail."""

    podcast_id: str


@dataclass(frozen=True)
class ModalShown:
    """The modal shows a podcast's detail.

    ``expanded_season`` is the 1-based number of the season whose episodes
    are listed, or None when every season is collapsed.
    """

    detail: PodcastDetail
    genre_names: tuple[str, ...]
    expanded_season: int | None = None


@dataclass(frozen=True)
class ModalFailed:
    """The detail fetch failed; the error is shown inside the modal."""

    podcast_id: str
    message: str


ModalState = ModalClosed | ModalLoading | ModalShown | ModalFailed

Listener = Callable[[ViewState, ModalState], None]


def build_entries(podcasts: list[PodcastSummary]) -> tuple[CatalogEntry, ...]:
    """Attach genre names to every catalog summary."""
    return tuple(
        CatalogEntry(podcast=podcast, genre_names=tuple(enrich(podcast.genre_ids)))
        for podcast in podcasts
    )


class Browser:
    """Holds the catalog view state and the detail modal state.

    Concurrent catalog loads follow a supersede policy: the most recently
    issued load wins and earlier ones are discarded when they complete.
    The same holds for detail fetches, and closing the modal invalidates
    whatever detail fetch is still pending.
    """

    def __init__(self, source: PodcastSource) -> None:
        self.source = source
        self.view: ViewState = Idle()
        self.modal: ModalState = ModalClosed()
        self._catalog_generation = 0
        self._modal_generation = 0
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener(view, modal)`` after every transition.

        Returns:
            A function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self) -> None:
        for listener in list(self._listeners):
            listener(self.view, self.modal)

    def _set_view(self, view: ViewState) -> None:
        self.view = view
        self._emit()

    def _set_modal(self, modal: ModalState) -> None:
        self.modal = modal
        self._emit()

    @property
    def entries(self) -> tuple[CatalogEntry, ...]:
        """The loaded catalog, or an empty tuple in any other view state."""
        if isinstance(self.view, Loaded):
            return self.view.entries
        return ()

    async def load(self) -> None:
        """Enter Loading and fetch the catalog.

        Used both on start and for retry. A load issued while another is in
        flight supersedes it.
        """
        self._catalog_generation += 1
        generation = self._catalog_generation
        self._set_view(Loading())

        try:
            podcasts = await self.source.fetch_catalog()
        except FetchError as e:
            if generation != self._catalog_generation:
                logger.debug("Dropping failure of superseded catalog load %d", generation)
                return
            logger.warning("Catalog fetch failed (%s): %s", type(e).__name__, e)
            self._set_view(Failed(CATALOG_ERROR_MESSAGE))
            return

        if generation != self._catalog_generation:
            logger.debug("Dropping result of superseded catalog load %d", generation)
            return

        self._set_view(Loaded(build_entries(podcasts)))

    async def retry(self) -> None:
        """Re-enter Loading from any state."""
        await self.load()

    async def open(self, podcast_id: str) -> None:
        """Open the modal for ``podcast_id`` and fetch its detail.

        The detail is fetched on every open, including reopening the podcast
        that was shown last.
        """
        self._modal_generation += 1
        generation = self._modal_generation
        self._set_modal(ModalLoading(podcast_id))

        try:
            detail = await self.source.fetch_detail(podcast_id)
        except FetchError as e:
            if generation != self._modal_generation:
                logger.debug("Dropping failure of stale detail fetch for %s", podcast_id)
                return
            logger.warning(
                "Detail fetch for %s failed (%s): %s", podcast_id, type(e).__name__, e
            )
            self._set_modal(ModalFailed(podcast_id, DETAIL_ERROR_MESSAGE))
            return

        if generation != self._modal_generation:
            logger.debug("Dropping stale detail for %s", podcast_id)
            return

        self._set_modal(ModalShown(detail, tuple(detail_genre_names(detail))))

    def close(self) -> None:
        """Close the modal from any state and drop pending detail fetches."""
        self._modal_generation += 1
        if not isinstance(self.modal, ModalClosed):
            self._set_modal(ModalClosed())

    def toggle_season(self, number: int) -> None:
        """Expand season ``number`` (1-based), or collapse it if expanded."""
        modal = self.modal
        if not isinstance(modal, ModalShown):
            return
        if not 1 <= number <= len(modal.detail.seasons):
            return

        expanded = None if modal.expanded_season == number else number
        self._set_modal(replace(modal, expanded_season=expanded))

    def resolve(self, key: str) -> str | None:
        """Map a grid position (1-based) or a podcast id to a podcast id."""
        key = key.strip()
        entries = self.entries
        if key.isascii() and key.isdigit() and 1 <= int(key) <= len(entries):
            return entries[int(key) - 1].podcast.id
        for entry in entries:
            if entry.podcast.id == key:
                return key
        return None
