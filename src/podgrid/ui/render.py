"""Render layer: pure projections from browser state to rich renderables.

Nothing here performs I/O or changes state. Callers print the returned
renderables on whatever console they own.
"""

from __future__ import annotations

from datetime import datetime

from rich.columns import Columns
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from podgrid.core.config import DisplayConfig
from podgrid.core.models import CatalogEntry, Season
from podgrid.core.state import (
    Failed,
    Idle,
    Loaded,
    Loading,
    ModalClosed,
    ModalFailed,
    ModalLoading,
    ModalState,
    ViewState,
)
from podgrid.ui.bindings import Action, KeyBindings
from podgrid.ui.formatting import episode_label, format_relative_time, season_label

APP_TITLE = "🎧 Podcast Discovery"
EMPTY_MESSAGE = "No podcasts found."
GENRE_SEPARATOR = ", "
CARD_WIDTH = 36


def render_loading() -> RenderableType:
    return Text("⏳ Loading podcasts...", style="dim")


def render_error(message: str, bindings: KeyBindings) -> RenderableType:
    """Error (or empty catalog) panel with the retry hint."""
    body = Group(
        Text(message, style="bold red"),
        Text(""),
        Text(bindings.hint(Action.RETRY, Action.QUIT), style="cyan"),
    )
    return Panel(body, title="⚠️", border_style="red", expand=False)


def card_genres(entry: CatalogEntry, limit: int = 2) -> str:
    """The first ``limit`` genre names of a card, joined for display."""
    return GENRE_SEPARATOR.join(entry.genre_names[:limit])


def render_card(
    entry: CatalogEntry,
    position: int | None = None,
    genre_limit: int = 2,
    now: datetime | None = None,
) -> RenderableType:
    """One podcast card: title, cover, seasons, genres and last update."""
    podcast = entry.podcast
    title = Text(podcast.title, style="bold")
    if position is not None:
        title = Text.assemble((f"{position}. ", "dim"), title)

    lines = [
        title,
        Text(podcast.image_url or "-", style="cyan", overflow="ellipsis", no_wrap=True),
        Text(season_label(podcast.season_count)),
    ]
    if genre_limit:
        lines.append(
            Text(
                card_genres(entry, genre_limit),
                style="magenta",
                overflow="ellipsis",
                no_wrap=True,
            )
        )
    lines.append(
        Text(f"Updated {format_relative_time(podcast.last_updated, now)}", style="dim")
    )

    return Panel(Group(*lines), width=CARD_WIDTH)


def render_grid(
    entries: tuple[CatalogEntry, ...],
    bindings: KeyBindings,
    display: DisplayConfig | None = None,
    now: datetime | None = None,
) -> RenderableType:
    """Grid of podcast cards, or the empty-catalog message."""
    if not entries:
        return render_error(EMPTY_MESSAGE, bindings)

    display = display or DisplayConfig()
    cards = [
        render_card(entry, position, display.card_genres, now)
        for position, entry in enumerate(entries, 1)
    ]
    if display.columns:
        table = Table.grid(padding=(0, 1))
        for _ in range(display.columns):
            table.add_column()
        for start in range(0, len(cards), display.columns):
            table.add_row(*cards[start : start + display.columns])
        return table
    return Columns(cards)


def _render_season_table(seasons: tuple[Season, ...], expanded: int | None) -> RenderableType:
    if not seasons:
        return Text("No seasons available", style="dim")

    table = Table(title="Seasons", show_header=True, expand=False)
    table.add_column("#", style="dim", width=4)
    table.add_column("Season", style="bold")
    table.add_column("Episodes", style="cyan")

    for number, season in enumerate(seasons, 1):
        table.add_row(str(number), Text(season.title), episode_label(len(season.episodes)))

    if expanded is None:
        return table

    season = seasons[expanded - 1]
    episodes = Table(title=Text(season.title), show_header=True, expand=False)
    episodes.add_column("#", style="dim", width=4)
    episodes.add_column("Episode", style="bold")
    episodes.add_column("Description")
    for number, episode in enumerate(season.episodes, 1):
        label = str(episode.number) if episode.number is not None else str(number)
        episodes.add_row(label, Text(episode.title), Text(episode.description or "-"))
    if not season.episodes:
        episodes.add_row("-", "No episodes available", "")

    return Group(table, episodes)


def render_modal(
    modal: ModalState,
    bindings: KeyBindings,
    now: datetime | None = None,
) -> RenderableType | None:
    """The detail modal, or None when it is closed."""
    if isinstance(modal, ModalClosed):
        return None

    close_hint = Text(bindings.hint(Action.CLOSE), style="cyan")

    if isinstance(modal, ModalLoading):
        body = Group(Text("Loading seasons...", style="dim"), Text(""), close_hint)
        return Panel(body, title="Loading...", border_style="blue")

    if isinstance(modal, ModalFailed):
        body = Group(Text(modal.message, style="red"), Text(""), close_hint)
        return Panel(body, title="Error", border_style="red")

    detail = modal.detail
    tags = Text()
    for name in modal.genre_names:
        tags.append(f" {name} ", style="black on magenta")
        tags.append(" ")

    body = Group(
        Text(detail.image_url or "-", style="cyan"),
        Text(""),
        Text(detail.description or "No description available"),
        Text(""),
        tags,
        Text(f"Last updated: {format_relative_time(detail.last_updated, now)}", style="dim"),
        Text(""),
        _render_season_table(detail.seasons, modal.expanded_season),
        Text(""),
        Text(bindings.hint(Action.TOGGLE_SEASON, Action.CLOSE), style="cyan"),
    )
    return Panel(body, title=Text(detail.title, style="bold"), border_style="green")


def render_view(
    view: ViewState,
    bindings: KeyBindings,
    display: DisplayConfig | None = None,
    now: datetime | None = None,
) -> RenderableType:
    """The catalog area for the current view state."""
    if isinstance(view, (Idle, Loading)):
        return render_loading()
    if isinstance(view, Failed):
        return render_error(view.message, bindings)
    if isinstance(view, Loaded):
        grid = render_grid(view.entries, bindings, display, now)
        if view.is_empty or not bindings.bindings:
            return grid
        hint = Text.assemble(
            "Enter a number or id to open a podcast  ",
            bindings.hint(Action.RETRY, Action.QUIT),
            style="cyan",
        )
        return Group(grid, hint)
    raise TypeError(f"Unknown view state: {view!r}")


def render_screen(
    view: ViewState,
    modal: ModalState,
    bindings: KeyBindings | None = None,
    display: DisplayConfig | None = None,
    now: datetime | None = None,
) -> RenderableType:
    """The whole screen: header plus the open modal, or the catalog view.

    An open modal covers the catalog the way an overlay would; the catalog
    state itself is untouched and reappears once the modal closes.
    """
    bindings = bindings or KeyBindings()
    header = Text(APP_TITLE, style="bold")

    modal_renderable = render_modal(modal, bindings, now)
    if modal_renderable is not None:
        return Group(header, modal_renderable)

    return Group(header, render_view(view, bindings, display, now))
