"""Tests for the render layer.

Renders to plain text and checks what a user would see.
"""

from __future__ import annotations

from dataclasses import replace

import pytest

from podgrid.core.config import DisplayConfig
from podgrid.core.models import CatalogEntry, PodcastDetail, PodcastSummary
from podgrid.core.state import (
    CATALOG_ERROR_MESSAGE,
    DETAIL_ERROR_MESSAGE,
    Failed,
    Idle,
    Loaded,
    Loading,
    ModalClosed,
    ModalFailed,
    ModalLoading,
    ModalShown,
    build_entries,
)
from podgrid.ui.bindings import KeyBindings
from podgrid.ui.render import (
    EMPTY_MESSAGE,
    card_genres,
    render_card,
    render_modal,
    render_screen,
    render_view,
)
from fakes import NOW

BINDINGS = KeyBindings()


def entry(title: str = "Podcast", seasons: int = 1, genres: tuple[str, ...] = ()) -> CatalogEntry:
    return CatalogEntry(
        podcast=PodcastSummary(id="1", title=title, season_count=seasons),
        genre_names=genres,
    )


class TestCard:
    """Podcast cards."""

    def test_card_contents(self, sample_summary: PodcastSummary, render_text) -> None:
        (card_entry,) = build_entries([sample_summary])

        text = render_text(render_card(card_entry, position=1, now=NOW))

        assert "1. Something Was Wrong" in text
        assert "https://example.com/swr.jpg" in text
        assert "14 Seasons" in text
        assert "Personal Growth, Invest" in text
        assert card_genres(card_entry) == "Personal Growth, Investigative Journalism"
        assert "Updated 2 days ago" in text

    @pytest.mark.parametrize(
        ("seasons", "label"),
        [(0, "0 Seasons"), (1, "1 Season"), (2, "2 Seasons")],
    )
    def test_season_pluralisation(self, seasons: int, label: str, render_text) -> None:
        text = render_text(render_card(entry(seasons=seasons)))
        assert label in [line.strip("│ ") for line in text.splitlines()]

    def test_only_first_two_genres(self) -> None:
        card_entry = entry(genres=("Comedy", "News", "History"))
        assert card_genres(card_entry) == "Comedy, News"

    def test_genre_limit_from_display_config(self) -> None:
        card_entry = entry(genres=("Comedy", "News", "History"))
        assert card_genres(card_entry, limit=3) == "Comedy, News, History"

    def test_missing_timestamp(self, render_text) -> None:
        assert "Updated Unknown" in render_text(render_card(entry()))


class TestView:
    """Catalog view states."""

    @pytest.mark.parametrize("view", [Idle(), Loading()])
    def test_loading(self, view, render_text) -> None:
        assert "Loading podcasts..." in render_text(render_view(view, BINDINGS))

    def test_error_panel_has_retry(self, render_text) -> None:
        text = render_text(render_view(Failed(CATALOG_ERROR_MESSAGE), BINDINGS))

        assert CATALOG_ERROR_MESSAGE in text
        assert "[r] retry" in text

    def test_empty_catalog_has_retry(self, render_text) -> None:
        text = render_text(render_view(Loaded(()), BINDINGS))

        assert EMPTY_MESSAGE in text
        assert "[r] retry" in text

    def test_grid_lists_every_podcast(self, render_text) -> None:
        entries = (entry("Alpha"), entry("Beta"), entry("Gamma"))

        text = render_text(render_view(Loaded(entries), BINDINGS))

        for position, name in enumerate(["Alpha", "Beta", "Gamma"], 1):
            assert f"{position}. {name}" in text
        assert "Enter a number or id" in text

    def test_fixed_columns(self, render_text) -> None:
        entries = tuple(entry(f"Show {i}") for i in range(3))

        text = render_text(
            render_view(Loaded(entries), BINDINGS, DisplayConfig(columns=1)), width=200
        )

        lines = [line for line in text.splitlines() if "Show" in line]
        assert len(lines) == 3

    def test_no_hints_without_bindings(self, render_text) -> None:
        text = render_text(render_view(Loaded((entry("Alpha"),)), KeyBindings(bindings=())))
        assert "Enter a number" not in text


class TestModal:
    """Detail modal states."""

    def test_closed_renders_nothing(self) -> None:
        assert render_modal(ModalClosed(), BINDINGS) is None

    def test_loading_shell(self, render_text) -> None:
        text = render_text(render_modal(ModalLoading("10716"), BINDINGS))

        assert "Loading..." in text
        assert "[x/esc] close" in text

    def test_error_shell(self, render_text) -> None:
        text = render_text(render_modal(ModalFailed("10716", DETAIL_ERROR_MESSAGE), BINDINGS))

        assert "Error" in text
        assert DETAIL_ERROR_MESSAGE in text

    def test_shown(self, sample_detail: PodcastDetail, render_text) -> None:
        modal = ModalShown(sample_detail, ("Personal Growth", "Investigative Journalism"))

        text = render_text(render_modal(modal, BINDINGS, now=NOW))

        assert "Something Was Wrong" in text
        assert "An Iris Award-winning docuseries." in text
        assert "Personal Growth" in text
        assert "Investigative Journalism" in text
        assert "Last updated: 2 days ago" in text
        assert "2 Episodes" in text
        assert "0 Episodes" in text
        assert "Ep 1: Hidden" not in text

    def test_expanded_season_lists_episodes(self, sample_detail: PodcastDetail, render_text) -> None:
        modal = ModalShown(sample_detail, ("History",), expanded_season=1)

        text = render_text(render_modal(modal, BINDINGS, now=NOW))

        assert "Ep 1: Hidden" in text
        assert "It ends." in text

    def test_expanded_empty_season(self, sample_detail: PodcastDetail, render_text) -> None:
        modal = ModalShown(sample_detail, ("History",), expanded_season=2)
        assert "No episodes available" in render_text(render_modal(modal, BINDINGS))

    def test_no_seasons(self, sample_detail: PodcastDetail, render_text) -> None:
        modal = ModalShown(replace(sample_detail, seasons=()), ("History",))
        assert "No seasons available" in render_text(render_modal(modal, BINDINGS))

    def test_unknown_update_time(self, sample_detail: PodcastDetail, render_text) -> None:
        modal = ModalShown(replace(sample_detail, last_updated=None), ("History",))
        assert "Last updated: Unknown" in render_text(render_modal(modal, BINDINGS))


class TestScreen:
    """Whole-screen composition."""

    def test_modal_covers_grid(self, sample_detail: PodcastDetail, render_text) -> None:
        view = Loaded((entry("Alpha"),))
        modal = ModalShown(sample_detail, ("History",))

        text = render_text(render_screen(view, modal, now=NOW))

        assert "Podcast Discovery" in text
        assert "Something Was Wrong" in text
        assert "1. Alpha" not in text

    def test_grid_returns_after_close(self, render_text) -> None:
        text = render_text(render_screen(Loaded((entry("Alpha"),)), ModalClosed()))
        assert "1. Alpha" in text
