"""Pytest fixtures for podgrid tests."""

from __future__ import annotations

import io
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import pytest
from rich.console import Console, RenderableType

from podgrid.core import config as config_module
from podgrid.core.models import Episode, PodcastDetail, PodcastSummary, Season


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch) -> None:
    """Keep tests away from real config files and environment."""
    monkeypatch.setattr(config_module, "LOCAL_CONFIG_PATH", tmp_path / "local" / "config")
    monkeypatch.setattr(config_module, "GLOBAL_CONFIG_PATH", tmp_path / "global" / "config")
    monkeypatch.delenv(config_module.API_URL_ENV_VAR, raising=False)


@pytest.fixture
def render_text() -> Callable[[RenderableType], str]:
    """Render a rich renderable to plain text."""

    def _render(renderable: RenderableType, width: int = 120) -> str:
        console = Console(file=io.StringIO(), width=width, color_system=None)
        console.print(renderable)
        return console.file.getvalue()

    return _render


@pytest.fixture
def catalog_payload() -> list[dict[str, Any]]:
    """A catalog response as served by the podcast API."""
    return [
        {
            "id": "10716",
            "title": "Something Was Wrong",
            "image": "https://example.com/swr.jpg",
            "genres": [1, 2],
            "seasons": 14,
            "updated": "2024-05-30T12:00:00.000Z",
        },
        {
            "id": "5675",
            "title": "This Is Actually Happening",
            "image": "https://example.com/tiah.jpg",
            "genre_ids": [3],
            "seasons": 1,
            "updated": "2024-05-01T12:00:00.000Z",
        },
    ]


@pytest.fixture
def detail_payload() -> dict[str, Any]:
    """A detail response for podcast 10716."""
    return {
        "id": "10716",
        "title": "Something Was Wrong",
        "description": "An Iris Award-winning docuseries.",
        "image": "https://example.com/swr.jpg",
        "genres": [1, 2],
        "updated": "2024-05-30T12:00:00.000Z",
        "seasons": [
            {
                "season": 1,
                "title": "Season 1",
                "image": "https://example.com/s1.jpg",
                "episodes": [
                    {"title": "Ep 1: Hidden", "description": "It begins.", "episode": 1,
                     "file": "https://example.com/1.mp3"},
                    {"title": "Ep 2: Found", "description": "It ends.", "episode": 2,
                     "file": "https://example.com/2.mp3"},
                ],
            },
            {"season": 2, "title": "Season 2", "episodes": []},
        ],
    }


@pytest.fixture
def sample_summary() -> PodcastSummary:
    return PodcastSummary(
        id="10716",
        title="Something Was Wrong",
        image_url="https://example.com/swr.jpg",
        genre_ids=(1, 2),
        last_updated=datetime(2024, 5, 30, 12, 0, 0, tzinfo=UTC),
        season_count=14,
    )


@pytest.fixture
def sample_detail() -> PodcastDetail:
    return PodcastDetail(
        id="10716",
        title="Something Was Wrong",
        description="An Iris Award-winning docuseries.",
        image_url="https://example.com/swr.jpg",
        genre_ids=(1, 2),
        last_updated=datetime(2024, 5, 30, 12, 0, 0, tzinfo=UTC),
        seasons=(
            Season(
                title="Season 1",
                number=1,
                episodes=(
                    Episode(title="Ep 1: Hidden", description="It begins.", number=1),
                    Episode(title="Ep 2: Found", description="It ends.", number=2),
                ),
            ),
            Season(title="Season 2", number=2),
        ),
    )
