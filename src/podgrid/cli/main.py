"""Main CLI application for podgrid."""

import asyncio
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from podgrid.core.config import Config, get_config, validate_base_url
from podgrid.core.errors import ConfigError
from podgrid.core.logging import setup_logging

app = typer.Typer(
    name="podgrid",
    help="Browse the podcast catalog from the terminal.",
    no_args_is_help=True,
)

console = Console()
error_console = Console(stderr=True)


class State:
    """Global CLI state."""

    def __init__(self) -> None:
        self.config: Config | None = None
        self.api_url: str | None = None


state = State()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from podgrid import __version__

        console.print(f"podgrid version {__version__}")
        raise typer.Exit()


def _make_browser():
    from podgrid.core.state import Browser
    from podgrid.services.catalog import CatalogClient

    assert state.config is not None

    base_url = state.api_url or state.config.get_base_url()
    client = CatalogClient(base_url, timeout=state.config.api.timeout)
    return Browser(client)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose (DEBUG) logging"),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="Also write logs to this file"),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", help="Path to configuration file"),
    ] = None,
    api_url: Annotated[
        str | None,
        typer.Option("--api-url", help="Podcast API base URL"),
    ] = None,
    version: Annotated[  # noqa: ARG001
        bool,
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version"),
    ] = False,
) -> None:
    """podgrid - podcast discovery in the terminal."""
    setup_logging(verbose=verbose, log_file=log_file)

    try:
        state.config = get_config(config_path)
        if api_url is not None:
            validate_base_url(api_url, "--api-url")
    except ConfigError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from None

    state.api_url = api_url.rstrip("/") if api_url else None


@app.command()
def browse() -> None:
    """Browse the catalog interactively."""
    from podgrid.ui.app import InteractiveSession

    assert state.config is not None

    session = InteractiveSession(_make_browser(), console, display=state.config.display)
    try:
        asyncio.run(session.run())
    except KeyboardInterrupt:
        pass


@app.command("list")
def list_podcasts() -> None:
    """Fetch the catalog and print it as a grid of cards."""
    from podgrid.core.state import Failed
    from podgrid.ui.render import render_view

    assert state.config is not None

    browser = _make_browser()
    asyncio.run(browser.load())

    console.print(render_view(browser.view, _plain_bindings(), state.config.display))
    if isinstance(browser.view, Failed):
        raise typer.Exit(1)


@app.command()
def show(
    podcast_id: Annotated[str, typer.Argument(help="Podcast id")],
    season: Annotated[
        int | None,
        typer.Option("--season", "-s", help="List the episodes of this season (1-based)"),
    ] = None,
) -> None:
    """Fetch one podcast and print its details."""
    from podgrid.core.state import ModalFailed
    from podgrid.ui.render import render_modal

    browser = _make_browser()
    asyncio.run(browser.open(podcast_id))
    if season is not None:
        browser.toggle_season(season)

    renderable = render_modal(browser.modal, _plain_bindings())
    if renderable is not None:
        console.print(renderable)
    if isinstance(browser.modal, ModalFailed):
        raise typer.Exit(1)


@app.command()
def genres() -> None:
    """List the known genres."""
    from podgrid.core.genres import all_genres

    table = Table(title="Genres")
    table.add_column("ID", style="dim", width=4)
    table.add_column("Title", style="bold")

    for genre in all_genres():
        table.add_row(str(genre.id), genre.title)

    console.print(table)


def _plain_bindings():
    """Bindings without interactive keys, so one-shot output has no key hints."""
    from podgrid.ui.bindings import KeyBindings

    return KeyBindings(bindings=())


if __name__ == "__main__":
    app()
