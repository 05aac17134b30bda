"""Interactive browser loop.

Reads one command per line, dispatches it through the key bindings to the
``Browser`` and redraws the screen after every state transition.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Coroutine
from typing import Any

from rich.console import Console
from rich.markup import escape

from podgrid.core.config import DisplayConfig
from podgrid.core.state import Browser, ModalState, ViewState
from podgrid.ui.bindings import Action, Command, KeyBindings
from podgrid.ui.render import render_screen

logger = logging.getLogger(__name__)

LineReader = Callable[[], Awaitable[str]]


def _log_task_failure(task: asyncio.Task[None]) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("Background task failed", exc_info=exc)


class InteractiveSession:
    """Runs the browser against a console until the user quits.

    Fetches triggered by the user run as tasks so the prompt stays
    responsive; closing the modal cancels a pending detail fetch and
    leaving the session cancels everything still running.
    """

    def __init__(
        self,
        browser: Browser,
        console: Console,
        bindings: KeyBindings | None = None,
        display: DisplayConfig | None = None,
        read_line: LineReader | None = None,
    ) -> None:
        self.browser = browser
        self.console = console
        self.bindings = bindings or KeyBindings()
        self.display = display
        self.read_line = read_line or self._read_console
        self._tasks: set[asyncio.Task[None]] = set()
        self._detail_task: asyncio.Task[None] | None = None

    async def _read_console(self) -> str:
        return await asyncio.to_thread(self.console.input, "> ")

    def redraw(self, view: ViewState, modal: ModalState) -> None:
        self.console.print(render_screen(view, modal, self.bindings, self.display))

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task[None]:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        task.add_done_callback(_log_task_failure)
        return task

    def _cancel_detail(self) -> None:
        if self._detail_task is not None and not self._detail_task.done():
            self._detail_task.cancel()
        self._detail_task = None

    def dispatch(self, command: Command) -> bool:
        """Apply one command. Returns False when the session should end."""
        if command.action == Action.QUIT:
            return False

        if command.action == Action.RETRY:
            self._spawn(self.browser.retry())
        elif command.action == Action.CLOSE:
            self._cancel_detail()
            self.browser.close()
        elif command.action == Action.TOGGLE_SEASON:
            self.browser.toggle_season(int(command.argument or 0))
        elif command.action == Action.OPEN:
            podcast_id = self.browser.resolve(command.argument or "")
            if podcast_id is None:
                query = escape(command.argument or "")
                self.console.print(f"[yellow]No podcast matches '{query}'[/yellow]")
            else:
                self._cancel_detail()
                self._detail_task = self._spawn(self.browser.open(podcast_id))

        return True

    async def run(self) -> None:
        unsubscribe = self.browser.subscribe(self.redraw)
        try:
            await self.browser.load()
            while True:
                try:
                    line = await self.read_line()
                except EOFError:
                    break

                command = self.bindings.parse(line)
                if command is None:
                    self.console.print("[yellow]Unknown command[/yellow]")
                    continue
                logger.debug("Dispatching %s", command)
                if not self.dispatch(command):
                    break
        finally:
            unsubscribe()
            pending = list(self._tasks)
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)
