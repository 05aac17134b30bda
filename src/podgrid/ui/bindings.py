"""Declarative key bindings for the interactive browser.

Every user input is looked up in one table and turned into an ``Action``.
The close button, the backdrop and the Escape key of a graphical modal are
all bindings of the same ``close`` action here.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Action(str, Enum):
    """Things the user can ask the browser to do."""

    OPEN = "open"
    CLOSE = "close"
    RETRY = "retry"
    TOGGLE_SEASON = "toggle_season"
    QUIT = "quit"


@dataclass(frozen=True)
class Binding:
    """One input that triggers an action."""

    key: str
    action: Action
    label: str


@dataclass(frozen=True)
class Command:
    """A parsed user input: the action plus its argument, if any."""

    action: Action
    argument: str | None = None


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    Binding("x", Action.CLOSE, "close"),
    Binding("esc", Action.CLOSE, "close"),
    Binding("\x1b", Action.CLOSE, "close"),
    Binding("", Action.CLOSE, "close"),
    Binding("r", Action.RETRY, "retry"),
    Binding("s", Action.TOGGLE_SEASON, "toggle season"),
    Binding("q", Action.QUIT, "quit"),
)


class KeyBindings:
    """Lookup table from input keys to actions."""

    def __init__(self, bindings: tuple[Binding, ...] = DEFAULT_BINDINGS) -> None:
        self.bindings = bindings
        self._by_key = {binding.key: binding for binding in bindings}

    def keys_for(self, action: Action) -> list[str]:
        """Return the visible keys bound to ``action``, in table order."""
        return [
            binding.key
            for binding in self.bindings
            if binding.action == action and binding.key and binding.key.isprintable()
        ]

    def hint(self, *actions: Action) -> str:
        """Build a hint such as "[r] retry  [q] quit" for the given actions."""
        parts = []
        for action in actions:
            keys = self.keys_for(action)
            if not keys:
                continue
            label = next(b.label for b in self.bindings if b.action == action)
            parts.append(f"[{'/'.join(keys)}] {label}")
        return "  ".join(parts)

    def parse(self, text: str) -> Command | None:
        """Turn one line of input into a command.

        A bound key maps to its action, "<key> <arg>" passes an argument
        (used by toggle season), and anything else is read as a podcast to
        open. Returns None for input that names no action.
        """
        text = text.strip()
        key, _, argument = text.partition(" ")
        key = key.lower()
        argument = argument.strip()

        binding = self._by_key.get(key)
        if binding is not None:
            if binding.action == Action.TOGGLE_SEASON:
                if not (argument.isascii() and argument.isdigit()):
                    return None
                return Command(binding.action, argument)
            if argument:
                return None
            return Command(binding.action)

        if text and " " not in text:
            return Command(Action.OPEN, text)
        return None
