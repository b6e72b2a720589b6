# src/roster_keeper/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.dispatch import handle_request
from ..core.requests import OperationKind, OperationRequest
from ..core.state import AppState

CommandEmitter = Callable[[str], None]
CommandHandler = Callable[[AppState, list[str], CommandEmitter | None], str]

logger = logging.getLogger(__name__)

ADD_USAGE = "Usage: /add <name> <age> [secret]"


class CommandRegistry:
    """Slash-command registry used by the console (/help, /add, /save, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._canonical: dict[str, str] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._canonical[key] = key
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler
            self._canonical[alias.lower()] = key

    def resolve(self, line: str) -> str | None:
        """Canonical command name for a "/command args" line, or None."""
        if not line.startswith("/"):
            return None
        parts = line[1:].split()
        if not parts:
            return None
        return self._canonical.get(parts[0].lower())

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args, emit)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            aliases = sorted(a for a, c in self._canonical.items() if c == name and a != name)
            alias_str = f" (also: {', '.join('/' + a for a in aliases)})" if aliases else ""
            lines.append(f"  /{name} - {help_text}{alias_str}")
        return "\n".join(lines)


registry = CommandRegistry()


def parse_add_args(args: list[str]) -> OperationRequest | None:
    """
    Parse `<name...> <age> [secret...]`.

    The first all-digit token after at least one name token is the age, so names may
    contain spaces and a numeric secret still works: "/add Mary Ann 25 1234".
    """
    for i in range(1, len(args)):
        if args[i].isdigit():
            name = " ".join(args[:i])
            secret = " ".join(args[i + 1 :])
            return OperationRequest.add(name, int(args[i]), secret)
    return None


def _simple(kind: OperationKind) -> CommandHandler:
    def handler(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
        return handle_request(state, OperationRequest(kind=kind))

    handler.__name__ = f"cmd_{kind.value}"
    return handler


def cmd_help(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    request = parse_add_args(args)
    if request is None:
        return ADD_USAGE
    return handle_request(state, request)


def cmd_status(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    worker = state.worker
    drain = "drain" if worker.drain_on_stop else "discard"
    return (
        "Status:\n"
        f"  Records: {len(state.roster)}\n"
        f"  Undo depth: {len(state.history)}\n"
        f"  Worker: {worker.state.value} (pending={worker.pending()}, on stop: {drain})\n"
        f"  File: {state.store.path}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a record: /add <name> <age> [secret].", aliases=["1"])
registry.register(
    "undo", _simple(OperationKind.UNDO_LAST), help_text="Undo the last add.", aliases=["2"]
)
registry.register(
    "save", _simple(OperationKind.SAVE), help_text="Save the roster (background).", aliases=["3"]
)
registry.register(
    "load", _simple(OperationKind.LOAD), help_text="Load the roster (background).", aliases=["4"]
)
registry.register(
    "show",
    _simple(OperationKind.DISPLAY),
    help_text="Display the roster (background).",
    aliases=["display", "5"],
)
registry.register(
    "stats",
    _simple(OperationKind.ANALYZE_AGE),
    help_text="Age statistics: min/max/mean (background).",
    aliases=["analyze", "6"],
)
registry.register(
    "exit",
    _simple(OperationKind.SHUTDOWN),
    help_text="Stop the worker and quit.",
    aliases=["quit", "7"],
)
registry.register("status", cmd_status, help_text="Show roster size, undo depth and worker state.")
