# src/roster_keeper/commands/history.py

from __future__ import annotations

import logging
import threading

from .command import Command

logger = logging.getLogger(__name__)


class UndoHistory:
    """
    LIFO stack of executed commands.

    One instance per AppState (no process-wide singleton), so tests get isolated histories.
    Only the console thread touches it today; the lock keeps it safe if commands ever
    get submitted from elsewhere.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._stack: list[Command] = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._stack)

    def push(self, command: Command) -> None:
        with self._lock:
            self._stack.append(command)

    def peek(self) -> Command | None:
        with self._lock:
            return self._stack[-1] if self._stack else None

    def undo_last(self) -> Command | None:
        """Pop and undo the most recent command. Empty history -> None (no-op)."""
        with self._lock:
            if not self._stack:
                logger.debug("undo_last: history is empty")
                return None
            command = self._stack.pop()

        command.undo()
        return command
