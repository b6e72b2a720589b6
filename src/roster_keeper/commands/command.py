# src/roster_keeper/commands/command.py

from __future__ import annotations

import logging
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

from ..core.errors import CommandAlreadyExecuted, CommandNotExecuted
from ..core.record import Record
from ..core.roster import Roster

if TYPE_CHECKING:
    from .history import UndoHistory

logger = logging.getLogger(__name__)


class Command(Protocol):
    """A reversible mutation executed synchronously by the caller."""

    def execute(self) -> None: ...
    def undo(self) -> None: ...


class CommandState(StrEnum):
    NEW = "new"
    EXECUTED = "executed"
    UNDONE = "undone"


class AddRecordCommand:
    """
    Append one record to the roster; undo removes that same instance.

    One-shot:
    - execute() only from NEW, undo() only from EXECUTED;
    - anything else raises a CommandStateError subclass.

    Ordering: the append happens before the push onto the history, so the history
    never holds a command whose mutation isn't visible yet.
    """

    def __init__(self, roster: Roster, history: UndoHistory, record: Record) -> None:
        self._roster = roster
        self._history = history
        self.record = record
        self.state = CommandState.NEW

    def __repr__(self) -> str:
        return f"AddRecordCommand(record={self.record!r}, state={self.state.value})"

    def execute(self) -> None:
        if self.state is not CommandState.NEW:
            raise CommandAlreadyExecuted(f"{self!r} cannot be executed again")

        self._roster.append(self.record)
        self.state = CommandState.EXECUTED
        self._history.push(self)
        logger.info("Added record name=%s age=%s", self.record.name, self.record.age)

    def undo(self) -> None:
        if self.state is not CommandState.EXECUTED:
            raise CommandNotExecuted(f"{self!r} has nothing to undo")

        removed = self._roster.remove(self.record)
        self.state = CommandState.UNDONE
        if not removed:
            # A load replaced the roster since this add ran; the record is already gone.
            logger.info("Undo add: record name=%s no longer in roster", self.record.name)
            return
        logger.info("Undid add of record name=%s", self.record.name)
