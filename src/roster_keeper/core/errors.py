# src/roster_keeper/core/errors.py

"""
Exception hierarchy.

Persistence errors are expected at runtime (missing file, bad disk, hand-edited JSON)
and are handled inside the task that hit them. Command state errors are caller bugs
and propagate.
"""

from __future__ import annotations


class RosterError(Exception):
    """Base class for all roster_keeper errors."""


class InvalidRecordError(RosterError, ValueError):
    """Record fields failed validation (empty name, negative age, ...)."""


# ---- persistence ----


class PersistenceError(RosterError):
    def __init__(self, message: str, *, path: object = None) -> None:
        super().__init__(message)
        self.path = path


class PersistenceUnavailable(PersistenceError):
    """The roster file cannot be opened for read or write."""


class CorruptPersistedData(PersistenceError):
    """The roster file exists but does not decode into a valid record list."""


# ---- commands ----


class CommandStateError(RosterError):
    """execute()/undo() called out of order."""


class CommandAlreadyExecuted(CommandStateError):
    pass


class CommandNotExecuted(CommandStateError):
    pass


# ---- worker ----


class WorkerStoppedError(RosterError):
    """The worker no longer accepts tasks."""
