# src/roster_keeper/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The worker and the application loop depend on Protocols instead of concrete classes,
so storage and result reporting can be swapped for fakes in tests.
"""

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import TaskResult
    from .record import Record


class RosterStore(Protocol):
    """Whole-roster persistence (RosterFile in production)."""

    path: object

    def save(self, records: Iterable[Record]) -> int: ...
    def load(self) -> list[Record]: ...


ResultSink = Callable[["TaskResult"], None]
# Called from the worker thread once per finished task, in execution order.
