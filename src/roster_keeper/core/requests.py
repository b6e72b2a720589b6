# src/roster_keeper/core/requests.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from ..tasks.task_models import TaskKind


class OperationKind(StrEnum):
    ADD_RECORD = "add_record"
    UNDO_LAST = "undo_last"
    SAVE = "save"
    LOAD = "load"
    DISPLAY = "display"
    ANALYZE_AGE = "analyze_age"
    SHUTDOWN = "shutdown"


# Operations that are deferred to the worker instead of running in the caller.
DEFERRED: dict[OperationKind, TaskKind] = {
    OperationKind.SAVE: TaskKind.SAVE,
    OperationKind.LOAD: TaskKind.LOAD,
    OperationKind.DISPLAY: TaskKind.DISPLAY,
    OperationKind.ANALYZE_AGE: TaskKind.ANALYZE_AGE,
}


@dataclass(slots=True, frozen=True)
class OperationRequest:
    """One operator choice, independent of how it was typed in."""

    kind: OperationKind
    name: str | None = None
    age: int | None = None
    secret: str = ""

    def __repr__(self) -> str:
        # Never echo the secret into logs.
        return f"OperationRequest(kind={self.kind.value!r}, name={self.name!r}, age={self.age!r})"

    @classmethod
    def add(cls, name: str, age: int, secret: str = "") -> OperationRequest:
        return cls(kind=OperationKind.ADD_RECORD, name=name, age=age, secret=secret)
