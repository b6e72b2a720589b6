# src/roster_keeper/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

NO_DATA = "no data"


class TaskKind(StrEnum):
    """Deferred operations the worker knows how to run."""

    SAVE = "save"
    LOAD = "load"
    DISPLAY = "display"
    ANALYZE_AGE = "analyze_age"


class WorkerState(StrEnum):
    """
    Worker lifecycle.

    idle -> running -> idle -> ... -> draining -> stopped
    """

    IDLE = "idle"
    RUNNING = "running"
    DRAINING = "draining"
    STOPPED = "stopped"


@dataclass(slots=True, frozen=True)
class Task:
    kind: TaskKind
    task_id: int
    submitted_at: float


@dataclass(slots=True, frozen=True)
class AgeStats:
    count: int
    minimum: int | None
    maximum: int | None
    mean: float | None

    @property
    def has_data(self) -> bool:
        return self.count > 0

    def render(self) -> list[str]:
        def show(v: object) -> str:
            return NO_DATA if v is None else str(v)

        return [
            "Age statistics:",
            f"  Minimum age: {show(self.minimum)}",
            f"  Maximum age: {show(self.maximum)}",
            f"  Average age: {show(self.mean)}",
        ]


@dataclass(slots=True)
class TaskResult:
    """What the worker reports back for one finished task."""

    task: Task
    ok: bool
    message: str
    lines: list[str] = field(default_factory=list)
    stats: AgeStats | None = None

    def render(self) -> str:
        return "\n".join([self.message, *self.lines]) if self.lines else self.message
