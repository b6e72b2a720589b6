# src/roster_keeper/tasks/task_handlers.py

"""
Task handlers.

One function per TaskKind. Each runs on the worker thread, touches the roster only
through snapshot()/replace_all(), and turns expected failures into a failed TaskResult
instead of raising.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from ..core.errors import PersistenceError
from ..core.ports import RosterStore
from ..core.record import Record
from ..core.roster import Roster
from .task_models import AgeStats, Task, TaskKind, TaskResult

logger = logging.getLogger(__name__)

TaskHandler = Callable[[Task, Roster, RosterStore], TaskResult]

RULE = "-" * 38


def compute_age_stats(records: Sequence[Record]) -> AgeStats:
    ages = [r.age for r in records]
    if not ages:
        return AgeStats(count=0, minimum=None, maximum=None, mean=None)
    return AgeStats(
        count=len(ages),
        minimum=min(ages),
        maximum=max(ages),
        mean=sum(ages) / len(ages),
    )


def render_table(records: Sequence[Record]) -> list[str]:
    lines = [RULE]
    if not records:
        lines.append("(roster is empty)")
    for r in records:
        lines.append(f"| {r.name:<15} | {r.age:<3} |")
    lines.append(RULE)
    return lines


def handle_save(task: Task, roster: Roster, store: RosterStore) -> TaskResult:
    snapshot = roster.snapshot()
    try:
        count = store.save(snapshot)
    except PersistenceError as e:
        logger.warning("Save failed: %s", e)
        return TaskResult(task=task, ok=False, message=f"Save failed: {e}")
    return TaskResult(task=task, ok=True, message=f"Saved {count} record(s) to {store.path}.")


def handle_load(task: Task, roster: Roster, store: RosterStore) -> TaskResult:
    try:
        records = store.load()
    except PersistenceError as e:
        # Roster stays untouched on any load failure.
        logger.warning("Load failed: %s", e)
        return TaskResult(task=task, ok=False, message=f"Load failed: {e}")

    roster.replace_all(records)
    return TaskResult(
        task=task, ok=True, message=f"Loaded {len(records)} record(s) from {store.path}."
    )


def handle_display(task: Task, roster: Roster, store: RosterStore) -> TaskResult:
    snapshot = roster.snapshot()
    return TaskResult(
        task=task,
        ok=True,
        message=f"Roster ({len(snapshot)} record(s)):",
        lines=render_table(snapshot),
    )


def handle_analyze_age(task: Task, roster: Roster, store: RosterStore) -> TaskResult:
    stats = compute_age_stats(roster.snapshot())
    lines = stats.render()
    return TaskResult(task=task, ok=True, message=lines[0], lines=lines[1:], stats=stats)


HANDLERS: dict[TaskKind, TaskHandler] = {
    TaskKind.SAVE: handle_save,
    TaskKind.LOAD: handle_load,
    TaskKind.DISPLAY: handle_display,
    TaskKind.ANALYZE_AGE: handle_analyze_age,
}


def run_task(task: Task, roster: Roster, store: RosterStore) -> TaskResult:
    handler = HANDLERS.get(task.kind)
    if handler is None:
        logger.warning("No handler for task kind=%s id=%s", task.kind, task.task_id)
        return TaskResult(task=task, ok=False, message=f"Unknown task kind: {task.kind}")
    return handler(task, roster, store)
