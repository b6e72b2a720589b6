# src/roster_keeper/core/dispatch.py

"""
Request dispatch.

Maps an OperationRequest to one of two execution models:
- add/undo run as commands right here, in the caller's thread, before returning;
- save/load/display/analyze are enqueued for the worker and return immediately.
Task output arrives later through the worker's result sink.
"""

from __future__ import annotations

import logging

from ..commands.command import AddRecordCommand
from .errors import WorkerStoppedError
from .record import Record
from .requests import DEFERRED, OperationKind, OperationRequest
from .state import AppState

logger = logging.getLogger(__name__)


def handle_request(state: AppState, request: OperationRequest) -> str:
    kind = request.kind
    logger.debug("handle_request %r", request)

    if kind == OperationKind.ADD_RECORD:
        # Raises InvalidRecordError on bad input; the caller decides how to show it.
        record = Record(name=request.name or "", age=request.age, secret=request.secret)  # type: ignore[arg-type]
        AddRecordCommand(state.roster, state.history, record).execute()
        return f"Added {record.name} ({record.age}). Roster size: {len(state.roster)}."

    if kind == OperationKind.UNDO_LAST:
        command = state.history.undo_last()
        if command is None:
            return "Nothing to undo."
        record = getattr(command, "record", None)
        what = f"add of {record.name} ({record.age})" if record is not None else repr(command)
        return f"Undone: {what}. Roster size: {len(state.roster)}."

    task_kind = DEFERRED.get(kind)
    if task_kind is not None:
        try:
            task = state.worker.enqueue(task_kind)
        except WorkerStoppedError:
            return "Worker is stopped; request ignored."
        return f"Queued {task_kind.value} (task #{task.task_id})."

    if kind == OperationKind.SHUTDOWN:
        joined = state.shutdown()
        return "Worker stopped." if joined else "Worker did not stop in time."

    return f"Unsupported operation: {kind}"
