# src/roster_keeper/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the roster, undo history, roster file and worker into AppState,
- starts the worker thread.
"""

from __future__ import annotations

import logging

from ..commands.history import UndoHistory
from ..config import get_settings
from ..core.ports import ResultSink
from ..core.roster import Roster
from ..core.state import AppState
from ..storage.roster_file import RosterFile
from ..tasks.task_worker import TaskWorker

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.roster_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, on_result: ResultSink | None = None) -> AppState:
    """
    Create AppState from the provided settings and start its worker.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    roster = Roster()
    store = RosterFile(settings.roster_path)
    worker = TaskWorker(
        roster,
        store,
        on_result=on_result,
        drain_on_stop=bool(getattr(settings, "drain_on_stop", False)),
    )

    state = AppState(
        settings=settings,
        roster=roster,
        history=UndoHistory(),
        store=store,
        worker=worker,
    )
    worker.start()
    logger.info("State ready file=%s drain_on_stop=%s", store.path, worker.drain_on_stop)
    return state
