# src/roster_keeper/core/state.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ..commands.history import UndoHistory
from ..tasks.task_worker import TaskWorker
from .ports import RosterStore
from .roster import Roster

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    """
    Everything one running application owns.

    Built once by cli.bootstrap.create_initial_state() and passed explicitly to the
    console loop and request dispatch (no module-level singletons).
    """

    # Settings object (config.Settings or a test SimpleNamespace).
    settings: Any

    roster: Roster
    history: UndoHistory
    store: RosterStore
    worker: TaskWorker

    _shut_down: bool = field(default=False, repr=False)

    @property
    def stop_timeout(self) -> float:
        return float(getattr(self.settings, "stop_timeout_seconds", 5.0))

    def shutdown(self) -> bool:
        """Stop and join the worker. Safe to call more than once."""
        if self._shut_down:
            return not self.worker.is_alive()
        self._shut_down = True
        joined = self.worker.stop(timeout=self.stop_timeout)
        if not joined:
            logger.warning("Worker still running after shutdown timeout.")
        return joined
