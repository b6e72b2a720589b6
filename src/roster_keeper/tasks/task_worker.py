# src/roster_keeper/tasks/task_worker.py

from __future__ import annotations

"""
Single background worker.

One thread takes tasks from an unbounded FIFO queue and runs them one at a time,
in submission order. The console thread only enqueues and never waits.

Shutdown:
- non-draining (default): tasks still queued at stop() are discarded,
  the task in progress (if any) finishes;
- draining (drain_on_stop=True): every queued task runs before the thread exits.
Either way stop() joins the thread with a bounded wait.
"""

import itertools
import logging
import queue
import threading
import time

from ..core.errors import WorkerStoppedError
from ..core.ports import ResultSink, RosterStore
from ..core.roster import Roster
from .task_handlers import run_task
from .task_models import Task, TaskKind, TaskResult, WorkerState

logger = logging.getLogger(__name__)

_STOP = object()


class TaskWorker:
    def __init__(
        self,
        roster: Roster,
        store: RosterStore,
        *,
        on_result: ResultSink | None = None,
        drain_on_stop: bool = False,
        name: str = "roster-worker",
    ) -> None:
        self._roster = roster
        self._store = store
        self._on_result = on_result
        self.drain_on_stop = bool(drain_on_stop)
        self.name = name

        self._queue: queue.Queue[Task | object] = queue.Queue()
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._stop_requested = False
        self._state = WorkerState.IDLE

        # Tasks enqueued but not yet finished or discarded (for wait_all()).
        self._outstanding = 0
        self._done = threading.Condition()

        self.executed = 0
        self.discarded = 0

    def __repr__(self) -> str:
        return f"TaskWorker(name={self.name!r}, state={self._state.value}, pending={self.pending()})"

    # ---- inspection ----

    @property
    def state(self) -> WorkerState:
        return self._state

    def pending(self) -> int:
        return self._queue.qsize()

    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    # ---- lifecycle ----

    def start(self) -> None:
        with self._lock:
            if self._stop_requested:
                raise WorkerStoppedError("worker was stopped and cannot be restarted")
            if self._thread is not None:
                return
            self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
            self._thread.start()
        logger.info("Worker %s started (drain_on_stop=%s).", self.name, self.drain_on_stop)

    def enqueue(self, kind: TaskKind | str) -> Task:
        """Append a task to the queue and return immediately."""
        kind = TaskKind(kind)
        with self._lock:
            if self._stop_requested:
                raise WorkerStoppedError(f"worker is stopping, {kind.value} task rejected")
            task = Task(kind=kind, task_id=next(self._ids), submitted_at=time.time())
            with self._done:
                self._outstanding += 1
            self._queue.put(task)
        logger.debug("Enqueued task id=%s kind=%s", task.task_id, kind.value)
        return task

    def stop(self, timeout: float | None = 5.0) -> bool:
        """
        Request shutdown and wait (bounded) for the worker thread to exit.

        Idempotent. Returns True when no worker thread is running anymore.
        """
        with self._lock:
            first_call = not self._stop_requested
            self._stop_requested = True
            thread = self._thread

            if first_call:
                if thread is None:
                    self._state = WorkerState.STOPPED
                    self._discard_pending()
                else:
                    self._state = WorkerState.DRAINING
                    if not self.drain_on_stop:
                        self._discard_pending()
                    self._queue.put(_STOP)
                logger.info("Stopping worker %s (discarded=%d)...", self.name, self.discarded)

        if thread is None:
            return True
        if thread is threading.current_thread():
            # Called from a result sink on the worker itself; the loop exits after this task.
            return False

        thread.join(timeout=timeout)
        alive = thread.is_alive()
        if alive:
            logger.warning("Worker %s did not stop within %ss.", self.name, timeout)
        elif first_call:
            logger.info("Worker %s stopped.", self.name)
        return not alive

    def wait_all(self, timeout: float | None = None) -> bool:
        """Block until every enqueued task has finished or been discarded."""
        with self._done:
            return self._done.wait_for(lambda: self._outstanding == 0, timeout=timeout)

    # ---- internals ----

    def _discard_pending(self) -> None:
        while True:
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                return
            try:
                if isinstance(item, Task):
                    self._discard(item)
            finally:
                self._queue.task_done()

    def _discard(self, task: Task) -> None:
        self.discarded += 1
        logger.info("Discarded task id=%s kind=%s (worker stopping).", task.task_id, task.kind.value)
        self._mark_finished()

    def _mark_finished(self) -> None:
        with self._done:
            self._outstanding -= 1
            self._done.notify_all()

    def _run(self) -> None:
        logger.debug("Worker thread %s running.", self.name)
        try:
            while True:
                item = self._queue.get()
                try:
                    if item is _STOP:
                        logger.debug("Worker %s received stop signal.", self.name)
                        return
                    assert isinstance(item, Task)

                    if self._stop_requested and not self.drain_on_stop:
                        self._discard(item)
                        continue

                    self._execute(item)
                finally:
                    self._queue.task_done()
        finally:
            self._state = WorkerState.STOPPED

    def _execute(self, task: Task) -> None:
        self._state = WorkerState.RUNNING
        logger.info("Running task id=%s kind=%s", task.task_id, task.kind.value)
        try:
            result = run_task(task, self._roster, self._store)
        except Exception as e:
            logger.exception("Task id=%s kind=%s crashed", task.task_id, task.kind.value)
            result = TaskResult(task=task, ok=False, message=f"{task.kind.value} failed: {e!r}")
        self.executed += 1

        # Reporting is part of the task: the worker stays RUNNING until the sink returns.
        try:
            if self._on_result is not None:
                self._on_result(result)
        except Exception:
            logger.exception("Result sink failed for task id=%s", task.task_id)
        finally:
            self._state = WorkerState.DRAINING if self._stop_requested else WorkerState.IDLE
            self._mark_finished()
