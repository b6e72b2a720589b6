# src/roster_keeper/core/roster.py

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from .record import Record

logger = logging.getLogger(__name__)


class Roster:
    """
    The shared, ordered collection of records.

    Thread-safety:
    - the console thread (commands) and the worker thread (tasks) both use the same instance;
    - every read and write holds one lock, so a snapshot never sees half an append/replace;
    - the internal list is never handed out, readers get an immutable tuple.

    Duplicates are allowed. `remove` matches by identity, not by value: undoing an add
    must not take out an unrelated record that happens to have the same name and age.
    """

    def __init__(self, records: Iterable[Record] = ()) -> None:
        self._lock = threading.RLock()
        self._records: list[Record] = list(records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __repr__(self) -> str:
        return f"Roster(size={len(self)})"

    def append(self, record: Record) -> None:
        with self._lock:
            self._records.append(record)
            logger.debug("Roster append name=%s size=%d", record.name, len(self._records))

    def remove(self, record: Record) -> bool:
        """Remove the first occurrence of this exact instance. Returns False if absent."""
        with self._lock:
            for i, item in enumerate(self._records):
                if item is record:
                    del self._records[i]
                    logger.debug("Roster remove name=%s size=%d", record.name, len(self._records))
                    return True
        return False

    def replace_all(self, records: Iterable[Record]) -> None:
        # Materialize before taking the lock so a failing iterator can't leave a partial state.
        new_records = list(records)
        with self._lock:
            self._records = new_records
            logger.debug("Roster replaced size=%d", len(new_records))

    def snapshot(self) -> tuple[Record, ...]:
        with self._lock:
            return tuple(self._records)
