# src/roster_keeper/storage/roster_file.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from ..core.errors import CorruptPersistedData, InvalidRecordError, PersistenceUnavailable
from ..core.record import PersistedRecord, Record

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


class RosterFile:
    """
    JSON file holding the persisted roster.

    Layout:
        {"version": 1, "records": [{"name": "...", "age": 42}, ...]}

    Only PersistedRecord views are written, so secrets never reach the disk.
    Writes go to a sibling temp file which is fsync'ed and then os.replace()'d over
    the target: a reader sees either the previous file or the new one, never a partial write.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"RosterFile({str(self.path)!r})"

    def save(self, records: Iterable[Record]) -> int:
        payload = {
            "version": FORMAT_VERSION,
            "records": [r.persisted().to_dict() for r in records],
        }
        data = json.dumps(payload, ensure_ascii=False, indent=2)

        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as fh:
                fh.write(data)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp, self.path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise PersistenceUnavailable(f"cannot write {self.path}: {e}", path=self.path) from e

        with contextlib.suppress(OSError):
            # Best-effort: keep the roster private on disk.
            os.chmod(self.path, 0o600)

        count = len(payload["records"])
        logger.info("Saved roster: %d records to %s", count, self.path)
        return count

    def load(self) -> list[Record]:
        try:
            raw = self.path.read_text("utf-8")
        except OSError as e:
            raise PersistenceUnavailable(f"cannot read {self.path}: {e}", path=self.path) from e
        except UnicodeDecodeError as e:
            raise CorruptPersistedData(f"{self.path} is not valid UTF-8", path=self.path) from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptPersistedData(f"{self.path} is not valid JSON: {e}", path=self.path) from e

        records = self._decode(data)
        logger.info("Loaded roster: %d records from %s", len(records), self.path)
        return records

    def _decode(self, data: Any) -> list[Record]:
        if not isinstance(data, dict):
            raise CorruptPersistedData(f"{self.path}: top level must be an object", path=self.path)

        version = data.get("version")
        if version != FORMAT_VERSION:
            raise CorruptPersistedData(
                f"{self.path}: unsupported format version {version!r}", path=self.path
            )

        items = data.get("records")
        if not isinstance(items, list):
            raise CorruptPersistedData(f"{self.path}: 'records' must be a list", path=self.path)

        out: list[Record] = []
        for i, item in enumerate(items):
            try:
                out.append(PersistedRecord.from_dict(item).to_record())
            except InvalidRecordError as e:
                raise CorruptPersistedData(f"{self.path}: record #{i}: {e}", path=self.path) from e
        return out
