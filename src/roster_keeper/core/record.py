# src/roster_keeper/core/record.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .errors import InvalidRecordError


def _validate(name: Any, age: Any) -> None:
    if not isinstance(name, str) or not name.strip():
        raise InvalidRecordError(f"name must be a non-empty string, got {name!r}")
    # bool is an int subclass; reject it explicitly.
    if isinstance(age, bool) or not isinstance(age, int):
        raise InvalidRecordError(f"age must be an integer, got {age!r}")
    if age < 0:
        raise InvalidRecordError(f"age must be >= 0, got {age}")


@dataclass(frozen=True, slots=True)
class PersistedRecord:
    """The persistable view of a Record: everything except the secret."""

    name: str
    age: int

    def __post_init__(self) -> None:
        _validate(self.name, self.age)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "age": self.age}

    @classmethod
    def from_dict(cls, raw: Any) -> PersistedRecord:
        if not isinstance(raw, dict):
            raise InvalidRecordError(f"record entry must be an object, got {type(raw).__name__}")
        return cls(name=raw.get("name"), age=raw.get("age"))

    def to_record(self) -> Record:
        # Secrets never travel through persistence; a loaded record has none.
        return Record(name=self.name, age=self.age)


@dataclass(frozen=True, slots=True)
class Record:
    """
    One roster entry.

    `secret` lives only in memory. It is excluded from repr, equality and from
    every serialized form (use `persisted()` to get the storable view).
    """

    name: str
    age: int
    secret: str = field(default="", repr=False, compare=False)

    def __post_init__(self) -> None:
        _validate(self.name, self.age)

    def persisted(self) -> PersistedRecord:
        return PersistedRecord(name=self.name, age=self.age)
