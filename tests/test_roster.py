# tests/test_roster.py

from __future__ import annotations

import pytest

from roster_keeper.core.errors import InvalidRecordError
from roster_keeper.core.record import PersistedRecord, Record
from roster_keeper.core.roster import Roster


def test_record_validation() -> None:
    with pytest.raises(InvalidRecordError):
        Record(name="  ", age=3)
    with pytest.raises(InvalidRecordError):
        Record(name="Ann", age=-1)
    with pytest.raises(InvalidRecordError):
        Record(name="Ann", age=True)  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        Record(name="Ann", age="12")  # type: ignore[arg-type]


def test_secret_is_hidden_from_repr_equality_and_persisted_view() -> None:
    a = Record(name="Ann", age=30, secret="hunter2")
    b = Record(name="Ann", age=30, secret="other")

    assert "hunter2" not in repr(a)
    assert a == b
    assert a.persisted() == PersistedRecord(name="Ann", age=30)
    assert a.persisted().to_dict() == {"name": "Ann", "age": 30}
    assert PersistedRecord.from_dict({"name": "Ann", "age": 30}).to_record().secret == ""


def test_display_order_is_insertion_order() -> None:
    roster = Roster()
    names = ["Zed", "Ann", "Bob", "Ann"]
    for i, n in enumerate(names):
        roster.append(Record(name=n, age=20 + i))

    assert [r.name for r in roster.snapshot()] == names
    assert len(roster) == 4


def test_remove_matches_identity_not_value() -> None:
    first = Record(name="Ann", age=30)
    twin = Record(name="Ann", age=30)
    roster = Roster([first, twin])

    assert roster.remove(twin) is True
    snap = roster.snapshot()
    assert len(snap) == 1
    assert snap[0] is first

    assert roster.remove(twin) is False
    assert len(roster) == 1


def test_snapshot_is_immutable_copy() -> None:
    roster = Roster([Record(name="Ann", age=1)])
    snap = roster.snapshot()
    roster.append(Record(name="Bob", age=2))

    assert isinstance(snap, tuple)
    assert len(snap) == 1
    assert len(roster.snapshot()) == 2


def test_replace_all_swaps_whole_content() -> None:
    roster = Roster([Record(name="Old", age=1)])
    roster.replace_all(Record(name=n, age=5) for n in ("A", "B"))
    assert [r.name for r in roster.snapshot()] == ["A", "B"]


def test_replace_all_with_failing_iterable_keeps_old_content() -> None:
    roster = Roster([Record(name="Old", age=1)])

    def broken():
        yield Record(name="New", age=2)
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        roster.replace_all(broken())
    assert [r.name for r in roster.snapshot()] == ["Old"]
