# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from types import SimpleNamespace

import pytest

from roster_keeper.cli.bootstrap import create_initial_state
from roster_keeper.core.state import AppState

from .fakes import RecordingSink


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="roster-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        roster_path=tmp_path / "data" / "roster.json",
        drain_on_stop=False,
        stop_timeout_seconds=5.0,
    )


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def state(settings: SimpleNamespace, sink: RecordingSink) -> Iterator[AppState]:
    """AppState with a real RosterFile under tmp_path and a recording result sink."""
    st = create_initial_state(settings=settings, on_result=sink)
    yield st
    st.shutdown()
