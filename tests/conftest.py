"""Shared test fixtures for buildmonitor."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from buildmonitor.core.clock import FixedClock
from buildmonitor.models.jobs import BuildRecord, ChangeRecord, JobRecord
from buildmonitor.models.results import Result
from buildmonitor.snapshot.store import SnapshotStore

REFERENCE_TIME = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    """A fixed reference time for progress calculations."""
    return REFERENCE_TIME


@pytest.fixture
def clock() -> FixedClock:
    """A clock frozen one hour after the reference time."""
    return FixedClock(REFERENCE_TIME + timedelta(hours=1))


# ---------------------------------------------------------------------------
# Record factories - shared across test modules
# ---------------------------------------------------------------------------


@pytest.fixture
def make_build() -> Callable[..., BuildRecord]:
    """Factory fixture: build a completed BuildRecord with sensible defaults."""

    def _factory(
        number: int = 1,
        result: Result | None = Result.SUCCESS,
        **overrides: Any,
    ) -> BuildRecord:
        defaults: dict[str, Any] = {
            "number": number,
            "timestamp": REFERENCE_TIME - timedelta(hours=number),
            "estimated_duration": timedelta(minutes=10),
            "result": result,
        }
        defaults.update(overrides)
        return BuildRecord(**defaults)

    return _factory


@pytest.fixture
def make_running_build() -> Callable[..., BuildRecord]:
    """Factory fixture: a build still executing, started ``elapsed`` ago."""

    def _factory(
        number: int = 99,
        elapsed: timedelta = timedelta(minutes=3),
        estimated: timedelta = timedelta(minutes=10),
        **overrides: Any,
    ) -> BuildRecord:
        defaults: dict[str, Any] = {
            "number": number,
            "timestamp": REFERENCE_TIME - elapsed,
            "estimated_duration": estimated,
            "result": None,
            "building": True,
        }
        defaults.update(overrides)
        return BuildRecord(**defaults)

    return _factory


@pytest.fixture
def make_change() -> Callable[..., ChangeRecord]:
    """Factory fixture: an SCM change entry."""

    def _factory(
        commit_id: str = "abc123",
        author: str = "Ana Lima",
        msg: str = "Fix the build",
    ) -> ChangeRecord:
        return ChangeRecord(commit_id=commit_id, author=author, msg=msg)

    return _factory


@pytest.fixture
def make_job() -> Callable[..., JobRecord]:
    """Factory fixture: a JobRecord; builds are given most recent first."""

    def _factory(
        name: str = "job",
        builds: list[BuildRecord] | None = None,
        downstream: list[str] | None = None,
        **overrides: Any,
    ) -> JobRecord:
        defaults: dict[str, Any] = {
            "name": name,
            "builds": builds or [],
            "downstream": downstream or [],
        }
        defaults.update(overrides)
        return JobRecord(**defaults)

    return _factory


@pytest.fixture
def make_store() -> Callable[..., SnapshotStore]:
    """Factory fixture: a SnapshotStore over the given job records."""

    def _factory(*jobs: JobRecord) -> SnapshotStore:
        return SnapshotStore(jobs)

    return _factory
