"""Snapshot records describing jobs and their build history.

These are the serialized form of what the build-automation server knows
about a job.  They carry no behaviour; ``buildmonitor.snapshot`` wraps them
in adapters that satisfy the read contract in
``buildmonitor.core.collaborator``.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from buildmonitor.models.results import Result


class ChangeRecord(BaseModel):
    """A single SCM change entry attached to a build."""

    model_config = ConfigDict(frozen=True)

    commit_id: str
    author: str
    msg: str = ""


class BuildRecord(BaseModel):
    """One execution of a job.

    ``kind`` tags the capability of the build: ``"build"`` records carry SCM
    data (culprits and a change set), ``"run"`` records are generic runs
    without change tracking.
    """

    model_config = ConfigDict(frozen=True)

    number: int
    kind: Literal["build", "run"] = "build"
    display_name: str | None = None  # defaults to "#<number>"
    timestamp: datetime
    estimated_duration: timedelta = timedelta(0)
    result: Result | None = None  # None while running
    queued: bool = False
    building: bool = False
    log_updated: bool = False
    culprits: list[str] = []  # contributor full names
    changes: list[ChangeRecord] = []


class JobRecord(BaseModel):
    """A job definition with its history and downstream edges."""

    model_config = ConfigDict(frozen=True)

    name: str
    display_name: str | None = None
    url: str = ""  # defaults to "job/<name>/"
    builds: list[BuildRecord] = Field(
        default_factory=list,
        description="Build history, most recent first.",
    )
    downstream: list[str] = []  # names of directly downstream jobs


class SnapshotDocument(BaseModel):
    """Top-level shape of a snapshot file."""

    model_config = ConfigDict(frozen=True)

    schema_version: str = "1"
    captured_at: datetime | None = None
    jobs: list[JobRecord] = []
