"""Read contract required from the build-automation server.

Jobs, builds and projects are owned by the server; the job view only reads
them through these Protocols.  Builds that carry SCM data expose it through
the optional ``ChangeTracking`` capability returned by
``Run.change_tracking()``.  A run without the capability yields empty
culprits, changes and downstream jobs.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta
from typing import Protocol, runtime_checkable

from buildmonitor.models.results import Result


@runtime_checkable
class Contributor(Protocol):
    """A user attributed to a build."""

    @property
    def full_name(self) -> str: ...


@runtime_checkable
class ChangeEntry(Protocol):
    """A single SCM change recorded against a build."""

    @property
    def commit_id(self) -> str: ...

    @property
    def author(self) -> str: ...

    @property
    def msg(self) -> str: ...


@runtime_checkable
class Project(Protocol):
    """The job definition a build belongs to, seen from the build."""

    @property
    def downstream_projects(self) -> Sequence[Job]: ...


@runtime_checkable
class ChangeTracking(Protocol):
    """Capability of builds that record culprits, changes and their project."""

    @property
    def culprits(self) -> Iterable[Contributor]: ...

    @property
    def change_set(self) -> Iterable[ChangeEntry]: ...

    @property
    def project(self) -> Project: ...


@runtime_checkable
class Run(Protocol):
    """One execution of a job."""

    @property
    def display_name(self) -> str: ...

    @property
    def url(self) -> str: ...

    @property
    def timestamp(self) -> datetime: ...

    @property
    def estimated_duration(self) -> timedelta: ...

    @property
    def result(self) -> Result | None: ...

    @property
    def previous_build(self) -> Run | None: ...

    def hasnt_started_yet(self) -> bool: ...

    def is_building(self) -> bool: ...

    def is_log_updated(self) -> bool: ...

    def change_tracking(self) -> ChangeTracking | None: ...


@runtime_checkable
class Job(Protocol):
    """A named build definition with history."""

    @property
    def name(self) -> str: ...

    @property
    def display_name_or_none(self) -> str | None: ...

    @property
    def url(self) -> str: ...

    @property
    def last_build(self) -> Run | None: ...
