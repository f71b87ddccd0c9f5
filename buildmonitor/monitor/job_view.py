"""JobView - derived, point-in-time health view of one job.

A JobView never stores state of its own.  It holds a job handle and a
reference time; every accessor re-reads the job's build history, so two
calls against an unchanged snapshot with the same reference time return the
same answer.

Downstream jobs are wrapped in their own JobView, and a downstream job that
is ``"failing"`` makes its parent ``"failing"`` too.  The downstream graph
must be acyclic; recursion is not guarded here.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from datetime import datetime, timedelta, timezone
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from buildmonitor.core.clock import SYSTEM_CLOCK, Clock
from buildmonitor.core.collaborator import Job, Run
from buildmonitor.models.results import Result

logger = logging.getLogger(__name__)

SUCCESSFUL = "successful"
FAILING = "failing"
RUNNING_SUFFIX = " running"

JobStatusName = Literal[
    "successful",
    "successful running",
    "failing",
    "failing running",
]


class JobStatus(BaseModel):
    """Serializable snapshot of a JobView, including its downstream tree.

    Computed fresh on every ``JobView.snapshot()`` call and never persisted.
    Dumping with ``by_alias=True`` yields the dashboard field names
    (``buildName``, ``buildUrl``, ``downstreamJobs``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    url: str
    status: JobStatusName
    build_name: str | None = Field(default=None, alias="buildName")
    build_url: str | None = Field(default=None, alias="buildUrl")
    progress: int = Field(default=0, ge=0, le=100)
    culprits: list[str] = []
    changes: list[str] = []
    downstream_jobs: list[JobStatus] = Field(default=[], alias="downstreamJobs")

    @property
    def is_running(self) -> bool:
        return self.status.endswith(RUNNING_SUFFIX)

    @property
    def is_failing(self) -> bool:
        return self.status.startswith(FAILING)

    def walk(self) -> Iterator[JobStatus]:
        """Yield this status and every downstream status, depth first."""
        yield self
        for child in self.downstream_jobs:
            yield from child.walk()


class JobView:
    """Pure read-only view over a job's build history.

    Use ``JobView.of(job)`` to view the job as of now, or
    ``JobView.of(job, reference_time)`` to pin the reference time.

    Parameters
    ----------
    job:
        The job to view.
    reference_time:
        The "now" that build progress is measured against.
    clock:
        Time source for downstream views.  Each downstream view samples
        ``clock.now()`` when it is created rather than inheriting
        ``reference_time``.
    """

    def __init__(
        self,
        job: Job,
        reference_time: datetime,
        clock: Clock | None = None,
    ) -> None:
        self._job = job
        self._reference_time = _aware(reference_time)
        self._clock = clock or SYSTEM_CLOCK

    @classmethod
    def of(
        cls,
        job: Job,
        reference_time: datetime | None = None,
        *,
        clock: Clock | None = None,
    ) -> JobView:
        clock = clock or SYSTEM_CLOCK
        if reference_time is None:
            reference_time = clock.now()
        return cls(job, reference_time, clock)

    @property
    def reference_time(self) -> datetime:
        return self._reference_time

    # ------------------------------------------------------------------
    # Derived fields
    # ------------------------------------------------------------------

    def name(self) -> str:
        display_name = self._job.display_name_or_none
        return display_name if display_name is not None else self._job.name

    def url(self) -> str:
        return self._job.url

    def status(self) -> str:
        """One of ``"successful"``, ``"failing"``, optionally ``" running"``.

        A downstream job whose own status is exactly ``"failing"`` turns
        this job ``"failing"``; this job's running suffix is kept.
        """
        return self._compose_status(
            downstream.status() for downstream in self.downstream_jobs()
        )

    def build_name(self) -> str | None:
        last_build = self._job.last_build
        return last_build.display_name if last_build is not None else None

    def build_url(self) -> str | None:
        last_build = self._job.last_build
        return last_build.url if last_build is not None else None

    def progress(self) -> int:
        """Percentage of the estimated duration the last build has used.

        0 when the last build is not running.  100 once the build overruns
        its estimate, or when there is no usable estimate.
        """
        last_build = self._job.last_build
        if not is_active(last_build):
            return 0

        elapsed = self._reference_time - _aware(last_build.timestamp)
        estimated = last_build.estimated_duration

        if elapsed > estimated:
            return 100

        if estimated > timedelta(0):
            return max(0, (elapsed * 100) // estimated)

        return 100

    def culprits(self) -> set[str]:
        """Full names of everyone attributed to the current failure streak.

        Walks back from the last build until the most recent success
        (exclusive).  Running builds are passed over without contributing.
        """
        culprits: set[str] = set()

        run = self._job.last_build
        while run is not None and run.result != Result.SUCCESS:
            tracking = run.change_tracking()
            if tracking is not None and not is_active(run):
                culprits.update(culprit.full_name for culprit in tracking.culprits)
            run = run.previous_build

        return culprits

    def changes(self) -> list[str]:
        """Change log of the last build as ``"<id>: <author> - <msg>"``."""
        last_build = self._job.last_build
        tracking = last_build.change_tracking() if last_build is not None else None
        if tracking is None:
            return []

        return [
            f"{entry.commit_id}: {entry.author} - {entry.msg}"
            for entry in tracking.change_set
        ]

    def downstream_jobs(self) -> list[JobView]:
        """Views of the jobs directly downstream of the last build's project."""
        last_build = self._job.last_build
        tracking = last_build.change_tracking() if last_build is not None else None
        if tracking is None:
            return []

        projects = list(tracking.project.downstream_projects)
        if projects:
            logger.debug(
                "Expanding %d downstream jobs of %s", len(projects), self._job.name
            )
        return [JobView.of(project, clock=self._clock) for project in projects]

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def snapshot(self) -> JobStatus:
        """Evaluate every field into a ``JobStatus`` tree.

        Downstream views are evaluated once per call; nothing is kept
        between calls.
        """
        children = [downstream.snapshot() for downstream in self.downstream_jobs()]

        return JobStatus(
            name=self.name(),
            url=self.url(),
            status=self._compose_status(child.status for child in children),
            build_name=self.build_name(),
            build_url=self.build_url(),
            progress=self.progress(),
            culprits=sorted(self.culprits()),
            changes=self.changes(),
            downstream_jobs=children,
        )

    def to_dict(self) -> dict[str, Any]:
        """The dashboard JSON shape of ``snapshot()``."""
        return self.snapshot().model_dump(by_alias=True, mode="json")

    def __str__(self) -> str:
        return self.name()

    def __repr__(self) -> str:
        return f"JobView({self._job.name!r}, {self._reference_time.isoformat()})"

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _compose_status(self, downstream_statuses: Iterable[str]) -> str:
        status = SUCCESSFUL if self._is_successful() else FAILING

        if any(downstream == FAILING for downstream in downstream_statuses):
            status = FAILING

        if self._is_running():
            status += RUNNING_SUFFIX

        return status

    def _last_result(self) -> Result:
        # A running build has no final result yet; fall back to the one before.
        last_build = self._job.last_build
        if is_active(last_build):
            last_build = last_build.previous_build

        if last_build is None or last_build.result is None:
            return Result.NOT_BUILT
        return last_build.result

    def _is_successful(self) -> bool:
        return self._last_result() == Result.SUCCESS

    def _is_running(self) -> bool:
        return is_active(self._job.last_build)


def is_active(run: Run | None) -> bool:
    """True while a build is queued, executing, or still writing its log."""
    return run is not None and (
        run.hasnt_started_yet() or run.is_building() or run.is_log_updated()
    )


def _aware(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant
