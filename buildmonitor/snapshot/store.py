"""In-memory, read-only build server snapshot.

``SnapshotStore`` holds ``JobRecord`` history captured from a build server
and exposes it through the Protocols in ``buildmonitor.core.collaborator``
so job views can be computed without a live server.

The store validates its topology once, on construction:
- every downstream name must refer to a job in the snapshot;
- the downstream graph must be acyclic (Kahn's algorithm).
Job views never re-check this; they rely on the DAG guarantee.
"""

from __future__ import annotations

import json
import logging
from collections import deque
from collections.abc import Iterable
from datetime import datetime, timedelta
from pathlib import Path

from pydantic import ValidationError

from buildmonitor.core.collaborator import ChangeTracking
from buildmonitor.models.jobs import (
    BuildRecord,
    ChangeRecord,
    JobRecord,
    SnapshotDocument,
)
from buildmonitor.models.results import Result

logger = logging.getLogger(__name__)


class SnapshotError(RuntimeError):
    """Raised when a snapshot file cannot be read or parsed."""


class UnknownJobError(LookupError):
    """Raised when a job name does not exist in the snapshot."""


class CyclicTopologyError(ValueError):
    """Raised when the downstream job graph contains a cycle."""


# ---------------------------------------------------------------------------
# Adapters - satisfy the collaborator Protocols over stored records
# ---------------------------------------------------------------------------


class StoredContributor:
    """A culprit, identified by full name only."""

    def __init__(self, full_name: str) -> None:
        self.full_name = full_name

    def __repr__(self) -> str:
        return f"StoredContributor({self.full_name!r})"


class StoredProject:
    """The owning job of a build, as seen from that build."""

    def __init__(self, store: SnapshotStore, job_name: str) -> None:
        self._store = store
        self._job_name = job_name

    @property
    def downstream_projects(self) -> list[StoredJob]:
        record = self._store.record(self._job_name)
        return [self._store.job(name) for name in record.downstream]


class _StoredChangeTracking:
    """SCM data of a ``kind="build"`` record."""

    def __init__(self, store: SnapshotStore, job_name: str, record: BuildRecord) -> None:
        self._store = store
        self._job_name = job_name
        self._record = record

    @property
    def culprits(self) -> list[StoredContributor]:
        return [StoredContributor(name) for name in self._record.culprits]

    @property
    def change_set(self) -> list[ChangeRecord]:
        return list(self._record.changes)

    @property
    def project(self) -> StoredProject:
        return StoredProject(self._store, self._job_name)


class StoredRun:
    """One build of a stored job; ``previous_build`` follows history order."""

    def __init__(self, store: SnapshotStore, job_name: str, index: int) -> None:
        self._store = store
        self._job_name = job_name
        self._index = index
        self._record = store.record(job_name).builds[index]

    @property
    def number(self) -> int:
        return self._record.number

    @property
    def display_name(self) -> str:
        return self._record.display_name or f"#{self.number}"

    @property
    def url(self) -> str:
        return f"{self._store.job(self._job_name).url}{self.number}/"

    @property
    def timestamp(self) -> datetime:
        return self._record.timestamp

    @property
    def estimated_duration(self) -> timedelta:
        return self._record.estimated_duration

    @property
    def result(self) -> Result | None:
        return self._record.result

    @property
    def previous_build(self) -> StoredRun | None:
        if self._index + 1 >= len(self._store.record(self._job_name).builds):
            return None
        return StoredRun(self._store, self._job_name, self._index + 1)

    def hasnt_started_yet(self) -> bool:
        return self._record.queued

    def is_building(self) -> bool:
        return self._record.building

    def is_log_updated(self) -> bool:
        return self._record.log_updated

    def change_tracking(self) -> ChangeTracking | None:
        if self._record.kind != "build":
            return None
        return _StoredChangeTracking(self._store, self._job_name, self._record)

    def __repr__(self) -> str:
        return f"StoredRun({self._job_name!r}, {self.display_name!r})"


class StoredJob:
    """A job in the snapshot."""

    def __init__(self, store: SnapshotStore, record: JobRecord) -> None:
        self._store = store
        self._record = record

    @property
    def name(self) -> str:
        return self._record.name

    @property
    def display_name_or_none(self) -> str | None:
        return self._record.display_name

    @property
    def url(self) -> str:
        return self._record.url or f"job/{self._record.name}/"

    @property
    def last_build(self) -> StoredRun | None:
        if not self._record.builds:
            return None
        return StoredRun(self._store, self._record.name, 0)

    @property
    def builds(self) -> list[StoredRun]:
        """Full history, most recent first."""
        return [
            StoredRun(self._store, self._record.name, i)
            for i in range(len(self._record.builds))
        ]

    def __repr__(self) -> str:
        return f"StoredJob({self.name!r})"


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class SnapshotStore:
    """Read-only collection of jobs captured from a build server.

    Parameters
    ----------
    jobs:
        Job records.  Names must be unique.
    captured_at:
        When the snapshot was taken, if known.
    """

    def __init__(
        self,
        jobs: Iterable[JobRecord],
        *,
        captured_at: datetime | None = None,
    ) -> None:
        self._records: dict[str, JobRecord] = {}
        for record in jobs:
            if record.name in self._records:
                raise SnapshotError(f"Duplicate job name in snapshot: {record.name!r}")
            self._records[record.name] = record
        self.captured_at = captured_at

        self._validate_downstream_references()
        self._validate_no_cycles()

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _validate_downstream_references(self) -> None:
        for record in self._records.values():
            for name in record.downstream:
                if name not in self._records:
                    raise UnknownJobError(
                        f"Job {record.name!r} lists unknown downstream job {name!r}"
                    )

    def _validate_no_cycles(self) -> None:
        """Verify the downstream graph is a DAG (Kahn's algorithm)."""
        in_degree = {name: 0 for name in self._records}
        for record in self._records.values():
            for name in record.downstream:
                in_degree[name] += 1

        queue = deque(name for name, deg in in_degree.items() if deg == 0)
        visited = 0

        while queue:
            node = queue.popleft()
            visited += 1
            for dep in self._records[node].downstream:
                in_degree[dep] -= 1
                if in_degree[dep] == 0:
                    queue.append(dep)

        if visited != len(self._records):
            stuck = sorted(name for name, deg in in_degree.items() if deg > 0)
            raise CyclicTopologyError(
                f"Downstream job graph has a cycle involving: {', '.join(stuck)}"
            )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def record(self, name: str) -> JobRecord:
        """Return the raw record for ``name``."""
        try:
            return self._records[name]
        except KeyError:
            raise UnknownJobError(f"No job named {name!r} in snapshot") from None

    def job(self, name: str) -> StoredJob:
        """Return the job called ``name``."""
        logger.debug("Looking up job %s", name)
        return StoredJob(self, self.record(name))

    def job_names(self) -> list[str]:
        """All job names, in snapshot order."""
        return list(self._records)

    def jobs(self) -> list[StoredJob]:
        return [StoredJob(self, record) for record in self._records.values()]

    def root_jobs(self) -> list[StoredJob]:
        """Jobs that are not downstream of any other job."""
        targets = {
            name for record in self._records.values() for name in record.downstream
        }
        return [
            StoredJob(self, record)
            for name, record in self._records.items()
            if name not in targets
        ]

    def __contains__(self, name: object) -> bool:
        return name in self._records

    def __len__(self) -> int:
        return len(self._records)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def to_document(self) -> SnapshotDocument:
        return SnapshotDocument(
            captured_at=self.captured_at,
            jobs=list(self._records.values()),
        )

    def to_file(self, path: Path) -> None:
        """Write the snapshot as JSON to ``path``."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_document().model_dump_json(indent=2), encoding="utf-8")
        logger.info("Wrote snapshot of %d jobs to %s", len(self), path)

    @classmethod
    def from_document(cls, document: SnapshotDocument) -> SnapshotStore:
        return cls(document.jobs, captured_at=document.captured_at)

    @classmethod
    def from_file(cls, path: Path) -> SnapshotStore:
        """Load a snapshot from a JSON file.

        Raises
        ------
        SnapshotError
            If the file is missing or unreadable, is not UTF-8 JSON, or
            does not match the snapshot schema.
        UnknownJobError, CyclicTopologyError
            If the downstream topology is invalid.
        """
        path = Path(path)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            raise SnapshotError(f"Snapshot not found: {path}") from None
        except (OSError, UnicodeDecodeError) as exc:
            raise SnapshotError(f"Cannot read snapshot {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise SnapshotError(f"Snapshot {path} is not valid JSON: {exc}") from exc

        try:
            document = SnapshotDocument.model_validate(raw)
        except ValidationError as exc:
            raise SnapshotError(f"Snapshot {path} is malformed: {exc}") from exc

        store = cls.from_document(document)
        logger.info("Loaded snapshot of %d jobs from %s", len(store), path)
        return store
