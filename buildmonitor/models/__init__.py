"""buildmonitor data models - all Pydantic v2, all frozen (immutable)."""

from buildmonitor.models.jobs import (
    BuildRecord,
    ChangeRecord,
    JobRecord,
    SnapshotDocument,
)
from buildmonitor.models.results import Result

__all__ = [
    # results
    "Result",
    # jobs
    "BuildRecord",
    "ChangeRecord",
    "JobRecord",
    "SnapshotDocument",
]
