"""Read-only build server snapshots.

Modules
-------
store
    ``SnapshotStore`` loads job history from JSON and hands out adapters
    implementing the collaborator read contract.
sample
    A synthetic pipeline used by ``buildmonitor demo``.
"""

from buildmonitor.snapshot.store import (
    CyclicTopologyError,
    SnapshotError,
    SnapshotStore,
    StoredJob,
    StoredRun,
    UnknownJobError,
)

__all__ = [
    "CyclicTopologyError",
    "SnapshotError",
    "SnapshotStore",
    "StoredJob",
    "StoredRun",
    "UnknownJobError",
]
