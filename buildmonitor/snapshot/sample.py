"""Synthetic snapshot used by ``buildmonitor demo``.

A small pipeline: ``compile`` feeds ``unit-tests`` and ``package``;
``package`` feeds ``deploy-staging``.  Unit tests have been failing for two
builds, and ``compile`` is currently running.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from buildmonitor.models.jobs import BuildRecord, ChangeRecord, JobRecord
from buildmonitor.snapshot.store import SnapshotStore


def build_sample_store(now: datetime) -> SnapshotStore:
    """Return a demo snapshot whose timestamps are relative to ``now``."""
    compile_job = JobRecord(
        name="compile",
        display_name="Compile",
        downstream=["unit-tests", "package"],
        builds=[
            BuildRecord(
                number=42,
                timestamp=now - timedelta(minutes=3),
                estimated_duration=timedelta(minutes=10),
                building=True,
                changes=[
                    ChangeRecord(
                        commit_id="9f2c1e7",
                        author="Ana Lima",
                        msg="Speed up incremental compilation",
                    ),
                ],
            ),
            BuildRecord(
                number=41,
                timestamp=now - timedelta(minutes=60),
                estimated_duration=timedelta(minutes=10),
                result="success",
            ),
        ],
    )
    unit_tests = JobRecord(
        name="unit-tests",
        display_name="Unit Tests",
        builds=[
            BuildRecord(
                number=17,
                timestamp=now - timedelta(minutes=40),
                estimated_duration=timedelta(minutes=5),
                result="failure",
                culprits=["Ana Lima", "Ben Ortiz"],
                changes=[
                    ChangeRecord(
                        commit_id="3b8d0aa",
                        author="Ben Ortiz",
                        msg="Refactor fixtures",
                    ),
                ],
            ),
            BuildRecord(
                number=16,
                timestamp=now - timedelta(minutes=90),
                estimated_duration=timedelta(minutes=5),
                result="unstable",
                culprits=["Ana Lima"],
            ),
            BuildRecord(
                number=15,
                timestamp=now - timedelta(minutes=180),
                estimated_duration=timedelta(minutes=5),
                result="success",
                culprits=["Chris Park"],
            ),
        ],
    )
    package = JobRecord(
        name="package",
        downstream=["deploy-staging"],
        builds=[
            BuildRecord(
                number=8,
                timestamp=now - timedelta(minutes=50),
                estimated_duration=timedelta(minutes=2),
                result="success",
            ),
        ],
    )
    deploy = JobRecord(
        name="deploy-staging",
        display_name="Deploy (staging)",
    )
    return SnapshotStore(
        [compile_job, unit_tests, package, deploy],
        captured_at=now,
    )
