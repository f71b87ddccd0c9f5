"""Smoke test - computes the job view over the sample pipeline.

Usage:
    python demo_smoke.py
"""

from __future__ import annotations

import json

from buildmonitor.config import config
from buildmonitor.core.clock import SYSTEM_CLOCK
from buildmonitor.monitor.job_view import JobView
from buildmonitor.snapshot.sample import build_sample_store


def main() -> None:
    """Print the dashboard JSON for every root job of the sample pipeline."""
    print(f"buildmonitor | Environment: {config.environment}")
    print()

    now = SYSTEM_CLOCK.now()
    store = build_sample_store(now)

    for job in store.root_jobs():
        view = JobView.of(job, now)
        print(f"{view}: {view.status()} ({view.progress()}%)")
        print(json.dumps(view.to_dict(), indent=2))


if __name__ == "__main__":
    main()
