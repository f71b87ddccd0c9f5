"""``buildmonitor jobs`` - list the jobs in a snapshot."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from buildmonitor.cli.commands._common import load_store
from buildmonitor.config import config
from buildmonitor.monitor.job_view import JobView

console = Console()


def jobs_cmd(
    snapshot: Path = typer.Option(
        None,
        "--snapshot",
        "-s",
        help="Path to the snapshot JSON file (defaults to BUILDMONITOR_SNAPSHOT_PATH).",
    ),
    roots_only: bool = typer.Option(
        False,
        "--roots",
        help="Only list jobs that are not downstream of another job.",
    ),
) -> None:
    """List jobs with their last build, history size and current status."""
    store = load_store(snapshot or config.snapshot_path, console)
    jobs = store.root_jobs() if roots_only else store.jobs()

    if not jobs:
        console.print("[dim]No jobs in snapshot.[/dim]")
        return

    table = Table(title="Jobs")
    table.add_column("Job", style="cyan")
    table.add_column("Name")
    table.add_column("Last build")
    table.add_column("No.", justify="right")
    table.add_column("Builds", justify="right")
    table.add_column("Status")

    for job in jobs:
        view = JobView.of(job)
        builds = job.builds
        number = str(builds[0].number) if builds else "-"
        table.add_row(
            job.name,
            view.name(),
            view.build_name() or "-",
            number,
            str(len(builds)),
            view.status(),
        )

    console.print(table)
