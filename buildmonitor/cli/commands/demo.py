"""``buildmonitor demo`` - show the build monitor over a synthetic pipeline.

Writes a sample snapshot (optionally to disk) and displays the view of its
root job with the full downstream tree.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from buildmonitor.core.clock import SYSTEM_CLOCK
from buildmonitor.monitor.job_view import JobView
from buildmonitor.monitor.renderer import MonitorRenderer
from buildmonitor.snapshot.sample import build_sample_store

console = Console()


def demo_cmd(
    output: Path = typer.Option(
        None,
        "--output",
        "-o",
        help="Also write the sample snapshot to this path.",
    ),
) -> None:
    """Show the build monitor over a synthetic four-job pipeline."""
    now = SYSTEM_CLOCK.now()
    store = build_sample_store(now)

    console.print()
    console.print(
        Panel(
            "[bold]buildmonitor demo[/bold]\n\n"
            "A synthetic pipeline: compile -> unit-tests, package -> deploy-staging.\n"
            "Failing downstream jobs turn their upstream job red.",
            border_style="cyan",
            padding=(1, 2),
        )
    )
    console.print()

    if output is not None:
        store.to_file(output)
        console.print(f"[bold green]Sample snapshot written:[/bold green] {output}")
        console.print()

    renderer = MonitorRenderer(console=console)
    for job in store.root_jobs():
        view = JobView.of(job, now)
        renderer.print_status(view.snapshot(), reference_time=now)
