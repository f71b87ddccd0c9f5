"""``buildmonitor show JOB`` - show the health view of a job.

Displays status, progress, culprits, changes and the downstream job tree.
Supports JSON output, a pinned reference time and continuous live mode.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console

from buildmonitor.cli.commands._common import load_store, parse_reference_time
from buildmonitor.config import config
from buildmonitor.core.clock import SYSTEM_CLOCK
from buildmonitor.monitor.job_view import JobView
from buildmonitor.monitor.renderer import MonitorRenderer
from buildmonitor.snapshot.store import UnknownJobError

console = Console()


def show_cmd(
    job_name: str = typer.Argument(
        ...,
        help="Name of the job to show.",
    ),
    snapshot: Path = typer.Option(
        None,
        "--snapshot",
        "-s",
        help="Path to the snapshot JSON file (defaults to BUILDMONITOR_SNAPSHOT_PATH).",
    ),
    output_format: str = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format: 'table' or 'json' (the dashboard JSON shape).",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Shortcut for --format json.",
    ),
    at: str = typer.Option(
        None,
        "--at",
        help="ISO-8601 reference time for progress (defaults to now).",
    ),
    live: bool = typer.Option(
        False,
        "--live",
        "-L",
        help="Enable continuous live monitoring mode (Ctrl+C to exit).",
    ),
    refresh_hz: float = typer.Option(
        None,
        "--refresh",
        "-r",
        help="Refresh rate in Hz for live mode.",
    ),
) -> None:
    """Show the health view of a job and its downstream jobs.

    The view is a pure read-only projection over the snapshot.  Every
    display recomputes it from the build history.
    """
    if as_json:
        if output_format not in (None, "json"):
            raise typer.BadParameter(
                f"--json conflicts with --format {output_format!r}",
                param_hint="--json",
            )
        output_format = "json"
    output_format = (output_format or config.default_format).lower()
    if output_format not in ("table", "json"):
        raise typer.BadParameter(
            f"unknown format {output_format!r}", param_hint="--format"
        )
    reference_time = parse_reference_time(at)
    store = load_store(snapshot or config.snapshot_path, console)

    try:
        job = store.job(job_name)
    except UnknownJobError:
        console.print(f"[bold red]Job not found:[/bold red] {job_name}")
        names = store.job_names()
        if names:
            console.print("\n[bold]Available jobs:[/bold]")
            for name in names[:10]:
                console.print(f"  [cyan]{name}[/cyan]")
            if len(names) > 10:
                console.print(f"  [dim]... and {len(names) - 10} more[/dim]")
        raise typer.Exit(code=1)

    if output_format == "json":
        view = JobView.of(job, reference_time)
        typer.echo(json.dumps(view.to_dict(), indent=2))
        return

    renderer = MonitorRenderer(console=console)

    if live:
        hz = refresh_hz or config.refresh_hz
        console.print(
            f"[dim]Live monitoring {job_name} at {hz} Hz. Press Ctrl+C to exit.[/dim]"
        )
        console.print()

        def compute():
            at_now = reference_time or SYSTEM_CLOCK.now()
            return JobView.of(job, at_now).snapshot(), at_now

        renderer.render_live(compute, refresh_hz=hz)
    else:
        view = JobView.of(job, reference_time)
        renderer.print_status(view.snapshot(), reference_time=view.reference_time)
