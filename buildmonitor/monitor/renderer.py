"""Rich terminal renderer for job views.

Turns a ``JobStatus`` tree into Rich renderables, with color-coded status
and an optional continuous ``Rich.Live`` mode.

Color scheme
------------
- green         : successful
- yellow        : successful running
- red           : failing
- bold magenta  : failing running
"""

from __future__ import annotations

import time
from collections.abc import Callable
from datetime import datetime

from rich.console import Console, Group
from rich.live import Live
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text
from rich.tree import Tree

from buildmonitor.monitor.job_view import JobStatus

# ---------------------------------------------------------------------------
# Status -> Rich style mapping
# ---------------------------------------------------------------------------

_STATUS_STYLES: dict[str, str] = {
    "successful": "bold green",
    "successful running": "bold yellow",
    "failing": "bold red",
    "failing running": "bold magenta",
}

_STATUS_LABELS: dict[str, str] = {
    "successful": "[green]SUCCESSFUL[/green]",
    "successful running": "[yellow]RUNNING[/yellow]",
    "failing": "[bold red]FAILING[/bold red]",
    "failing running": "[magenta]FAILING (RUNNING)[/magenta]",
}

_BAR_WIDTH = 20


def progress_bar(progress: int, width: int = _BAR_WIDTH) -> str:
    """Render ``progress`` (0-100) as a fixed-width text bar."""
    filled = progress * width // 100
    return "[" + "#" * filled + "-" * (width - filled) + f"] {progress:3d}%"


class MonitorRenderer:
    """Renders ``JobStatus`` trees as Rich terminal output.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    # ------------------------------------------------------------------
    # Single status render
    # ------------------------------------------------------------------

    def render_status(
        self,
        status: JobStatus,
        *,
        reference_time: datetime | None = None,
    ) -> Panel:
        """Render a JobStatus tree as a Rich Panel.

        Returns a Rich renderable (Panel) that can be printed or used
        in Rich.Live.
        """
        tree = self._build_tree(status)

        all_jobs = list(status.walk())
        failing = sum(1 for job in all_jobs if job.is_failing)
        running = sum(1 for job in all_jobs if job.is_running)

        summary_parts: list[str] = [
            f"[bold]Jobs:[/bold] {len(all_jobs)}",
            f"[bold]Failing:[/bold] "
            + (f"[red]{failing}[/red]" if failing else "[green]0[/green]"),
            f"[bold]Running:[/bold] {running}",
        ]
        summary = "  |  ".join(summary_parts)

        subtitle = None
        if reference_time is not None:
            subtitle = f"As of: {reference_time.strftime('%Y-%m-%d %H:%M:%S %Z')}"

        return Panel(
            Group(tree, Text(""), Text.from_markup(summary)),
            title=f"[bold]Build Monitor: {escape(status.name)}[/bold]",
            subtitle=subtitle,
            border_style=_STATUS_STYLES.get(status.status, "blue"),
            padding=(1, 2),
        )

    def _build_tree(self, status: JobStatus) -> Tree:
        tree = Tree(self._job_label(status))
        self._add_details(tree, status)
        return tree

    def _add_details(self, node: Tree, status: JobStatus) -> None:
        if status.is_running:
            node.add(f"[yellow]{escape(progress_bar(status.progress))}[/yellow]")
        if status.culprits:
            node.add(f"[red]Culprits:[/red] {escape(', '.join(status.culprits))}")
        for change in status.changes:
            node.add(f"[dim]{escape(change)}[/dim]")
        for child in status.downstream_jobs:
            branch = node.add(self._job_label(child))
            self._add_details(branch, child)

    @staticmethod
    def _job_label(status: JobStatus) -> str:
        style = _STATUS_STYLES.get(status.status, "")
        label = _STATUS_LABELS.get(status.status, status.status)
        build = f" [dim]{escape(status.build_name)}[/dim]" if status.build_name else ""
        return f"[{style}]{escape(status.name)}[/{style}]{build}  {label}"

    # ------------------------------------------------------------------
    # Continuous live rendering
    # ------------------------------------------------------------------

    def render_live(
        self,
        compute: Callable[[], tuple[JobStatus, datetime]],
        *,
        refresh_hz: float = 2.0,
    ) -> None:
        """Continuously re-render a job view in Rich Live mode.

        ``compute`` is called on every refresh cycle and must return a
        fresh status and the reference time it was computed at.  Press
        Ctrl+C to stop.
        """
        interval = 1.0 / max(refresh_hz, 0.1)

        with Live(
            console=self.console,
            refresh_per_second=refresh_hz,
            transient=False,
        ) as live:
            try:
                while True:
                    status, at = compute()
                    live.update(self.render_status(status, reference_time=at))
                    time.sleep(interval)
            except KeyboardInterrupt:
                status, at = compute()
                live.update(self.render_status(status, reference_time=at))

    # ------------------------------------------------------------------
    # Standalone print
    # ------------------------------------------------------------------

    def print_status(
        self,
        status: JobStatus,
        *,
        reference_time: datetime | None = None,
    ) -> None:
        """Print a single status tree to the console."""
        self.console.print(self.render_status(status, reference_time=reference_time))
