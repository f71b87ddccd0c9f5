"""Helpers shared by CLI commands."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import typer
from rich.console import Console

from buildmonitor.snapshot.store import (
    CyclicTopologyError,
    SnapshotError,
    SnapshotStore,
    UnknownJobError,
)


def load_store(path: Path, console: Console) -> SnapshotStore:
    """Load a snapshot or exit with code 1 and a readable error."""
    try:
        return SnapshotStore.from_file(path)
    except SnapshotError as exc:
        console.print(f"[bold red]Cannot load snapshot:[/bold red] {exc}")
        console.print("[dim]Export one from your build server or try: buildmonitor demo[/dim]")
        raise typer.Exit(code=1) from exc
    except (UnknownJobError, CyclicTopologyError) as exc:
        console.print(f"[bold red]Invalid job topology:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc


def parse_reference_time(value: str | None) -> datetime | None:
    """Parse an ISO-8601 ``--at`` option; naive times are taken as UTC."""
    if value is None:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise typer.BadParameter(f"not an ISO-8601 timestamp: {value!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
