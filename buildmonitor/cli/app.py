"""Main Typer application - imports and registers all CLI commands.

Entry point: ``buildmonitor`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import logging

import typer

from buildmonitor.cli.commands.demo import demo_cmd
from buildmonitor.cli.commands.jobs import jobs_cmd
from buildmonitor.cli.commands.show import show_cmd
from buildmonitor.config import config

app = typer.Typer(
    name="buildmonitor",
    help="buildmonitor: job health views for build dashboards.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="show", help="Show the health view of a job.")(show_cmd)
app.command(name="jobs", help="List jobs in a snapshot.")(jobs_cmd)
app.command(name="demo", help="Show the monitor over a synthetic pipeline.")(demo_cmd)


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        None,
        "--log-level",
        help="Logging level (defaults to BUILDMONITOR_LOG_LEVEL).",
    ),
) -> None:
    """Configure logging before any command runs."""
    logging.basicConfig(
        level=(log_level or config.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
