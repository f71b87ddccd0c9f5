"""buildmonitor CLI - Typer-based command-line interface.

Provides the ``buildmonitor`` command with subcommands for showing a job's
health view, listing the jobs in a snapshot, and running a demo.

All output uses Rich for formatted terminal display.
"""
