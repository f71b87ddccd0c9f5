"""Unit tests for the CLI - Typer command registration and basic behavior.

Exercises CLI app registration, help output, and the show / jobs / demo
commands via typer.testing.CliRunner.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from buildmonitor.cli.app import app
from buildmonitor.models.results import Result
from buildmonitor.snapshot.store import SnapshotStore

runner = CliRunner()


@pytest.fixture
def snapshot_file(make_job, make_build, make_change, tmp_path: Path) -> Path:
    store = SnapshotStore(
        [
            make_job(
                "api",
                display_name="API",
                builds=[make_build(2, changes=[make_change("abc123", "Ana", "Tidy")])],
                downstream=["docs"],
            ),
            make_job("docs", builds=[make_build(1, Result.FAILURE, culprits=["Ben"])]),
        ]
    )
    path = tmp_path / "snapshot.json"
    store.to_file(path)
    return path


def _json_output(output: str) -> dict:
    return json.loads(output[output.index("{"):])


# ---------------------------------------------------------------------------
# Test: CLI help and registration
# ---------------------------------------------------------------------------


class TestCliApp:
    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        # Typer's no_args_is_help may exit with 0 or 2 depending on version
        assert result.exit_code in (0, 2)
        assert "usage" in result.output.lower()

    def test_help_flag(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "show" in result.output
        assert "jobs" in result.output
        assert "demo" in result.output

    @pytest.mark.parametrize("command", ["show", "jobs", "demo"])
    def test_command_help(self, command):
        result = runner.invoke(app, [command, "--help"])
        assert result.exit_code == 0


# ---------------------------------------------------------------------------
# Test: show
# ---------------------------------------------------------------------------


class TestShowCommand:
    def test_json_output(self, snapshot_file: Path):
        result = runner.invoke(
            app,
            [
                "show",
                "api",
                "--snapshot",
                str(snapshot_file),
                "--format",
                "json",
                "--at",
                "2026-03-01T12:00:00+00:00",
            ],
        )
        assert result.exit_code == 0, result.output
        data = _json_output(result.stdout)
        assert data["name"] == "API"
        assert data["status"] == "failing"
        assert data["buildName"] == "#2"
        assert data["changes"] == ["abc123: Ana - Tidy"]
        assert data["downstreamJobs"][0]["culprits"] == ["Ben"]

    def test_table_output(self, snapshot_file: Path):
        result = runner.invoke(app, ["show", "api", "--snapshot", str(snapshot_file)])
        assert result.exit_code == 0, result.output
        assert "API" in result.output
        assert "docs" in result.output

    def test_unknown_job(self, snapshot_file: Path):
        result = runner.invoke(app, ["show", "nope", "--snapshot", str(snapshot_file)])
        assert result.exit_code == 1
        assert "Job not found" in result.output
        assert "api" in result.output

    def test_missing_snapshot(self, tmp_path: Path):
        result = runner.invoke(
            app, ["show", "api", "--snapshot", str(tmp_path / "none.json")]
        )
        assert result.exit_code == 1
        assert "Cannot load snapshot" in result.output

    def test_snapshot_not_utf8(self, tmp_path: Path):
        path = tmp_path / "snapshot.json"
        path.write_bytes(b"\xff\xfe\x00")
        result = runner.invoke(app, ["show", "api", "--snapshot", str(path)])
        assert result.exit_code == 1
        assert "Cannot load snapshot" in result.output

    def test_cyclic_snapshot(self, tmp_path: Path):
        path = tmp_path / "snapshot.json"
        path.write_text(
            json.dumps(
                {
                    "jobs": [
                        {"name": "a", "downstream": ["b"]},
                        {"name": "b", "downstream": ["a"]},
                    ]
                }
            )
        )
        result = runner.invoke(app, ["show", "a", "--snapshot", str(path)])
        assert result.exit_code == 1
        assert "Invalid job topology" in result.output

    def test_bad_reference_time(self, snapshot_file: Path):
        result = runner.invoke(
            app, ["show", "api", "--snapshot", str(snapshot_file), "--at", "yesterday"]
        )
        assert result.exit_code == 2

    def test_bad_format(self, snapshot_file: Path):
        result = runner.invoke(
            app, ["show", "api", "--snapshot", str(snapshot_file), "--format", "xml"]
        )
        assert result.exit_code == 2

    def test_json_flag(self, snapshot_file: Path):
        result = runner.invoke(
            app,
            [
                "show",
                "api",
                "--snapshot",
                str(snapshot_file),
                "--json",
                "--at",
                "2026-03-01T12:00:00+00:00",
            ],
        )
        assert result.exit_code == 0, result.output
        data = _json_output(result.stdout)
        assert data["name"] == "API"
        assert data["downstreamJobs"][0]["name"] == "docs"

    def test_json_flag_conflicts_with_table_format(self, snapshot_file: Path):
        result = runner.invoke(
            app,
            ["show", "api", "--snapshot", str(snapshot_file), "--json", "--format", "table"],
        )
        assert result.exit_code == 2


# ---------------------------------------------------------------------------
# Test: jobs and demo
# ---------------------------------------------------------------------------


class TestJobsCommand:
    def test_lists_all_jobs(self, snapshot_file: Path):
        result = runner.invoke(app, ["jobs", "--snapshot", str(snapshot_file)])
        assert result.exit_code == 0, result.output
        assert "api" in result.output
        assert "docs" in result.output

    def test_roots_only(self, snapshot_file: Path):
        result = runner.invoke(
            app, ["jobs", "--snapshot", str(snapshot_file), "--roots"]
        )
        assert result.exit_code == 0, result.output
        assert "api" in result.output
        assert "docs" not in result.output

    def test_shows_build_number_and_history_size(
        self, make_job, make_build, tmp_path: Path
    ):
        path = tmp_path / "snapshot.json"
        SnapshotStore(
            [make_job("api", builds=[make_build(9), make_build(8), make_build(7)])]
        ).to_file(path)
        result = runner.invoke(app, ["jobs", "--snapshot", str(path)])
        assert result.exit_code == 0, result.output
        assert "No." in result.output
        assert "Builds" in result.output
        row = next(line for line in result.output.splitlines() if "api" in line)
        assert "#9" in row
        assert "3" in row.split("#9", 1)[1]

    def test_snapshot_is_a_directory(self, tmp_path: Path):
        result = runner.invoke(app, ["jobs", "--snapshot", str(tmp_path)])
        assert result.exit_code == 1
        assert "Cannot load snapshot" in result.output


class TestDemoCommand:
    def test_demo_runs_and_writes_snapshot(self, tmp_path: Path):
        output = tmp_path / "demo.json"
        result = runner.invoke(app, ["demo", "--output", str(output)])
        assert result.exit_code == 0, result.output
        assert "Compile" in result.output
        assert SnapshotStore.from_file(output).job_names() == [
            "compile",
            "unit-tests",
            "package",
            "deploy-staging",
        ]
