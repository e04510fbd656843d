"""
Unit tests for the planner command line interface.
Commands run through typer's CliRunner against temporary databases.
"""

import pytest
from typer.testing import CliRunner

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

import planner


runner = CliRunner()


@pytest.fixture
def cli(seeded_db, temp_config, monkeypatch):
    """CLI bound to the seeded database."""
    monkeypatch.setattr(planner, "_db", seeded_db)
    monkeypatch.setattr(planner, "_config", temp_config)
    return planner.app


class TestInitDb:
    """Tests for the init-db command."""

    def test_creates_seeded_database(self, tmp_path, temp_config, monkeypatch):
        db_file = tmp_path / "cli" / "museum.db"
        monkeypatch.setenv("MUSEUM_PLANNER_DB", str(db_file))
        monkeypatch.setattr(planner, "_config", temp_config)

        result = runner.invoke(planner.app, ["init-db", "--seed"])

        assert result.exit_code == 0
        assert db_file.exists()
        assert "Database created" in result.output

    def test_refuses_to_overwrite(self, tmp_path, temp_config, monkeypatch):
        db_file = tmp_path / "museum.db"
        db_file.write_bytes(b"")
        monkeypatch.setenv("MUSEUM_PLANNER_DB", str(db_file))
        monkeypatch.setattr(planner, "_config", temp_config)

        result = runner.invoke(planner.app, ["init-db"])

        assert result.exit_code == 1
        assert "already exists" in result.output


class TestTaskCommands:
    """Tests for add, complete and tasks."""

    def test_add(self, cli, seeded_db):
        result = runner.invoke(cli, ["add", "Order frames", "-c", "collection", "-p", "4"])

        assert result.exit_code == 0
        assert "Task created" in result.output
        assert seeded_db.count("tasks") == 5

    def test_add_invalid_category(self, cli):
        result = runner.invoke(cli, ["add", "Mow lawn", "-c", "gardening"])

        assert result.exit_code == 1
        assert "Invalid category" in result.output

    def test_complete(self, cli, seeded_db):
        result = runner.invoke(cli, ["complete", "2", "--hours", "1.5"])

        assert result.exit_code == 0
        assert seeded_db.execute_one("SELECT status FROM tasks WHERE id = 2")["status"] == "completed"

    def test_complete_missing(self, cli):
        result = runner.invoke(cli, ["complete", "99"])
        assert result.exit_code == 1

    def test_tasks_empty_filter(self, cli):
        result = runner.invoke(cli, ["tasks", "--status", "completed"])

        assert result.exit_code == 0
        assert "No tasks found" in result.output


class TestDashboardCommands:
    """Tests for the read-only dashboard commands."""

    def test_suggest(self, cli):
        result = runner.invoke(cli, ["suggest", "4", "--hour", "10"])

        assert result.exit_code == 0
        assert "Right now" in result.output

    def test_suggest_missing(self, cli):
        result = runner.invoke(cli, ["suggest", "42", "--hour", "10"])
        assert result.exit_code == 1

    @pytest.mark.parametrize("command", ["today", "top", "schedule", "budget"])
    def test_renders(self, cli, command):
        result = runner.invoke(cli, [command])
        assert result.exit_code == 0
