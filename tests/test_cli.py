"""Tests für die Kommandozeile (click.testing.CliRunner)."""

from datetime import date, time
from pathlib import Path

import pytest
from click.testing import CliRunner

from main import cli
from models.assignment import Assignment
from models.course import Course
from models.snapshot import AssignmentSnapshot
from models.teacher import Teacher
from models.timeslot import TimeSlot
from models.weight_profile import WeightProfile


def _slot(start: time, end: time) -> TimeSlot:
    minutes = (end.hour * 60 + end.minute) - (start.hour * 60 + start.minute)
    return TimeSlot(date=date(2025, 9, 1), start_time=start, end_time=end, duration_minutes=minutes)


def _write_snapshot(path: Path, assignments: list[Assignment], weights=None) -> Path:
    snapshot = AssignmentSnapshot(
        teachers=[
            Teacher(id=1, name="Alice", qualifications=["Mathematics"]),
            Teacher(id=2, name="Bob", qualifications=["Physics"]),
        ],
        courses=[
            Course(id=1, topic="Mathematics", lessons_count=4, lesson_duration=60,
                   start_date=date(2025, 9, 1), end_date=date(2025, 10, 31)),
        ],
        assignments=assignments,
        weights=weights,
    )
    path.write_text(snapshot.model_dump_json(), encoding="utf-8")
    return path


@pytest.fixture
def runner(tmp_path: Path, monkeypatch) -> CliRunner:
    # Ohne Konfigurationsdatei im Arbeitsverzeichnis gelten die Defaults
    monkeypatch.chdir(tmp_path)
    return CliRunner()


class TestConfigCommands:
    def test_config_init_creates_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["config", "init"])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "config" / "engine_config.yaml").exists()

    def test_config_init_does_not_overwrite(self, runner):
        runner.invoke(cli, ["config", "init"])
        result = runner.invoke(cli, ["config", "init"])
        assert result.exit_code == 0
        assert "existiert bereits" in result.output

    def test_config_show(self, runner):
        result = runner.invoke(cli, ["config", "show"])
        assert result.exit_code == 0, result.output
        assert "Balanced" in result.output


class TestProfileCommands:
    def test_list(self, runner):
        result = runner.invoke(cli, ["profiles", "list"])
        assert result.exit_code == 0
        assert "Emergency" in result.output

    def test_check_valid(self, runner):
        result = runner.invoke(cli, ["profiles", "check", "Balanced"])
        assert result.exit_code == 0
        assert "gültig" in result.output

    def test_check_unknown_profile(self, runner):
        result = runner.invoke(cli, ["profiles", "check", "Unbekannt"])
        assert result.exit_code == 1
        assert "nicht gefunden" in result.output

    def test_rebalance(self, runner):
        result = runner.invoke(cli, ["profiles", "rebalance", "Balanced", "equality", "50"])
        assert result.exit_code == 0, result.output
        assert "50/25/25" in result.output

    def test_rebalance_out_of_range(self, runner):
        result = runner.invoke(cli, ["profiles", "rebalance", "Balanced", "loyalty", "120"])
        assert result.exit_code == 1

    def test_rebalance_save(self, runner, tmp_path):
        result = runner.invoke(
            cli, ["profiles", "rebalance", "Emergency", "loyalty", "20", "--save"]
        )
        assert result.exit_code == 0, result.output
        from config.manager import ConfigManager
        saved = ConfigManager().load(tmp_path / "config" / "engine_config.yaml")
        assert saved.get_profile("Emergency").as_tuple() == (48, 32, 20)


class TestSnapshotCommands:
    def test_check_clean_snapshot(self, runner, tmp_path):
        path = _write_snapshot(tmp_path / "snap.json", [Assignment(id=1, teacher_id=1, course_id=1)])
        result = runner.invoke(cli, ["check", str(path)])
        assert result.exit_code == 0, result.output
        assert "KEINE KONFLIKTE" in result.output

    def test_check_high_conflict_exit_code(self, runner, tmp_path):
        path = _write_snapshot(tmp_path / "snap.json", [Assignment(id=1, teacher_id=2, course_id=1)])
        result = runner.invoke(cli, ["check", str(path)])
        assert result.exit_code == 1
        assert "qualification_mismatch" in result.output

    def test_check_unknown_reference(self, runner, tmp_path):
        path = _write_snapshot(tmp_path / "snap.json", [Assignment(id=1, teacher_id=7, course_id=1)])
        result = runner.invoke(cli, ["check", str(path)])
        assert result.exit_code == 1
        assert "Unbekannte Referenz" in result.output

    def test_evaluate_accepted(self, runner, tmp_path):
        snap = _write_snapshot(tmp_path / "snap.json", [])
        cand = tmp_path / "candidate.json"
        cand.write_text(
            Assignment(id=1, teacher_id=1, course_id=1,
                       scheduled_slots=[_slot(time(9, 0), time(10, 0))]).model_dump_json(),
            encoding="utf-8",
        )
        result = runner.invoke(cli, ["evaluate", str(snap), str(cand), "--profile", "Emergency"])
        assert result.exit_code == 0, result.output
        assert "ZULÄSSIG" in result.output

    def test_evaluate_uses_snapshot_weights(self, runner, tmp_path):
        weights = WeightProfile(name="Schnappschuss", equality=50, continuity=40, loyalty=10)
        snap = _write_snapshot(tmp_path / "snap.json", [], weights)
        cand = tmp_path / "candidate.json"
        cand.write_text(Assignment(id=1, teacher_id=1, course_id=1).model_dump_json(), encoding="utf-8")
        result = runner.invoke(cli, ["evaluate", str(snap), str(cand)])
        assert result.exit_code == 0, result.output
        assert "Schnappschuss" in result.output

    def test_evaluate_rejected(self, runner, tmp_path):
        snap = _write_snapshot(tmp_path / "snap.json", [])
        cand = tmp_path / "candidate.json"
        cand.write_text(Assignment(id=1, teacher_id=2, course_id=1).model_dump_json(), encoding="utf-8")
        result = runner.invoke(cli, ["evaluate", str(snap), str(cand)])
        assert result.exit_code == 1
        assert "ABGELEHNT" in result.output

    def test_workload(self, runner, tmp_path):
        path = _write_snapshot(tmp_path / "snap.json", [
            Assignment(id=1, teacher_id=1, course_id=1,
                       scheduled_slots=[_slot(time(9, 0), time(10, 0))]),
        ])
        result = runner.invoke(cli, ["workload", str(path)])
        assert result.exit_code == 0, result.output
        assert "Alice" in result.output

    def test_verbose_flag(self, runner, tmp_path):
        path = _write_snapshot(tmp_path / "snap.json", [Assignment(id=1, teacher_id=1, course_id=1)])
        result = runner.invoke(cli, ["--verbose", "check", str(path)])
        assert result.exit_code == 0, result.output
