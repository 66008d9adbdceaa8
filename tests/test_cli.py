"""Tests for the command-line interface."""

import json

import pytest
from typer.testing import CliRunner

from timetable_scheduler.cli import EXIT_LOAD_ERROR, EXIT_PARTIAL, EXIT_SUCCESS, app

runner = CliRunner()


def _flat(output):
    """Collapse line wrapping from the rich console."""
    return " ".join(output.split())


def _input_args(data_dir):
    return [
        "--courses",
        str(data_dir / "courses.csv"),
        "--professors",
        str(data_dir / "professors.csv"),
        "--rooms",
        str(data_dir / "rooms.csv"),
        "--timeslots",
        str(data_dir / "timeslots.csv"),
    ]


class TestScheduleCommand:
    """Tests for the schedule command."""

    def test_full_schedule_exits_zero(self, data_dir):
        result = runner.invoke(app, ["schedule", *_input_args(data_dir)])

        assert result.exit_code == EXIT_SUCCESS
        assert "SUCCESS" in _flat(result.output)
        assert "Courses scheduled: 2" in _flat(result.output)

    def test_exports_json_with_default_suffix(self, data_dir, tmp_path):
        output = tmp_path / "out" / "schedule"
        result = runner.invoke(app, ["schedule", *_input_args(data_dir), "-o", str(output)])

        assert result.exit_code == EXIT_SUCCESS
        data = json.loads(output.with_suffix(".json").read_text(encoding="utf-8"))
        assert data["success"] is True
        assert {a["course_id"] for a in data["assignments"]} == {"C1", "C2"}

    @pytest.mark.parametrize("format_type,suffix", [("csv", ".csv"), ("excel", ".xlsx")])
    def test_exports_other_formats(self, data_dir, tmp_path, format_type, suffix):
        output = tmp_path / "schedule"
        result = runner.invoke(
            app, ["schedule", *_input_args(data_dir), "-o", str(output), "-f", format_type]
        )

        assert result.exit_code == EXIT_SUCCESS
        assert output.with_suffix(suffix).exists()

    def test_partial_schedule_exits_one(self, data_dir):
        (data_dir / "rooms.csv").write_text(
            "roomId,name,capacity,features,unavailableSlots\nR1,Closet,5,projector,\n",
            encoding="utf-8",
        )
        result = runner.invoke(app, ["schedule", *_input_args(data_dir)])

        assert result.exit_code == EXIT_PARTIAL
        assert "PARTIAL" in _flat(result.output)
        assert "capacity_exceeded" in _flat(result.output)

    def test_iteration_cap(self, data_dir):
        result = runner.invoke(
            app, ["schedule", *_input_args(data_dir), "--max-iterations", "0"]
        )

        assert result.exit_code == EXIT_PARTIAL
        assert "Reached maximum iterations: 0" in _flat(result.output)

    def test_load_error_exits_two(self, data_dir):
        (data_dir / "courses.csv").write_text(
            "courseId,name,duration,expectedEnrollment,professorId,requiredFeatures,preferredSlots\n"
            "C1,Programming,2,80,P1,projector,42\n",
            encoding="utf-8",
        )
        result = runner.invoke(app, ["schedule", *_input_args(data_dir)])

        assert result.exit_code == EXIT_LOAD_ERROR
        assert "Unknown time slot ID" in _flat(result.output)

    def test_duplicate_course_id_exits_two(self, data_dir):
        (data_dir / "courses.csv").write_text(
            "courseId,name,duration,expectedEnrollment,professorId\n"
            "C1,Programming,1,10,P1\n"
            "C1,Databases,1,10,P1\n",
            encoding="utf-8",
        )
        result = runner.invoke(app, ["schedule", *_input_args(data_dir)])

        assert result.exit_code == EXIT_LOAD_ERROR
        assert "Duplicate courseId" in _flat(result.output)

    def test_missing_file_exits_two(self, data_dir, tmp_path):
        args = _input_args(data_dir)
        args[args.index("--rooms") + 1] = str(tmp_path / "missing.csv")
        result = runner.invoke(app, ["schedule", *args])

        assert result.exit_code == EXIT_LOAD_ERROR
        assert "File not found" in _flat(result.output)

    def test_invalid_timeout_exits_two(self, data_dir):
        result = runner.invoke(app, ["schedule", *_input_args(data_dir), "--timeout", "soon"])

        assert result.exit_code == EXIT_LOAD_ERROR
        assert "Invalid timeout" in _flat(result.output)

    def test_soft_preferences_and_options_accepted(self, data_dir):
        result = runner.invoke(
            app,
            [
                "schedule",
                *_input_args(data_dir),
                "--soft-preferences",
                "--timeout",
                "5m",
                "--seed",
                "42",
                "--enforce-max-load",
            ],
        )

        assert result.exit_code == EXIT_SUCCESS


class TestValidateCommand:
    """Tests for the validate command."""

    def test_valid_input(self, data_dir):
        result = runner.invoke(app, ["validate", *_input_args(data_dir)])

        assert result.exit_code == 0
        assert "Courses: 2" in _flat(result.output)
        assert "Input files are valid" in _flat(result.output)

    def test_reports_unknown_professors(self, data_dir):
        (data_dir / "professors.csv").write_text(
            "professorId,name,maxLoad,unavailableSlots\nP2,Dr. Alan Turing,,\n",
            encoding="utf-8",
        )
        result = runner.invoke(app, ["validate", *_input_args(data_dir)])

        assert result.exit_code == 0
        assert "unknown professors: C1" in _flat(result.output)

    def test_invalid_input_exits_two(self, data_dir):
        (data_dir / "timeslots.csv").write_text("slotId\n1\n", encoding="utf-8")
        result = runner.invoke(app, ["validate", *_input_args(data_dir)])

        assert result.exit_code == EXIT_LOAD_ERROR
        assert "missing required columns" in _flat(result.output)
