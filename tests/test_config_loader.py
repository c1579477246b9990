"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from labgrader.config_loader import ConfigError, load_config

from conftest import SHIPPED_CONFIG, make_config


class TestShippedConfig:
    def test_task_marks_add_up(self, shipped_config):
        assert [t.marks for t in shipped_config.tasks] == [20, 25, 20, 15]
        assert shipped_config.tasks_max == 80
        assert shipped_config.max_score == 100

    def test_deadline_is_offset_qualified(self, shipped_config):
        assert shipped_config.deadline.utcoffset().total_seconds() == 3 * 3600

    def test_required_files_follow_requirements(self, shipped_config):
        assert shipped_config.tasks[0].required_files == ["TaskApp"]
        assert shipped_config.tasks[3].required_files == ["TaskApp", "TaskList"]

    def test_output_dir_relative_to_config(self, shipped_config):
        assert shipped_config.output_dir == SHIPPED_CONFIG.parent / "artifacts"
        assert "artifacts" in shipped_config.excluded_dirs


class TestLoadConfig:
    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yml")

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "empty.yml"
        path.write_text("")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_absolute_output_dir_kept(self, tmp_path: Path):
        path = tmp_path / "cfg.yml"
        out = tmp_path / "elsewhere"
        path.write_text(
            "lab_name: x\n"
            "deadline: '2026-01-01T00:00:00+00:00'\n"
            f"output_dir: {out.as_posix()}\n"
            "files: {App: [App.jsx]}\n"
            "tasks:\n"
            "  - {id: t1, name: T1, marks: 5, requirements: [{label: l, files: [App], patterns: [x]}]}\n"
        )
        assert load_config(path).output_dir == out


class TestValidation:
    def test_deadline_needs_offset(self):
        with pytest.raises(ValidationError):
            make_config(deadline="2026-02-25T20:59:00")

    def test_unknown_file_reference(self):
        tasks = [{"id": "t1", "name": "T", "marks": 5,
                  "requirements": [{"label": "l", "files": ["Nope"], "patterns": ["x"]}]}]
        with pytest.raises(ValidationError, match="unknown files: Nope"):
            make_config(tasks=tasks)

    def test_duplicate_task_ids(self):
        task = {"id": "t1", "name": "T", "marks": 5,
                "requirements": [{"label": "l", "files": ["App"], "patterns": ["x"]}]}
        with pytest.raises(ValidationError, match="Duplicate task ids: t1"):
            make_config(tasks=[task, task])

    def test_total_max_mismatch(self):
        with pytest.raises(ValidationError, match="expected 100"):
            make_config(total_max=100)

    def test_total_max_match(self):
        assert make_config(total_max=40).max_score == 40

    def test_late_marks_cannot_exceed_full(self):
        with pytest.raises(ValidationError):
            make_config(submission_max=5, submission_late=10)

    def test_marks_must_be_positive(self):
        task = {"id": "t1", "name": "T", "marks": 0, "requirements": []}
        with pytest.raises(ValidationError):
            make_config(tasks=[task])

    def test_config_is_immutable(self):
        config = make_config()
        with pytest.raises(ValidationError):
            config.lab_name = "changed"
