"""
Configuration loader for the lab grader.

Handles parsing and validation of YAML configuration files. The whole
grading setup (deadline, marks, files, tasks and their requirement
patterns) lives in one immutable GraderConfig that is passed explicitly
into the pipeline.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, NonNegativeInt, PositiveInt, model_validator

from .config import (
    DEFAULT_OUTPUT_DIR,
    DEFAULT_SUBMISSION_ID,
    FILE_LOCATIONS,
    IGNORED_DIRS,
    MANIFEST_FILENAME,
    PREFERRED_PROJECT_DIRS,
    SOURCE_DIRNAME,
    SUBMISSION_LATE,
    SUBMISSION_MAX,
    SUMMARY_ENV_VAR,
)
from .models import Task


class ConfigError(ValueError):
    """Configuration is empty or inconsistent (wrapped by pydantic when raised in a validator)."""


class GraderConfig(BaseModel):
    """
    Configuration model for the grader.
    """

    model_config = ConfigDict(frozen=True)

    lab_name: str = Field(..., min_length=1, description="Lab name used in report headings")
    submission_id: str = Field(DEFAULT_SUBMISSION_ID, description="Identifier written to grade.csv")
    deadline: AwareDatetime = Field(..., description="Deadline, ISO-8601 with explicit UTC offset")
    submission_max: NonNegativeInt = Field(SUBMISSION_MAX, description="Timing marks when on time")
    submission_late: NonNegativeInt = Field(SUBMISSION_LATE, description="Timing marks when late")
    total_max: PositiveInt | None = Field(None, description="Expected overall maximum, checked if set")

    output_dir: Path = Field(DEFAULT_OUTPUT_DIR, description="Directory for grade.csv and feedback")
    summary_env_var: str = Field(SUMMARY_ENV_VAR, description="Env var naming the CI summary file")

    manifest_name: str = Field(MANIFEST_FILENAME, description="File marking a project folder")
    source_dir: str = Field(SOURCE_DIRNAME, description="Source folder marking a project folder")
    preferred_project_dirs: list[str] = Field(
        default_factory=lambda: list(PREFERRED_PROJECT_DIRS), description="Known lab folder names"
    )
    file_locations: list[str] = Field(
        default_factory=lambda: list(FILE_LOCATIONS), description="Conventional file directories"
    )
    ignored_dirs: list[str] = Field(
        default_factory=lambda: list(IGNORED_DIRS), description="Directory names skipped while searching"
    )

    files: dict[str, list[str]] = Field(..., description="Logical file name -> acceptable basenames")
    tasks: list[Task] = Field(..., min_length=1, description="Tasks in grading order")

    @model_validator(mode="after")
    def _check_consistency(self) -> "GraderConfig":
        if self.submission_late > self.submission_max:
            raise ConfigError("submission_late cannot exceed submission_max")

        for name, basenames in self.files.items():
            if not basenames:
                raise ConfigError(f"File '{name}' has no acceptable basenames")

        ids = [t.id for t in self.tasks]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ConfigError(f"Duplicate task ids: {', '.join(duplicates)}")

        for task in self.tasks:
            unknown = [f for f in task.required_files if f not in self.files]
            if unknown:
                raise ConfigError(f"Task '{task.id}' refers to unknown files: {', '.join(unknown)}")

        if self.total_max is not None and self.total_max != self.max_score:
            raise ConfigError(
                f"Task marks ({self.tasks_max}) + submission marks ({self.submission_max}) "
                f"= {self.max_score}, expected {self.total_max}"
            )
        return self

    @property
    def tasks_max(self) -> int:
        return sum(t.marks for t in self.tasks)

    @property
    def max_score(self) -> int:
        return self.tasks_max + self.submission_max

    @property
    def excluded_dirs(self) -> list[str]:
        """Ignored directory names plus the grader's own output folder."""
        excluded = list(self.ignored_dirs)
        if self.output_dir.name and self.output_dir.name not in excluded:
            excluded.append(self.output_dir.name)
        return excluded


def load_config(config_path: Path) -> GraderConfig:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        GraderConfig object with loaded values.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        yaml.YAMLError: If config file is invalid YAML.
        ConfigError: If the file is empty.
        ValidationError: If config data is invalid or inconsistent.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        config_data: dict[str, Any] | None = yaml.safe_load(f)

    if not config_data:
        raise ConfigError(f"Configuration file is empty: {config_path}")

    # Resolve the output directory relative to the config file location
    if config_data.get("output_dir"):
        output_dir = Path(config_data["output_dir"])
        if not output_dir.is_absolute():
            config_data["output_dir"] = config_path.parent / output_dir
    else:
        config_data["output_dir"] = config_path.parent / DEFAULT_OUTPUT_DIR

    return GraderConfig(**config_data)
