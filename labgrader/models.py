"""
Pydantic models for the lab grader.

Defines the grading configuration types (tasks and their requirements)
and the per-run results consumed by the report formatter. All models are
frozen: a result is never modified once the stage that made it returns.
"""

import re
from datetime import datetime

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, PositiveInt, field_validator


class Requirement(BaseModel):
    """
    One independently checked pattern-presence condition.

    Attributes:
        label: Human-readable description shown in the checklist.
        files: Logical file names whose normalized source is searched.
        patterns: Alternative regular expressions; any match satisfies the requirement.
    """

    model_config = ConfigDict(frozen=True)

    label: str = Field(..., min_length=1, description="Checklist label")
    files: list[str] = Field(..., min_length=1, description="Logical files the patterns apply to")
    patterns: list[str] = Field(..., min_length=1, description="Alternative surface patterns")

    @field_validator("patterns")
    @classmethod
    def _patterns_compile(cls, patterns: list[str]) -> list[str]:
        for pattern in patterns:
            try:
                re.compile(pattern, re.IGNORECASE)
            except re.error as e:
                raise ValueError(f"Invalid pattern {pattern!r}: {e}") from e
        return patterns


class Task(BaseModel):
    """
    A gradable unit of functionality worth a fixed number of marks.

    Attributes:
        id: Short identifier (e.g. "t1").
        name: Display name used in reports.
        marks: Maximum marks for this task.
        requirements: Requirements in display order.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Task identifier")
    name: str = Field(..., min_length=1, description="Display name")
    marks: PositiveInt = Field(..., description="Maximum marks")
    requirements: list[Requirement] = Field(default_factory=list, description="Requirement checklist")

    @property
    def required_files(self) -> list[str]:
        """Logical files read by any requirement, in first-use order."""
        seen: list[str] = []
        for requirement in self.requirements:
            for name in requirement.files:
                if name not in seen:
                    seen.append(name)
        return seen


class RequirementCheck(BaseModel):
    """Outcome of a single requirement."""

    model_config = ConfigDict(frozen=True)

    label: str = Field(..., description="Requirement label")
    satisfied: bool = Field(..., description="Whether any alternative pattern matched")


class TaskResult(BaseModel):
    """
    Grade for one task.

    Attributes:
        task_id: Identifier of the graded task.
        name: Display name of the task.
        max_marks: Maximum marks for the task.
        score: Marks awarded (0 <= score <= max_marks).
        checks: Per-requirement outcomes; empty when the task was not evaluated.
        deductions: Reasons for lost marks.
    """

    model_config = ConfigDict(frozen=True)

    task_id: str = Field(..., description="Task identifier")
    name: str = Field(..., description="Task display name")
    max_marks: float = Field(..., gt=0, description="Maximum marks")
    score: float = Field(..., ge=0, description="Marks awarded")
    checks: list[RequirementCheck] = Field(default_factory=list, description="Requirement checklist")
    deductions: list[str] = Field(default_factory=list, description="Deduction reasons")

    @property
    def found(self) -> list[RequirementCheck]:
        return [c for c in self.checks if c.satisfied]

    @property
    def missing(self) -> list[RequirementCheck]:
        return [c for c in self.checks if not c.satisfied]


class ResolvedFile(BaseModel):
    """
    A logical file and where it was found, if anywhere.

    Attributes:
        name: Logical name used by requirements (e.g. "TaskApp").
        candidates: Acceptable basenames, in preference order.
        path: Absolute path, or None when the file could not be located.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Logical file name")
    candidates: list[str] = Field(..., min_length=1, description="Acceptable basenames")
    path: str | None = Field(default=None, description="Absolute path if found")

    @property
    def found(self) -> bool:
        return self.path is not None

    @property
    def display_name(self) -> str:
        return self.candidates[0]


class SubmissionTiming(BaseModel):
    """
    Timing score for the submission.

    Attributes:
        submitted_at: Submission instant, or None when it could not be determined.
        submitted_text: Instant as shown in reports.
        deadline: Deadline instant (timezone-aware).
        is_late: Whether the submission is after the deadline.
        score: Timing marks awarded.
        max_score: Full timing marks.
        notes: Degradations applied while resolving the instant.
    """

    model_config = ConfigDict(frozen=True)

    submitted_at: datetime | None = Field(default=None, description="Submission instant")
    submitted_text: str = Field(default="", description="Submission instant as displayed")
    deadline: AwareDatetime = Field(..., description="Deadline instant")
    is_late: bool = Field(..., description="Whether the submission is late")
    score: float = Field(..., ge=0, description="Timing marks awarded")
    max_score: float = Field(..., ge=0, description="Full timing marks")
    notes: list[str] = Field(default_factory=list, description="Resolution notes")


class GradeReport(BaseModel):
    """
    Complete grading result for one submission.

    Attributes:
        lab_name: Lab identifier shown in report headings.
        submission_id: Identifier written to the machine-readable record.
        repo_root: Directory the run started from.
        project_root: Detected project root.
        files: Resolution outcome for every configured file.
        tasks: Task results in configured order.
        timing: Timing score.
        total_score: round2(sum of task scores + timing score).
        max_score: Sum of task maxima + timing maximum.
    """

    model_config = ConfigDict(frozen=True)

    lab_name: str = Field(..., description="Lab name")
    submission_id: str = Field(..., description="Submission identifier")
    repo_root: str = Field(..., description="Starting directory")
    project_root: str = Field(..., description="Detected project root")
    files: list[ResolvedFile] = Field(default_factory=list, description="Resolved files")
    tasks: list[TaskResult] = Field(default_factory=list, description="Per-task results")
    timing: SubmissionTiming = Field(..., description="Timing score")
    total_score: float = Field(..., ge=0, description="Total marks awarded")
    max_score: float = Field(..., gt=0, description="Maximum possible marks")

    @property
    def tasks_score(self) -> float:
        return sum(t.score for t in self.tasks)

    @property
    def tasks_max(self) -> float:
        return sum(t.max_marks for t in self.tasks)


class RenderedReport(BaseModel):
    """Text renditions of a GradeReport."""

    model_config = ConfigDict(frozen=True)

    summary: str = Field(..., description="Markdown summary (CI step summary)")
    feedback: str = Field(..., description="Markdown feedback document")
    csv: str = Field(..., description="Machine-readable single-row record")
