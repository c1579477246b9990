"""
Requirement checking and proportional task scoring.

A requirement is satisfied when any of its alternative patterns occurs
anywhere in the comment-stripped source of any file it applies to. Each
missing requirement costs an equal share of the task's marks.
"""

import math
import re
from collections.abc import Mapping
from functools import lru_cache

from .models import Requirement, RequirementCheck, Task, TaskResult


def round2(value: float) -> float:
    """Round to two decimal places, halves rounding up."""
    return math.floor(value * 100 + 0.5) / 100


def split_marks(max_marks: float, missing: int, total: int) -> float:
    """
    Deduct equal shares of `max_marks` for each missing requirement.

    Args:
        max_marks: Marks available for the task.
        missing: Number of unsatisfied requirements.
        total: Number of requirements in the task.

    Returns:
        `max_marks` when nothing is missing, otherwise
        max(0, round2(max_marks - max_marks * missing / total)).
    """
    if missing <= 0 or total <= 0:
        return max_marks
    deducted = max_marks / total * missing
    return max(0, round2(max_marks - deducted))


@lru_cache(maxsize=None)
def _compile(pattern: str) -> re.Pattern:
    return re.compile(pattern, re.IGNORECASE)


def requirement_satisfied(requirement: Requirement, sources: Mapping[str, str | None]) -> bool:
    """Return True if any pattern matches any of the requirement's sources."""
    texts = [sources[name] for name in requirement.files if sources.get(name) is not None]
    return any(_compile(pattern).search(text) for pattern in requirement.patterns for text in texts)


class RequirementEvaluator:
    """
    Grades tasks against normalized source texts.
    """

    def __init__(self, sources: Mapping[str, str | None], display_names: Mapping[str, str] | None = None) -> None:
        """
        Initialize the evaluator.

        Args:
            sources: Logical file name -> normalized source, or None if the file is absent.
            display_names: Logical file name -> name shown in deduction reasons.
        """
        self.sources = dict(sources)
        self.display_names = dict(display_names or {})

    def missing_files(self, task: Task) -> list[str]:
        return [name for name in task.required_files if self.sources.get(name) is None]

    def evaluate(self, task: Task) -> TaskResult:
        """
        Grade one task.

        If any file the task needs is absent the task is not checked at all
        and scores 0. Otherwise each requirement is checked and the score is
        reduced by an equal share per missing requirement.
        """
        absent = self.missing_files(task)
        if absent:
            names = ", ".join(self.display_names.get(name, name) for name in absent)
            return TaskResult(
                task_id=task.id,
                name=task.name,
                max_marks=task.marks,
                score=0,
                deductions=[f"Missing key files: {names}."],
            )

        checks = [
            RequirementCheck(label=r.label, satisfied=requirement_satisfied(r, self.sources))
            for r in task.requirements
        ]
        missing = [c for c in checks if not c.satisfied]

        return TaskResult(
            task_id=task.id,
            name=task.name,
            max_marks=task.marks,
            score=split_marks(task.marks, len(missing), len(checks)),
            checks=checks,
            deductions=[f"Missing: {c.label}" for c in missing],
        )
