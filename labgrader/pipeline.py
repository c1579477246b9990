"""
Grading pipeline: locate, read, normalize, evaluate, time, aggregate.

A run never raises past this module for problems with the submission
itself: missing or unreadable files score zero on the tasks that need
them, and an unknown submission time falls back per SubmissionTimer.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from functools import partial
from pathlib import Path

from .config_loader import GraderConfig
from .evaluator import RequirementEvaluator, round2
from .locator import ProjectLocator
from .models import GradeReport, ResolvedFile, SubmissionTiming, TaskResult
from .normalizer import strip_comments
from .timer import SubmissionTimer, git_commit_timestamp, utc_now

logger = logging.getLogger(__name__)


def read_source(resolved: ResolvedFile) -> str | None:
    """
    Read a resolved file as UTF-8 text, replacing undecodable bytes.

    Returns:
        The file contents, or None if the file is absent or unreadable.
    """
    if not resolved.found:
        return None
    try:
        return Path(resolved.path).read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning("Could not read %s: %s", resolved.path, e)
        return None


def build_report(
    config: GraderConfig,
    repo_root: Path,
    project_root: Path,
    files: list[ResolvedFile],
    tasks: list[TaskResult],
    timing: SubmissionTiming,
) -> GradeReport:
    """Aggregate task results and timing into a GradeReport."""
    tasks_score = sum(t.score for t in tasks)
    return GradeReport(
        lab_name=config.lab_name,
        submission_id=config.submission_id,
        repo_root=str(repo_root),
        project_root=str(project_root),
        files=files,
        tasks=tasks,
        timing=timing,
        total_score=round2(tasks_score + timing.score),
        max_score=sum(t.max_marks for t in tasks) + timing.max_score,
    )


class GradingPipeline:
    """
    Grades one submission tree against a GraderConfig.
    """

    def __init__(
        self,
        config: GraderConfig,
        timestamp_source: Callable[[], str | None] | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Initialize the pipeline.

        Args:
            config: Grading configuration.
            timestamp_source: Returns the submission instant as text. Defaults to
                the last git commit time of the start directory.
            clock: Current-time source used when no submission instant is available.
        """
        self.config = config
        self.timestamp_source = timestamp_source
        self.clock = clock

    def run(self, start_dir: Path) -> GradeReport:
        """
        Grade the submission rooted at `start_dir`.

        Args:
            start_dir: Directory to start project detection from.

        Returns:
            The complete GradeReport.
        """
        config = self.config
        locator = ProjectLocator.from_config(start_dir, config)
        project_root = locator.project_root
        logger.info("Project root: %s", project_root)

        files = [locator.resolve(name, basenames) for name, basenames in config.files.items()]

        sources: dict[str, str | None] = {}
        for resolved in files:
            raw = read_source(resolved)
            sources[resolved.name] = strip_comments(raw) if raw is not None else None

        evaluator = RequirementEvaluator(sources, {f.name: f.display_name for f in files})
        results = [evaluator.evaluate(task) for task in config.tasks]
        for result in results:
            logger.debug("%s: %s/%s", result.task_id, result.score, result.max_marks)

        source = self.timestamp_source or partial(git_commit_timestamp, locator.start_dir)
        timer = SubmissionTimer(
            deadline=config.deadline,
            full_marks=config.submission_max,
            late_marks=config.submission_late,
            timestamp_source=source,
            clock=self.clock,
        )
        timing = timer.resolve()

        return build_report(config, locator.start_dir, project_root, files, results, timing)
