"""
Artifact writer for a graded submission.

Saves the CSV record, the feedback document and the full JSON report to
the output directory, and appends the summary to the CI step summary file
when one is configured.
"""

import logging
import os
from pathlib import Path

from .config import (
    DEFAULT_OUTPUT_DIR,
    FEEDBACK_DIRNAME,
    FEEDBACK_FILENAME,
    GRADE_CSV_FILENAME,
    GRADE_JSON_FILENAME,
    SUMMARY_ENV_VAR,
)
from .models import GradeReport, RenderedReport

logger = logging.getLogger(__name__)


class ArtifactWriter:
    """
    Writes grading artifacts to disk.
    """

    def __init__(self, output_dir: Path | None = None, summary_env_var: str = SUMMARY_ENV_VAR) -> None:
        """
        Initialize the writer.

        Args:
            output_dir: Directory to save artifacts. Defaults to ./artifacts/
            summary_env_var: Environment variable naming the CI summary file.
        """
        self.output_dir = output_dir or DEFAULT_OUTPUT_DIR
        self.summary_env_var = summary_env_var

    def save_all(self, report: GradeReport, rendered: RenderedReport) -> dict[str, Path]:
        """
        Save all artifacts to the output directory.

        Creates:
        - grade.csv with the single-row record
        - feedback/README.md with the feedback document
        - grade.json with the complete report

        Returns:
            Dictionary of output file paths.

        Raises:
            OSError: If the output directory or a file cannot be written.
        """
        feedback_dir = self.output_dir / FEEDBACK_DIRNAME
        feedback_dir.mkdir(parents=True, exist_ok=True)

        output_files: dict[str, Path] = {
            "csv": self.output_dir / GRADE_CSV_FILENAME,
            "feedback": feedback_dir / FEEDBACK_FILENAME,
            "json": self.output_dir / GRADE_JSON_FILENAME,
        }

        with open(output_files["csv"], "w", newline="", encoding="utf-8") as f:
            f.write(rendered.csv)

        with open(output_files["feedback"], "w", encoding="utf-8") as f:
            f.write(rendered.feedback)

        with open(output_files["json"], "w", encoding="utf-8") as f:
            f.write(report.model_dump_json(indent=2))

        return output_files

    def append_summary(self, rendered: RenderedReport) -> Path | None:
        """
        Append the summary to the CI step summary file, if configured.

        Returns:
            The summary path written to, or None if the variable is unset.
        """
        target = os.environ.get(self.summary_env_var)
        if not target:
            return None

        path = Path(target)
        try:
            with open(path, "a", encoding="utf-8") as f:
                f.write(rendered.summary)
        except OSError as e:
            logger.warning("Could not append summary to %s: %s", path, e)
            return None
        return path
