"""
Deadline-based timing score.

The submission instant is the last commit time reported by git. When git
cannot provide it the current time is used instead, so grading still
completes; the substitution is recorded in the timing notes.
"""

import logging
import subprocess
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path

from .config import GIT_TIMEOUT_SECONDS, GIT_TIMESTAMP_ARGS
from .models import SubmissionTiming

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def git_commit_timestamp(repo_dir: Path) -> str | None:
    """
    Return the last commit's committer date in strict ISO-8601 form.

    Args:
        repo_dir: Directory inside the git working tree.

    Returns:
        The timestamp text, or None if git failed or printed nothing.
    """
    try:
        result = subprocess.run(
            GIT_TIMESTAMP_ARGS,
            cwd=str(repo_dir),
            capture_output=True,
            text=True,
            check=False,
            timeout=GIT_TIMEOUT_SECONDS,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.warning("git log failed in %s: %s", repo_dir, e)
        return None

    if result.returncode != 0:
        logger.warning("git log exited with %s: %s", result.returncode, result.stderr.strip())
        return None

    return result.stdout.strip() or None


def parse_instant(text: str | None) -> datetime | None:
    """Parse an ISO-8601 instant, returning None if it cannot be parsed."""
    if not text:
        return None
    value = text.strip()
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


class SubmissionTimer:
    """
    Compares the submission instant against a fixed deadline.
    """

    def __init__(
        self,
        deadline: datetime,
        full_marks: float,
        late_marks: float,
        timestamp_source: Callable[[], str | None],
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Initialize the timer.

        Args:
            deadline: Timezone-aware deadline.
            full_marks: Marks for an on-time submission.
            late_marks: Marks for a late submission.
            timestamp_source: Returns the submission instant as ISO-8601 text, or None.
            clock: Returns the current time; used when the source has nothing.

        Raises:
            ValueError: If the deadline has no UTC offset.
        """
        if deadline.tzinfo is None or deadline.utcoffset() is None:
            raise ValueError("Deadline must include an explicit UTC offset")
        self.deadline = deadline
        self.full_marks = full_marks
        self.late_marks = late_marks
        self.timestamp_source = timestamp_source
        self.clock = clock

    def evaluate(
        self,
        instant: datetime | None,
        submitted_text: str = "",
        notes: list[str] | None = None,
    ) -> SubmissionTiming:
        """
        Score a submission instant.

        On or before the deadline earns full marks; strictly after earns the
        late marks. An unknown instant is scored as late.
        """
        notes = list(notes or [])

        if instant is None:
            is_late = True
            notes.append("Submission time unknown; scored as late.")
        else:
            if instant.tzinfo is None or instant.utcoffset() is None:
                instant = instant.replace(tzinfo=timezone.utc)
                notes.append("Submission time had no UTC offset; read as UTC.")
            is_late = instant > self.deadline

        return SubmissionTiming(
            submitted_at=instant,
            submitted_text=submitted_text or (instant.isoformat() if instant else "unknown"),
            deadline=self.deadline,
            is_late=is_late,
            score=self.late_marks if is_late else self.full_marks,
            max_score=self.full_marks,
            notes=notes,
        )

    def resolve(self) -> SubmissionTiming:
        """
        Query the timestamp source and score the result.

        A failing source or unparsable text falls back to the clock.
        """
        notes: list[str] = []
        try:
            text = self.timestamp_source()
        except Exception as e:
            logger.warning("Timestamp source failed: %s", e)
            text = None

        instant = parse_instant(text)
        if instant is None:
            if text:
                notes.append(f"Could not parse submission time {text!r}; using current time.")
            else:
                notes.append("Last commit time unavailable; using current time.")
            logger.warning(notes[-1])
            instant = self.clock()
            text = instant.isoformat()

        return self.evaluate(instant, submitted_text=text, notes=notes)
