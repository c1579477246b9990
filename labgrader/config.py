"""
Configuration constants for the lab grader.

These are defaults; every value that affects scoring or file discovery can
be overridden from the YAML configuration file.
"""

from pathlib import Path


# Output artifacts
DEFAULT_OUTPUT_DIR: Path = Path("artifacts")
GRADE_CSV_FILENAME: str = "grade.csv"
GRADE_JSON_FILENAME: str = "grade.json"
FEEDBACK_DIRNAME: str = "feedback"
FEEDBACK_FILENAME: str = "README.md"
CSV_HEADER: list[str] = ["student", "score", "max_score"]
DEFAULT_SUBMISSION_ID: str = "all_students"

# CI step summary sink (appended to when the variable is set)
SUMMARY_ENV_VAR: str = "GITHUB_STEP_SUMMARY"

# Project detection
MANIFEST_FILENAME: str = "package.json"
SOURCE_DIRNAME: str = "src"
PREFERRED_PROJECT_DIRS: list[str] = ["5-3-react-event-handling", "5-4-react-rendering-lists"]

# Conventional file locations, relative to the project root, checked in order
FILE_LOCATIONS: list[str] = ["src/components", "src"]

# Directory names never descended into while searching for files
IGNORED_DIRS: list[str] = ["node_modules", ".git", "dist", "build", ".next", ".cache"]

# Submission timing marks
SUBMISSION_MAX: int = 20
SUBMISSION_LATE: int = 10

# Git query for the submission instant (strict ISO-8601 committer date)
GIT_TIMESTAMP_ARGS: list[str] = ["git", "log", "-1", "--format=%cI"]
GIT_TIMEOUT_SECONDS: int = 30

# Logging
LOG_FORMAT: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOGGER_NAME: str = "labgrader"
