"""
Lab Grader: pattern-based autograding for programming labs

Usage:
  main.py [--config=PATH] [--root=DIR] [--verbose]
  main.py (-h | --help)

Options:
  --config=PATH  Path to YAML configuration file [default: grader_config.yml].
  --root=DIR     Directory to grade, usually the repository root [default: .].
  --verbose      Print debug logging and per-requirement results.
  -h --help      Show this screen.
"""

import sys
from pathlib import Path

import yaml
from docopt import docopt
from pydantic import ValidationError

from labgrader.artifacts import ArtifactWriter
from labgrader.config_loader import GraderConfig, load_config
from labgrader.logger import setup_logging
from labgrader.models import GradeReport
from labgrader.pipeline import GradingPipeline
from labgrader.report import format_console_line, format_number, render_report


def print_grade_summary(report: GradeReport, verbose: bool = False) -> None:
    """
    Print a summary of the grade to console.

    Args:
        report: GradeReport to summarize.
        verbose: Also list every requirement.
    """
    print(f"\n  {'='*50}")
    print(f"  Lab: {report.lab_name}")
    print(f"  Project root: {report.project_root}")
    print(f"  Total Score: {format_number(report.total_score)}/{format_number(report.max_score)}")
    print(f"  Late: {'Yes' if report.timing.is_late else 'No'}")
    print(f"  {'='*50}")

    for result in report.tasks:
        status = "+" if result.score >= result.max_marks else "-"
        print(f"  [{status}] {result.name}: {format_number(result.score)}/{format_number(result.max_marks)}")
        if verbose:
            for check in result.checks:
                print(f"        {'ok' if check.satisfied else '--'} {check.label}")
        if not result.checks:
            for deduction in result.deductions:
                print(f"        {deduction}")

    print()


def run_grading(config: GraderConfig, root: Path, verbose: bool = False) -> GradeReport:
    """
    Grade the submission at `root` and write all artifacts.

    Args:
        config: Loaded grader configuration.
        root: Directory to grade.
        verbose: Print per-requirement results.

    Returns:
        The GradeReport for the submission.

    Raises:
        OSError: If the artifacts cannot be written.
    """
    print(f"Grading {root.resolve()}...")
    report = GradingPipeline(config).run(root)
    rendered = render_report(report)

    writer = ArtifactWriter(output_dir=config.output_dir, summary_env_var=config.summary_env_var)
    output_files = writer.save_all(report, rendered)
    print(f"  Grade CSV: {output_files['csv']}")
    print(f"  Feedback:  {output_files['feedback']}")

    summary_path = writer.append_summary(rendered)
    if summary_path:
        print(f"  Step summary: {summary_path}")

    print_grade_summary(report, verbose=verbose)
    print(format_console_line(report))
    return report


def main() -> int:
    """
    Main CLI entrypoint.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    arguments = docopt(__doc__)
    config_path = Path(arguments["--config"])
    root = Path(arguments["--root"])
    verbose = bool(arguments["--verbose"])

    setup_logging(verbose)

    if not config_path.exists():
        print(f"Error: Configuration file not found at {config_path}")
        return 1

    if not root.is_dir():
        print(f"Error: Directory to grade not found: {root}")
        return 1

    try:
        config = load_config(config_path)
        print(f"Loaded configuration from {config_path}")
    except (ValueError, ValidationError, yaml.YAMLError, OSError) as e:
        print(f"Error loading config: {e}")
        return 1

    try:
        run_grading(config, root, verbose=verbose)
        return 0
    except KeyboardInterrupt:
        print("\nGrading interrupted by user.")
        return 1
    except OSError as e:
        print(f"\nError writing artifacts: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
