"""
Text renditions of a GradeReport.

Produces the CI step summary (markdown with collapsible per-task
checklists), the student feedback document and the one-row CSV record.
Every function here is pure: the same report always renders to the same
text.
"""

import csv
import io

from .config import CSV_HEADER, FEEDBACK_DIRNAME, FEEDBACK_FILENAME
from .models import GradeReport, RenderedReport, TaskResult

FOUND_MARK = "✅"
MISSING_MARK = "❌"
NOTE_MARK = "❗"

DEDUCTION_RULES: list[str] = [
    "JS/JSX comments are ignored (so examples in comments do NOT count).",
    "Checks are intentionally light: they look for key constructs and basic structure.",
    "Code can be in ANY order; repeated code is allowed.",
    "Common equivalents are accepted, and naming is flexible.",
    "Missing required items reduce marks proportionally within that TODO.",
    "If a file a TODO needs cannot be found, that TODO scores 0.",
]


def format_number(value: float) -> str:
    """Format a mark without trailing zeros (15.0 -> "15", 18.50 -> "18.5")."""
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def md_escape(text: str) -> str:
    return str(text).replace("<", "&lt;").replace(">", "&gt;")


def _checklist_lines(result: TaskResult) -> list[str]:
    return [f"{FOUND_MARK if c.satisfied else MISSING_MARK} {c.label}" for c in result.checks]


def _submission_lines(report: GradeReport) -> list[str]:
    timing = report.timing
    status = "(Late submission)" if timing.is_late else "(On time)"
    lines = [
        f"- **Lab:** {report.lab_name}",
        f"- **Deadline:** {timing.deadline.isoformat()}",
        f"- **Last commit time (from git log):** {timing.submitted_text}",
        f"- **Submission marks:** **{format_number(timing.score)}/{format_number(timing.max_score)}** {status}",
    ]
    lines.extend(f"- **Note:** {note}" for note in timing.notes)
    return lines


def _files_lines(report: GradeReport) -> list[str]:
    lines = [
        f"- Repo root (cwd): {report.repo_root}",
        f"- Detected project root: {report.project_root}",
    ]
    for resolved in report.files:
        if resolved.found:
            lines.append(f"- {resolved.name}: {FOUND_MARK} {resolved.path}")
        else:
            lines.append(f"- {resolved.name}: {MISSING_MARK} {resolved.display_name} not found")
    return lines


def _bullets(items: list[str], empty: str) -> list[str]:
    if not items:
        return [f"- {empty}"]
    return [f"- {md_escape(item)}" for item in items]


def format_summary(report: GradeReport) -> str:
    """
    Render the markdown summary for the CI step summary.

    Args:
        report: Grade report to render.

    Returns:
        Markdown text.
    """
    timing = report.timing
    lines = [
        f"# {report.lab_name} - Autograding Summary",
        "",
        "## Submission",
        "",
        *_submission_lines(report),
        "",
        "## Files Checked",
        "",
        *_files_lines(report),
        "",
        "## Marks Breakdown",
        "",
        "| Component | Marks |",
        "|---|---:|",
    ]
    for result in report.tasks:
        lines.append(f"| {md_escape(result.name)} | {format_number(result.score)}/{format_number(result.max_marks)} |")
    lines.append(f"| Submission (timing) | {format_number(timing.score)}/{format_number(timing.max_score)} |")

    lines.extend([
        "",
        "## Total Marks",
        "",
        f"**{format_number(report.total_score)} / {format_number(report.max_score)}**",
        "",
        "## Detailed Checks (What you did / missed)",
    ])

    for result in report.tasks:
        checklist = _checklist_lines(result)
        done = [c for c in checklist if c.startswith(FOUND_MARK)]
        missed = [c for c in checklist if c.startswith(MISSING_MARK)]
        lines.extend([
            "",
            "<details>",
            f"  <summary><strong>{md_escape(result.name)}</strong> - "
            f"{format_number(result.score)}/{format_number(result.max_marks)}</summary>",
            "",
            f"  <strong>{FOUND_MARK} Found</strong>",
            "",
            *_bullets(done, "(Nothing detected)"),
            "",
            f"  <strong>{MISSING_MARK} Missing</strong>",
            "",
            *_bullets(missed, "(Nothing missing)"),
            "",
            f"  <strong>{NOTE_MARK} Deductions / Notes</strong>",
            "",
            *_bullets(result.deductions, "No deductions."),
            "",
            "</details>",
        ])

    lines.extend([
        "",
        f"> Full feedback is also available in: `{FEEDBACK_DIRNAME}/{FEEDBACK_FILENAME}`",
        "",
    ])
    return "\n".join(lines)


def format_feedback(report: GradeReport) -> str:
    """
    Render the feedback document given to the student.

    Args:
        report: Grade report to render.

    Returns:
        Markdown text.
    """
    lines = [
        f"# {report.lab_name} - Feedback",
        "",
        "## Submission",
        "",
        *_submission_lines(report),
        "",
        "## Files Checked",
        "",
        *_files_lines(report),
        "",
        "---",
        "",
        "## TODO-by-TODO Feedback",
    ]

    for result in report.tasks:
        checklist = _checklist_lines(result)
        lines.extend([
            "",
            f"### {result.name} - **{format_number(result.score)}/{format_number(result.max_marks)}**",
            "",
            "**Checklist**",
        ])
        lines.extend([f"- {item}" for item in checklist] or ["- (No checks available)"])
        lines.extend(["", "**Deductions / Notes**"])
        lines.extend(
            [f"- {NOTE_MARK} {d}" for d in result.deductions] or [f"- {FOUND_MARK} No deductions. Good job!"]
        )

    lines.extend(["", "---", "", "## How marks were deducted (rules)", ""])
    lines.extend(f"- {rule}" for rule in DEDUCTION_RULES)
    lines.append("")
    return "\n".join(lines)


def format_csv(report: GradeReport) -> str:
    """Render the single-row machine-readable record."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    writer.writerow([report.submission_id, format_number(report.total_score), format_number(report.max_score)])
    return buffer.getvalue()


def format_console_line(report: GradeReport) -> str:
    """One-line result printed at the end of a run."""
    timing = report.timing
    return (
        f"Lab graded: {format_number(report.total_score)}/{format_number(report.max_score)} "
        f"(Submission: {format_number(timing.score)}/{format_number(timing.max_score)}, "
        f"TODOs: {format_number(report.tasks_score)}/{format_number(report.tasks_max)})."
    )


def render_report(report: GradeReport) -> RenderedReport:
    """Render all text views of a report."""
    return RenderedReport(
        summary=format_summary(report),
        feedback=format_feedback(report),
        csv=format_csv(report),
    )
