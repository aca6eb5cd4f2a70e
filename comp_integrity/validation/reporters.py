"""Validation report formatting.

Renders a ``ValidationReport`` for the terminal, for log lines and for
machine consumption.
"""

import json
from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from comp_integrity.models import Issue, Severity, ValidationReport

type ReportFormat = str  # "table" | "json" | "summary"

SEVERITY_STYLES = {
    Severity.CRITICAL: "bold red",
    Severity.HIGH: "red",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "cyan",
    Severity.INFO: "dim",
}

STATUS_STYLES = {
    "excellent": "green",
    "good": "green",
    "fair": "yellow",
    "poor": "red",
}


def format_report(report: ValidationReport, output_format: ReportFormat = "table") -> str:
    match output_format:
        case "json":
            return _to_json(report)
        case "summary":
            return _to_summary(report)
        case "table" | _:
            return _to_table(report)


def _to_json(report: ValidationReport) -> str:
    return json.dumps(report.to_dict(), indent=2, default=str)


def _to_summary(report: ValidationReport) -> str:
    summary = report.summary
    lines = [
        f"[{summary.status}] grade {summary.data_quality_grade} "
        f"(score {summary.overall_score:.3f}) over {report.total_records} records: "
        f"{summary.total_issues} issues, {summary.critical_issues} critical"
    ]
    for issue in _ranked(report.all_issues())[:10]:
        lines.append(f"  {issue.severity.upper()}: row {issue.row_index} {issue.rule} ({issue.message})")
    for recommendation in summary.recommendations:
        lines.append(f"  -> {recommendation}")
    return "\n".join(lines)


def _ranked(issues: Sequence[Issue]) -> list[Issue]:
    return sorted(issues, key=lambda i: (-i.severity.rank, i.row_index))


def _quality_table(report: ValidationReport) -> Table:
    quality = report.data_quality
    status_style = STATUS_STYLES.get(report.summary.status, "white")

    table = Table(title=f"Data quality: {report.total_records} records")
    table.add_column("Dimension", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Details")

    table.add_row(
        "Completeness",
        f"{quality.completeness.score:.3f}",
        f"{quality.completeness.missing_required} required / "
        f"{quality.completeness.missing_optional} optional missing",
    )
    table.add_row(
        "Consistency",
        f"{quality.consistency.score:.3f}",
        f"{len(quality.consistency.inconsistencies)} inconsistencies",
    )
    table.add_row(
        "Accuracy",
        f"{quality.accuracy.score:.3f}",
        f"{quality.accuracy.accurate_checks}/{quality.accuracy.total_checks} checks",
    )
    table.add_row(
        "Validity",
        f"{quality.validity.score:.3f}",
        f"{quality.validity.valid_validations}/{quality.validity.total_validations} values",
    )
    table.add_row(
        "[bold]Overall[/bold]",
        f"[bold]{quality.overall:.3f}[/bold]",
        f"[{status_style}]{report.summary.status}[/{status_style}], grade {report.summary.data_quality_grade}",
    )
    return table


def _issue_table(issues: Sequence[Issue]) -> Table:
    table = Table(title=f"Issues ({len(issues)})")
    table.add_column("Row", justify="right")
    table.add_column("Employee")
    table.add_column("Rule", style="cyan")
    table.add_column("Severity")
    table.add_column("Message")

    for issue in _ranked(issues):
        style = SEVERITY_STYLES.get(issue.severity, "white")
        table.add_row(
            str(issue.row_index),
            escape(f"{issue.employee_id} {issue.employee_name}"),
            f"{issue.field}.{issue.rule}" if issue.field else issue.rule,
            f"[{style}]{issue.severity}[/{style}]",
            escape(issue.message),
        )
    return table


def _to_table(report: ValidationReport) -> str:
    buf = Console(file=None, force_terminal=False, width=160)
    with buf.capture() as capture:
        buf.print(_quality_table(report))
        issues = report.all_issues()
        if issues:
            buf.print(_issue_table(issues))
        for suggestion in report.suggestions:
            buf.print(f"[bold]{suggestion.priority}[/bold] {escape(suggestion.message)} ({suggestion.action})")
    return capture.get()
