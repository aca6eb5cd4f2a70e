"""Command-line runner: validate an employee CSV export and print the report."""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from comp_integrity.checker import IntegrityChecker
from comp_integrity.config import ConfigError, load_validation_policy, policy_from_pyproject
from comp_integrity.models import EmployeeRecord, ValidationReport
from comp_integrity.utils.io import read_records_csv, write_records, write_report
from comp_integrity.validation.reporters import format_report

console = Console()


def _records_table(records: list[EmployeeRecord]) -> Table:
    table = Table(title=f"Cleaned records ({len(records)})")
    for column in ("ID", "Name", "Title", "Country", "Rating"):
        table.add_column(column)
    for r in records:
        table.add_row(*(escape(str(v)) if v is not None else "" for v in (r.id, r.name, r.title, r.country, r.rating_text)))
    return table


def exit_code(report: ValidationReport, strict: bool = False) -> int:
    match report.summary:
        case summary if summary.status == "poor":
            return 1
        case summary if strict and summary.critical_issues > 0:
            return 1
        case _:
            return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Check employee compensation data for integrity issues")
    parser.add_argument("input", type=Path, help="CSV export of employee records")
    parser.add_argument("--format", choices=["table", "json", "summary"], default="table")
    parser.add_argument("--clean", action="store_true", help="Clean records before validating")
    parser.add_argument("--output", type=Path, help="Write the report here (.json, otherwise text)")
    parser.add_argument("--strict", action="store_true", help="Fail on any critical issue")
    parser.add_argument("--profile", help="Validation profile: default, strict or lenient")
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )

    try:
        policy = load_validation_policy(args.profile) if args.profile else policy_from_pyproject()
    except ConfigError as exc:
        console.print(f"[red]Invalid configuration: {exc}[/red]")
        return 2

    if not args.input.exists():
        console.print(f"[red]Input file not found: {args.input}[/red]")
        return 2
    try:
        records = read_records_csv(args.input)
    except (KeyError, ValueError) as exc:
        console.print(f"[red]Could not read {args.input}: {exc}[/red]")
        return 2

    checker = IntegrityChecker(policy=policy)
    if args.clean:
        records = checker.clean_data(records)
        if args.output:
            write_records(records, args.output.with_name(f"{args.input.stem}_cleaned.csv"))
        else:
            console.print(_records_table(records))

    report = checker.validate_dataset(records, {"source": str(args.input), "cleaned": args.clean})

    console.print(format_report(report, args.format), markup=False, highlight=False, soft_wrap=True)

    if args.output:
        write_report(report, args.output, "json" if args.output.suffix == ".json" else "txt")

    return exit_code(report, args.strict)


if __name__ == "__main__":
    sys.exit(main())
