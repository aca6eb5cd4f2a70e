"""File I/O for the command line: employee CSVs in, reports and cleaned CSVs out."""

import json
import logging
from collections.abc import Iterable
from pathlib import Path

import pandas as pd
from rich.console import Console

from comp_integrity.models import EmployeeRecord, ValidationReport
from comp_integrity.utils.frames import records_from_frame, records_to_frame
from comp_integrity.validation.reporters import format_report

type FilePath = str | Path

logger = logging.getLogger(__name__)

console = Console()


def read_csv(path: FilePath) -> pd.DataFrame:
    """Read an HRIS export, handling encoding quirks."""
    path = Path(path)
    for encoding in ("utf-8", "latin-1", "cp1252"):
        try:
            # ids stay strings; "E001" and "001" must not be coerced
            return pd.read_csv(path, encoding=encoding, dtype={"id": str, "employee_id": str})
        except UnicodeDecodeError:
            logger.debug("Could not decode %s as %s", path.name, encoding)
            continue
    raise ValueError(f"Could not decode {path}")


def read_records_csv(path: FilePath) -> list[EmployeeRecord]:
    df = read_csv(path)
    logger.info("Read %d rows from %s", len(df), Path(path).name)
    return records_from_frame(df)


def write_report(report: ValidationReport, path: FilePath, fmt: str = "json") -> Path:
    """Persist a validation report as JSON, or as plain text for ``txt``."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    match fmt:
        case "json":
            content = json.dumps(report.to_dict(), indent=2, default=str)
        case "txt":
            content = format_report(report, "table")
        case other:
            raise ValueError(f"Unsupported report format: {other}")

    path.write_text(content)
    console.print(f"  Report saved: {path}")
    return path


def write_records(records: Iterable[EmployeeRecord], path: FilePath) -> Path:
    """Write records to CSV with the same headers ``read_records_csv`` accepts."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    df = records_to_frame(records).drop(columns="salary")
    df.to_csv(path, index=False)
    console.print(f"  Wrote {len(df)} rows to {path}")
    return path
