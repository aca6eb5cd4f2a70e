"""Conversions between pandas DataFrames and typed employee records.

``records_from_frame`` is the seam to the upstream tabular parser: it takes a
frame that has already been read and hands back ``EmployeeRecord`` values.
Schema problems are logged, not raised, because reporting bad values is the
validation engine's job.
"""

import logging
from collections.abc import Iterable, Mapping

import pandas as pd
import pandera.pandas as pa
from pandera.errors import SchemaErrors
from pandera.pandas import Check, Column

from comp_integrity.models import EmployeeRecord

logger = logging.getLogger(__name__)

type ColumnMapping = dict[str, str]

REQUIRED_COLUMNS = ["id", "name", "title", "country", "salary_amount"]

FRAME_COLUMNS = [
    "id",
    "name",
    "title",
    "country",
    "salary",
    "salary_amount",
    "salary_currency",
    "performance_rating",
    "comparatio",
    "time_in_role",
    "time_since_raise",
    "future_talent",
]

# Common HRIS export headers, after snake_casing
DEFAULT_COLUMN_MAP: ColumnMapping = {
    "employee_id": "id",
    "emp_id": "id",
    "employee_name": "name",
    "full_name": "name",
    "job_title": "title",
    "base_salary": "salary_amount",
    "salary": "salary_amount",
    "amount": "salary_amount",
    "currency": "salary_currency",
    "rating": "performance_rating",
    "performancerating": "performance_rating",
    "compa_ratio": "comparatio",
    "timeinrole": "time_in_role",
    "months_in_role": "time_in_role",
    "timesinceraise": "time_since_raise",
    "months_since_raise": "time_since_raise",
    "futuretalent": "future_talent",
}


employee_frame_schema = pa.DataFrameSchema(
    {
        "id": Column(nullable=True),
        "name": Column(str, Check.str_length(max_value=100), nullable=True),
        "title": Column(str, nullable=True),
        "country": Column(str, nullable=True),
        "salary_amount": Column(float, Check.ge(0), nullable=True, coerce=True),
        "salary_currency": Column(str, Check.str_length(3, 3), nullable=True, required=False),
        "performance_rating": Column(str, nullable=True, required=False),
        "comparatio": Column(float, Check.in_range(0.5, 2.0), nullable=True, required=False, coerce=True),
        "time_in_role": Column(float, Check.ge(0), nullable=True, required=False, coerce=True),
        "time_since_raise": Column(float, Check.ge(0), nullable=True, required=False, coerce=True),
        "future_talent": Column(nullable=True, required=False),
    },
    strict=False,
)


def normalize_columns(df: pd.DataFrame, mapping: ColumnMapping | None = None) -> pd.DataFrame:
    """Snake-case headers, then map known aliases onto the record field names."""
    df = df.copy()
    df.columns = [str(col).strip().lower().replace(" ", "_").replace("-", "_") for col in df.columns]
    aliases = {k: v for k, v in DEFAULT_COLUMN_MAP.items() if v not in df.columns}
    aliases.update(mapping or {})
    return df.rename(columns=aliases)


def check_frame(df: pd.DataFrame) -> list[str]:
    """Run the pandera schema lazily and return readable failure messages."""
    try:
        employee_frame_schema.validate(df, lazy=True)
        return []
    except SchemaErrors as e:
        errors = []
        for _, row in e.failure_cases.iterrows():
            match row.to_dict():
                case {"column": col, "check": check, "failure_case": val, "index": idx}:
                    errors.append(f"Row {idx} column '{col}' failed check '{check}': {val}")
                case failure:
                    errors.append(f"Schema failure: {failure}")
        return errors


def records_from_frame(df: pd.DataFrame, column_map: ColumnMapping | None = None) -> list[EmployeeRecord]:
    frame = normalize_columns(df, column_map)

    missing = [col for col in REQUIRED_COLUMNS if col not in frame.columns]
    if missing:
        raise KeyError(f"Input frame is missing required columns: {missing}")

    for message in check_frame(frame):
        logger.warning(message)

    frame = frame.astype(object).where(frame.notna(), None)
    records = []
    for row in frame.to_dict(orient="records"):
        row["salary"] = {"amount": row.pop("salary_amount"), "currency": row.pop("salary_currency", None)}
        records.append(EmployeeRecord.from_mapping(row))

    logger.info("Converted %d frame rows into employee records", len(records))
    return records


def records_to_frame(records: Iterable[EmployeeRecord]) -> pd.DataFrame:
    """Flatten records into one row each, keeping raw values (object dtype)."""
    rows = []
    for r in records:
        rating = r.rating_text if isinstance(r.performance_rating, Mapping) else r.performance_rating
        rows.append({
            "id": r.id,
            "name": r.name,
            "title": r.title,
            "country": r.country,
            "salary": r.salary,
            "salary_amount": r.salary.amount if r.salary else None,
            "salary_currency": r.salary.currency if r.salary else None,
            "performance_rating": rating,
            "comparatio": r.comparatio,
            "time_in_role": r.time_in_role,
            "time_since_raise": r.time_since_raise,
            "future_talent": r.future_talent,
        })
    return pd.DataFrame(rows, columns=FRAME_COLUMNS, dtype="object")
