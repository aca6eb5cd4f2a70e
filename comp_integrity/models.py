"""Typed records, issues and report structures for the integrity engine."""

import numbers
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from types import MappingProxyType
from typing import Any

import pandas as pd
from pandas.api.types import is_scalar

type RecordID = str | int
type RatingValue = str | Mapping[str, Any]
type FieldValue = Any
type Details = dict[str, Any] | tuple[Any, ...]


class Severity(StrEnum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"

    @property
    def rank(self) -> int:
        """Ordinal rank, critical highest."""
        match self:
            case Severity.CRITICAL:
                return 5
            case Severity.HIGH:
                return 4
            case Severity.MEDIUM:
                return 3
            case Severity.LOW:
                return 2
            case _:
                return 1


class Category(StrEnum):
    REQUIRED = "required"
    FORMAT = "format"
    RANGE = "range"
    CONSISTENCY = "consistency"
    BUSINESS_LOGIC = "business_logic"
    REFERENTIAL = "referential"
    COMPLETENESS = "completeness"
    VALIDATION_ERROR = "validation_error"


class Priority(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return {"high": 3, "medium": 2, "low": 1}[self.value]


def is_missing(value: FieldValue) -> bool:
    """None, NaN, NaT or pd.NA; containers and records are never missing."""
    return is_scalar(value) and bool(pd.isna(value))


def is_present(value: FieldValue) -> bool:
    """True unless the value is missing or an empty string."""
    if is_missing(value):
        return False
    return not (isinstance(value, str) and value == "")


def _to_number(value: FieldValue) -> float | None:
    if not is_present(value):
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    try:
        return float(str(value).replace(",", "").strip())
    except ValueError:
        return None


def _to_text(value: FieldValue) -> str | None:
    if is_missing(value):
        return None
    return value if isinstance(value, str) else str(value)


def _to_record_id(value: FieldValue) -> RecordID | None:
    """Keep str/int ids; integral floats (pandas upcasts) become ints."""
    if is_missing(value):
        return None
    match value:
        case bool():
            return str(value)
        case str() | int():
            return value
        case numbers.Integral():
            return int(value)
        case float() if value.is_integer():
            return int(value)
        case _:
            return str(value)


@dataclass(frozen=True)
class Salary:
    amount: float | None
    currency: str | None = None

    @classmethod
    def from_value(cls, value: FieldValue) -> "Salary | None":
        """Accept a Salary, a {"amount", "currency"} mapping or a bare amount."""
        match value:
            case Salary():
                return value
            case None:
                return None
            case Mapping():
                return cls(_to_number(value.get("amount")), _to_text(value.get("currency")))
            case int() | float() | str() if is_present(value):
                return cls(_to_number(value), None)
            case _:
                return None

    def to_dict(self) -> dict[str, Any]:
        return {"amount": self.amount, "currency": self.currency}


# camelCase wire keys accepted alongside the snake_case attribute names
_FIELD_ALIASES = {
    "performanceRating": "performance_rating",
    "timeInRole": "time_in_role",
    "timeSinceRaise": "time_since_raise",
    "futureTalent": "future_talent",
}


@dataclass(frozen=True)
class EmployeeRecord:
    """One employee as supplied by the upstream parser.

    Required fields can still carry ``None``; the ``required`` rules report
    that, construction never rejects a record.
    """

    id: RecordID | None
    name: str | None
    title: str | None
    country: str | None
    salary: Salary | None
    performance_rating: RatingValue | None = None
    comparatio: float | None = None
    time_in_role: float | None = None
    time_since_raise: float | None = None
    future_talent: str | bool | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "EmployeeRecord":
        normalized = {_FIELD_ALIASES.get(key, key): value for key, value in data.items()}
        rating = normalized.get("performance_rating")
        if is_missing(rating):
            rating = None
        future_talent = normalized.get("future_talent")
        return cls(
            id=_to_record_id(normalized.get("id")),
            name=_to_text(normalized.get("name")),
            title=_to_text(normalized.get("title")),
            country=_to_text(normalized.get("country")),
            salary=Salary.from_value(normalized.get("salary")),
            performance_rating=rating,
            comparatio=_to_number(normalized.get("comparatio")),
            time_in_role=_to_number(normalized.get("time_in_role")),
            time_since_raise=_to_number(normalized.get("time_since_raise")),
            future_talent=None if is_missing(future_talent) else future_talent,
        )

    def get(self, field_name: str) -> FieldValue:
        """Read a field by wire name (camelCase) or attribute name."""
        return getattr(self, _FIELD_ALIASES.get(field_name, field_name))

    @property
    def display_name(self) -> str:
        return self.name if isinstance(self.name, str) and self.name else "Unknown"

    @property
    def rating_text(self) -> str | None:
        """Performance rating as plain text, unwrapping ``{"text": ...}`` values."""
        match self.performance_rating:
            case {"text": text}:
                return text if isinstance(text, str) else None
            case str() as text:
                return text
            case _:
                return None

    @property
    def is_future_talent(self) -> bool:
        match self.future_talent:
            case True:
                return True
            case str() as flag:
                return flag.strip().lower() in ("yes", "y", "true", "1")
            case _:
                return False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "title": self.title,
            "country": self.country,
            "salary": self.salary.to_dict() if self.salary else None,
            "performanceRating": self.performance_rating,
            "comparatio": self.comparatio,
            "timeInRole": self.time_in_role,
            "timeSinceRaise": self.time_since_raise,
            "futureTalent": self.future_talent,
        }


@dataclass(frozen=True)
class Issue:
    employee_id: RecordID | None
    employee_name: str
    rule: str
    category: Category
    severity: Severity
    message: str
    row_index: int
    value: FieldValue = None
    field: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data = {
            "employeeId": self.employee_id,
            "employeeName": self.employee_name,
            "rule": self.rule,
            "category": str(self.category),
            "severity": str(self.severity),
            "message": self.message,
            "rowIndex": self.row_index,
        }
        if self.field is not None:
            data["field"] = self.field
            data["value"] = self.value.to_dict() if isinstance(self.value, Salary) else self.value
        return data


@dataclass(frozen=True)
class FieldResult:
    total_checked: int = 0
    passed: int = 0
    failed: int = 0
    issues: tuple[Issue, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalChecked": self.total_checked,
            "passed": self.passed,
            "failed": self.failed,
            "issues": [issue.to_dict() for issue in self.issues],
        }


@dataclass(frozen=True)
class DimensionScore:
    """One quality dimension, scored in [0, 1]."""

    score: float


@dataclass(frozen=True)
class CompletenessScore(DimensionScore):
    required_completeness: float
    optional_completeness: float
    missing_required: int
    missing_optional: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "requiredCompleteness": self.required_completeness,
            "optionalCompleteness": self.optional_completeness,
            "missingRequired": self.missing_required,
            "missingOptional": self.missing_optional,
        }


@dataclass(frozen=True)
class ConsistencyScore(DimensionScore):
    inconsistencies: tuple[dict[str, str], ...]
    duplicate_ids: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "inconsistencies": list(self.inconsistencies),
            "duplicateIds": self.duplicate_ids,
        }


@dataclass(frozen=True)
class AccuracyScore(DimensionScore):
    total_checks: int
    accurate_checks: int

    @property
    def inaccurate_checks(self) -> int:
        return self.total_checks - self.accurate_checks

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "totalChecks": self.total_checks,
            "accurateChecks": self.accurate_checks,
            "inaccurateChecks": self.inaccurate_checks,
        }


@dataclass(frozen=True)
class ValidityScore(DimensionScore):
    total_validations: int
    valid_validations: int

    @property
    def invalid_validations(self) -> int:
        return self.total_validations - self.valid_validations

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "totalValidations": self.total_validations,
            "validValidations": self.valid_validations,
            "invalidValidations": self.invalid_validations,
        }


@dataclass(frozen=True)
class DataQuality:
    completeness: CompletenessScore
    consistency: ConsistencyScore
    accuracy: AccuracyScore
    validity: ValidityScore
    overall: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "completeness": self.completeness.to_dict(),
            "consistency": self.consistency.to_dict(),
            "accuracy": self.accuracy.to_dict(),
            "validity": self.validity.to_dict(),
            "overall": self.overall,
        }


@dataclass(frozen=True)
class Suggestion:
    type: str
    priority: Priority
    message: str
    action: str
    details: Details = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        details = self.details
        if isinstance(details, tuple):
            details = [d.to_dict() if isinstance(d, Issue) else d for d in details]
        return {
            "type": self.type,
            "priority": str(self.priority),
            "message": self.message,
            "action": self.action,
            "details": details,
        }


@dataclass(frozen=True)
class Summary:
    status: str
    overall_score: float
    total_issues: int
    critical_issues: int
    data_quality_grade: str
    recommendations: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "overallScore": self.overall_score,
            "totalIssues": self.total_issues,
            "criticalIssues": self.critical_issues,
            "dataQualityGrade": self.data_quality_grade,
            "recommendations": list(self.recommendations),
        }


@dataclass(frozen=True)
class PerformanceMetrics:
    validation_time: float
    rules_executed: int
    memory_usage: dict[str, int] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "validationTime": self.validation_time,
            "rulesExecuted": self.rules_executed,
            "memoryUsage": self.memory_usage,
        }


@dataclass(frozen=True)
class ValidationReport:
    timestamp: datetime
    total_records: int
    validation_options: Mapping[str, Any]
    field_validation: Mapping[str, FieldResult]
    business_validation: tuple[Issue, ...]
    data_quality: DataQuality
    suggestions: tuple[Suggestion, ...]
    summary: Summary
    performance: PerformanceMetrics

    def __post_init__(self) -> None:
        # Read-only views over private copies; the caller's dicts stay independent.
        object.__setattr__(self, "validation_options", MappingProxyType(dict(self.validation_options)))
        object.__setattr__(self, "field_validation", MappingProxyType(dict(self.field_validation)))

    def all_issues(self) -> list[Issue]:
        issues = [issue for result in self.field_validation.values() for issue in result.issues]
        issues.extend(self.business_validation)
        return issues

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "totalRecords": self.total_records,
            "validationOptions": dict(self.validation_options),
            "fieldValidation": {
                name: result.to_dict() for name, result in self.field_validation.items()
            },
            "businessValidation": [issue.to_dict() for issue in self.business_validation],
            "dataQuality": self.data_quality.to_dict(),
            "suggestions": [s.to_dict() for s in self.suggestions],
            "summary": self.summary.to_dict(),
            "performance": self.performance.to_dict(),
        }
