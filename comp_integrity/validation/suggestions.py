"""Remediation suggestions, letter grades and the report summary."""

import logging
from collections.abc import Iterable, Mapping, Sequence

from comp_integrity.config import ValidationPolicy
from comp_integrity.models import (
    Category,
    DataQuality,
    FieldResult,
    Issue,
    Priority,
    Severity,
    Suggestion,
    Summary,
)

logger = logging.getLogger(__name__)

type QualityGrade = str  # "A+" | "A" | "B+" | "B" | "C+" | "C" | "D" | "F"
type QualityStatus = str  # "excellent" | "good" | "fair" | "poor"
type FieldResults = Mapping[str, FieldResult]

GRADE_THRESHOLDS: tuple[tuple[float, QualityGrade], ...] = (
    (0.95, "A+"),
    (0.90, "A"),
    (0.85, "B+"),
    (0.80, "B"),
    (0.75, "C+"),
    (0.70, "C"),
    (0.60, "D"),
)

STATUS_THRESHOLDS: tuple[tuple[float, QualityStatus], ...] = (
    (0.90, "excellent"),
    (0.80, "good"),
    (0.60, "fair"),
)


def quality_grade(score: float) -> QualityGrade:
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return "F"


def quality_status(score: float) -> QualityStatus:
    for threshold, status in STATUS_THRESHOLDS:
        if score >= threshold:
            return status
    return "poor"


def _field_issues(field_results: FieldResults) -> Iterable[Issue]:
    for result in field_results.values():
        yield from result.issues


def collect_critical_issues(field_results: FieldResults, business_issues: Sequence[Issue]) -> list[Issue]:
    """Critical issues from field results first, then business rules."""
    critical = [i for i in _field_issues(field_results) if i.severity == Severity.CRITICAL]
    critical.extend(i for i in business_issues if i.severity == Severity.CRITICAL)
    return critical


def collect_cleanable_issues(field_results: FieldResults) -> list[Issue]:
    """Format issues below critical severity; the cleaner can usually fix these."""
    return [
        i for i in _field_issues(field_results)
        if i.category == Category.FORMAT and i.severity != Severity.CRITICAL
    ]


def count_issues(field_results: FieldResults, business_issues: Sequence[Issue]) -> int:
    return sum(len(r.issues) for r in field_results.values()) + len(business_issues)


def generate_suggestions(
    field_results: FieldResults,
    business_issues: Sequence[Issue],
    quality: DataQuality,
    policy: ValidationPolicy | None = None,
) -> list[Suggestion]:
    """Turn issues and quality scores into remediation actions.

    The three checks are independent; none suppresses another.
    """
    policy = policy or ValidationPolicy()
    suggestions: list[Suggestion] = []

    critical = collect_critical_issues(field_results, business_issues)
    if critical:
        suggestions.append(Suggestion(
            type="critical",
            priority=Priority.HIGH,
            message=f"{len(critical)} critical data issues found that must be resolved",
            action="review_critical_issues",
            details=tuple(critical[:policy.max_critical_details]),
        ))

    completeness = quality.completeness
    if completeness.score < policy.completeness_threshold:
        suggestions.append(Suggestion(
            type="completeness",
            priority=Priority.MEDIUM,
            message=(
                f"Data completeness is below recommended threshold "
                f"({policy.completeness_threshold:.0%})"
            ),
            action="improve_completeness",
            details={
                "currentScore": completeness.score,
                "missingRequired": completeness.missing_required,
            },
        ))

    cleanable = collect_cleanable_issues(field_results)
    if cleanable:
        suggestions.append(Suggestion(
            type="cleaning",
            priority=Priority.LOW,
            message=f"{len(cleanable)} data formatting issues can be automatically cleaned",
            action="auto_clean_data",
            details=tuple(cleanable),
        ))

    logger.debug("Generated %d suggestions", len(suggestions))
    return suggestions


def top_recommendations(suggestions: Sequence[Suggestion], limit: int = 3) -> list[str]:
    ranked = sorted(suggestions, key=lambda s: s.priority.rank, reverse=True)
    return [s.message for s in ranked[:limit]]


def build_summary(
    field_results: FieldResults,
    business_issues: Sequence[Issue],
    quality: DataQuality,
    suggestions: Sequence[Suggestion],
    policy: ValidationPolicy | None = None,
) -> Summary:
    policy = policy or ValidationPolicy()
    overall = quality.overall
    return Summary(
        status=quality_status(overall),
        overall_score=overall,
        total_issues=count_issues(field_results, business_issues),
        critical_issues=len(collect_critical_issues(field_results, business_issues)),
        data_quality_grade=quality_grade(overall),
        recommendations=tuple(top_recommendations(suggestions, policy.max_recommendations)),
    )
