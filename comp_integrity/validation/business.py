"""Business-rule validation across fields and across the whole batch."""

import logging
from collections.abc import Sequence

from comp_integrity.models import Category, EmployeeRecord, Issue, Severity
from comp_integrity.rules.catalog import BusinessRuleDescriptor, RuleCatalog
from comp_integrity.rules.context import EvaluationContext, Failed, Faulted, Passed

logger = logging.getLogger(__name__)


def _business_issue(
    record: EmployeeRecord,
    row_index: int,
    rule: BusinessRuleDescriptor,
    error: Exception | None = None,
) -> Issue:
    match error:
        case None:
            category, severity, message = rule.category, rule.severity, rule.message
        case exc:
            category, severity = Category.VALIDATION_ERROR, Severity.HIGH
            message = f"Business rule error: {exc}"

    return Issue(
        employee_id=record.id,
        employee_name=record.display_name,
        rule=rule.name,
        category=category,
        severity=severity,
        message=message,
        row_index=row_index,
    )


def validate_business_rules(
    records: Sequence[EmployeeRecord],
    catalog: RuleCatalog,
    context: EvaluationContext,
) -> list[Issue]:
    """Evaluate every business rule against every record, in record order."""
    issues: list[Issue] = []

    for row_index, record in enumerate(records):
        for rule in catalog.business_rules:
            match rule.evaluate(record, records, context):
                case Passed():
                    continue
                case Failed():
                    issues.append(_business_issue(record, row_index, rule))
                case Faulted(error=exc):
                    issues.append(_business_issue(record, row_index, rule, exc))

    logger.info(
        "Business validation: %d rules over %d records, %d issues",
        len(catalog.business_rules),
        len(records),
        len(issues),
    )
    return issues
