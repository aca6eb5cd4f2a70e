"""Field-level validation: every rule of every field against every record."""

import logging
from collections.abc import Sequence

from comp_integrity.models import Category, EmployeeRecord, FieldResult, FieldValue, Issue, Severity
from comp_integrity.rules.catalog import RuleCatalog, RuleDescriptor
from comp_integrity.rules.context import EvaluationContext, Failed, Faulted, Passed

logger = logging.getLogger(__name__)

type FieldResults = dict[str, FieldResult]


def _issue_for(
    record: EmployeeRecord,
    row_index: int,
    field_name: str,
    rule: RuleDescriptor,
    value,
    error: Exception | None = None,
) -> Issue:
    if error is None:
        category, severity, message = rule.category, rule.severity, rule.message
    else:
        category, severity = Category.VALIDATION_ERROR, Severity.HIGH
        message = f"Validation error: {error}"

    return Issue(
        employee_id=record.id,
        employee_name=record.display_name,
        rule=rule.name,
        category=category,
        severity=severity,
        message=message,
        row_index=row_index,
        value=value,
        field=field_name,
    )


def _field_value(record: EmployeeRecord, field_name: str) -> tuple[FieldValue, Exception | None]:
    try:
        return record.get(field_name), None
    except AttributeError as exc:
        logger.warning("Record has no field %s", field_name)
        return None, exc


def validate_field(
    field_name: str,
    rules: Sequence[RuleDescriptor],
    records: Sequence[EmployeeRecord],
    context: EvaluationContext,
) -> FieldResult:
    total = passed = failed = 0
    issues: list[Issue] = []

    for row_index, record in enumerate(records):
        value, lookup_error = _field_value(record, field_name)
        for rule in rules:
            total += 1
            outcome = Faulted(lookup_error) if lookup_error is not None else rule.evaluate(value, record, records, context)
            match outcome:
                case Passed():
                    passed += 1
                case Failed():
                    failed += 1
                    issues.append(_issue_for(record, row_index, field_name, rule, value))
                case Faulted(error=exc):
                    failed += 1
                    issues.append(_issue_for(record, row_index, field_name, rule, value, exc))

    return FieldResult(total_checked=total, passed=passed, failed=failed, issues=tuple(issues))


def validate_fields(
    records: Sequence[EmployeeRecord],
    catalog: RuleCatalog,
    context: EvaluationContext,
) -> FieldResults:
    """Evaluate the catalog's field rules over the batch.

    Returns per-field tallies in catalog order. A predicate that raises is
    recorded as a high-severity ``validation_error`` issue and evaluation
    carries on with the remaining (record, rule) pairs.
    """
    results: FieldResults = {}
    for field_name, rules in catalog.field_rules.items():
        results[field_name] = validate_field(field_name, rules, records, context)

    failed = sum(r.failed for r in results.values())
    logger.info("Field validation: %d fields checked, %d failures", len(results), failed)
    return results
