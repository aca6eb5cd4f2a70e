"""Report assembly: runs every validation stage and records the result.

``IntegrityChecker.validate_dataset`` is the entry point. It never raises:
rule violations and rule faults become issues, and anything unexpected is
logged and reported as a failed validation rather than propagated.
"""

import logging
import time
import tracemalloc
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

from comp_integrity.cleaning import clean_data
from comp_integrity.config import ValidationPolicy
from comp_integrity.history import ValidationHistory
from comp_integrity.models import (
    AccuracyScore,
    Category,
    CompletenessScore,
    ConsistencyScore,
    DataQuality,
    EmployeeRecord,
    Issue,
    PerformanceMetrics,
    Severity,
    ValidationReport,
    ValidityScore,
)
from comp_integrity.rules.catalog import RuleCatalog, build_default_catalog
from comp_integrity.rules.context import EvaluationContext
from comp_integrity.utils.frames import records_to_frame
from comp_integrity.validation.business import validate_business_rules
from comp_integrity.validation.fields import validate_fields
from comp_integrity.validation.quality import assess_data_quality
from comp_integrity.validation.suggestions import build_summary, generate_suggestions

logger = logging.getLogger(__name__)

type RecordInput = EmployeeRecord | Mapping[str, Any]
type ValidationOptions = Mapping[str, Any]


def coerce_records(records: Iterable[RecordInput] | None) -> list[EmployeeRecord]:
    """Normalise caller input into a list of records, never raising.

    Mappings are converted; anything else in the batch becomes an empty
    record so row positions stay aligned and the required rules report it.
    """
    match records:
        case None:
            logger.warning("No records supplied, validating an empty batch")
            return []
        case str() | bytes() | Mapping():
            logger.warning("Expected a sequence of records, got %s", type(records).__name__)
            return []

    try:
        items = list(records)
    except TypeError:
        logger.warning("Records are not iterable (%s), validating an empty batch", type(records).__name__)
        return []

    batch = []
    for row_index, item in enumerate(items):
        match item:
            case EmployeeRecord():
                batch.append(item)
            case Mapping():
                batch.append(EmployeeRecord.from_mapping(item))
            case _:
                logger.warning("Row %d is not a record (%s)", row_index, type(item).__name__)
                batch.append(EmployeeRecord.from_mapping({}))
    return batch


def _failed_quality() -> DataQuality:
    return DataQuality(
        completeness=CompletenessScore(0.0, 0.0, 0.0, 0, 0),
        consistency=ConsistencyScore(0.0, (), 0),
        accuracy=AccuracyScore(0.0, 0, 0),
        validity=ValidityScore(0.0, 0, 0),
        overall=0.0,
    )


class IntegrityChecker:
    def __init__(
        self,
        catalog: RuleCatalog | None = None,
        policy: ValidationPolicy | None = None,
        history: ValidationHistory | None = None,
    ):
        self.policy = policy or ValidationPolicy()
        self.catalog = catalog or build_default_catalog(self.policy)
        self.history = history if history is not None else ValidationHistory(self.policy.history_limit)

    def validate_dataset(
        self,
        records: Iterable[RecordInput] | None,
        options: ValidationOptions | None = None,
    ) -> ValidationReport:
        started = time.perf_counter()
        options = dict(options or {})
        tracing = self.policy.track_memory and not tracemalloc.is_tracing()
        if tracing:
            tracemalloc.start()

        batch: list[EmployeeRecord] = []
        try:
            batch = coerce_records(records)
            report = self._assemble(batch, options, started)
        except Exception as exc:
            logger.exception("Validation aborted unexpectedly")
            report = self._failure_report(batch, options, started, exc)
        finally:
            if tracing:
                tracemalloc.stop()

        self.history.record(report)
        logger.info(
            "Validated %d records: grade %s, %d issues (%d critical) in %.1f ms",
            report.total_records,
            report.summary.data_quality_grade,
            report.summary.total_issues,
            report.summary.critical_issues,
            report.performance.validation_time,
        )
        return report

    def _assemble(
        self,
        batch: list[EmployeeRecord],
        options: dict[str, Any],
        started: float,
    ) -> ValidationReport:
        context = EvaluationContext.build(batch, self.policy)

        field_results = validate_fields(batch, self.catalog, context)
        business_issues = validate_business_rules(batch, self.catalog, context)
        quality = assess_data_quality(records_to_frame(batch), self.policy)
        suggestions = generate_suggestions(field_results, business_issues, quality, self.policy)
        summary = build_summary(field_results, business_issues, quality, suggestions, self.policy)

        return ValidationReport(
            timestamp=datetime.now(timezone.utc),
            total_records=len(batch),
            validation_options=options,
            field_validation=field_results,
            business_validation=tuple(business_issues),
            data_quality=quality,
            suggestions=tuple(suggestions),
            summary=summary,
            performance=self._performance(started),
        )

    def _failure_report(
        self,
        batch: list[EmployeeRecord],
        options: dict[str, Any],
        started: float,
        error: Exception,
    ) -> ValidationReport:
        issue = Issue(
            employee_id=None,
            employee_name="Unknown",
            rule="validate_dataset",
            category=Category.VALIDATION_ERROR,
            severity=Severity.CRITICAL,
            message=f"Validation failed: {error}",
            row_index=-1,
        )
        quality = _failed_quality()
        summary = build_summary({}, [issue], quality, [], self.policy)
        return ValidationReport(
            timestamp=datetime.now(timezone.utc),
            total_records=len(batch),
            validation_options=options,
            field_validation={},
            business_validation=(issue,),
            data_quality=quality,
            suggestions=(),
            summary=summary,
            performance=self._performance(started),
        )

    def _performance(self, started: float) -> PerformanceMetrics:
        memory = None
        if self.policy.track_memory and tracemalloc.is_tracing():
            current, peak = tracemalloc.get_traced_memory()
            memory = {"used": current, "peak": peak}
        return PerformanceMetrics(
            validation_time=(time.perf_counter() - started) * 1000,
            rules_executed=self.catalog.rule_count(),
            memory_usage=memory,
        )

    def clean_data(self, records: Iterable[RecordInput]) -> list[EmployeeRecord]:
        return clean_data(coerce_records(records), self.catalog)

    def get_validation_history(self) -> tuple[ValidationReport, ...]:
        return self.history.snapshot()

    def clear_validation_history(self) -> None:
        self.history.clear()


def validate_dataset(
    records: Iterable[RecordInput] | None,
    options: ValidationOptions | None = None,
    policy: ValidationPolicy | None = None,
) -> ValidationReport:
    """Validate a batch with a throwaway checker (and throwaway history)."""
    return IntegrityChecker(policy=policy).validate_dataset(records, options)
