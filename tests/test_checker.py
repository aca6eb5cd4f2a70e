import json

import pandas as pd
import pytest

from comp_integrity import checker as checker_module
from comp_integrity.checker import IntegrityChecker, coerce_records, validate_dataset
from comp_integrity.config import ValidationPolicy
from comp_integrity.history import ValidationHistory
from comp_integrity.models import Category, EmployeeRecord, Severity
from comp_integrity.rules import field_rules
from comp_integrity.rules.catalog import RuleDescriptor, build_default_catalog

from tests.conftest import employee


def test_three_record_scenario(three_records):
    report = validate_dataset(three_records)
    issues = report.all_issues()

    assert report.summary.total_issues == 2
    assert report.summary.critical_issues == 0

    [country] = report.field_validation["country"].issues
    assert (country.rule, country.severity, country.category) == ("required", Severity.HIGH, Category.REQUIRED)
    assert country.message == "Country is required"
    assert country.row_index == 0

    [salary] = report.field_validation["salary"].issues
    assert (salary.rule, salary.severity, salary.category) == ("reasonable_amount", Severity.MEDIUM, Category.RANGE)
    assert salary.row_index == 1

    assert report.business_validation == ()
    assert {i.row_index for i in issues} == {0, 1}
    assert report.data_quality.accuracy.total_checks == 9
    assert report.data_quality.accuracy.accurate_checks == 8


def test_empty_batch_is_perfect():
    report = validate_dataset([])

    assert report.total_records == 0
    assert report.data_quality.overall == 1.0
    assert report.summary.total_issues == 0
    assert report.suggestions == ()
    assert (report.summary.data_quality_grade, report.summary.status) == ("A+", "excellent")


@pytest.mark.parametrize("batch", [None, 42, "not records", {"id": "E1"}])
def test_malformed_batches_validate_as_empty(batch):
    report = validate_dataset(batch)
    assert report.total_records == 0
    assert report.summary.total_issues == 0


def test_non_record_items_become_empty_records():
    records = coerce_records([employee(), "junk", EmployeeRecord.from_mapping(employee(id="E2"))])

    assert len(records) == 3
    assert records[1] == EmployeeRecord.from_mapping({})
    report = validate_dataset(records)
    assert {i.row_index for i in report.all_issues() if i.severity == Severity.CRITICAL} == {1}


def test_duplicate_ids_reported_in_fields_and_consistency():
    report = validate_dataset([employee(id="E1"), employee(id="E1", name="Bob Jones"), employee(id="E2")])

    assert len([i for i in report.field_validation["id"].issues if i.rule == "unique"]) == 2
    assert report.data_quality.consistency.duplicate_ids == 1
    assert report.suggestions[0].type == "critical"


def test_rule_fault_is_reported_not_raised():
    def explode(value, record, records, context):
        raise ValueError("unexpected value")

    catalog = build_default_catalog().with_field_rule(
        "comparatio", RuleDescriptor("explodes", Category.RANGE, Severity.LOW, explode, "unused")
    )
    report = IntegrityChecker(catalog=catalog).validate_dataset([employee(), employee(id="E2")])

    errors = [i for i in report.all_issues() if i.category == Category.VALIDATION_ERROR]
    assert len(errors) == 2
    assert all(i.severity == Severity.HIGH for i in errors)
    assert report.performance.rules_executed == catalog.rule_count()


def test_internal_failure_gives_failed_report(monkeypatch):
    def broken(*args, **kwargs):
        raise RuntimeError("scoring exploded")

    monkeypatch.setattr(checker_module, "assess_data_quality", broken)
    checker = IntegrityChecker()
    report = checker.validate_dataset([employee()])

    assert report.summary.status == "poor"
    assert report.summary.data_quality_grade == "F"
    [issue] = report.business_validation
    assert issue.severity == Severity.CRITICAL
    assert issue.category == Category.VALIDATION_ERROR
    assert "scoring exploded" in issue.message
    assert checker.get_validation_history() == (report,)


def test_history_is_per_checker_and_bounded():
    history = ValidationHistory(maxlen=2)
    checker = IntegrityChecker(history=history)
    reports = [checker.validate_dataset([employee(id=f"E{i}")]) for i in range(3)]

    assert checker.get_validation_history() == tuple(reports[1:])
    assert len(IntegrityChecker().get_validation_history()) == 0

    checker.clear_validation_history()
    assert checker.get_validation_history() == ()


def test_history_limit_from_policy():
    checker = IntegrityChecker(policy=ValidationPolicy(history_limit=1))
    checker.validate_dataset([])
    latest = checker.validate_dataset([employee()])
    assert checker.get_validation_history() == (latest,)


def test_options_echo_and_performance():
    report = validate_dataset([employee()], {"source": "unit-test"})

    assert report.validation_options == {"source": "unit-test"}
    assert report.performance.validation_time >= 0
    assert report.performance.memory_usage is None


def test_memory_tracking():
    report = validate_dataset([employee()], policy=ValidationPolicy(track_memory=True))
    assert set(report.performance.memory_usage) == {"used", "peak"}


def test_report_serialises_to_json(three_records):
    data = json.loads(json.dumps(validate_dataset(three_records).to_dict(), default=str))

    assert data["totalRecords"] == 3
    assert data["summary"]["totalIssues"] == 2
    assert data["fieldValidation"]["country"]["issues"][0]["severity"] == "high"
    assert set(data["dataQuality"]) == {"completeness", "consistency", "accuracy", "validity", "overall"}


def test_checker_clean_data_accepts_mappings():
    cleaned = IntegrityChecker().clean_data([employee(name="  alice smith ", country="usa")])
    assert (cleaned[0].name, cleaned[0].country) == ("Alice Smith", "US")


def test_custom_policy_changes_rule_thresholds():
    policy = ValidationPolicy(salary_min=100)
    report = validate_dataset([employee(salary={"amount": 500, "currency": "USD"})], policy=policy)
    assert report.field_validation["salary"].issues == ()


def test_rule_predicates_are_reusable_outside_the_checker(make_context):
    r = EmployeeRecord.from_mapping(employee())
    assert field_rules.valid_currency(r.salary, r, [r], make_context([r]))


def test_pandas_missing_markers_are_validated_not_faulted():
    report = validate_dataset([employee(comparatio=pd.NA), employee(id="E2", futureTalent=pd.NA)])

    assert report.total_records == 2
    assert report.summary.data_quality_grade != "F"
    assert not [i for i in report.all_issues() if i.category == Category.VALIDATION_ERROR]


def test_report_mappings_are_read_only():
    options = {"source": "unit-test"}
    report = validate_dataset([employee()], options)
    options["source"] = "changed"

    assert report.validation_options == {"source": "unit-test"}
    with pytest.raises(TypeError):
        report.validation_options["source"] = "tampered"
    with pytest.raises(TypeError):
        del report.field_validation["id"]
    assert json.loads(json.dumps(report.to_dict(), default=str))["validationOptions"] == {"source": "unit-test"}


def test_rule_for_unknown_field_is_reported_not_raised():
    catalog = build_default_catalog().with_field_rule(
        "department", RuleDescriptor("known_department", Category.REFERENTIAL, Severity.LOW, lambda *_: True, "unused")
    )
    report = IntegrityChecker(catalog=catalog).validate_dataset([employee(), employee(id="E2")])

    errors = report.field_validation["department"].issues
    assert report.total_records == 2
    assert [i.category for i in errors] == [Category.VALIDATION_ERROR] * 2
    assert all(i.severity == Severity.HIGH for i in errors)
    assert not [i for i in report.business_validation if i.category == Category.VALIDATION_ERROR]
