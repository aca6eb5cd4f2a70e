from dataclasses import replace

import pytest

from comp_integrity.models import Category, Severity
from comp_integrity.rules import field_rules
from comp_integrity.rules.catalog import RuleDescriptor
from comp_integrity.rules.context import Failed, Faulted, Passed
from comp_integrity.validation.fields import validate_field, validate_fields

from tests.conftest import record


def _issues(results, field_name):
    return list(results[field_name].issues)


@pytest.mark.parametrize(
    "field_name, overrides",
    [
        ("id", {"id": None}),
        ("name", {"name": "  "}),
        ("salary", {"salary": {"amount": 0, "currency": "USD"}}),
        ("salary", {"salary": None}),
    ],
)
def test_missing_critical_field_gives_exactly_one_critical_issue(catalog, make_context, field_name, overrides):
    records = [record(**overrides)]
    results = validate_fields(records, catalog, make_context(records))

    critical = [i for i in _issues(results, field_name) if i.severity == Severity.CRITICAL]
    assert len(critical) == 1
    assert critical[0].category == Category.REQUIRED
    assert critical[0].row_index == 0


@pytest.mark.parametrize("field_name", ["title", "country"])
def test_missing_title_or_country_is_high(catalog, make_context, field_name):
    records = [record(**{field_name: None})]
    issues = _issues(validate_fields(records, catalog, make_context(records)), field_name)

    assert [(i.rule, i.severity) for i in issues] == [("required", Severity.HIGH)]


def test_valid_record_passes_every_field_rule(catalog, make_context):
    records = [record()]
    results = validate_fields(records, catalog, make_context(records))

    assert all(r.failed == 0 for r in results.values())
    assert sum(r.total_checked for r in results.values()) == sum(len(rules) for rules in catalog.field_rules.values())


def test_duplicate_ids_flag_every_occurrence(catalog, make_context):
    records = [record(id="E1"), record(id="E1", name="Bob Jones"), record(id="E2")]
    issues = _issues(validate_fields(records, catalog, make_context(records)), "id")

    assert [(i.rule, i.row_index) for i in issues] == [("unique", 0), ("unique", 1)]
    assert all(i.severity == Severity.CRITICAL for i in issues)


def test_missing_ids_are_not_duplicates(catalog, make_context):
    records = [record(id=None), record(id=None)]
    issues = _issues(validate_fields(records, catalog, make_context(records)), "id")
    assert {i.rule for i in issues} == {"required"}


def test_name_format_and_length(make_context):
    context = make_context([])
    r = record()
    assert field_rules.name_format("José O'Neil-Smith", r, [], context)
    assert not field_rules.name_format("R2-D2", r, [], context)
    assert not field_rules.name_length("A", r, [], context)
    assert field_rules.name_length("", r, [], context)


def test_salary_rules(make_context):
    context = make_context([])
    salary = record(salary={"amount": 500, "currency": "usd"}).salary
    assert field_rules.salary_required(salary, None, [], context)
    assert not field_rules.reasonable_amount(salary, None, [], context)
    assert not field_rules.valid_currency(salary, None, [], context)
    assert field_rules.currency_required(salary, None, [], context)


def test_country_accepts_codes_names_and_synonyms(make_context):
    context = make_context([])
    for country in ("US", "Germany", "usa", " United Kingdom "):
        assert field_rules.valid_country(country, None, [], context)
    assert not field_rules.valid_country("Atlantis", None, [], context)


def test_rating_accepts_mapping_form(make_context):
    context = make_context([])
    assert field_rules.valid_rating({"text": "High Impact Performer"}, None, [], context)
    assert field_rules.valid_rating(None, None, [], context)
    assert not field_rules.valid_rating("Superstar", None, [], context)
    assert not field_rules.valid_rating(3, None, [], context)


def test_range_rules_respect_policy(make_context):
    context = make_context([])
    assert field_rules.comparatio_range(2.0, None, [], context)
    assert not field_rules.comparatio_range(2.01, None, [], context)
    assert field_rules.time_in_role_range(600, None, [], context)
    assert not field_rules.time_since_raise_range(-1, None, [], context)


def test_descriptor_outcomes(make_context):
    context = make_context([])
    passes = RuleDescriptor("always", Category.FORMAT, Severity.LOW, lambda *_: True, "never shown")
    fails = RuleDescriptor("never", Category.FORMAT, Severity.LOW, lambda *_: False, "shown")

    def explode(*_):
        raise RuntimeError("boom")

    faults = RuleDescriptor("explodes", Category.FORMAT, Severity.LOW, explode, "unused")

    assert passes.evaluate(None, None, [], context) == Passed()
    assert fails.evaluate(None, None, [], context) == Failed()
    outcome = faults.evaluate(None, None, [], context)
    assert isinstance(outcome, Faulted)
    assert str(outcome.error) == "boom"


def test_faulting_predicate_becomes_validation_error(make_context):
    records = [replace(record(), comparatio="abc"), record(id="E2")]
    rules = [RuleDescriptor("valid_range", Category.RANGE, Severity.MEDIUM, field_rules.comparatio_range, "msg")]

    result = validate_field("comparatio", rules, records, make_context(records))

    assert (result.total_checked, result.passed, result.failed) == (2, 1, 1)
    [issue] = result.issues
    assert issue.category == Category.VALIDATION_ERROR
    assert issue.severity == Severity.HIGH
    assert issue.message.startswith("Validation error:")
