import math

import pandas as pd

from comp_integrity.models import (
    Category,
    EmployeeRecord,
    Issue,
    Priority,
    Salary,
    Severity,
    is_present,
)


def test_severity_rank_orders_critical_highest():
    ranks = [s.rank for s in (Severity.CRITICAL, Severity.HIGH, Severity.MEDIUM, Severity.LOW, Severity.INFO)]
    assert ranks == sorted(ranks, reverse=True)
    assert Priority.HIGH.rank > Priority.MEDIUM.rank > Priority.LOW.rank


def test_is_present():
    assert not is_present(None)
    assert not is_present("")
    assert not is_present(math.nan)
    assert not is_present(pd.NA)
    assert not is_present(pd.NaT)
    assert is_present({"text": "Meets"})
    assert is_present(0)
    assert is_present("x")


def test_from_mapping_accepts_wire_and_attribute_names():
    wire = EmployeeRecord.from_mapping({"id": "E1", "timeInRole": "24", "performanceRating": {"text": "Meets"}})
    snake = EmployeeRecord.from_mapping({"id": "E1", "time_in_role": 24})

    assert wire.time_in_role == 24.0
    assert snake.time_in_role == 24
    assert wire.rating_text == "Meets"
    assert wire.get("timeInRole") == wire.get("time_in_role")


def test_from_mapping_normalises_ids_and_missing_values():
    r = EmployeeRecord.from_mapping({"id": 12.0, "name": math.nan, "comparatio": "n/a"})
    assert r.id == 12
    assert r.name is None
    assert r.comparatio is None
    assert r.salary is None
    assert r.display_name == "Unknown"


def test_salary_from_value():
    assert Salary.from_value({"amount": "1,200", "currency": "EUR"}) == Salary(1200.0, "EUR")
    assert Salary.from_value({"currency": "EUR"}) == Salary(None, "EUR")
    assert Salary.from_value(50_000) == Salary(50_000, None)
    assert Salary.from_value(None) is None
    assert Salary.from_value("") is None


def test_future_talent_flags():
    assert EmployeeRecord.from_mapping({"futureTalent": "Yes"}).is_future_talent
    assert EmployeeRecord.from_mapping({"futureTalent": True}).is_future_talent
    assert not EmployeeRecord.from_mapping({"futureTalent": "No"}).is_future_talent
    assert not EmployeeRecord.from_mapping({}).is_future_talent


def test_issue_to_dict_includes_field_and_value_only_for_field_issues():
    field_issue = Issue("E1", "Alice", "required", Category.REQUIRED, Severity.CRITICAL,
                        "Valid salary amount is required", 0, value=Salary(0, "USD"), field="salary")
    business_issue = Issue("E1", "Alice", "time_consistency", Category.BUSINESS_LOGIC, Severity.LOW,
                           "Time since raise cannot exceed time in role", 0)

    assert field_issue.to_dict()["value"] == {"amount": 0, "currency": "USD"}
    assert field_issue.to_dict()["severity"] == "critical"
    assert "field" not in business_issue.to_dict()
    assert business_issue.to_dict()["rowIndex"] == 0


def test_from_mapping_treats_pandas_missing_markers_as_none():
    r = EmployeeRecord.from_mapping({
        "id": pd.NA,
        "name": pd.NA,
        "comparatio": pd.NA,
        "salary": {"amount": pd.NA, "currency": "USD"},
        "performanceRating": pd.NA,
        "futureTalent": pd.NA,
    })

    assert (r.id, r.name, r.comparatio) == (None, None, None)
    assert r.salary.amount is None
    assert r.performance_rating is None
    assert r.future_talent is None
