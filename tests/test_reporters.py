import json

from comp_integrity.checker import validate_dataset
from comp_integrity.validation.reporters import format_report

from tests.conftest import employee


def _report():
    return validate_dataset([
        employee(country=None),
        employee(id="E002", name="Bob [admin] Jones", salary={"amount": 500, "currency": "USD"}),
    ])


def test_json_format_round_trips():
    data = json.loads(format_report(_report(), "json"))
    assert data["totalRecords"] == 2
    assert data["summary"]["dataQualityGrade"] == _report().summary.data_quality_grade


def test_summary_format_lists_issues_by_severity():
    lines = format_report(_report(), "summary").splitlines()

    assert lines[0].startswith("[")
    assert "grade" in lines[0]
    assert lines[1].strip().startswith("CRITICAL") or lines[1].strip().startswith("HIGH")


def test_table_format_renders_scores_and_issues():
    text = format_report(_report(), "table")

    assert "Completeness" in text
    assert "Overall" in text
    assert "Country is required" in text
    assert "[admin]" in text


def test_unknown_format_falls_back_to_table():
    assert "Completeness" in format_report(validate_dataset([]), "html")
