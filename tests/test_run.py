import json

import pytest

from comp_integrity.checker import validate_dataset
from comp_integrity.run import exit_code, main
from comp_integrity.utils.io import write_records

from tests.conftest import record


@pytest.fixture
def csv_path(tmp_path):
    records = [record(id="E1"), record(id="E2", name="Bob Jones"), record(id="E3", name=None)]
    return write_records(records, tmp_path / "employees.csv")


def test_cli_exit_codes(csv_path):
    assert main([str(csv_path), "--format", "summary"]) == 0
    assert main([str(csv_path), "--format", "summary", "--strict"]) == 1


def test_cli_missing_input(tmp_path):
    assert main([str(tmp_path / "nope.csv")]) == 2


def test_cli_unknown_profile(csv_path):
    assert main([str(csv_path), "--profile", "aggressive"]) == 2


def test_cli_json_output(csv_path, capsys):
    capsys.readouterr()
    main([str(csv_path), "--format", "json"])
    data = json.loads(capsys.readouterr().out)
    assert data["totalRecords"] == 3
    assert data["summary"]["criticalIssues"] == 1


def test_cli_writes_report_and_cleaned_records(csv_path, tmp_path):
    output = tmp_path / "reports" / "report.json"
    main([str(csv_path), "--clean", "--format", "summary", "--output", str(output)])

    assert json.loads(output.read_text())["validationOptions"]["cleaned"] is True
    assert (output.parent / "employees_cleaned.csv").exists()


def test_exit_code_for_poor_status():
    bad = {"id": "E1", "country": "Atlantis", "salary": {"amount": 5, "currency": "XYZ"},
           "comparatio": 9, "performanceRating": "Bad"}
    poor = validate_dataset([bad, {**bad, "salary": {"amount": 5, "currency": "ABC"}}])
    assert poor.summary.status == "poor"
    assert exit_code(poor) == 1
    assert exit_code(validate_dataset([])) == 0
