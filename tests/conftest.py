import pytest

from comp_integrity.config import ValidationPolicy
from comp_integrity.models import EmployeeRecord
from comp_integrity.rules.catalog import build_default_catalog
from comp_integrity.rules.context import EvaluationContext


def employee(**overrides) -> dict:
    """A fully valid employee row in wire (camelCase) shape."""
    row = {
        "id": "E001",
        "name": "Alice Smith",
        "title": "Engineer",
        "country": "US",
        "salary": {"amount": 100_000, "currency": "USD"},
        "performanceRating": "Meets Expectations",
        "comparatio": 1.0,
        "timeInRole": 24,
        "timeSinceRaise": 12,
        "futureTalent": "No",
    }
    row.update(overrides)
    return row


def record(**overrides) -> EmployeeRecord:
    return EmployeeRecord.from_mapping(employee(**overrides))


@pytest.fixture
def policy():
    return ValidationPolicy()


@pytest.fixture
def catalog(policy):
    return build_default_catalog(policy)


@pytest.fixture
def make_context(policy):
    def _make(records):
        return EvaluationContext.build(records, policy)
    return _make


@pytest.fixture
def three_records():
    """One record missing its country, one underpaid, one clean."""
    return [
        employee(id="E001", name="Alice Smith", title="Engineer", country=None),
        employee(id="E002", name="Bob Jones", title="Analyst", salary={"amount": 500, "currency": "USD"}),
        employee(id="E003", name="Carol White", title="Manager", salary={"amount": 120_000, "currency": "USD"}),
    ]
