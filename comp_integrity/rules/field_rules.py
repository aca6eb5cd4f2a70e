"""Per-field validation predicates.

Every predicate takes ``(value, record, records, context)`` and returns True
when the value passes. Predicates other than the ``required`` ones treat a
missing value as vacuously valid.
"""

import re
from collections.abc import Mapping, Sequence

from comp_integrity.models import EmployeeRecord, FieldValue, Salary, is_present
from comp_integrity.rules.context import EvaluationContext
from comp_integrity.rules.vocab import VALID_CURRENCIES, VALID_RATINGS, is_known_country

type Records = Sequence[EmployeeRecord]

# letters, spaces, hyphens, apostrophes, periods, commas, parentheses, Latin accents
NAME_PATTERN = re.compile(r"^[a-zA-Z\s\-'.,()\u00C0-\u017F]+$")


def _text(value: FieldValue) -> str:
    return str(value).strip() if is_present(value) else ""


def _in_range(value: float, low: float, high: float) -> bool:
    return low <= value <= high


def id_required(value: FieldValue, record: EmployeeRecord, records: Records, context: EvaluationContext) -> bool:
    return is_present(value)


def id_unique(value: FieldValue, record: EmployeeRecord, records: Records, context: EvaluationContext) -> bool:
    if not is_present(value):
        return True
    return context.occurrences(value) <= 1


def text_required(value: FieldValue, record: EmployeeRecord, records: Records, context: EvaluationContext) -> bool:
    return bool(_text(value))


def name_format(value: FieldValue, record: EmployeeRecord, records: Records, context: EvaluationContext) -> bool:
    text = _text(value)
    if not text:
        return True
    return NAME_PATTERN.match(text) is not None


def name_length(value: FieldValue, record: EmployeeRecord, records: Records, context: EvaluationContext) -> bool:
    text = _text(value)
    if not text:
        return True
    policy = context.policy
    return _in_range(len(text), policy.name_min_length, policy.name_max_length)


def title_length(value: FieldValue, record: EmployeeRecord, records: Records, context: EvaluationContext) -> bool:
    text = _text(value)
    if not text:
        return True
    return len(text) <= context.policy.title_max_length


def valid_country(value: FieldValue, record: EmployeeRecord, records: Records, context: EvaluationContext) -> bool:
    text = _text(value)
    if not text:
        return True
    return is_known_country(text)


def salary_required(value: FieldValue, record: EmployeeRecord, records: Records, context: EvaluationContext) -> bool:
    if not isinstance(value, Salary) or not is_present(value.amount):
        return False
    return value.amount > 0


def currency_required(value: FieldValue, record: EmployeeRecord, records: Records, context: EvaluationContext) -> bool:
    return isinstance(value, Salary) and bool(_text(value.currency))


def valid_currency(value: FieldValue, record: EmployeeRecord, records: Records, context: EvaluationContext) -> bool:
    if not isinstance(value, Salary) or not _text(value.currency):
        return True
    return _text(value.currency) in VALID_CURRENCIES


def reasonable_amount(value: FieldValue, record: EmployeeRecord, records: Records, context: EvaluationContext) -> bool:
    if not isinstance(value, Salary) or not is_present(value.amount) or value.amount == 0:
        return True
    return _in_range(value.amount, context.policy.salary_min, context.policy.salary_max)


def valid_rating(value: FieldValue, record: EmployeeRecord, records: Records, context: EvaluationContext) -> bool:
    rating = value.get("text") if isinstance(value, Mapping) else value
    if not is_present(rating):
        return True
    return isinstance(rating, str) and rating.strip() in VALID_RATINGS


def comparatio_range(value: FieldValue, record: EmployeeRecord, records: Records, context: EvaluationContext) -> bool:
    if not is_present(value):
        return True
    return _in_range(value, context.policy.comparatio_min, context.policy.comparatio_max)


def time_in_role_range(value: FieldValue, record: EmployeeRecord, records: Records, context: EvaluationContext) -> bool:
    if not is_present(value):
        return True
    return _in_range(value, 0, context.policy.max_time_in_role_months)


def time_since_raise_range(value: FieldValue, record: EmployeeRecord, records: Records, context: EvaluationContext) -> bool:
    if not is_present(value):
        return True
    return _in_range(value, 0, context.policy.max_time_since_raise_months)
