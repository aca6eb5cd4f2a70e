"""Cross-field and cross-record business predicates.

Each predicate takes ``(record, records, context)``. Peer lookups go through
``context.peers`` rather than rescanning ``records``.
"""

from collections.abc import Sequence

from comp_integrity.models import EmployeeRecord
from comp_integrity.rules.context import EvaluationContext
from comp_integrity.rules.vocab import HIGH_PERFORMANCE_RATINGS, LOW_PERFORMANCE_RATINGS

type Records = Sequence[EmployeeRecord]


def salary_comparatio_consistency(record: EmployeeRecord, records: Records, context: EvaluationContext) -> bool:
    """Declared comparatio should match salary relative to same country/title peers."""
    if record.salary is None or not record.salary.amount or not record.comparatio:
        return True

    peer_mean = context.peers.mean_peer_salary(record)
    if peer_mean is None:
        return True

    expected = record.salary.amount / peer_mean
    return abs(record.comparatio - expected) <= context.policy.peer_comparatio_tolerance


def performance_salary_alignment(record: EmployeeRecord, records: Records, context: EvaluationContext) -> bool:
    rating = record.rating_text
    if not rating or not record.comparatio:
        return True

    policy = context.policy
    match rating.strip():
        case r if r in HIGH_PERFORMANCE_RATINGS:
            return record.comparatio >= policy.high_performer_min_comparatio
        case r if r in LOW_PERFORMANCE_RATINGS:
            return record.comparatio <= policy.low_performer_max_comparatio
        case _:
            return True


def time_consistency(record: EmployeeRecord, records: Records, context: EvaluationContext) -> bool:
    if record.time_in_role is None or record.time_since_raise is None:
        return True
    return record.time_since_raise <= record.time_in_role


def future_talent_performance_consistency(
    record: EmployeeRecord, records: Records, context: EvaluationContext
) -> bool:
    rating = record.rating_text
    if not record.is_future_talent or not rating:
        return True
    return rating.strip() not in LOW_PERFORMANCE_RATINGS
