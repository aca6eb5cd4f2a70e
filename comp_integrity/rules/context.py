"""Per-run evaluation context and the structured outcome of a rule check."""

import logging
from collections import Counter
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from comp_integrity.config import ValidationPolicy
from comp_integrity.models import EmployeeRecord, RecordID, is_present
from comp_integrity.rules.peers import PeerIndex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Passed:
    pass


@dataclass(frozen=True)
class Failed:
    pass


@dataclass(frozen=True)
class Faulted:
    error: Exception


type RuleOutcome = Passed | Failed | Faulted

PASSED = Passed()
FAILED = Failed()


def evaluate_predicate(check: Callable[[], bool], rule_name: str) -> RuleOutcome:
    """Run one bound predicate and fold its result, or its exception, into an outcome."""
    try:
        return PASSED if check() else FAILED
    except Exception as exc:
        logger.warning("Rule %s raised %s: %s", rule_name, type(exc).__name__, exc)
        return Faulted(exc)


@dataclass(frozen=True)
class EvaluationContext:
    """Lookups shared by every rule during a single validation pass."""

    policy: ValidationPolicy
    id_counts: Counter[RecordID]
    peers: PeerIndex

    @classmethod
    def build(
        cls,
        records: Sequence[EmployeeRecord],
        policy: ValidationPolicy | None = None,
    ) -> "EvaluationContext":
        id_counts = Counter(r.id for r in records if is_present(r.id))
        return cls(
            policy=policy or ValidationPolicy(),
            id_counts=id_counts,
            peers=PeerIndex(records),
        )

    def occurrences(self, record_id: RecordID) -> int:
        return self.id_counts.get(record_id, 0)
