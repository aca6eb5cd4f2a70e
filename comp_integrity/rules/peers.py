"""Peer-group index keyed by (country, title).

Peer-comparison rules need the mean salary of every *other* record sharing a
record's country and title. Rescanning the batch per record is quadratic, so
the index aggregates group totals once with a pandas groupby and answers each
lookup by subtracting the subject's own contribution.
"""

import logging
import math
from collections.abc import Sequence

import numpy as np
import pandas as pd

from comp_integrity.models import EmployeeRecord, Salary

logger = logging.getLogger(__name__)

type PeerKey = tuple[str, str]


def peer_key(record: EmployeeRecord) -> PeerKey | None:
    if not isinstance(record.country, str) or not isinstance(record.title, str):
        return None
    country, title = record.country.strip(), record.title.strip()
    if not country or not title:
        return None
    return country, title


def usable_salary(salary: Salary | None) -> float:
    """Positive numeric salary amount, or NaN when there isn't one."""
    if salary is None or isinstance(salary.amount, bool):
        return np.nan
    if not isinstance(salary.amount, (int, float)) or math.isnan(salary.amount):
        return np.nan
    return float(salary.amount) if salary.amount > 0 else np.nan


class PeerIndex:
    def __init__(self, records: Sequence[EmployeeRecord]):
        keys = [peer_key(r) for r in records]
        frame = pd.DataFrame({
            "country": pd.Series([k[0] if k else None for k in keys], dtype="object"),
            "title": pd.Series([k[1] if k else None for k in keys], dtype="object"),
            "amount": pd.Series([usable_salary(r.salary) for r in records], dtype="float64"),
        })

        grouped = frame.groupby(["country", "title"], dropna=True)["amount"]
        self._totals: dict[PeerKey, float] = grouped.sum().to_dict()
        self._salaried: dict[PeerKey, int] = grouped.count().to_dict()
        self._sizes: dict[PeerKey, int] = grouped.size().to_dict()
        logger.debug("Indexed %d records into %d peer groups", len(records), len(self._sizes))

    def __len__(self) -> int:
        return len(self._sizes)

    def peer_count(self, record: EmployeeRecord) -> int:
        """Number of other records in the same (country, title) group."""
        key = peer_key(record)
        if key is None or key not in self._sizes:
            return 0
        return int(self._sizes[key]) - 1

    def mean_peer_salary(self, record: EmployeeRecord) -> float | None:
        """Mean salary of the record's salaried peers, excluding the record itself.

        Returns None when the record has no peers with a usable salary.
        """
        key = peer_key(record)
        if key is None or key not in self._sizes:
            return None

        total = float(self._totals[key])
        count = int(self._salaried[key])
        own = usable_salary(record.salary)
        if not math.isnan(own):
            total -= own
            count -= 1

        if count <= 0 or total <= 0:
            return None
        return total / count
