"""Caller-owned store of validation reports."""

import logging
from collections import deque
from collections.abc import Iterator

from comp_integrity.models import ValidationReport

logger = logging.getLogger(__name__)


class ValidationHistory:
    """Append-only report log, optionally bounded to the most recent ``maxlen`` reports."""

    def __init__(self, maxlen: int | None = None):
        self._reports: deque[ValidationReport] = deque(maxlen=maxlen)

    @property
    def maxlen(self) -> int | None:
        return self._reports.maxlen

    def record(self, report: ValidationReport) -> None:
        if self.maxlen is not None and len(self._reports) == self.maxlen:
            logger.debug("History full (%d), dropping oldest report", self.maxlen)
        self._reports.append(report)

    def clear(self) -> None:
        self._reports.clear()

    def snapshot(self) -> tuple[ValidationReport, ...]:
        return tuple(self._reports)

    def latest(self) -> ValidationReport | None:
        return self._reports[-1] if self._reports else None

    def __len__(self) -> int:
        return len(self._reports)

    def __iter__(self) -> Iterator[ValidationReport]:
        return iter(self.snapshot())
