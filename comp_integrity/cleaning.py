"""Explicit, on-demand normalisation of employee records.

Cleaning is never run as part of validation. It returns new records and
leaves the input untouched; a transform that fails on one field of one
record is logged and that field keeps its original value.
"""

import logging
from collections.abc import Iterable
from dataclasses import replace

from comp_integrity.models import EmployeeRecord
from comp_integrity.rules.catalog import RuleCatalog, build_default_catalog

logger = logging.getLogger(__name__)

# catalog field names (wire names) -> EmployeeRecord attributes
_ATTRIBUTES = {
    "id": "id",
    "name": "name",
    "title": "title",
    "country": "country",
    "salary": "salary",
    "performanceRating": "performance_rating",
    "comparatio": "comparatio",
    "timeInRole": "time_in_role",
    "timeSinceRaise": "time_since_raise",
    "futureTalent": "future_talent",
}


def clean_record(record: EmployeeRecord, catalog: RuleCatalog) -> EmployeeRecord:
    changes = {}
    for field_name, rules in catalog.cleaning_rules.items():
        attribute = _ATTRIBUTES.get(field_name, field_name)
        value = getattr(record, attribute)
        if value is None:
            continue

        for rule in rules:
            try:
                value = rule.transform(value)
            except Exception as exc:
                logger.warning(
                    "Error cleaning field %s for employee %s with %s: %s",
                    field_name, record.id, rule.name, exc,
                )

        if value != getattr(record, attribute):
            changes[attribute] = value

    return replace(record, **changes) if changes else record


def clean_data(records: Iterable[EmployeeRecord], catalog: RuleCatalog | None = None) -> list[EmployeeRecord]:
    """Apply the catalog's cleaning rules to every record, returning new records."""
    catalog = catalog or build_default_catalog()
    originals = list(records)
    cleaned = [clean_record(record, catalog) for record in originals]
    modified = sum(1 for before, after in zip(originals, cleaned) if before is not after)
    logger.info("Cleaned %d records, %d modified", len(cleaned), modified)
    return cleaned
