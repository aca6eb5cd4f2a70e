"""Data quality scoring: completeness, consistency, accuracy and validity.

Each dimension is computed independently over a flat frame of the batch and
returns a score in [0, 1] with the counts behind it. A dimension with
nothing to measure scores 1.0. The overall score is the policy-weighted
combination of the four, so it stays within [0, 1] as long as the weights
sum to one.
"""

import logging
import math

import numpy as np
import pandas as pd

from comp_integrity.config import QualityWeights, ValidationPolicy
from comp_integrity.models import (
    AccuracyScore,
    CompletenessScore,
    ConsistencyScore,
    DataQuality,
    ValidityScore,
)
from comp_integrity.rules.vocab import VALID_CURRENCIES, VALID_RATINGS, is_known_country

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ["id", "name", "title", "country", "salary"]
OPTIONAL_FIELDS = ["performance_rating", "comparatio", "time_in_role", "time_since_raise", "future_talent"]


def present_mask(series: pd.Series) -> pd.Series:
    """Boolean mask of values that are not None/NaN/empty-string."""
    not_blank = series.map(lambda v: not (isinstance(v, str) and v == "")).astype(bool)
    return series.notna().astype(bool) & not_blank


def _ratio(numerator: int, denominator: int) -> float:
    return numerator / denominator if denominator > 0 else 1.0


def _member_mask(series: pd.Series, allowed) -> pd.Series:
    return series.map(lambda v: isinstance(v, str) and v.strip() in allowed).astype(bool)


def assess_completeness(frame: pd.DataFrame, policy: ValidationPolicy) -> CompletenessScore:
    rows = len(frame)
    required_present = sum(int(present_mask(frame[col]).sum()) for col in REQUIRED_FIELDS)
    optional_present = sum(int(present_mask(frame[col]).sum()) for col in OPTIONAL_FIELDS)
    required_total = rows * len(REQUIRED_FIELDS)
    optional_total = rows * len(OPTIONAL_FIELDS)

    required_score = _ratio(required_present, required_total)
    optional_score = _ratio(optional_present, optional_total)
    score = math.fsum([
        policy.required_completeness_weight * required_score,
        policy.optional_completeness_weight * optional_score,
    ])

    return CompletenessScore(
        score=min(score, 1.0),
        required_completeness=required_score,
        optional_completeness=optional_score,
        missing_required=required_total - required_present,
        missing_optional=optional_total - optional_present,
    )


def assess_consistency(frame: pd.DataFrame) -> ConsistencyScore:
    inconsistencies: list[dict[str, str]] = []

    ids = frame.loc[present_mask(frame["id"]), "id"]
    id_counts = ids.value_counts(sort=False)
    duplicates = id_counts[id_counts > 1]
    for record_id, count in duplicates.items():
        inconsistencies.append({
            "type": "duplicate_id",
            "message": f"Duplicate employee ID: {record_id} ({count} occurrences)",
        })

    has_pair = present_mask(frame["country"]) & present_mask(frame["salary_currency"])
    pairs = frame.loc[has_pair, ["country", "salary_currency"]]
    for country, currencies in pairs.groupby("country", sort=False)["salary_currency"]:
        distinct = list(dict.fromkeys(currencies))
        if len(distinct) > 1:
            inconsistencies.append({
                "type": "inconsistent_currency",
                "message": f"Multiple currencies for {country}: {', '.join(map(str, distinct))}",
            })

    rows = len(frame)
    score = max(0.0, 1 - len(inconsistencies) / rows) if rows else 1.0
    return ConsistencyScore(
        score=score,
        inconsistencies=tuple(inconsistencies),
        duplicate_ids=len(duplicates),
    )


def assess_accuracy(frame: pd.DataFrame, policy: ValidationPolicy) -> AccuracyScore:
    amount = pd.to_numeric(frame["salary_amount"], errors="coerce")
    comparatio = pd.to_numeric(frame["comparatio"], errors="coerce")
    time_in_role = pd.to_numeric(frame["time_in_role"], errors="coerce")

    # (applicable, accurate) per plausibility check; zero salary is not applicable
    checks = [
        (
            present_mask(frame["salary_amount"]) & amount.ne(0),
            amount.between(policy.salary_min, policy.salary_max),
        ),
        (
            present_mask(frame["comparatio"]),
            comparatio.between(policy.comparatio_min, policy.comparatio_max),
        ),
        (
            present_mask(frame["time_in_role"]),
            time_in_role.between(0, policy.max_time_in_role_months),
        ),
    ]

    total = sum(int(applicable.sum()) for applicable, _ in checks)
    accurate = sum(int((applicable & accurate_mask).sum()) for applicable, accurate_mask in checks)
    return AccuracyScore(score=_ratio(accurate, total), total_checks=total, accurate_checks=accurate)


def assess_validity(frame: pd.DataFrame) -> ValidityScore:
    country_valid = frame["country"].map(lambda v: isinstance(v, str) and is_known_country(v)).astype(bool)
    checks = [
        (present_mask(frame["country"]), country_valid),
        (present_mask(frame["salary_currency"]), _member_mask(frame["salary_currency"], VALID_CURRENCIES)),
        (present_mask(frame["performance_rating"]), _member_mask(frame["performance_rating"], VALID_RATINGS)),
    ]

    total = sum(int(applicable.sum()) for applicable, _ in checks)
    valid = sum(int((applicable & valid_mask).sum()) for applicable, valid_mask in checks)
    return ValidityScore(score=_ratio(valid, total), total_validations=total, valid_validations=valid)


def combine_scores(
    completeness: float,
    consistency: float,
    accuracy: float,
    validity: float,
    weights: QualityWeights,
) -> float:
    overall = math.fsum([
        completeness * weights.completeness,
        consistency * weights.consistency,
        accuracy * weights.accuracy,
        validity * weights.validity,
    ])
    return float(np.clip(overall, 0.0, 1.0))


def assess_data_quality(frame: pd.DataFrame, policy: ValidationPolicy | None = None) -> DataQuality:
    policy = policy or ValidationPolicy()
    completeness = assess_completeness(frame, policy)
    consistency = assess_consistency(frame)
    accuracy = assess_accuracy(frame, policy)
    validity = assess_validity(frame)

    overall = combine_scores(
        completeness.score, consistency.score, accuracy.score, validity.score, policy.weights
    )
    logger.info(
        "Quality scores: completeness=%.3f consistency=%.3f accuracy=%.3f validity=%.3f overall=%.3f",
        completeness.score, consistency.score, accuracy.score, validity.score, overall,
    )
    return DataQuality(
        completeness=completeness,
        consistency=consistency,
        accuracy=accuracy,
        validity=validity,
        overall=overall,
    )
