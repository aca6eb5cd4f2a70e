"""Validation policy configuration.

Tolerance bands and plausibility limits are business policy, not mechanism,
so every rule reads them from a ``ValidationPolicy`` instead of inlining
numbers. Policies come from a named profile or from the
``[tool.comp_integrity]`` table of a pyproject.toml.
"""

import math
import tomllib
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

type ConfigDict = dict[str, str | int | float | bool | dict[str, float]]


class ConfigError(ValueError):
    """Raised when a policy or weight set is malformed."""


@dataclass(frozen=True)
class QualityWeights:
    completeness: float = 0.30
    consistency: float = 0.25
    accuracy: float = 0.25
    validity: float = 0.20

    def __post_init__(self) -> None:
        values = [self.completeness, self.consistency, self.accuracy, self.validity]
        if any(w < 0 for w in values):
            raise ConfigError(f"Quality weights must be non-negative: {values}")
        if not math.isclose(math.fsum(values), 1.0, abs_tol=1e-9):
            raise ConfigError(f"Quality weights must sum to 1.0, got {math.fsum(values)}")


@dataclass(frozen=True)
class ValidationPolicy:
    # peer comparison and rating/comparatio alignment
    peer_comparatio_tolerance: float = 0.3
    high_performer_min_comparatio: float = 0.8
    low_performer_max_comparatio: float = 1.2

    # field plausibility ranges
    salary_min: float = 1_000
    salary_max: float = 10_000_000
    comparatio_min: float = 0.5
    comparatio_max: float = 2.0
    max_time_in_role_months: float = 600
    max_time_since_raise_months: float = 120
    name_min_length: int = 2
    name_max_length: int = 100
    title_max_length: int = 200

    # quality scoring and suggestions
    weights: QualityWeights = field(default_factory=QualityWeights)
    required_completeness_weight: float = 0.8
    optional_completeness_weight: float = 0.2
    completeness_threshold: float = 0.8
    max_critical_details: int = 5
    max_recommendations: int = 3

    track_memory: bool = False
    history_limit: int | None = None

    def __post_init__(self) -> None:
        if self.peer_comparatio_tolerance < 0:
            raise ConfigError("peer_comparatio_tolerance must be non-negative")
        if self.salary_min > self.salary_max:
            raise ConfigError("salary_min must not exceed salary_max")
        if self.comparatio_min > self.comparatio_max:
            raise ConfigError("comparatio_min must not exceed comparatio_max")
        split = (self.required_completeness_weight, self.optional_completeness_weight)
        if min(split) < 0 or not math.isclose(math.fsum(split), 1.0, abs_tol=1e-9):
            raise ConfigError(f"Completeness weights must be non-negative and sum to 1.0: {split}")
        if self.history_limit is not None and self.history_limit < 1:
            raise ConfigError("history_limit must be a positive integer or unset")


def load_validation_policy(profile: str = "default") -> ValidationPolicy:
    match profile:
        case "default":
            return ValidationPolicy()
        case "strict":
            return ValidationPolicy(
                peer_comparatio_tolerance=0.2,
                high_performer_min_comparatio=0.9,
                low_performer_max_comparatio=1.1,
                completeness_threshold=0.9,
            )
        case "lenient":
            return ValidationPolicy(
                peer_comparatio_tolerance=0.4,
                high_performer_min_comparatio=0.7,
                low_performer_max_comparatio=1.3,
                completeness_threshold=0.7,
            )
        case other:
            raise ConfigError(f"Unknown validation profile: {other}")


def policy_from_mapping(data: dict[str, Any]) -> ValidationPolicy:
    """Build a policy from a profile name plus field overrides."""
    overrides = dict(data)
    base = load_validation_policy(overrides.pop("profile", "default"))

    known = {f.name for f in fields(ValidationPolicy)}
    unknown = set(overrides) - known
    if unknown:
        raise ConfigError(f"Unknown policy settings: {sorted(unknown)}")

    if "weights" in overrides:
        weights = overrides["weights"]
        if not isinstance(weights, dict):
            raise ConfigError("weights must be a table of dimension -> weight")
        try:
            overrides["weights"] = QualityWeights(**weights)
        except TypeError as exc:
            raise ConfigError(f"Invalid weights table: {exc}") from exc

    return replace(base, **overrides)


def get_env_config(pyproject: Path | None = None) -> ConfigDict:
    """Read the ``[tool.comp_integrity]`` table from pyproject.toml."""
    if pyproject is None:
        pyproject = Path(__file__).parent.parent / "pyproject.toml"
    if not pyproject.exists():
        return {}
    with open(pyproject, "rb") as f:
        data = tomllib.load(f)
    return data.get("tool", {}).get("comp_integrity", {})


def policy_from_pyproject(pyproject: Path | None = None) -> ValidationPolicy:
    return policy_from_mapping(get_env_config(pyproject))
