"""Rule descriptors and the catalog the validators evaluate.

The validators are generic over a ``RuleCatalog``: adding a check means adding
a descriptor here (or via ``with_field_rule`` / ``with_business_rule``), never
touching the evaluation loop.
"""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from typing import Any

from comp_integrity.config import ValidationPolicy
from comp_integrity.models import Category, EmployeeRecord, FieldValue, Severity
from comp_integrity.rules import business_rules, cleaning, field_rules
from comp_integrity.rules.context import EvaluationContext, RuleOutcome, evaluate_predicate

type Records = Sequence[EmployeeRecord]
type FieldPredicate = Callable[[FieldValue, EmployeeRecord, Records, EvaluationContext], bool]
type BusinessPredicate = Callable[[EmployeeRecord, Records, EvaluationContext], bool]
type Transform = Callable[[Any], Any]


@dataclass(frozen=True)
class RuleDescriptor:
    name: str
    category: Category
    severity: Severity
    predicate: FieldPredicate
    message: str

    def evaluate(
        self,
        value: FieldValue,
        record: EmployeeRecord,
        records: Records,
        context: EvaluationContext,
    ) -> RuleOutcome:
        return evaluate_predicate(lambda: self.predicate(value, record, records, context), self.name)


@dataclass(frozen=True)
class BusinessRuleDescriptor:
    name: str
    category: Category
    severity: Severity
    predicate: BusinessPredicate
    message: str

    def evaluate(self, record: EmployeeRecord, records: Records, context: EvaluationContext) -> RuleOutcome:
        return evaluate_predicate(lambda: self.predicate(record, records, context), self.name)


@dataclass(frozen=True)
class CleaningRule:
    name: str
    transform: Transform


@dataclass(frozen=True)
class RuleCatalog:
    field_rules: Mapping[str, tuple[RuleDescriptor, ...]]
    business_rules: tuple[BusinessRuleDescriptor, ...] = ()
    cleaning_rules: Mapping[str, tuple[CleaningRule, ...]] = field(default_factory=dict)

    def rule_count(self) -> int:
        return sum(len(rules) for rules in self.field_rules.values()) + len(self.business_rules)

    def with_field_rule(self, field_name: str, rule: RuleDescriptor) -> "RuleCatalog":
        updated = dict(self.field_rules)
        updated[field_name] = (*updated.get(field_name, ()), rule)
        return replace(self, field_rules=updated)

    def with_business_rule(self, rule: BusinessRuleDescriptor) -> "RuleCatalog":
        return replace(self, business_rules=(*self.business_rules, rule))

    def with_cleaning_rule(self, field_name: str, rule: CleaningRule) -> "RuleCatalog":
        updated = dict(self.cleaning_rules)
        updated[field_name] = (*updated.get(field_name, ()), rule)
        return replace(self, cleaning_rules=updated)


def _field_rules(policy: ValidationPolicy) -> dict[str, tuple[RuleDescriptor, ...]]:
    required, fmt, rng, consistency = Category.REQUIRED, Category.FORMAT, Category.RANGE, Category.CONSISTENCY
    critical, high, medium, low = Severity.CRITICAL, Severity.HIGH, Severity.MEDIUM, Severity.LOW

    return {
        "id": (
            RuleDescriptor("required", required, critical, field_rules.id_required,
                           "Employee ID is required"),
            RuleDescriptor("unique", consistency, critical, field_rules.id_unique,
                           "Employee ID must be unique"),
        ),
        "name": (
            RuleDescriptor("required", required, critical, field_rules.text_required,
                           "Employee name is required"),
            RuleDescriptor("format", fmt, medium, field_rules.name_format,
                           "Name contains invalid characters"),
            RuleDescriptor("length", rng, medium, field_rules.name_length,
                           f"Name must be between {policy.name_min_length} and "
                           f"{policy.name_max_length} characters"),
        ),
        "title": (
            RuleDescriptor("required", required, high, field_rules.text_required,
                           "Job title is required"),
            RuleDescriptor("length", rng, low, field_rules.title_length,
                           f"Job title is too long (max {policy.title_max_length} characters)"),
        ),
        "country": (
            RuleDescriptor("required", required, high, field_rules.text_required,
                           "Country is required"),
            RuleDescriptor("valid_country", fmt, medium, field_rules.valid_country,
                           "Invalid country code or name"),
        ),
        "salary": (
            RuleDescriptor("required", required, critical, field_rules.salary_required,
                           "Valid salary amount is required"),
            RuleDescriptor("currency_required", required, high, field_rules.currency_required,
                           "Salary currency is required"),
            RuleDescriptor("valid_currency", fmt, medium, field_rules.valid_currency,
                           "Invalid currency code"),
            RuleDescriptor("reasonable_amount", rng, medium, field_rules.reasonable_amount,
                           f"Salary amount seems unreasonable (should be between "
                           f"{policy.salary_min:,.0f} and {policy.salary_max:,.0f})"),
        ),
        "performanceRating": (
            RuleDescriptor("valid_rating", rng, medium, field_rules.valid_rating,
                           "Invalid performance rating"),
        ),
        "comparatio": (
            RuleDescriptor("valid_range", rng, medium, field_rules.comparatio_range,
                           f"Comparatio should be between {policy.comparatio_min} and "
                           f"{policy.comparatio_max}"),
        ),
        "timeInRole": (
            RuleDescriptor("valid_range", rng, low, field_rules.time_in_role_range,
                           f"Time in role should be between 0 and "
                           f"{policy.max_time_in_role_months / 12:g} years "
                           f"({policy.max_time_in_role_months:g} months)"),
        ),
        "timeSinceRaise": (
            RuleDescriptor("valid_range", rng, low, field_rules.time_since_raise_range,
                           f"Time since raise should be between 0 and "
                           f"{policy.max_time_since_raise_months / 12:g} years "
                           f"({policy.max_time_since_raise_months:g} months)"),
        ),
    }


def _business_rules() -> tuple[BusinessRuleDescriptor, ...]:
    logic = Category.BUSINESS_LOGIC
    return (
        BusinessRuleDescriptor(
            "salary_comparatio_consistency", logic, Severity.MEDIUM,
            business_rules.salary_comparatio_consistency,
            "Comparatio seems inconsistent with salary relative to peers",
        ),
        BusinessRuleDescriptor(
            "performance_salary_alignment", logic, Severity.LOW,
            business_rules.performance_salary_alignment,
            "Performance rating and salary level may not be aligned",
        ),
        BusinessRuleDescriptor(
            "time_consistency", logic, Severity.LOW,
            business_rules.time_consistency,
            "Time since raise cannot exceed time in role",
        ),
        BusinessRuleDescriptor(
            "future_talent_performance_consistency", logic, Severity.LOW,
            business_rules.future_talent_performance_consistency,
            "Future talent designation may not align with performance rating",
        ),
    )


def _cleaning_rules() -> dict[str, tuple[CleaningRule, ...]]:
    trim = CleaningRule("trim_whitespace", cleaning.trim_whitespace)
    title_case = CleaningRule("normalize_case", cleaning.title_case)
    return {
        "name": (trim, title_case),
        "title": (trim, title_case),
        "country": (trim, CleaningRule("normalize_country", cleaning.normalize_country)),
        "performanceRating": (CleaningRule("normalize_rating", cleaning.normalize_rating),),
    }


def build_default_catalog(policy: ValidationPolicy | None = None) -> RuleCatalog:
    policy = policy or ValidationPolicy()
    return RuleCatalog(
        field_rules=_field_rules(policy),
        business_rules=_business_rules(),
        cleaning_rules=_cleaning_rules(),
    )
