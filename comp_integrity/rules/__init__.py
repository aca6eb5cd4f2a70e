"""Rule descriptors, vocabularies and the default rule catalog."""

from comp_integrity.rules.context import EvaluationContext, Faulted, Failed, Passed, RuleOutcome
from comp_integrity.rules.catalog import (
    BusinessRuleDescriptor,
    CleaningRule,
    RuleCatalog,
    RuleDescriptor,
    build_default_catalog,
)
from comp_integrity.rules.peers import PeerIndex
