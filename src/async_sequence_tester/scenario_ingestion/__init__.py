"""Scenario ingestion exports."""

from .expectation_rules import (
    PredicateRule,
    PredicateRuleError,
    PredicateRuleKind,
    parse_predicate_rule,
)
from .scenario_models import ScenarioReadResult, SequenceScenario, TerminalErrorSpec
from .scenario_reader import ScenarioValidationError, read_scenarios

__all__ = [
    "PredicateRule",
    "PredicateRuleError",
    "PredicateRuleKind",
    "ScenarioReadResult",
    "ScenarioValidationError",
    "SequenceScenario",
    "TerminalErrorSpec",
    "parse_predicate_rule",
    "read_scenarios",
]
