"""Predicate rule parsing and evaluation tests."""

from __future__ import annotations

from decimal import Decimal

import pytest
from async_sequence_tester.scenario_ingestion import (
    PredicateRuleError,
    PredicateRuleKind,
    parse_predicate_rule,
)


@pytest.mark.parametrize(
    ("rule_text", "element", "expected"),
    [
        ("<5", 4, True),
        ("<5", 5, False),
        ("<= 5", 5, True),
        (">= 2.5", 2.5, True),
        ("> 2,5", 2.4, False),
        ("!= 3", 4, True),
        ("== 3", "3", True),
        ("== ready", "ready", True),
        ("!= ready", "done", True),
        ("<5", "not a number", False),
        ("<5", None, False),
        ("<5", True, False),
        ("<5", Decimal("4.9"), True),
    ],
)
def test_comparison_rules(rule_text: str, element: object, expected: bool) -> None:
    rule = parse_predicate_rule(rule_text)

    assert rule.kind == PredicateRuleKind.COMPARISON
    assert rule(element) is expected


@pytest.mark.parametrize(
    ("rule_text", "element", "expected"),
    [
        ("10+-0.5", 10.4, True),
        ("10+-0.5", 10.6, False),
        ("1,50+-0,1", "1,55", True),
        ("10+2", 12, True),
        ("10+2", 12.1, False),
        ("10-2", 8, True),
        ("10-2", 7.9, False),
        ("10+-1", "ten", False),
    ],
)
def test_tolerance_rules(rule_text: str, element: object, expected: bool) -> None:
    rule = parse_predicate_rule(rule_text)

    assert rule.kind == PredicateRuleKind.TOLERANCE
    assert rule(element) is expected


def test_pattern_rules_search_strings_only() -> None:
    rule = parse_predicate_rule("re:^ab+c")

    assert rule.kind == PredicateRuleKind.PATTERN
    assert rule("abbbc-tail")
    assert not rule("xabc")
    assert not rule(123)


def test_rule_description_quotes_rule_text() -> None:
    assert parse_predicate_rule(" <5 ").description == "matching '<5'"


@pytest.mark.parametrize("raw_rule", ["", "   ", 5, None, "~5", "< five", "re:(unclosed"])
def test_invalid_rules_raise(raw_rule: object) -> None:
    with pytest.raises(PredicateRuleError):
        parse_predicate_rule(raw_rule)
