"""Predicate rule modeling for scenario expectations."""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum

_NUMBER_PATTERN = r"[+-]?\d+(?:[.,]\d+)?"
_PLUS_MINUS_PATTERN = re.compile(rf"^\s*({_NUMBER_PATTERN})\s*\+\-\s*({_NUMBER_PATTERN})\s*$")
_PLUS_PATTERN = re.compile(rf"^\s*({_NUMBER_PATTERN})\s*\+\s*({_NUMBER_PATTERN})\s*$")
_MINUS_PATTERN = re.compile(rf"^\s*({_NUMBER_PATTERN})\s*-\s*({_NUMBER_PATTERN})\s*$")
_COMPARISON_PATTERN = re.compile(r"^\s*(<=|>=|!=|==|<|>)\s*(.*?)\s*$")
_REGEX_PREFIX = "re:"


class PredicateRuleKind(str, Enum):
    """Supported predicate rule kinds."""

    COMPARISON = "comparison"
    TOLERANCE = "tolerance"
    PATTERN = "pattern"


@dataclass(frozen=True)
class PredicateRule:
    """Parsed predicate rule, callable against one element."""

    kind: PredicateRuleKind
    text: str

    @property
    def description(self) -> str:
        """Human-readable rendering used as the descriptor description."""
        return f"matching '{self.text}'"

    def __call__(self, element: object) -> bool:
        if self.kind == PredicateRuleKind.PATTERN:
            return _evaluate_pattern(self.text, element)
        if self.kind == PredicateRuleKind.TOLERANCE:
            return _evaluate_tolerance(self.text, element)
        return _evaluate_comparison(self.text, element)


class PredicateRuleError(ValueError):
    """Raised when a predicate rule expression cannot be parsed."""


def parse_predicate_rule(raw_rule: object) -> PredicateRule:
    """Parse a raw rule expression into an explicit predicate rule."""
    if not isinstance(raw_rule, str) or not raw_rule.strip():
        raise PredicateRuleError("Predicate rule must be a non-empty string.")
    text = raw_rule.strip()
    if text.startswith(_REGEX_PREFIX):
        try:
            re.compile(text[len(_REGEX_PREFIX) :])
        except re.error as exc:
            raise PredicateRuleError(f"Invalid regular expression in rule '{text}': {exc}") from exc
        return PredicateRule(kind=PredicateRuleKind.PATTERN, text=text)
    if _is_tolerance_expression(text):
        return PredicateRule(kind=PredicateRuleKind.TOLERANCE, text=text)
    match = _COMPARISON_PATTERN.fullmatch(text)
    if match is None or not match.group(2):
        raise PredicateRuleError(
            f"Unsupported predicate rule '{text}'. "
            "Use a comparison (<, <=, >, >=, ==, !=), a tolerance (10+-0,5) or 're:<pattern>'."
        )
    operator = match.group(1)
    if operator not in ("==", "!=") and _parse_decimal(match.group(2)) is None:
        raise PredicateRuleError(f"Ordering rule '{text}' requires a numeric operand.")
    return PredicateRule(kind=PredicateRuleKind.COMPARISON, text=text)


def _is_tolerance_expression(value: str) -> bool:
    return any(
        pattern.fullmatch(value) for pattern in (_PLUS_MINUS_PATTERN, _PLUS_PATTERN, _MINUS_PATTERN)
    )


def _evaluate_pattern(text: str, element: object) -> bool:
    if not isinstance(element, str):
        return False
    return re.search(text[len(_REGEX_PREFIX) :], element) is not None


def _evaluate_tolerance(text: str, element: object) -> bool:
    actual = _parse_decimal(element)
    if actual is None:
        return False
    for pattern, evaluator in (
        (_PLUS_MINUS_PATTERN, _evaluate_plus_minus),
        (_PLUS_PATTERN, _evaluate_plus),
        (_MINUS_PATTERN, _evaluate_minus),
    ):
        match = pattern.fullmatch(text)
        if match:
            return evaluator(actual, match.group(1), match.group(2))
    return False


def _evaluate_plus_minus(actual: Decimal, center_raw: str, tolerance_raw: str) -> bool:
    center, tolerance = _parse_tolerance_parts(center_raw, tolerance_raw)
    if center is None or tolerance is None:
        return False
    return abs(actual - center) <= tolerance


def _evaluate_plus(actual: Decimal, center_raw: str, tolerance_raw: str) -> bool:
    center, tolerance = _parse_tolerance_parts(center_raw, tolerance_raw)
    if center is None or tolerance is None:
        return False
    return actual <= center + tolerance


def _evaluate_minus(actual: Decimal, center_raw: str, tolerance_raw: str) -> bool:
    center, tolerance = _parse_tolerance_parts(center_raw, tolerance_raw)
    if center is None or tolerance is None:
        return False
    return actual >= center - tolerance


def _parse_tolerance_parts(
    center_raw: str, tolerance_raw: str
) -> tuple[Decimal | None, Decimal | None]:
    return _parse_decimal(center_raw), _parse_decimal(tolerance_raw)


def _evaluate_comparison(text: str, element: object) -> bool:
    match = _COMPARISON_PATTERN.fullmatch(text)
    if match is None:
        return False
    operator, operand_raw = match.group(1), match.group(2)
    operand = _parse_decimal(operand_raw)
    actual = _parse_decimal(element)
    if operand is not None and actual is not None:
        return _compare(actual, operator, operand)
    if operator == "==":
        return _normalize_comparison_value(element) == operand_raw
    if operator == "!=":
        return _normalize_comparison_value(element) != operand_raw
    return False


def _compare(actual: Decimal, operator: str, operand: Decimal) -> bool:
    if operator == "<":
        return actual < operand
    if operator == "<=":
        return actual <= operand
    if operator == ">":
        return actual > operand
    if operator == ">=":
        return actual >= operand
    if operator == "==":
        return actual == operand
    return actual != operand


def _parse_decimal(value: object) -> Decimal | None:
    normalized = _normalize_decimal_input(value)
    if normalized is None:
        return None
    try:
        return Decimal(normalized)
    except InvalidOperation:
        return None


def _normalize_decimal_input(value: object) -> str | Decimal | None:
    coerced_text = _coerce_decimal_text(value)
    if coerced_text is None:
        return None
    return _normalize_decimal_separators(coerced_text)


def _coerce_decimal_text(value: object) -> str | Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int | float):
        return str(value)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None


def _normalize_decimal_separators(value: str | Decimal) -> str | Decimal:
    if isinstance(value, Decimal):
        return value
    if "," in value and "." in value:
        if value.rfind(",") > value.rfind("."):
            return value.replace(".", "").replace(",", ".")
        return value.replace(",", "")
    if "," in value:
        return value.replace(".", "").replace(",", ".")
    return value


def _normalize_comparison_value(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
