"""Scenario file ingestion and validation service."""

from __future__ import annotations

import builtins
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from async_sequence_tester.expectation_descriptors import (
    ExpectationDescriptor,
    ExpectationKind,
    SourcePosition,
    describe_skip_count,
    emit,
    emit_eventually,
    emit_eventually_where,
    emit_where,
    expect_error,
    expect_error_where,
    skip,
    skip_all,
    skip_while,
)

from .expectation_rules import PredicateRuleError, parse_predicate_rule
from .scenario_models import ScenarioReadResult, SequenceScenario, TerminalErrorSpec

_BARE_EXPECTATIONS = frozenset({"skip", "skip_all", "expect_error"})


class ScenarioValidationError(Exception):
    """Raised when a scenario file is invalid."""


def read_scenarios(scenario_path: Path | str) -> ScenarioReadResult:
    """Read a YAML scenario file and return normalized scenarios."""
    path = Path(scenario_path)
    if not path.exists():
        raise ScenarioValidationError(f"Scenario file not found: {path}")
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ScenarioValidationError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(raw, Mapping):
        raise ScenarioValidationError(f"Scenario file {path} must contain a mapping.")
    entries = raw.get("scenarios")
    if not isinstance(entries, list) or not entries:
        raise ScenarioValidationError(
            f"Scenario file {path} must define a non-empty 'scenarios' list."
        )

    scenarios: list[SequenceScenario] = []
    seen_ids: set[str] = set()
    for entry_number, entry in enumerate(entries, start=1):
        if not isinstance(entry, Mapping):
            raise ScenarioValidationError(f"Scenario #{entry_number} in {path} must be a mapping.")
        scenario = _build_scenario(path, entry_number, entry)
        if scenario.scenario_id in seen_ids:
            raise ScenarioValidationError(
                f"Duplicate ID '{scenario.scenario_id}' detected (scenario #{entry_number})."
            )
        seen_ids.add(scenario.scenario_id)
        scenarios.append(scenario)
    return ScenarioReadResult(scenarios=tuple(scenarios))


def _build_scenario(path: Path, entry_number: int, entry: Mapping[str, Any]) -> SequenceScenario:
    scenario_id = _require_text(entry.get("id"), "id", entry_number)
    elements = entry.get("elements", [])
    if elements is None:
        elements = []
    if not isinstance(elements, list):
        raise ScenarioValidationError(f"Scenario '{scenario_id}': 'elements' must be a list.")
    raw_expectations = entry.get("expect")
    if not isinstance(raw_expectations, list):
        raise ScenarioValidationError(f"Scenario '{scenario_id}': 'expect' must be a list.")
    expectations = tuple(
        _build_expectation(raw_expectation, SourcePosition(str(path), index + 1, scenario_id))
        for index, raw_expectation in enumerate(raw_expectations)
    )
    return SequenceScenario(
        source_path=path,
        scenario_id=scenario_id,
        tags=_parse_tags(entry.get("tags")),
        enabled=_parse_bool(entry.get("enabled"), scenario_id),
        notes=_optional_string(entry.get("notes")),
        elements=tuple(elements),
        expectations=expectations,
        terminal_error=_parse_terminal_error(entry.get("error"), scenario_id),
    )


def _build_expectation(raw: object, position: SourcePosition) -> ExpectationDescriptor:
    """Translate one ``expect`` entry.

    Entries are either a bare keyword (``skip``, ``skip_all``, ``expect_error``) or a
    single-key mapping such as ``{emit: 3}`` or ``{skip_while: "<5"}``. The ``line``
    of the position is the 1-based entry number inside the scenario's ``expect`` list.
    """
    if isinstance(raw, str) and raw in _BARE_EXPECTATIONS:
        raw = {raw: None}
    if not isinstance(raw, Mapping) or len(raw) != 1:
        raise ScenarioValidationError(
            f"{position}: expectation must be a single-key mapping, got {raw!r}."
        )
    ((keyword, argument),) = raw.items()
    if keyword == "emit":
        return emit(argument, position=position)
    if keyword == "emit_eventually":
        return emit_eventually(argument, position=position)
    if keyword == "skip":
        return _build_skip(argument, position)
    if keyword == "skip_all":
        return skip_all(position=position)
    if keyword == "expect_error":
        return _build_error_expectation(argument, position)
    if keyword in ("emit_where", "emit_eventually_where", "skip_while"):
        try:
            rule = parse_predicate_rule(argument)
        except PredicateRuleError as exc:
            raise ScenarioValidationError(f"{position}: {exc}") from exc
        builder = {
            "emit_where": emit_where,
            "emit_eventually_where": emit_eventually_where,
            "skip_while": skip_while,
        }[keyword]
        return builder(rule, description=rule.description, position=position)
    raise ScenarioValidationError(f"{position}: unknown expectation '{keyword}'.")


def _build_skip(argument: object, position: SourcePosition) -> ExpectationDescriptor:
    if argument is None:
        return skip(position=position)
    if isinstance(argument, bool) or not isinstance(argument, int):
        raise ScenarioValidationError(f"{position}: skip count must be an integer.")
    # Non-positive counts are kept so the run reports them as InvalidSkipCount.
    return ExpectationDescriptor(
        kind=ExpectationKind.SKIP_COUNT,
        description=describe_skip_count(argument),
        count=argument,
        position=position,
    )


def _build_error_expectation(argument: object, position: SourcePosition) -> ExpectationDescriptor:
    if argument is None:
        return expect_error(position=position)
    if isinstance(argument, str):
        return expect_error(_resolve_error_type(argument, str(position)), position=position)
    if not isinstance(argument, Mapping):
        raise ScenarioValidationError(
            f"{position}: 'expect_error' must be empty, a type name or a mapping."
        )
    type_name = argument.get("type")
    error_type = (
        _resolve_error_type(type_name, str(position)) if type_name is not None else BaseException
    )
    fragment = argument.get("message_contains")
    if fragment is None:
        return expect_error(error_type if type_name is not None else None, position=position)
    if not isinstance(fragment, str):
        raise ScenarioValidationError(f"{position}: 'message_contains' must be a string.")
    label = f"error of type {error_type.__name__}" if type_name is not None else "error"
    return expect_error_where(
        lambda error: isinstance(error, error_type) and fragment in str(error),
        description=f"{label} containing '{fragment}'",
        position=position,
    )


def _parse_terminal_error(raw: object, scenario_id: str) -> TerminalErrorSpec | None:
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise ScenarioValidationError(f"Scenario '{scenario_id}': 'error' must be a mapping.")
    type_name = raw.get("type")
    error_type = _resolve_error_type(type_name, f"Scenario '{scenario_id}'")
    if not issubclass(error_type, Exception):
        raise ScenarioValidationError(
            f"Scenario '{scenario_id}': source error '{type_name}' must be an Exception subclass."
        )
    return TerminalErrorSpec(
        type_name=error_type.__name__, message=_optional_string(raw.get("message"))
    )


def _resolve_error_type(type_name: object, context: str) -> type[BaseException]:
    if not isinstance(type_name, str) or not type_name.strip():
        raise ScenarioValidationError(f"{context}: error type must be a non-empty string.")
    candidate = getattr(builtins, type_name.strip(), None)
    if not isinstance(candidate, type) or not issubclass(candidate, BaseException):
        raise ScenarioValidationError(f"{context}: unknown builtin error type '{type_name}'.")
    return candidate


def _parse_tags(value: object) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, list):
        return tuple(filter(None, (str(item).strip() for item in value)))
    return tuple(filter(None, (item.strip() for item in str(value).split(","))))


def _parse_bool(value: object, scenario_id: str) -> bool:
    if value is None:
        return True
    if isinstance(value, bool):
        return value
    raise ScenarioValidationError(
        f"Scenario '{scenario_id}': unable to interpret boolean value: {value!r}"
    )


def _optional_string(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _require_text(value: object, field_name: str, entry_number: int) -> str:
    text = _optional_string(value)
    if not text:
        raise ScenarioValidationError(
            f"Scenario #{entry_number}: field '{field_name}' is required."
        )
    return text
