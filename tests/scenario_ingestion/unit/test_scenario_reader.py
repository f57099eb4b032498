"""Scenario file reader tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from async_sequence_tester.expectation_descriptors import ExpectationKind, SourcePosition
from async_sequence_tester.matching_validation import matches_element, matches_error
from async_sequence_tester.scenario_ingestion import (
    ScenarioValidationError,
    TerminalErrorSpec,
    read_scenarios,
)


def _write_scenarios(tmp_path: Path, contents: str) -> Path:
    path = tmp_path / "scenarios.yaml"
    path.write_text(contents, encoding="utf-8")
    return path


def test_reads_scenario_with_all_expectation_forms(tmp_path: Path) -> None:
    path = _write_scenarios(
        tmp_path,
        """
scenarios:
  - id: ticks
    tags: [smoke, feed]
    notes: "  replayed from staging  "
    elements: [1, 2, 3, 10, 11, "done"]
    expect:
      - emit: 1
      - skip
      - skip: 1
      - emit_where: ">= 10"
      - emit_eventually: done
      - emit_eventually_where: "re:^d"
      - skip_while: "<5"
      - skip_all
""",
    )

    result = read_scenarios(path)

    (scenario,) = result.scenarios
    assert scenario.scenario_id == "ticks"
    assert scenario.tags == ("smoke", "feed")
    assert scenario.enabled is True
    assert scenario.notes == "replayed from staging"
    assert scenario.elements == (1, 2, 3, 10, 11, "done")
    assert scenario.terminal_error is None
    assert scenario.source_path == path
    assert [descriptor.kind for descriptor in scenario.expectations] == [
        ExpectationKind.EXACT_VALUE,
        ExpectationKind.SKIP_ONE,
        ExpectationKind.SKIP_COUNT,
        ExpectationKind.PREDICATE,
        ExpectationKind.EVENTUALLY_VALUE,
        ExpectationKind.EVENTUALLY_PREDICATE,
        ExpectationKind.SKIP_WHILE,
        ExpectationKind.SKIP_ALL,
    ]
    assert scenario.expectations[3].description == "matching '>= 10'"
    assert matches_element(scenario.expectations[3], 10)
    assert scenario.expectations[0].position == SourcePosition(str(path), 1, "ticks")
    assert scenario.expectations[7].position == SourcePosition(str(path), 8, "ticks")


def test_reads_error_expectation_forms(tmp_path: Path) -> None:
    path = _write_scenarios(
        tmp_path,
        """
scenarios:
  - id: any
    error: {type: ValueError, message: boom}
    expect:
      - expect_error
  - id: typed
    expect:
      - expect_error: LookupError
  - id: typed-with-message
    tags: "a, b"
    enabled: false
    expect:
      - expect_error: {type: KeyError, message_contains: missing}
  - id: message-only
    expect:
      - expect_error: {message_contains: late}
""",
    )

    scenarios = read_scenarios(path).scenarios

    any_error, typed, typed_with_message, message_only = (
        scenario.expectations[0] for scenario in scenarios
    )
    assert scenarios[0].terminal_error == TerminalErrorSpec(type_name="ValueError", message="boom")
    assert scenarios[2].tags == ("a", "b")
    assert scenarios[2].enabled is False
    assert scenarios[1].elements == ()
    assert any_error.kind == ExpectationKind.ERROR_ANY
    assert typed.kind == ExpectationKind.ERROR_OF_KIND
    assert typed.error_kind is LookupError
    assert typed_with_message.kind == ExpectationKind.ERROR_PREDICATE
    assert typed_with_message.description == "error of type KeyError containing 'missing'"
    assert matches_error(typed_with_message, KeyError("missing key"))
    assert not matches_error(typed_with_message, ValueError("missing key"))
    assert message_only.description == "error containing 'late'"
    assert matches_error(message_only, TimeoutError("too late"))


def test_terminal_error_spec_builds_builtin_exception() -> None:
    error = TerminalErrorSpec(type_name="ConnectionError", message="reset").build()

    assert isinstance(error, ConnectionError)
    assert str(error) == "reset"


def test_non_positive_skip_count_is_kept_for_the_run(tmp_path: Path) -> None:
    path = _write_scenarios(
        tmp_path,
        """
scenarios:
  - id: zero
    elements: [1]
    expect:
      - skip: 0
""",
    )

    (descriptor,) = read_scenarios(path).scenarios[0].expectations

    assert descriptor.kind == ExpectationKind.SKIP_COUNT
    assert descriptor.count == 0


@pytest.mark.parametrize(
    ("contents", "message"),
    [
        ("- just a list\n", "must contain a mapping"),
        ("scenarios: []\n", "non-empty 'scenarios' list"),
        ("scenarios:\n  - 3\n", "must be a mapping"),
        ("scenarios:\n  - expect: []\n", "field 'id' is required"),
        ("scenarios:\n  - {id: a, expect: []}\n  - {id: a, expect: []}\n", "Duplicate ID 'a'"),
        ("scenarios:\n  - {id: a, expect: [{emit: 1, skip: 2}]}\n", "single-key mapping"),
        ("scenarios:\n  - {id: a, expect: [{bogus: 1}]}\n", "unknown expectation 'bogus'"),
        ("scenarios:\n  - {id: a, expect: [{skip: two}]}\n", "skip count must be an integer"),
        ("scenarios:\n  - {id: a, expect: [{emit_where: '~1'}]}\n", "Unsupported predicate rule"),
        ("scenarios:\n  - {id: a, expect: [{expect_error: Nope}]}\n", "unknown builtin error"),
        ("scenarios:\n  - {id: a, elements: 3, expect: []}\n", "'elements' must be a list"),
        ("scenarios:\n  - {id: a, expect: {emit: 1}}\n", "'expect' must be a list"),
        ("scenarios:\n  - {id: a, enabled: maybe, expect: []}\n", "boolean value"),
        (
            "scenarios:\n  - {id: a, error: {type: KeyboardInterrupt}, expect: []}\n",
            "must be an Exception subclass",
        ),
        ("scenarios: [\n", "Invalid YAML"),
    ],
)
def test_invalid_scenario_files_raise(tmp_path: Path, contents: str, message: str) -> None:
    path = _write_scenarios(tmp_path, contents)

    with pytest.raises(ScenarioValidationError, match=message):
        read_scenarios(path)


def test_missing_scenario_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ScenarioValidationError, match="Scenario file not found"):
        read_scenarios(tmp_path / "missing.yaml")
