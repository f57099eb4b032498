"""Run execution use-case service."""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime
from pathlib import Path

from async_sequence_tester.configuration import (
    Configuration,
    ConfigurationError,
    load_configuration,
)
from async_sequence_tester.expectation_descriptors import render_value
from async_sequence_tester.issue_reporting import (
    render_issue_message,
    render_unexpected_error_message,
)
from async_sequence_tester.matching_validation import (
    ErrorExpectationMismatch,
    ExpectationMismatch,
    ExpectedErrorButSequenceSucceeded,
    InsufficientElements,
    InsufficientElementsForSkip,
    InvalidSkipCount,
    SequenceExpectationFailure,
    UnexpectedElement,
    validate_sequence,
)
from async_sequence_tester.results_writing import (
    RunMetadata,
    ScenarioResult,
    ScenarioStatus,
    write_results_workbook,
)
from async_sequence_tester.scenario_ingestion import (
    ScenarioValidationError,
    SequenceScenario,
    read_scenarios,
)
from async_sequence_tester.sequence_sources import ReplayedSequence

from .run_contracts import RunArtifacts, RunOutcome, RunRequest

_LOGGER = logging.getLogger("async_sequence_tester.run")
_LOGGER.addHandler(logging.NullHandler())


class RunExecutionError(Exception):
    """Raised when a run use case cannot be completed."""


def execute_scenario_run(request: RunRequest) -> RunOutcome:
    """Validate every scenario of the requested files and write the results workbook."""
    if not request.scenario_paths:
        raise RunExecutionError("At least one scenario file is required.")
    artifacts = _load_run_artifacts(request)
    run_start = datetime.now(UTC)
    validation = artifacts.configuration.validation

    results = [
        _run_scenario(
            scenario,
            max_rendered_length=validation.max_rendered_length,
            yield_control=validation.yield_between_elements,
        )
        for scenario in artifacts.scenarios
    ]

    output_path = _resolve_output_path(
        request.scenario_paths[0], request.output_dir, artifacts.configuration
    )
    run_metadata = RunMetadata(
        run_start=run_start,
        scenario_paths=tuple(Path(path).resolve() for path in request.scenario_paths),
        output_path=output_path.resolve(),
        config_path=artifacts.configuration.path,
        max_rendered_length=validation.max_rendered_length,
    )
    try:
        write_results_workbook(output_path, results, run_metadata)
    except OSError as exc:
        raise RunExecutionError(f"Unable to write results workbook: {exc}") from exc

    return RunOutcome(
        output_path=output_path.resolve(),
        passed=_count(results, ScenarioStatus.PASSED),
        failed=_count(results, ScenarioStatus.FAILED),
        errored=_count(results, ScenarioStatus.ERRORED),
        skipped=_count(results, ScenarioStatus.SKIPPED),
    )


def _load_run_artifacts(request: RunRequest) -> RunArtifacts:
    try:
        configuration = (
            load_configuration(request.config_path)
            if request.config_path
            else Configuration(path=None)
        )
        scenarios: list[SequenceScenario] = []
        for scenario_path in request.scenario_paths:
            scenarios.extend(read_scenarios(scenario_path).scenarios)
    except (ConfigurationError, ScenarioValidationError, OSError) as exc:
        raise RunExecutionError(str(exc)) from exc
    return RunArtifacts(configuration=configuration, scenarios=tuple(scenarios))


def _run_scenario(
    scenario: SequenceScenario, *, max_rendered_length: int, yield_control: bool
) -> ScenarioResult:
    if not scenario.enabled:
        _LOGGER.info("scenario %s skipped (disabled)", scenario.scenario_id)
        return _result(scenario, ScenarioStatus.SKIPPED)

    source = ReplayedSequence(
        scenario.elements,
        terminal_error=scenario.terminal_error.build() if scenario.terminal_error else None,
        yield_control=yield_control,
    )
    try:
        outcome = asyncio.run(
            validate_sequence(
                scenario.expectations, source, max_rendered_length=max_rendered_length
            )
        )
    except Exception as exc:  # pylint: disable=broad-exception-caught
        _LOGGER.info("scenario %s errored: %r", scenario.scenario_id, exc)
        return _result(
            scenario,
            ScenarioStatus.ERRORED,
            failure_kind=type(exc).__name__,
            actual=render_value(exc, max_rendered_length),
            message=render_unexpected_error_message(exc),
            elements_consumed=source.elements_emitted,
        )

    if outcome.failure is None:
        _LOGGER.info("scenario %s passed", scenario.scenario_id)
        return _result(
            scenario, ScenarioStatus.PASSED, elements_consumed=outcome.elements_consumed
        )

    failure = outcome.failure
    _LOGGER.info("scenario %s failed: %s", scenario.scenario_id, failure)
    expected, actual = _describe_failure(failure)
    return _result(
        scenario,
        ScenarioStatus.FAILED,
        failure_kind=failure.kind.value,
        expectation_index=failure.expectation_index,
        expected=expected,
        actual=actual,
        message=render_issue_message(failure),
        position=str(failure.position) if failure.position else "",
        elements_consumed=outcome.elements_consumed,
    )


def _describe_failure(failure: SequenceExpectationFailure) -> tuple[str, str]:
    """Return the (expected, actual) pair rendered in the results sheet."""
    if isinstance(failure, UnexpectedElement):
        return "no more elements", failure.element
    if isinstance(failure, ExpectationMismatch):
        return failure.expected, failure.actual
    if isinstance(failure, InsufficientElements):
        return f"{failure.expected} elements", f"{failure.actual} elements"
    if isinstance(failure, InsufficientElementsForSkip):
        return (
            f"skip {failure.skip_count} elements",
            f"{failure.elements_skipped} elements available",
        )
    if isinstance(failure, InvalidSkipCount):
        return "skip count greater than 0", str(failure.count)
    if isinstance(failure, ExpectedErrorButSequenceSucceeded):
        return failure.expected_error, "sequence succeeded"
    if isinstance(failure, ErrorExpectationMismatch):
        return failure.expected_error, failure.actual_error
    return "", str(failure)


def _result(
    scenario: SequenceScenario, status: ScenarioStatus, **details: object
) -> ScenarioResult:
    return ScenarioResult(
        source_path=scenario.source_path,
        scenario_id=scenario.scenario_id,
        tags=scenario.tags,
        status=status,
        **details,  # type: ignore[arg-type]
    )


def _count(results: list[ScenarioResult], status: ScenarioStatus) -> int:
    return sum(1 for result in results if result.status == status)


def _resolve_output_path(
    first_scenario_path: str, output_dir: str | None, configuration: Configuration
) -> Path:
    scenario_file = Path(first_scenario_path)
    if output_dir:
        destination = Path(output_dir)
    elif configuration.reporting.output_dir is not None:
        destination = configuration.reporting.output_dir
    else:
        destination = scenario_file.parent
    timestamp = datetime.now(UTC).strftime("%Y%m%d-%H%M%S")
    return destination / f"{scenario_file.stem}-results-{timestamp}.xlsx"
