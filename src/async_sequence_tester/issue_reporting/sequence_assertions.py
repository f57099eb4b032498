"""Assertion entry points surfacing validation outcomes to test code."""

from __future__ import annotations

from collections.abc import AsyncIterable, Sequence
from typing import Any

from async_sequence_tester.expectation_descriptors.descriptor_models import ExpectationDescriptor
from async_sequence_tester.matching_validation.sequence_validator import (
    DEFAULT_MAX_RENDERED_LENGTH,
    validate_sequence,
)
from async_sequence_tester.matching_validation.validation_outcomes import ValidationOutcome

from .issue_messages import render_issue_message, render_unexpected_error_message
from .issue_recorder import IssueRecorder


async def assert_sequence(
    source: AsyncIterable[Any],
    expectations: Sequence[ExpectationDescriptor],
    *,
    max_rendered_length: int | None = DEFAULT_MAX_RENDERED_LENGTH,
) -> None:
    """Validate ``source`` and raise the failure when expectations are not met.

    Raises:
      SequenceExpectationFailure: The failure of the validation pass.
      Exception: Any source error raised while no error expectation was active.
    """
    outcome = await validate_sequence(
        expectations, source, max_rendered_length=max_rendered_length
    )
    outcome.raise_for_failure()


async def check_sequence(
    source: AsyncIterable[Any],
    expectations: Sequence[ExpectationDescriptor],
    recorder: IssueRecorder | None = None,
    *,
    max_rendered_length: int | None = DEFAULT_MAX_RENDERED_LENGTH,
) -> ValidationOutcome | None:
    """Validate ``source`` and record failures as issues instead of raising.

    Returns the outcome, or None when the source failed with an unexpected error.
    """
    issue_recorder = recorder if recorder is not None else IssueRecorder()
    try:
        outcome = await validate_sequence(
            expectations, source, max_rendered_length=max_rendered_length
        )
    except Exception as exc:  # pylint: disable=broad-exception-caught
        issue_recorder.record(render_unexpected_error_message(exc))
        return None
    if outcome.failure is not None:
        issue_recorder.record(
            render_issue_message(outcome.failure),
            kind=outcome.failure.kind,
            position=outcome.failure.position,
        )
    return outcome
