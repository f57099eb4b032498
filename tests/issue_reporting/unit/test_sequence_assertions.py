"""Assertion entry point tests for both calling conventions."""

from __future__ import annotations

import pytest
from async_sequence_tester.expectation_descriptors import emit, expect_error, skip, skip_all
from async_sequence_tester.issue_reporting import IssueRecorder, assert_sequence, check_sequence
from async_sequence_tester.issue_reporting.pytest_fixtures import (  # noqa: F401
    sequence_issues,
)
from async_sequence_tester.matching_validation import (
    ExpectationMismatch,
    FailureKind,
    InsufficientElementsForSkip,
)
from async_sequence_tester.sequence_sources import ReplayedSequence


@pytest.mark.asyncio
async def test_assert_sequence_passes_silently() -> None:
    await assert_sequence(ReplayedSequence([1, 2, 3]), [emit(1), skip_all()])


@pytest.mark.asyncio
async def test_assert_sequence_raises_failure() -> None:
    with pytest.raises(ExpectationMismatch, match="Expected: 2, but got: 3"):
        await assert_sequence(ReplayedSequence([1, 3]), [emit(1), emit(2)])


@pytest.mark.asyncio
async def test_assert_sequence_propagates_unexpected_source_error() -> None:
    with pytest.raises(ConnectionError):
        await assert_sequence(
            ReplayedSequence([1], terminal_error=ConnectionError("down")), [emit(1)]
        )


@pytest.mark.asyncio
async def test_check_sequence_records_failure_with_position() -> None:
    recorder = IssueRecorder()
    descriptors = [emit(1), skip(4)]

    outcome = await check_sequence(ReplayedSequence([1, 2]), descriptors, recorder)

    assert outcome is not None
    assert isinstance(outcome.failure, InsufficientElementsForSkip)
    assert len(recorder.issues) == 1
    issue = recorder.issues[0]
    assert issue.kind == FailureKind.INSUFFICIENT_ELEMENTS_FOR_SKIP
    assert issue.position == descriptors[1].position
    assert "Attempted to skip 4 elements, but only 1 elements were available." in issue.message
    assert "Total expectations: 2" in issue.message


@pytest.mark.asyncio
async def test_check_sequence_uses_same_semantics_as_assert() -> None:
    recorder = IssueRecorder()

    outcome = await check_sequence(ReplayedSequence([]), [skip_all()], recorder)

    assert outcome is not None
    assert outcome.succeeded
    assert not recorder.has_issues


@pytest.mark.asyncio
async def test_check_sequence_records_unexpected_source_error() -> None:
    recorder = IssueRecorder()

    outcome = await check_sequence(
        ReplayedSequence([], terminal_error=OSError("disk")), [emit(1)], recorder
    )

    assert outcome is None
    assert recorder.issues[0].message == (
        "An unexpected error occurred during async sequence testing: OSError('disk')"
    )
    assert recorder.issues[0].kind is None


@pytest.mark.asyncio
async def test_check_sequence_records_error_expectation_failure() -> None:
    recorder = IssueRecorder()

    await check_sequence(ReplayedSequence([1]), [emit(1), expect_error(ValueError)], recorder)

    assert recorder.issues[0].kind == FailureKind.EXPECTED_ERROR_BUT_SEQUENCE_SUCCEEDED
    assert recorder.issues[0].message.startswith(
        "Expected error at position 1, but sequence succeeded"
    )


@pytest.mark.asyncio
async def test_sequence_issues_fixture_collects_issues(
    sequence_issues: IssueRecorder,  # noqa: F811
) -> None:
    await check_sequence(ReplayedSequence([1]), [emit(1)], sequence_issues)

    assert not sequence_issues.has_issues


def test_recorder_summary_and_clear() -> None:
    recorder = IssueRecorder()
    recorder.record("first")
    recorder.record("second")

    assert recorder.summary() == "first\n\nsecond"
    recorder.clear()
    assert not recorder.has_issues
