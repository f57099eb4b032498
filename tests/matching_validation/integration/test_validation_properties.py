"""End-to-end validation properties over replayed sequences."""

from __future__ import annotations

import pytest
from async_sequence_tester.expectation_descriptors import (
    ExpectationDescriptor,
    ExpectationKind,
    emit,
    emit_eventually,
    expect_error,
    skip,
    skip_all,
)
from async_sequence_tester.matching_validation import (
    ErrorExpectationMismatch,
    ExpectedErrorButSequenceSucceeded,
    InsufficientElements,
    InvalidSkipCount,
    UnexpectedElement,
    validate_sequence,
)
from async_sequence_tester.sequence_sources import ReplayedSequence


@pytest.mark.asyncio
async def test_empty_expectations_against_empty_source_succeed() -> None:
    outcome = await validate_sequence([], ReplayedSequence([]))

    assert outcome.succeeded
    assert outcome.elements_consumed == 0


@pytest.mark.asyncio
async def test_emit_skip_emit_scenario_succeeds() -> None:
    outcome = await validate_sequence(
        [emit("hello"), skip(2), emit("d"), emit("e")],
        ReplayedSequence(["hello", "b", "c", "d", "e"]),
    )

    assert outcome.succeeded


@pytest.mark.asyncio
async def test_extra_element_scenario_reports_unexpected_element() -> None:
    outcome = await validate_sequence([emit("hello")], ReplayedSequence(["hello", "unexpected"]))

    failure = outcome.failure
    assert isinstance(failure, UnexpectedElement)
    assert failure.element == "unexpected"
    assert failure.expectation_index == 1


@pytest.mark.asyncio
async def test_eventually_skip_eventually_scenario_succeeds() -> None:
    outcome = await validate_sequence(
        [emit_eventually(10), skip(), emit_eventually(30)],
        ReplayedSequence([1, 2, 3, 10, 20, 30]),
    )

    assert outcome.succeeded


@pytest.mark.parametrize("extra", [1, 3])
@pytest.mark.asyncio
async def test_excess_elements_fail_at_index_equal_to_expectation_count(extra: int) -> None:
    descriptors = [emit(0), emit(1), emit(2)]
    elements = list(range(3 + extra))

    outcome = await validate_sequence(descriptors, ReplayedSequence(elements))

    assert isinstance(outcome.failure, UnexpectedElement)
    assert outcome.failure.expectation_index == len(descriptors)


@pytest.mark.asyncio
async def test_short_source_reports_number_of_satisfied_expectations() -> None:
    outcome = await validate_sequence(
        [emit(0), emit(1), emit(2), emit(3)], ReplayedSequence([0, 1])
    )

    failure = outcome.failure
    assert isinstance(failure, InsufficientElements)
    assert failure.expected == 4
    assert failure.actual == 2
    assert failure.unprocessed_expectations == ("2", "3")


@pytest.mark.parametrize("elements", [[], [1], [1, 2, 3]])
@pytest.mark.asyncio
async def test_invalid_skip_count_fails_regardless_of_elements(elements: list[int]) -> None:
    with pytest.raises(InvalidSkipCount):
        skip(0)

    descriptor = ExpectationDescriptor(
        kind=ExpectationKind.SKIP_COUNT, description="skip 0 elements", count=0
    )
    outcome = await validate_sequence([descriptor], ReplayedSequence(elements))

    assert isinstance(outcome.failure, InvalidSkipCount)


@pytest.mark.asyncio
async def test_trailing_skip_all_covers_any_remainder() -> None:
    for elements in ([1], [1, 2], [1, 2, 3, 4, 5]):
        outcome = await validate_sequence([emit(1), skip_all()], ReplayedSequence(elements))
        assert outcome.succeeded


@pytest.mark.asyncio
async def test_error_expectation_outcomes() -> None:
    compatible = await validate_sequence(
        [emit(1), expect_error(ValueError)],
        ReplayedSequence([1], terminal_error=ValueError("bad")),
    )
    incompatible = await validate_sequence(
        [emit(1), expect_error(ValueError)],
        ReplayedSequence([1], terminal_error=TypeError("bad")),
    )
    clean = await validate_sequence(
        [emit(1), expect_error(ValueError)],
        ReplayedSequence([1]),
    )

    assert compatible.succeeded
    assert isinstance(incompatible.failure, ErrorExpectationMismatch)
    assert incompatible.failure.actual_error == "TypeError: bad"
    assert isinstance(clean.failure, ExpectedErrorButSequenceSucceeded)
