"""Multi-line diagnostic messages for recorded validation issues."""

from __future__ import annotations

from async_sequence_tester.matching_validation.validation_outcomes import (
    ErrorExpectationMismatch,
    ExpectationMismatch,
    ExpectedErrorButSequenceSucceeded,
    InsufficientElements,
    InsufficientElementsForSkip,
    InvalidSkipCount,
    SequenceExpectationFailure,
    UnexpectedElement,
)


def render_issue_message(failure: SequenceExpectationFailure) -> str:
    """Render the diagnostic text recorded for ``failure``."""
    if isinstance(failure, UnexpectedElement):
        return (
            f"Unexpected element received at position {failure.expectation_index}\n\n"
            f"Expected no more elements, but received: {failure.element}\n\n"
            "This indicates that the async sequence produced more elements than were "
            "expected in the test definition."
        )
    if isinstance(failure, ExpectationMismatch):
        return (
            f"Expectation mismatch at index {failure.expectation_index}\n\n"
            f"Expected: {failure.expected}\n"
            f"Received: {failure.actual}\n\n"
            "This indicates that the async sequence element does not match the expected "
            "value or predicate."
        )
    if isinstance(failure, InsufficientElements):
        unprocessed = "\n".join(f"- {item}" for item in failure.unprocessed_expectations)
        return (
            "Insufficient elements in async sequence\n\n"
            f"Expected {failure.expected} elements, but only received {failure.actual}.\n\n"
            f"Unprocessed expectations:\n{unprocessed}\n\n"
            "This indicates that the async sequence ended before all expected elements "
            "were received."
        )
    if isinstance(failure, InsufficientElementsForSkip):
        return (
            "Insufficient elements for skip operation\n\n"
            f"Attempted to skip {failure.skip_count} elements, but only "
            f"{failure.elements_skipped} elements were available.\n\n"
            f"Current expectation index: {failure.expectation_index}\n"
            f"Total expectations: {failure.total_expectations}"
        )
    if isinstance(failure, InvalidSkipCount):
        return (
            f"Invalid skip count: {failure.count}\n\n"
            f"Skip count must be greater than 0. Provided count: {failure.count}\n\n"
            "Use skip() for single element skipping or skip(n) where n > 0 for multiple "
            "elements."
        )
    if isinstance(failure, ExpectedErrorButSequenceSucceeded):
        return (
            f"Expected error at position {failure.expectation_index}, "
            "but sequence succeeded\n\n"
            f"Expected: {failure.expected_error}\n\n"
            "This indicates that the async sequence finished without raising an error "
            "when an error was expected."
        )
    if isinstance(failure, ErrorExpectationMismatch):
        return (
            f"Error expectation mismatch at index {failure.expectation_index}\n\n"
            f"Expected error: {failure.expected_error}\n"
            f"Actual error: {failure.actual_error}\n\n"
            "This indicates that the async sequence raised an error, but it doesn't match "
            "the expected error criteria."
        )
    return str(failure)


def render_unexpected_error_message(error: BaseException) -> str:
    """Render the text recorded when the source fails outside any error expectation."""
    return f"An unexpected error occurred during async sequence testing: {error!r}"
