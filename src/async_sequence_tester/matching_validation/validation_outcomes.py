"""Validation pass outcome and failure taxonomy."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from async_sequence_tester.expectation_descriptors.descriptor_models import SourcePosition


class FailureKind(str, Enum):
    """Failure variants a validation pass can end with."""

    UNEXPECTED_ELEMENT = "unexpected_element"
    EXPECTATION_MISMATCH = "expectation_mismatch"
    INSUFFICIENT_ELEMENTS = "insufficient_elements"
    INSUFFICIENT_ELEMENTS_FOR_SKIP = "insufficient_elements_for_skip"
    INVALID_SKIP_COUNT = "invalid_skip_count"
    EXPECTED_ERROR_BUT_SEQUENCE_SUCCEEDED = "expected_error_but_sequence_succeeded"
    ERROR_EXPECTATION_MISMATCH = "error_expectation_mismatch"


class SequenceExpectationFailure(AssertionError):
    """Base class for every assertion failure produced by a validation pass."""

    kind: FailureKind

    def __init__(
        self,
        summary: str,
        *,
        expectation_index: int | None,
        position: SourcePosition | None,
    ) -> None:
        super().__init__(summary)
        self.expectation_index = expectation_index
        self.position = position


class UnexpectedElement(SequenceExpectationFailure):
    """An element arrived after all expectations were satisfied."""

    kind = FailureKind.UNEXPECTED_ELEMENT

    def __init__(
        self, element: str, *, expectation_index: int, position: SourcePosition | None
    ) -> None:
        super().__init__(
            f"Unexpected element received: {element}",
            expectation_index=expectation_index,
            position=position,
        )
        self.element = element


class ExpectationMismatch(SequenceExpectationFailure):
    """An element did not satisfy the active plain or eventually expectation."""

    kind = FailureKind.EXPECTATION_MISMATCH

    def __init__(
        self,
        expected: str,
        actual: str,
        *,
        expectation_index: int,
        position: SourcePosition | None,
    ) -> None:
        super().__init__(
            f"Expectation at index {expectation_index} failed. "
            f"Expected: {expected}, but got: {actual}",
            expectation_index=expectation_index,
            position=position,
        )
        self.expected = expected
        self.actual = actual


class InsufficientElements(SequenceExpectationFailure):
    """The source ended while expectations were still unprocessed."""

    kind = FailureKind.INSUFFICIENT_ELEMENTS

    def __init__(
        self,
        expected: int,
        actual: int,
        unprocessed_expectations: tuple[str, ...],
        *,
        position: SourcePosition | None,
    ) -> None:
        super().__init__(
            f"Insufficient elements. Expected {expected}, but got {actual}",
            expectation_index=actual,
            position=position,
        )
        self.expected = expected
        self.actual = actual
        self.unprocessed_expectations = unprocessed_expectations


class InsufficientElementsForSkip(SequenceExpectationFailure):
    """The source ended while a counted skip was still consuming elements."""

    kind = FailureKind.INSUFFICIENT_ELEMENTS_FOR_SKIP

    def __init__(  # pylint: disable=too-many-arguments
        self,
        skip_count: int,
        elements_skipped: int,
        *,
        expectation_index: int,
        total_expectations: int,
        position: SourcePosition | None,
    ) -> None:
        super().__init__(
            f"Attempted to skip {skip_count} elements, "
            f"but only {elements_skipped} elements were available.",
            expectation_index=expectation_index,
            position=position,
        )
        self.skip_count = skip_count
        self.elements_skipped = elements_skipped
        self.total_expectations = total_expectations


class InvalidSkipCount(SequenceExpectationFailure):
    """A counted skip was declared with a count that is not positive."""

    kind = FailureKind.INVALID_SKIP_COUNT

    def __init__(
        self,
        count: int,
        *,
        expectation_index: int | None = None,
        position: SourcePosition | None = None,
    ) -> None:
        super().__init__(
            f"Invalid skip count: {count}. Skip count must be greater than 0.",
            expectation_index=expectation_index,
            position=position,
        )
        self.count = count


class ExpectedErrorButSequenceSucceeded(SequenceExpectationFailure):
    """An error expectation was active but the source produced an element or ended cleanly."""

    kind = FailureKind.EXPECTED_ERROR_BUT_SEQUENCE_SUCCEEDED

    def __init__(
        self, expected_error: str, *, expectation_index: int, position: SourcePosition | None
    ) -> None:
        super().__init__(
            f"Expected an error ({expected_error}) but sequence succeeded without throwing",
            expectation_index=expectation_index,
            position=position,
        )
        self.expected_error = expected_error


class ErrorExpectationMismatch(SequenceExpectationFailure):
    """The source raised an error the active error expectation rejected."""

    kind = FailureKind.ERROR_EXPECTATION_MISMATCH

    def __init__(
        self,
        expected_error: str,
        actual_error: str,
        *,
        expectation_index: int,
        position: SourcePosition | None,
    ) -> None:
        super().__init__(
            f"Error expectation failed. Expected: {expected_error}, but got: {actual_error}",
            expectation_index=expectation_index,
            position=position,
        )
        self.expected_error = expected_error
        self.actual_error = actual_error


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of one validation pass: success, or exactly one failure."""

    failure: SequenceExpectationFailure | None = None
    elements_consumed: int = 0

    @property
    def succeeded(self) -> bool:
        """Return True when the pass ended without a failure."""
        return self.failure is None

    def raise_for_failure(self) -> None:
        """Raise the recorded failure, if any."""
        if self.failure is not None:
            raise self.failure
