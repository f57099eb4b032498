"""Matching and validation domain exports."""

from .element_matchers import ensure_valid_skip_count, matches_element, matches_error
from .sequence_validator import DEFAULT_MAX_RENDERED_LENGTH, SequenceValidator, validate_sequence
from .validation_outcomes import (
    ErrorExpectationMismatch,
    ExpectationMismatch,
    ExpectedErrorButSequenceSucceeded,
    FailureKind,
    InsufficientElements,
    InsufficientElementsForSkip,
    InvalidSkipCount,
    SequenceExpectationFailure,
    UnexpectedElement,
    ValidationOutcome,
)

__all__ = [
    "DEFAULT_MAX_RENDERED_LENGTH",
    "SequenceValidator",
    "validate_sequence",
    "matches_element",
    "matches_error",
    "ensure_valid_skip_count",
    "FailureKind",
    "SequenceExpectationFailure",
    "UnexpectedElement",
    "ExpectationMismatch",
    "InsufficientElements",
    "InsufficientElementsForSkip",
    "InvalidSkipCount",
    "ExpectedErrorButSequenceSucceeded",
    "ErrorExpectationMismatch",
    "ValidationOutcome",
]
