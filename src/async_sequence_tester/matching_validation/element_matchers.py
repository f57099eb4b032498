"""Element and error matching rules for expectation descriptors."""

from __future__ import annotations

from async_sequence_tester.expectation_descriptors.descriptor_models import (
    ExpectationDescriptor,
    ExpectationKind,
)

from .validation_outcomes import InvalidSkipCount

_ALWAYS_MATCHING_KINDS = frozenset(
    {ExpectationKind.SKIP_ONE, ExpectationKind.SKIP_COUNT, ExpectationKind.SKIP_ALL}
)
_VALUE_KINDS = frozenset({ExpectationKind.EXACT_VALUE, ExpectationKind.EVENTUALLY_VALUE})
_PREDICATE_KINDS = frozenset(
    {
        ExpectationKind.PREDICATE,
        ExpectationKind.EVENTUALLY_PREDICATE,
        ExpectationKind.SKIP_WHILE,
    }
)


def matches_element(descriptor: ExpectationDescriptor, element: object) -> bool:
    """Return whether ``element`` satisfies ``descriptor``.

    A type-incompatible element is a non-match, not an error.

    Raises:
      InvalidSkipCount: If a counted skip carries a count that is not positive.
    """
    if descriptor.is_error_expectation:
        return False
    if descriptor.kind == ExpectationKind.SKIP_COUNT:
        ensure_valid_skip_count(descriptor)
    if descriptor.kind in _ALWAYS_MATCHING_KINDS:
        return True
    if not _is_compatible(descriptor, element):
        return False
    if descriptor.kind in _VALUE_KINDS:
        return bool(element == descriptor.value)
    if descriptor.kind in _PREDICATE_KINDS and descriptor.predicate is not None:
        return bool(descriptor.predicate(element))
    return False


def matches_error(descriptor: ExpectationDescriptor, error: BaseException) -> bool:
    """Return whether a terminal source ``error`` satisfies an error expectation."""
    if descriptor.kind == ExpectationKind.ERROR_ANY:
        return True
    if descriptor.kind == ExpectationKind.ERROR_OF_KIND:
        return descriptor.error_kind is not None and isinstance(error, descriptor.error_kind)
    if descriptor.kind == ExpectationKind.ERROR_PREDICATE:
        return descriptor.error_predicate is not None and bool(descriptor.error_predicate(error))
    return False


def ensure_valid_skip_count(
    descriptor: ExpectationDescriptor, expectation_index: int | None = None
) -> None:
    """Raise InvalidSkipCount when a counted skip is not positive."""
    count = descriptor.count if descriptor.count is not None else 0
    if count <= 0:
        raise InvalidSkipCount(
            count,
            expectation_index=expectation_index,
            position=descriptor.position,
        )


def _is_compatible(descriptor: ExpectationDescriptor, element: object) -> bool:
    if descriptor.element_type is None:
        return True
    return isinstance(element, descriptor.element_type)
