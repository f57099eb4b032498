"""Builder functions composing ordered expectation lists.

Each builder returns one immutable :class:`ExpectationDescriptor`. A test author
composes them into a plain list::

    await assert_sequence(source, [emit("hello"), skip(2), emit("d"), skip_all()])

Builders record the calling line as the descriptor position unless an explicit
``position`` is given.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any, get_type_hints

from async_sequence_tester.matching_validation.validation_outcomes import InvalidSkipCount

from .descriptor_models import ExpectationDescriptor, ExpectationKind, SourcePosition, render_value

_PREDICATE_DESCRIPTION = "matching predicate"


def emit(
    value: Any,
    *,
    element_type: type | None = None,
    position: SourcePosition | None = None,
) -> ExpectationDescriptor:
    """Expect the next element to equal ``value``.

    ``element_type`` defaults to ``type(value)``; elements of another type never match.
    """
    return ExpectationDescriptor(
        kind=ExpectationKind.EXACT_VALUE,
        description=render_value(value),
        value=value,
        element_type=element_type if element_type is not None else type(value),
        position=position or _caller_position(),
    )


def emit_where(
    predicate: Callable[[Any], bool],
    *,
    element_type: type | None = None,
    description: str | None = None,
    position: SourcePosition | None = None,
) -> ExpectationDescriptor:
    """Expect the next element to satisfy ``predicate``.

    Without ``element_type`` the type is taken from the annotation of the predicate's
    first parameter, if it names a plain class; elements of another type never match.
    """
    return ExpectationDescriptor(
        kind=ExpectationKind.PREDICATE,
        description=description or _PREDICATE_DESCRIPTION,
        predicate=predicate,
        element_type=element_type or _annotated_element_type(predicate),
        position=position or _caller_position(),
    )


def emit_eventually(
    value: Any,
    *,
    element_type: type | None = None,
    position: SourcePosition | None = None,
) -> ExpectationDescriptor:
    """Discard elements until one equals ``value``."""
    return ExpectationDescriptor(
        kind=ExpectationKind.EVENTUALLY_VALUE,
        description=render_value(value),
        value=value,
        element_type=element_type if element_type is not None else type(value),
        position=position or _caller_position(),
    )


def emit_eventually_where(
    predicate: Callable[[Any], bool],
    *,
    element_type: type | None = None,
    description: str | None = None,
    position: SourcePosition | None = None,
) -> ExpectationDescriptor:
    """Discard elements until one satisfies ``predicate``."""
    return ExpectationDescriptor(
        kind=ExpectationKind.EVENTUALLY_PREDICATE,
        description=description or _PREDICATE_DESCRIPTION,
        predicate=predicate,
        element_type=element_type or _annotated_element_type(predicate),
        position=position or _caller_position(),
    )


def skip(
    count: int | None = None, *, position: SourcePosition | None = None
) -> ExpectationDescriptor:
    """Skip one element, or ``count`` elements when a count is given.

    Raises:
      InvalidSkipCount: If ``count`` is not greater than zero.
    """
    resolved_position = position or _caller_position()
    if count is None:
        return ExpectationDescriptor(
            kind=ExpectationKind.SKIP_ONE,
            description="skip element",
            position=resolved_position,
        )
    if count <= 0:
        raise InvalidSkipCount(count, position=resolved_position)
    return ExpectationDescriptor(
        kind=ExpectationKind.SKIP_COUNT,
        description=describe_skip_count(count),
        count=count,
        position=resolved_position,
    )


def skip_all(*, position: SourcePosition | None = None) -> ExpectationDescriptor:
    """Skip every remaining element and end the pass successfully."""
    return ExpectationDescriptor(
        kind=ExpectationKind.SKIP_ALL,
        description="skip all remaining elements",
        position=position or _caller_position(),
    )


def skip_while(
    predicate: Callable[[Any], bool],
    *,
    element_type: type | None = None,
    description: str | None = None,
    position: SourcePosition | None = None,
) -> ExpectationDescriptor:
    """Skip elements while ``predicate`` holds; the first other element meets the next rule."""
    return ExpectationDescriptor(
        kind=ExpectationKind.SKIP_WHILE,
        description=description or f"skip while {_PREDICATE_DESCRIPTION}",
        predicate=predicate,
        element_type=element_type or _annotated_element_type(predicate),
        position=position or _caller_position(),
    )


def expect_error(
    kind: type[BaseException] | None = None, *, position: SourcePosition | None = None
) -> ExpectationDescriptor:
    """Expect the source to terminate with any error, or with an error of ``kind``."""
    resolved_position = position or _caller_position()
    if kind is None:
        return ExpectationDescriptor(
            kind=ExpectationKind.ERROR_ANY,
            description="any error",
            position=resolved_position,
        )
    return ExpectationDescriptor(
        kind=ExpectationKind.ERROR_OF_KIND,
        description=f"error of type {kind.__name__}",
        error_kind=kind,
        position=resolved_position,
    )


def expect_error_where(
    predicate: Callable[[BaseException], bool],
    *,
    description: str | None = None,
    position: SourcePosition | None = None,
) -> ExpectationDescriptor:
    """Expect the source to terminate with an error accepted by ``predicate``."""
    return ExpectationDescriptor(
        kind=ExpectationKind.ERROR_PREDICATE,
        description=description or "error matching predicate",
        error_predicate=predicate,
        position=position or _caller_position(),
    )


def _annotated_element_type(predicate: Callable[..., Any]) -> type | None:
    """Return the class annotated on the first parameter of ``predicate``, if any."""
    if not (inspect.isfunction(predicate) or inspect.ismethod(predicate)):
        return None
    try:
        parameters = list(inspect.signature(predicate).parameters)
        hints = get_type_hints(predicate)
    except (NameError, TypeError, ValueError):
        # Unresolvable forward references leave the predicate untyped.
        return None
    if not parameters:
        return None
    hint = hints.get(parameters[0])
    return hint if isinstance(hint, type) and hint is not object else None


def describe_skip_count(count: int) -> str:
    """Render the description of a counted skip."""
    return f"skip {count} element{'' if count == 1 else 's'}"


def _caller_position() -> SourcePosition | None:
    frame = inspect.currentframe()
    try:
        builder_frame = frame.f_back if frame is not None else None
        caller = builder_frame.f_back if builder_frame is not None else None
        if caller is None:
            return None
        return SourcePosition(
            path=caller.f_code.co_filename,
            line=caller.f_lineno,
            function=caller.f_code.co_name,
        )
    finally:
        del frame
