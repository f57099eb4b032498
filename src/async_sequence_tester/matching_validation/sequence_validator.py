"""Single-pass validation of an asynchronous sequence against ordered expectations."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable, AsyncIterator, Sequence
from typing import Any, Final

from async_sequence_tester.expectation_descriptors.descriptor_models import (
    ExpectationDescriptor,
    ExpectationKind,
    SourcePosition,
    render_value,
)

from .element_matchers import ensure_valid_skip_count, matches_element, matches_error
from .validation_outcomes import (
    ErrorExpectationMismatch,
    ExpectationMismatch,
    ExpectedErrorButSequenceSucceeded,
    InsufficientElements,
    InsufficientElementsForSkip,
    SequenceExpectationFailure,
    UnexpectedElement,
    ValidationOutcome,
)

_LOGGER = logging.getLogger("async_sequence_tester.validator")
_LOGGER.addHandler(logging.NullHandler())

DEFAULT_MAX_RENDERED_LENGTH: Final = 200

_UNPOSITIONED = SourcePosition(path="<expectations>")


class _Marker:
    def __init__(self, name: str) -> None:
        self._name = name

    def __repr__(self) -> str:
        return self._name


_EXHAUSTED: Final = _Marker("<exhausted>")
_PASS_COMPLETE: Final = _Marker("<pass complete>")


class _SourceTerminated(Exception):
    """Carries an error raised by the source out of the element-processing loop."""

    def __init__(self, error: Exception) -> None:
        super().__init__(error)
        self.error = error


class SequenceValidator:
    """State machine validating one source against one ordered descriptor list.

    The validator owns a cursor into the descriptor list which only moves forward.
    It is single-use: one instance performs exactly one pass.
    """

    def __init__(
        self,
        descriptors: Sequence[ExpectationDescriptor],
        source: AsyncIterable[Any],
        *,
        max_rendered_length: int | None = DEFAULT_MAX_RENDERED_LENGTH,
    ) -> None:
        self._descriptors: tuple[ExpectationDescriptor, ...] = tuple(descriptors)
        self._source = source
        self._iterator: AsyncIterator[Any] | None = None
        self._max_rendered_length = max_rendered_length
        self._cursor = 0
        self._elements_consumed = 0
        self._started = False
        self._source_error: Exception | None = None

    @property
    def cursor(self) -> int:
        """Index of the active descriptor."""
        return self._cursor

    async def run(self) -> ValidationOutcome:
        """Run the pass and return its outcome.

        Errors raised by the source while no error expectation is active propagate
        unchanged. Every other failure is returned inside the outcome.
        """
        if self._started:
            raise RuntimeError("SequenceValidator instances are single-use.")
        self._started = True
        try:
            self._ensure_valid_skip_counts()
            await self._run_pass()
        except SequenceExpectationFailure as failure:
            if failure is self._source_error:
                raise
            _LOGGER.debug("validation failed at cursor %d: %s", self._cursor, failure)
            return ValidationOutcome(failure=failure, elements_consumed=self._elements_consumed)
        _LOGGER.debug("validation succeeded after %d elements", self._elements_consumed)
        return ValidationOutcome(elements_consumed=self._elements_consumed)

    def _ensure_valid_skip_counts(self) -> None:
        for index, descriptor in enumerate(self._descriptors):
            if descriptor.kind == ExpectationKind.SKIP_COUNT:
                ensure_valid_skip_count(descriptor, index)

    async def _run_pass(self) -> None:
        self._iterator = aiter(self._source)
        try:
            await self._consume()
        finally:
            aclose = getattr(self._iterator, "aclose", None)
            if aclose is not None:
                await aclose()

    async def _consume(self) -> None:
        try:
            element = await self._pull()
            while element is not _EXHAUSTED:
                element = await self._dispatch(element)
                if element is _PASS_COMPLETE:
                    return
        except _SourceTerminated as terminated:
            source_error = terminated.error
        else:
            self._resolve_exhaustion()
            return
        self._source_error = source_error
        self._resolve_source_error(source_error)

    async def _pull(self) -> Any:
        assert self._iterator is not None
        try:
            element = await anext(self._iterator)
        except StopAsyncIteration:
            return _EXHAUSTED
        except Exception as exc:  # pylint: disable=broad-exception-caught
            raise _SourceTerminated(exc) from exc
        self._elements_consumed += 1
        return element

    async def _dispatch(self, element: Any) -> Any:
        """Process ``element`` at the cursor and return the next element to process."""
        if self._cursor >= len(self._descriptors):
            position = self._descriptors[-1].position if self._descriptors else _UNPOSITIONED
            raise UnexpectedElement(
                self._render(element),
                expectation_index=self._cursor,
                position=position,
            )

        descriptor = self._descriptors[self._cursor]
        _LOGGER.debug("cursor %d (%s) received %r", self._cursor, descriptor.kind.value, element)

        if descriptor.is_error_expectation:
            raise ExpectedErrorButSequenceSucceeded(
                descriptor.description,
                expectation_index=self._cursor,
                position=descriptor.position,
            )
        if descriptor.kind == ExpectationKind.SKIP_ONE:
            self._advance()
            return await self._pull()
        if descriptor.kind == ExpectationKind.SKIP_COUNT:
            await self._skip_count(descriptor)
            self._advance()
            return await self._pull()
        if descriptor.kind == ExpectationKind.SKIP_ALL:
            await self._drain()
            self._advance()
            return _PASS_COMPLETE
        if descriptor.kind == ExpectationKind.SKIP_WHILE:
            return await self._skip_while(descriptor, element)
        if descriptor.is_eventually:
            await self._search_eventually(descriptor, element)
            self._advance()
            return await self._pull()

        if matches_element(descriptor, element):
            self._advance()
            return await self._pull()
        raise ExpectationMismatch(
            descriptor.description,
            self._render(element),
            expectation_index=self._cursor,
            position=descriptor.position,
        )

    async def _skip_count(self, descriptor: ExpectationDescriptor) -> None:
        ensure_valid_skip_count(descriptor, self._cursor)
        skip_count = descriptor.count or 0
        elements_skipped = 1
        while elements_skipped < skip_count:
            if await self._pull() is _EXHAUSTED:
                raise InsufficientElementsForSkip(
                    skip_count,
                    elements_skipped,
                    expectation_index=self._cursor,
                    total_expectations=len(self._descriptors),
                    position=descriptor.position,
                )
            elements_skipped += 1

    async def _drain(self) -> None:
        while await self._pull() is not _EXHAUSTED:
            pass

    async def _skip_while(self, descriptor: ExpectationDescriptor, element: Any) -> Any:
        current = element
        try:
            while current is not _EXHAUSTED and matches_element(descriptor, current):
                current = await self._pull()
        except _SourceTerminated:
            # Termination completes the skip; the error is judged by the next descriptor.
            self._advance()
            raise
        self._advance()
        return current

    async def _search_eventually(self, descriptor: ExpectationDescriptor, element: Any) -> None:
        current = element
        while not matches_element(descriptor, current):
            current = await self._pull()
            if current is _EXHAUSTED:
                raise ExpectationMismatch(
                    f"eventually: {descriptor.description}",
                    "sequence ended without finding match",
                    expectation_index=self._cursor,
                    position=descriptor.position,
                )

    def _resolve_exhaustion(self) -> None:
        remaining = self._descriptors[self._cursor :]
        for offset, descriptor in enumerate(remaining):
            if descriptor.is_error_expectation:
                raise ExpectedErrorButSequenceSucceeded(
                    descriptor.description,
                    expectation_index=self._cursor + offset,
                    position=descriptor.position,
                )
        if not remaining:
            return
        if len(remaining) == 1 and remaining[0].kind == ExpectationKind.SKIP_ALL:
            self._advance()
            return
        raise InsufficientElements(
            len(self._descriptors),
            self._cursor,
            tuple(descriptor.description for descriptor in remaining),
            position=remaining[0].position,
        )

    def _resolve_source_error(self, error: Exception) -> None:
        if self._cursor < len(self._descriptors):
            descriptor = self._descriptors[self._cursor]
            if descriptor.is_error_expectation:
                if matches_error(descriptor, error):
                    _LOGGER.debug("cursor %d accepted source error %r", self._cursor, error)
                    return
                raise ErrorExpectationMismatch(
                    descriptor.description,
                    self._render(error),
                    expectation_index=self._cursor,
                    position=descriptor.position,
                )
        raise error

    def _advance(self) -> None:
        self._cursor += 1

    def _render(self, value: object) -> str:
        return render_value(value, self._max_rendered_length)


async def validate_sequence(
    descriptors: Sequence[ExpectationDescriptor],
    source: AsyncIterable[Any],
    *,
    max_rendered_length: int | None = DEFAULT_MAX_RENDERED_LENGTH,
) -> ValidationOutcome:
    """Validate ``source`` against ``descriptors`` in one fresh pass."""
    validator = SequenceValidator(descriptors, source, max_rendered_length=max_rendered_length)
    return await validator.run()
