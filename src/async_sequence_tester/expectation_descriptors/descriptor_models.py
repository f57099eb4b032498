"""Expectation descriptor entities."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

ElementT = TypeVar("ElementT")


class ExpectationKind(str, Enum):
    """Supported expectation descriptor variants."""

    EXACT_VALUE = "exact_value"
    PREDICATE = "predicate"
    SKIP_ONE = "skip_one"
    SKIP_COUNT = "skip_count"
    SKIP_ALL = "skip_all"
    SKIP_WHILE = "skip_while"
    EVENTUALLY_VALUE = "eventually_value"
    EVENTUALLY_PREDICATE = "eventually_predicate"
    ERROR_ANY = "error_any"
    ERROR_OF_KIND = "error_of_kind"
    ERROR_PREDICATE = "error_predicate"


ERROR_KINDS = frozenset(
    {ExpectationKind.ERROR_ANY, ExpectationKind.ERROR_OF_KIND, ExpectationKind.ERROR_PREDICATE}
)
EVENTUALLY_KINDS = frozenset(
    {ExpectationKind.EVENTUALLY_VALUE, ExpectationKind.EVENTUALLY_PREDICATE}
)


@dataclass(frozen=True)
class SourcePosition:
    """Where an expectation was declared. Only used for diagnostics."""

    path: str
    line: int | None = None
    function: str | None = None

    def __str__(self) -> str:
        location = self.path if self.line is None else f"{self.path}:{self.line}"
        if self.function:
            return f"{location} ({self.function})"
        return location


@dataclass(frozen=True)
class ExpectationDescriptor(Generic[ElementT]):  # pylint: disable=too-many-instance-attributes
    """One immutable matching rule in an ordered expectation list."""

    kind: ExpectationKind
    description: str
    value: Any = None
    predicate: Callable[[ElementT], bool] | None = None
    error_predicate: Callable[[BaseException], bool] | None = None
    count: int | None = None
    error_kind: type[BaseException] | None = None
    element_type: type | None = None
    position: SourcePosition | None = None

    @property
    def is_error_expectation(self) -> bool:
        """Return True when only a terminal source error can satisfy this descriptor."""
        return self.kind in ERROR_KINDS

    @property
    def is_eventually(self) -> bool:
        """Return True when leading non-matching elements are tolerated."""
        return self.kind in EVENTUALLY_KINDS

    def __str__(self) -> str:
        return self.description


def render_value(value: object, max_length: int | None = None) -> str:
    """Render an element, value, or error for diagnostics, optionally truncated."""
    rendered = str(value) if not isinstance(value, BaseException) else _render_error(value)
    if max_length is not None and len(rendered) > max_length:
        return rendered[: max(max_length - 3, 0)] + "..."
    return rendered


def _render_error(error: BaseException) -> str:
    message = str(error)
    if not message:
        return type(error).__name__
    return f"{type(error).__name__}: {message}"
