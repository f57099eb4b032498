"""Expectation descriptor domain exports."""

from .descriptor_builders import (
    describe_skip_count,
    emit,
    emit_eventually,
    emit_eventually_where,
    emit_where,
    expect_error,
    expect_error_where,
    skip,
    skip_all,
    skip_while,
)
from .descriptor_models import (
    ExpectationDescriptor,
    ExpectationKind,
    SourcePosition,
    render_value,
)

__all__ = [
    "ExpectationDescriptor",
    "ExpectationKind",
    "SourcePosition",
    "render_value",
    "describe_skip_count",
    "emit",
    "emit_where",
    "emit_eventually",
    "emit_eventually_where",
    "skip",
    "skip_all",
    "skip_while",
    "expect_error",
    "expect_error_where",
]
