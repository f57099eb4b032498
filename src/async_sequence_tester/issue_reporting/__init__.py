"""Issue reporting domain exports."""

from .issue_messages import render_issue_message, render_unexpected_error_message
from .issue_recorder import IssueRecorder, RecordedIssue
from .sequence_assertions import assert_sequence, check_sequence

__all__ = [
    "IssueRecorder",
    "RecordedIssue",
    "assert_sequence",
    "check_sequence",
    "render_issue_message",
    "render_unexpected_error_message",
]
