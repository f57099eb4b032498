"""pytest fixtures for recording sequence issues without stopping the test.

Registered through the ``pytest11`` entry point, so installing the package makes
``sequence_issues`` available to every test::

    async def test_ticks(sequence_issues):
        await check_sequence(ticker(), [emit(1), skip_all()], sequence_issues)
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from .issue_recorder import IssueRecorder


@pytest.fixture
def sequence_issues() -> Iterator[IssueRecorder]:
    """Yield a recorder and fail the test at teardown if it holds issues."""
    recorder = IssueRecorder()
    yield recorder
    if recorder.has_issues:
        pytest.fail(recorder.summary(), pytrace=False)
