"""Non-fatal issue recording."""

from __future__ import annotations

from dataclasses import dataclass, field

from async_sequence_tester.expectation_descriptors.descriptor_models import SourcePosition
from async_sequence_tester.matching_validation.validation_outcomes import FailureKind


@dataclass(frozen=True)
class RecordedIssue:
    """One recorded validation issue."""

    message: str
    kind: FailureKind | None
    position: SourcePosition | None

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.position}: {self.message}"


@dataclass
class IssueRecorder:
    """Mutable collector for issues recorded instead of raised."""

    issues: list[RecordedIssue] = field(default_factory=list)

    def record(
        self,
        message: str,
        *,
        kind: FailureKind | None = None,
        position: SourcePosition | None = None,
    ) -> RecordedIssue:
        """Append one issue and return it."""
        issue = RecordedIssue(message=message, kind=kind, position=position)
        self.issues.append(issue)
        return issue

    @property
    def has_issues(self) -> bool:
        """Return True when at least one issue was recorded."""
        return bool(self.issues)

    def clear(self) -> None:
        """Forget all recorded issues."""
        self.issues.clear()

    def summary(self) -> str:
        """Join all issues into one report."""
        return "\n\n".join(str(issue) for issue in self.issues)
