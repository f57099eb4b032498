"""Scenario ingestion entities."""

from __future__ import annotations

import builtins
from dataclasses import dataclass
from pathlib import Path

from async_sequence_tester.expectation_descriptors.descriptor_models import (
    ExpectationDescriptor,
)


@dataclass(frozen=True)
class TerminalErrorSpec:
    """Error a replayed scenario source raises after its last element."""

    type_name: str
    message: str

    def build(self) -> Exception:
        """Instantiate the builtin exception class named by ``type_name``."""
        error_type = getattr(builtins, self.type_name)
        return error_type(self.message)


@dataclass(frozen=True)
class SequenceScenario:  # pylint: disable=too-many-instance-attributes
    """Normalized representation of one scenario entry."""

    source_path: Path
    scenario_id: str
    tags: tuple[str, ...]
    enabled: bool
    notes: str
    elements: tuple[object, ...]
    expectations: tuple[ExpectationDescriptor, ...]
    terminal_error: TerminalErrorSpec | None = None


@dataclass(frozen=True)
class ScenarioReadResult:
    """Result of ingesting a scenario file."""

    scenarios: tuple[SequenceScenario, ...]
